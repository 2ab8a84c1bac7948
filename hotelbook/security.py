from dataclasses import dataclass
from typing import Optional
from itsdangerous import URLSafeSerializer, BadSignature
from fastapi import Request, Response, Depends

from .config import settings
from .errors import NotAuthenticated, Forbidden
from .services import identity
from .store import RecordStore, get_store

serializer = URLSafeSerializer(settings.SECRET_KEY, salt="hotelbook-session")


@dataclass
class Session:
    """Who is making the request; passed explicitly to every operation."""
    username: str = ""
    is_admin: bool = False


def set_session(response: Response, session: Session):
    token = serializer.dumps({"u": session.username, "a": session.is_admin})
    is_production = getattr(settings, "ENVIRONMENT", "development") == "production"
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=is_production,
        path="/",
        max_age=settings.SESSION_MAX_AGE_DAYS * 24 * 60 * 60
    )


def clear_session(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")


def get_session(request: Request) -> Optional[Session]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    try:
        data = serializer.loads(token)
        return Session(username=str(data.get("u") or ""), is_admin=bool(data.get("a")))
    except (BadSignature, AttributeError, TypeError):
        return None


def require_user(request: Request, store: RecordStore = Depends(get_store)) -> Session:
    """
    Dependency for customer routes.
    The session must name a user that is still registered.
    """
    session = get_session(request)
    if not session or not session.username:
        raise NotAuthenticated()
    if not identity.username_exists(store, session.username):
        # Cookie outlived the user record (e.g. data directory was reset)
        raise NotAuthenticated()
    return session


def require_admin(request: Request) -> Session:
    session = get_session(request)
    if not session:
        raise NotAuthenticated()
    if not session.is_admin:
        raise Forbidden()
    return session
