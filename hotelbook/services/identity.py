"""Customer accounts, profiles and the administrator secret.

Passwords and phones are compared as plain text; the record files are the
only credential storage.
"""
import logging
import re

from ..config import settings
from ..errors import (
    InvalidFieldValue,
    InvalidPhoneFormat,
    InvalidUsernameFormat,
    PasswordMismatch,
    PasswordTooShort,
    PhoneMismatch,
    UsernameTaken,
)
from ..models import AdminCredential, User, UserProfile
from ..store import DELIMITER, RecordStore

logger = logging.getLogger(__name__)

_USERNAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]{2,19}$")
_PHONE_RE = re.compile(r"^[0-9]{10,15}$")


def valid_username(username: str) -> bool:
    """3-20 characters, a letter first, then letters, digits or underscores."""
    return bool(username) and _USERNAME_RE.fullmatch(username) is not None


def valid_phone(phone: str) -> bool:
    return bool(phone) and _PHONE_RE.fullmatch(phone) is not None


def check_field(name: str, value: str) -> str:
    """Reject free text that would break the colon-delimited record format."""
    if DELIMITER in value or "\n" in value or "\r" in value:
        raise InvalidFieldValue(f"{name} may not contain ':' or line breaks.")
    return value


# ==== Users ====

def username_exists(store: RecordStore, username: str) -> bool:
    return any(u.username == username for u in store.load_all(User))


def register(store: RecordStore, username: str, phone: str) -> bool:
    """Append a new user; False when the username is already taken."""
    with store.lock:
        if username_exists(store, username):
            return False
        store.append(User, User(username=username, phone=phone))
    logger.info("Registered user %s", username)
    return True


def signup(store: RecordStore, username: str, phone: str, confirm_phone: str) -> User:
    """Validate a registration form and register the user."""
    if not valid_username(username):
        raise InvalidUsernameFormat()
    if not valid_phone(phone):
        raise InvalidPhoneFormat()
    if phone != confirm_phone:
        raise PhoneMismatch()
    if not register(store, username, phone):
        raise UsernameTaken()
    return User(username=username, phone=phone)


def authenticate(store: RecordStore, username: str, phone: str) -> bool:
    return any(u.username == username and u.phone == phone for u in store.load_all(User))


# ==== Profiles ====

def get_profile(store: RecordStore, username: str) -> UserProfile:
    """The stored profile, or an empty one when the user has none yet."""
    for profile in store.load_all(UserProfile):
        if profile.username == username:
            return profile
    return UserProfile(username=username)


def profile_exists(store: RecordStore, username: str) -> bool:
    return any(p.username == username for p in store.load_all(UserProfile))


def profile_upsert(store: RecordStore, username: str, full_name: str = "", id_number: str = "",
                   email: str = "", address: str = "", phone: str = "") -> UserProfile:
    """Replace the profile keyed by ``username`` or append a new one."""
    values = {
        "full_name": full_name.strip(),
        "id_number": id_number.strip(),
        "email": email.strip(),
        "address": address.strip(),
        "phone": phone.strip(),
    }
    for name, value in values.items():
        check_field(name, value)
    profile = UserProfile(username=username, **values)
    with store.lock:
        profiles = store.load_all(UserProfile)
        for i, existing in enumerate(profiles):
            if existing.username == username:
                profiles[i] = profile
                break
        else:
            profiles.append(profile)
        store.rewrite_all(UserProfile, profiles)
    logger.info("Saved profile for %s", username)
    return profile


# ==== Administrator ====

def admin_password(store: RecordStore) -> str:
    """The stored admin secret, writing the default on first access."""
    with store.lock:
        records = store.load_all(AdminCredential)
        if records:
            return records[0].password
        default = settings.ADMIN_DEFAULT_PASSWORD
        store.rewrite_all(AdminCredential, [AdminCredential(password=default)])
        logger.info("Created default admin password")
        return default


def admin_authenticate(store: RecordStore, password: str) -> bool:
    return password == admin_password(store)


def change_admin_password(store: RecordStore, new_password: str, confirm_password: str):
    # blank lines are skipped on load, so surrounding whitespace does not count
    if len(new_password.strip()) < settings.ADMIN_PASSWORD_MIN_LENGTH:
        raise PasswordTooShort(
            f"Password must be at least {settings.ADMIN_PASSWORD_MIN_LENGTH} characters long."
        )
    if new_password != confirm_password:
        raise PasswordMismatch()
    if "\n" in new_password or "\r" in new_password:
        raise InvalidFieldValue("Password may not contain line breaks.")
    store.rewrite_all(AdminCredential, [AdminCredential(password=new_password)])
    logger.info("Admin password changed")
