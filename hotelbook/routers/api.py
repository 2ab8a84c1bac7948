from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ..errors import InvalidCredentials, BookingNotFound
from ..models import Room, RoomType, BookingStatus, RoomFilter, UserProfile
from ..security import Session, set_session, clear_session, require_user
from ..services import bookings as booking_service
from ..services import identity, reporting
from ..services.rooms import list_rooms
from ..store import RecordStore, get_store

router = APIRouter(prefix="/api/v1", tags=["customer-api"])

# ==== Schemas ====

class RoomOut(BaseModel):
    room_number: int
    type: str
    price_per_night: Decimal
    status: str
    facilities: List[str]

    @classmethod
    def of(cls, room: Room) -> "RoomOut":
        return cls(room_number=room.room_number, type=room.type, price_per_night=room.price_per_night,
                   status=room.status.value, facilities=room.facilities)

class BookingOut(BaseModel):
    booking_id: int
    username: str
    room_number: int
    booking_date: datetime
    check_in_date: str
    check_out_date: str
    total_price: Decimal
    status: BookingStatus

    class Config:
        use_enum_values = True
        from_attributes = True

class BookingCreatedOut(BaseModel):
    booking_id: int
    nights: int
    total_price: Decimal
    message: str

class SessionOut(BaseModel):
    username: str
    is_admin: bool = False
    profile_complete: bool = False

class ProfileIn(BaseModel):
    full_name: str = ""
    id_number: str = ""
    email: str = ""
    address: str = ""
    phone: str = ""

class ProfileOut(ProfileIn):
    username: str
    complete: bool

    @classmethod
    def of(cls, profile: UserProfile) -> "ProfileOut":
        return cls(complete=profile.is_complete, **profile.model_dump())

class SignupIn(BaseModel):
    username: str
    phone: str
    confirm_phone: str

class LoginIn(BaseModel):
    username: str
    phone: str

class BookingCreateIn(BaseModel):
    room_number: int
    check_in: str
    check_out: str

# ==== Auth ====

@router.post("/auth/signup", response_model=SessionOut, status_code=201)
def api_signup(payload: SignupIn, store: RecordStore = Depends(get_store)):
    user = identity.signup(store, payload.username.strip(), payload.phone.strip(), payload.confirm_phone.strip())
    return SessionOut(username=user.username)

@router.post("/auth/login", response_model=SessionOut)
def api_login(payload: LoginIn, response: Response, store: RecordStore = Depends(get_store)):
    username = payload.username.strip()
    if not identity.authenticate(store, username, payload.phone.strip()):
        raise InvalidCredentials()
    set_session(response, Session(username=username))
    complete = identity.get_profile(store, username).is_complete
    return SessionOut(username=username, profile_complete=complete)

@router.post("/auth/logout")
def api_logout(response: Response):
    clear_session(response)
    return {"ok": True}

@router.get("/auth/me", response_model=SessionOut)
def api_me(session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    complete = identity.get_profile(store, session.username).is_complete
    return SessionOut(username=session.username, profile_complete=complete)

# ==== Profile ====

@router.get("/profile", response_model=ProfileOut)
def api_get_profile(session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    return ProfileOut.of(identity.get_profile(store, session.username))

@router.put("/profile", response_model=ProfileOut)
def api_save_profile(payload: ProfileIn, session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    profile = identity.profile_upsert(store, session.username, **payload.model_dump())
    return ProfileOut.of(profile)

# ==== Rooms ====

@router.get("/rooms", response_model=List[RoomOut])
def api_rooms(
    store: RecordStore = Depends(get_store),
    min_price: Decimal = Decimal("0"),
    max_price: Decimal = Decimal("0"),
    type: Optional[RoomType] = None,
    facilities: str = "",
):
    room_filter = RoomFilter(min_price=min_price, max_price=max_price, type=type.value if type else "", facilities=facilities.strip())
    return [RoomOut.of(r) for r in list_rooms(store, room_filter)]

# ==== Bookings ====

@router.get("/bookings", response_model=List[BookingOut])
def api_bookings(session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    return booking_service.bookings_for_user(store, session.username)

@router.post("/bookings", response_model=BookingCreatedOut, status_code=201)
def api_create_booking(payload: BookingCreateIn, session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    result = booking_service.book_room(store, session.username, payload.room_number, payload.check_in, payload.check_out)
    return BookingCreatedOut(
        booking_id=result.booking_id,
        nights=result.nights,
        total_price=result.total_price,
        message=f"Booking confirmed! ID: {result.booking_id}, Total: ${result.total_price:.2f} for {result.nights} nights.",
    )

@router.post("/bookings/{booking_id}/cancel", response_model=BookingOut)
def api_cancel_booking(booking_id: int, session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    return booking_service.cancel_booking(store, booking_id, username=session.username)

@router.get("/bookings/{booking_id}/receipt", response_class=PlainTextResponse)
def api_receipt(booking_id: int, session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    booking = booking_service.get_booking(store, booking_id)
    if booking.username != session.username:
        raise BookingNotFound(f"Booking {booking_id} not found.")
    return reporting.render_receipt(booking)

@router.get("/receipts", response_class=PlainTextResponse)
def api_receipts(session: Session = Depends(require_user), store: RecordStore = Depends(get_store)):
    return reporting.receipt_history(booking_service.bookings_for_user(store, session.username))
