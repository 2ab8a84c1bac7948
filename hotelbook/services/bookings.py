"""Booking engine: availability, booking creation and cancellation, listings.

Every state change runs as one read-modify-write cycle under the store lock,
so the availability check and the append that relies on it cannot interleave
with another request in the same process.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..errors import (
    BookingNotFound,
    CheckinInPast,
    CheckoutNotAfterCheckin,
    InvalidDateFormat,
    ProfileIncomplete,
    RoomNotFound,
    RoomUnavailable,
)
from ..models import Booking, BookingFilter, BookingStatus, RoomStatus
from ..store import RecordStore
from . import dates, rooms
from .identity import get_profile

logger = logging.getLogger(__name__)


@dataclass
class BookingResult:
    booking_id: int
    nights: int
    total_price: Decimal
    booking: Booking


def is_room_available(store: RecordStore, room_number: int, check_in: str, check_out: str,
                      exclude_id: int | None = None) -> bool:
    """No active booking on the room overlaps [check_in, check_out)."""
    for b in store.load_all(Booking):
        if b.room_number != room_number or not b.is_active or b.booking_id == exclude_id:
            continue
        if b.overlaps(check_in, check_out):
            return False
    return True


def next_booking_id(existing: list[Booking]) -> int:
    return max((b.booking_id for b in existing), default=0) + 1


def refresh_room_status(store: RecordStore, room_number: int, today: str) -> RoomStatus:
    """Recompute the room's display status from its active bookings that reach today or later."""
    busy = any(
        b.room_number == room_number and b.is_active and b.check_out_date > today
        for b in store.load_all(Booking)
    )
    status = RoomStatus.BOOKED if busy else RoomStatus.AVAILABLE
    rooms.set_status(store, room_number, status)
    return status


def book_room(store: RecordStore, username: str, room_number: int, check_in_raw: str,
              check_out_raw: str, now: datetime | None = None) -> BookingResult:
    now = now or datetime.now()
    check_in = dates.normalize(check_in_raw)
    check_out = dates.normalize(check_out_raw)
    if check_in == dates.INVALID or check_out == dates.INVALID:
        raise InvalidDateFormat()
    if not check_in < check_out:
        raise CheckoutNotAfterCheckin()
    if not dates.is_today_or_future(check_in, now.date()):
        raise CheckinInPast()

    with store.lock:
        if not is_room_available(store, room_number, check_in, check_out):
            logger.debug("Room %s unavailable for %s..%s", room_number, check_in, check_out)
            raise RoomUnavailable()
        if not get_profile(store, username).is_complete:
            raise ProfileIncomplete()

        nights = dates.nights_between(check_in, check_out)
        total = rooms.price_of(store, room_number) * nights
        booking = Booking(
            username=username,
            room_number=room_number,
            booking_date=now.replace(microsecond=0),
            check_in_date=check_in,
            check_out_date=check_out,
            total_price=total,
            status=BookingStatus.ACTIVE,
            booking_id=next_booking_id(store.load_all(Booking)),
        )
        store.append(Booking, booking)
        rooms.set_status(store, room_number, RoomStatus.BOOKED)

    logger.info("Booking %s: room %s for %s, %s..%s (%d nights, %.2f)",
                booking.booking_id, room_number, username, check_in, check_out, nights, total)
    return BookingResult(booking_id=booking.booking_id, nights=nights, total_price=total, booking=booking)


def cancel_booking(store: RecordStore, booking_id: int, username: str | None = None,
                   now: datetime | None = None) -> Booking:
    """Mark a booking canceled; canceling twice leaves the records untouched.

    When ``username`` is given, bookings owned by someone else are reported as
    not found.
    """
    now = now or datetime.now()
    with store.lock:
        bookings = store.load_all(Booking)
        target = next((b for b in bookings if b.booking_id == booking_id), None)
        if target is None or (username is not None and target.username != username):
            raise BookingNotFound(f"Booking {booking_id} not found.")
        if not target.is_active:
            return target
        target.status = BookingStatus.CANCELED
        store.rewrite_all(Booking, bookings)
        try:
            refresh_room_status(store, target.room_number, dates.today_str(now.date()))
        except RoomNotFound:
            logger.warning("Booking %s canceled but room %s is missing from the catalog",
                           booking_id, target.room_number)

    logger.info("Booking %s canceled (room %s)", booking_id, target.room_number)
    return target


def get_booking(store: RecordStore, booking_id: int) -> Booking:
    for b in store.load_all(Booking):
        if b.booking_id == booking_id:
            return b
    raise BookingNotFound(f"Booking {booking_id} not found.")


def bookings_for_user(store: RecordStore, username: str) -> list[Booking]:
    return [b for b in store.load_all(Booking) if b.username == username]


def _matches(b: Booking, f: BookingFilter) -> bool:
    if f.booking_id and b.booking_id != f.booking_id:
        return False
    if f.username and f.username not in b.username:
        return False
    if f.start_date and b.booked_on < f.start_date:
        return False
    if f.end_date and b.booked_on > f.end_date:
        return False
    return True


def all_bookings(store: RecordStore, booking_filter: BookingFilter | None = None) -> list[Booking]:
    """Every booking in file order; the date bounds apply to the booking date, inclusive."""
    bookings = store.load_all(Booking)
    if booking_filter is None:
        return bookings
    return [b for b in bookings if _matches(b, booking_filter)]
