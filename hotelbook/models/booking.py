from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from typing import ClassVar

from pydantic import Field, field_validator

from ..store import Record, TIMESTAMP_FORMAT

ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"

class BookingStatus(str, PyEnum):
    ACTIVE = "active"
    CANCELED = "canceled"

class Booking(Record):
    filename: ClassVar[str] = "bookings.txt"
    # booking_date is "YYYY-MM-DD HH:MM:SS" and so carries the delimiter itself
    greedy_field: ClassVar[str] = "booking_date"

    username: str
    room_number: int
    booking_date: datetime
    # Zero-padded ISO strings; lexicographic order is chronological order.
    check_in_date: str = Field(pattern=ISO_DATE)
    check_out_date: str = Field(pattern=ISO_DATE)
    total_price: Decimal = Field(ge=0)
    status: BookingStatus = BookingStatus.ACTIVE
    booking_id: int

    @field_validator("booking_date", mode="before")
    @classmethod
    def _parse_timestamp(cls, value):
        if isinstance(value, str):
            return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
        return value

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    @property
    def booked_on(self) -> str:
        """Date portion of the booking timestamp, as YYYY-MM-DD."""
        return self.booking_date.strftime("%Y-%m-%d")

    def overlaps(self, check_in: str, check_out: str) -> bool:
        """Half-open [check_in, check_out) overlap against this booking's stay."""
        return not (check_out <= self.check_in_date or check_in >= self.check_out_date)
