from decimal import Decimal
from enum import Enum as PyEnum
from typing import ClassVar

from pydantic import Field, field_validator

from ..store import Record

class RoomType(str, PyEnum):
    SINGLE = "Single"
    DOUBLE = "Double"
    SUITE = "Suite"

class RoomStatus(str, PyEnum):
    AVAILABLE = "Available"
    BOOKED = "Booked"

class Room(Record):
    filename: ClassVar[str] = "rooms.txt"

    room_number: int
    # Free text on disk; RoomType constrains what the catalog accepts as input.
    type: str
    price_per_night: Decimal = Field(ge=0)
    status: RoomStatus = RoomStatus.AVAILABLE
    facilities: list[str] = Field(default_factory=list)

    @field_validator("facilities", mode="before")
    @classmethod
    def _split_facilities(cls, value):
        if isinstance(value, str):
            return [f.strip() for f in value.split(",") if f.strip()]
        return value

    @property
    def facilities_text(self) -> str:
        return ",".join(self.facilities)
