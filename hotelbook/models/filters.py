from decimal import Decimal

from pydantic import BaseModel


class RoomFilter(BaseModel):
    """Room search criteria; zero or empty means no constraint."""
    min_price: Decimal = Decimal("0")
    max_price: Decimal = Decimal("0")
    type: str = ""
    facilities: str = ""


class BookingFilter(BaseModel):
    """Admin booking search criteria; zero or empty means no constraint."""
    booking_id: int = 0
    username: str = ""
    start_date: str = ""
    end_date: str = ""
