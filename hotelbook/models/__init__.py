from .room import Room, RoomType, RoomStatus
from .booking import Booking, BookingStatus
from .user import User, UserProfile, AdminCredential
from .filters import RoomFilter, BookingFilter
