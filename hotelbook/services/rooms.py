from decimal import Decimal

from ..errors import RoomNotFound
from ..models import Room, RoomStatus, RoomFilter
from ..store import RecordStore


def _matches(room: Room, f: RoomFilter) -> bool:
    if f.min_price > 0 and room.price_per_night < f.min_price:
        return False
    if f.max_price > 0 and room.price_per_night > f.max_price:
        return False
    if f.type and room.type != f.type:
        return False
    if f.facilities and f.facilities not in room.facilities_text:
        return False
    return True


def list_rooms(store: RecordStore, room_filter: RoomFilter | None = None) -> list[Room]:
    """Rooms matching ``room_filter``, cheapest first; equal prices keep file order."""
    rooms = store.load_all(Room)
    if room_filter is not None:
        rooms = [r for r in rooms if _matches(r, room_filter)]
    return sorted(rooms, key=lambda r: r.price_per_night)


def get_room(store: RecordStore, room_number: int) -> Room:
    for room in store.load_all(Room):
        if room.room_number == room_number:
            return room
    raise RoomNotFound(f"Room {room_number} not found.")


def price_of(store: RecordStore, room_number: int) -> Decimal:
    return get_room(store, room_number).price_per_night


def set_status(store: RecordStore, room_number: int, status: RoomStatus) -> Room:
    with store.lock:
        rooms = store.load_all(Room)
        target = None
        for room in rooms:
            if room.room_number == room_number:
                room.status = status
                target = room
        if target is None:
            raise RoomNotFound(f"Room {room_number} not found.")
        store.rewrite_all(Room, rooms)
    return target
