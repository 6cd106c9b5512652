"""
Hotel Management Module

Front desk operations over the room store and the booking log. Every
public operation returns an OperationResult; rooms and bookings are
written back to storage after each successful change when autosave is on.

Invariant: a booking exists for a room exactly when that room is booked.
"""

from typing import List, Optional

from .config import FrontOfficeConfig, get_config
from .entity_store import EntityStore
from .logging_config import get_logger, log_action
from .persistence import LoadReport, PersistenceAdapter
from .results import FailureKind, OperationError, OperationResult
from .rooms import Booking, BookingCodec, Customer, Room, RoomCodec, RoomKind
from .storage import FlatFileStorage, StorageInterface


logger = get_logger("front_office.hotel")


class Hotel:
    """
    Manages rooms and the bookings made against them
    
    Without booking_storage, bookings only last for the session; the
    invariant is still enforced on load by releasing booked rooms that
    have no booking.
    """
    
    def __init__(
        self,
        room_storage: StorageInterface,
        booking_storage: Optional[StorageInterface] = None,
        autosave: bool = True
    ):
        self.rooms: EntityStore[Room] = EntityStore("Room")
        self.booking_log: EntityStore[Booking] = EntityStore("Booking")
        self.autosave = autosave
        self._room_adapter = PersistenceAdapter(room_storage, RoomCodec(), "room")
        self._booking_adapter: Optional[PersistenceAdapter[Booking]] = None
        if booking_storage is not None:
            self._booking_adapter = PersistenceAdapter(booking_storage, BookingCodec(), "booking")
        self.load()
    
    def __enter__(self) -> "Hotel":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
    
    # Persistence
    
    def load(self) -> LoadReport:
        """Replace in-memory state with what storage holds"""
        self.rooms.clear()
        self.booking_log.clear()
        report = self._room_adapter.load(self.rooms)
        if self._booking_adapter is not None:
            self._booking_adapter.load(self.booking_log)
        self._reconcile_bookings()
        return report
    
    def save(self) -> bool:
        """Write rooms and bookings; False if either could not be written"""
        rooms_saved = self._room_adapter.save(self.rooms)
        if self._booking_adapter is None:
            return rooms_saved
        bookings_saved = self._booking_adapter.save(self.booking_log)
        return rooms_saved and bookings_saved
    
    def close(self) -> bool:
        """Final save on shutdown"""
        return self.save()
    
    def _changed(self) -> bool:
        if self.autosave:
            return self.save()
        return True
    
    def _reconcile_bookings(self) -> None:
        claimed = set()
        for booking in self.booking_log:
            room = self.rooms.find(booking.room_number)
            if room is None or not room.is_booked or room.number in claimed:
                logger.warning(
                    f"Dropping booking {booking.booking_id}: room {booking.room_number} "
                    f"is missing, not booked or already claimed"
                )
                self.booking_log.remove(booking.booking_id)
                continue
            claimed.add(room.number)
        
        for room in self.rooms:
            if room.is_booked and room.number not in claimed:
                logger.warning(f"Releasing room {room.number}: booked without a booking record")
                room.cancel()
    
    # Rooms
    
    def add_room(self, number: int, kind: RoomKind) -> OperationResult[Room]:
        """Create an available room with a fresh number"""
        if self.rooms.contains(number):
            return OperationResult.fail(
                FailureKind.DUPLICATE_IDENTIFIER, f"Room {number} already exists."
            )
        
        room = self.rooms.add(Room(number=number, kind=kind))
        persisted = self._changed()
        log_action(
            logger, "info", f"Room {number} added",
            action="add_room", resource="room", entity_id=number,
            extra={"kind": kind.label}
        )
        return OperationResult.ok(room, persisted=persisted)
    
    def find_room(self, number: int) -> OperationResult[Room]:
        try:
            return OperationResult.ok(self.rooms.get(number))
        except OperationError as e:
            return OperationResult.from_error(e)
    
    def check_availability(self) -> List[str]:
        """One status line per room, in store order"""
        return [room.describe() for room in self.rooms]
    
    def available_rooms(self) -> List[Room]:
        return [room for room in self.rooms if not room.is_booked]
    
    # Bookings
    
    def bookings(self) -> List[Booking]:
        return self.booking_log.all()
    
    def find_booking(self, booking_id: str) -> OperationResult[Booking]:
        try:
            return OperationResult.ok(self.booking_log.get(booking_id))
        except OperationError as e:
            return OperationResult.from_error(e)
    
    def book_room(self, number: int, customer: Customer, booking_id: str) -> OperationResult[Booking]:
        """
        Reserve a room for a customer.
        
        Fails with NOT_FOUND for an unknown room, DUPLICATE_IDENTIFIER for a
        booking id already in use and ALREADY_IN_STATE for a booked room.
        """
        try:
            room = self.rooms.get(number)
            if self.booking_log.contains(booking_id):
                raise OperationError(
                    FailureKind.DUPLICATE_IDENTIFIER, f"Booking {booking_id} already exists."
                )
            booking = Booking(booking_id=booking_id, customer=customer, room_number=number)
            with self.rooms.atomic():
                room.book()
                self.booking_log.add(booking)
        except OperationError as e:
            log_action(
                logger, "info", f"Booking rejected: {e}",
                action="book_room", resource="room", entity_id=number
            )
            return OperationResult.from_error(e)
        
        persisted = self._changed()
        log_action(
            logger, "info", f"Room {number} booked",
            action="book_room", resource="room", entity_id=number,
            extra={"booking_id": booking_id, "customer_id": customer.customer_id}
        )
        return OperationResult.ok(booking, persisted=persisted)
    
    def cancel_booking(self, booking_id: str) -> OperationResult[Booking]:
        """Cancel a booking and release its room"""
        try:
            booking = self.booking_log.get(booking_id)
            room = self.rooms.get(booking.room_number)
            with self.rooms.atomic():
                room.cancel()
                self.booking_log.remove(booking_id)
        except OperationError as e:
            log_action(
                logger, "info", f"Cancellation rejected: {e}",
                action="cancel_booking", resource="booking", entity_id=booking_id
            )
            return OperationResult.from_error(e)
        
        persisted = self._changed()
        log_action(
            logger, "info", f"Booking {booking_id} cancelled",
            action="cancel_booking", resource="booking", entity_id=booking_id,
            extra={"room_number": booking.room_number}
        )
        return OperationResult.ok(booking, persisted=persisted)


def create_hotel(config: Optional[FrontOfficeConfig] = None) -> Hotel:
    """Build a Hotel backed by the configured rooms and bookings files"""
    config = config or get_config()
    return Hotel(
        room_storage=FlatFileStorage(config.rooms_file),
        booking_storage=FlatFileStorage(config.bookings_file),
        autosave=config.autosave
    )
