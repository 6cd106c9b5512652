"""
Room Management Module

Rooms, customers and bookings for the hotel front desk, plus the codecs
that map them to flat file lines.

Rooms file line:    <room number> <Single|Double|Suite> <0|1>
Bookings file line: <booking id> <room number> <customer id> <customer name>
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .persistence import MalformedRecord, RecordCodec
from .results import FailureKind, OperationError


class RoomKind(Enum):
    """Room types with their file label and display name"""
    SINGLE = ("Single", "Single Room")
    DOUBLE = ("Double", "Double Room")
    SUITE = ("Suite", "Suite Room")
    
    def __init__(self, label: str, display_name: str):
        self.label = label
        self.display_name = display_name
    
    @classmethod
    def from_label(cls, label: str) -> Optional["RoomKind"]:
        """Kind for a stored label, None when unrecognized"""
        for kind in cls:
            if kind.label == label:
                return kind
        return None


def _check_token(value: str, what: str) -> None:
    if not value or any(ch.isspace() for ch in value):
        raise ValueError(f"{what} must be a non-empty value without whitespace: {value!r}")


@dataclass
class Room:
    """
    Hotel room
    
    The number never changes after creation; only the booked flag moves.
    """
    number: int
    kind: RoomKind
    is_booked: bool = False
    
    def __post_init__(self):
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise ValueError(f"Room number must be an integer: {self.number!r}")
    
    @property
    def identifier(self) -> int:
        return self.number
    
    @property
    def status(self) -> str:
        return "Booked" if self.is_booked else "Available"
    
    def book(self) -> None:
        """Available -> Booked"""
        if self.is_booked:
            raise OperationError(FailureKind.ALREADY_IN_STATE, f"Room {self.number} is already booked.")
        self.is_booked = True
    
    def cancel(self) -> None:
        """Booked -> Available"""
        if not self.is_booked:
            raise OperationError(FailureKind.ALREADY_IN_STATE, f"Room {self.number} is not booked yet.")
        self.is_booked = False
    
    def describe(self) -> str:
        return f"Room {self.number} ({self.kind.display_name}): {self.status}"


@dataclass(frozen=True)
class Customer:
    """Guest details copied into a booking"""
    customer_id: str
    name: str
    
    def __post_init__(self):
        _check_token(self.customer_id, "Customer ID")
        name = " ".join(self.name.split())
        if not name:
            raise ValueError("Customer name must not be empty")
        object.__setattr__(self, 'name', name)


@dataclass
class Booking:
    """Reservation of one room by one customer; refers to the room by number"""
    booking_id: str
    customer: Customer
    room_number: int
    
    def __post_init__(self):
        _check_token(self.booking_id, "Booking ID")
    
    @property
    def identifier(self) -> str:
        return self.booking_id


class RoomCodec(RecordCodec[Room]):
    field_count = 3
    
    def encode(self, room: Room) -> List[str]:
        return [str(room.number), room.kind.label, "1" if room.is_booked else "0"]
    
    def decode(self, fields: List[str]) -> Optional[Room]:
        number_text, label, flag = fields
        try:
            number = int(number_text)
        except ValueError:
            raise MalformedRecord(f"invalid room number {number_text!r}")
        if flag not in ("0", "1"):
            raise MalformedRecord(f"invalid booked flag {flag!r}")
        
        kind = RoomKind.from_label(label)
        if kind is None:
            return None
        
        room = Room(number=number, kind=kind)
        if flag == "1":
            # Re-run the booking guard rather than trusting the stored flag
            room.book()
        return room
    
    def identifier(self, room: Room) -> int:
        return room.number


class BookingCodec(RecordCodec[Booking]):
    field_count = 4
    trailing_text = True
    
    def encode(self, booking: Booking) -> List[str]:
        return [
            booking.booking_id,
            str(booking.room_number),
            booking.customer.customer_id,
            booking.customer.name,
        ]
    
    def decode(self, fields: List[str]) -> Optional[Booking]:
        booking_id, room_text, customer_id, name = fields
        try:
            room_number = int(room_text)
        except ValueError:
            raise MalformedRecord(f"invalid room number {room_text!r}")
        return Booking(
            booking_id=booking_id,
            customer=Customer(customer_id=customer_id, name=name),
            room_number=room_number
        )
    
    def identifier(self, booking: Booking) -> str:
        return booking.booking_id
