"""
Seat inventory model: Event -> Section -> Row -> Seat.

Key design decisions:
- The tree shape is frozen once built. Sections, rows and seats are tuples and
  membership never changes.
- A seat's booking id and timestamp live together in one immutable SeatBooking.
  Booking a seat is a single attribute assignment, so a concurrent reader sees
  either a fully unbooked seat or a fully booked one.
- Seats are never released; mark_booked refuses to overwrite an existing booking.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class SeatBooking:
    booking_id: str
    booked_at: datetime


@dataclass(eq=False)
class Seat:
    id: str
    number: int
    _booking: Optional[SeatBooking] = field(default=None, repr=False)

    @property
    def booking(self) -> Optional[SeatBooking]:
        return self._booking

    @property
    def is_booked(self) -> bool:
        return self._booking is not None

    @property
    def booking_id(self) -> Optional[str]:
        booking = self._booking
        return booking.booking_id if booking else None

    @property
    def booked_at(self) -> Optional[datetime]:
        booking = self._booking
        return booking.booked_at if booking else None

    def mark_booked(self, booking: SeatBooking) -> None:
        """Attach a booking. Only the booking engine calls this, under the row lock."""
        if self._booking is not None:
            raise RuntimeError(f"Seat {self.number} is already booked")
        self._booking = booking

    def __repr__(self) -> str:
        return f"<Seat(number={self.number}, booked={self.is_booked})>"


@dataclass(frozen=True)
class Row:
    id: str
    name: str
    seats: tuple[Seat, ...]

    def available_seats(self) -> list[Seat]:
        """Unbooked seats, lowest seat number first."""
        return sorted((s for s in self.seats if not s.is_booked), key=lambda s: s.number)


@dataclass(frozen=True)
class Section:
    id: str
    name: str
    price: Decimal
    rows: tuple[Row, ...]

    def find_row(self, row_id: str) -> Optional[Row]:
        return next((r for r in self.rows if r.id == row_id), None)


@dataclass(frozen=True)
class Event:
    id: str
    title: str
    description: str
    date: datetime
    venue: str
    sections: tuple[Section, ...]
    created_at: datetime

    def find_section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, sections={len(self.sections)})>"
