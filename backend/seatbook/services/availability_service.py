"""
Seat availability, derived on demand from live inventory.

Counts are never stored. Reads take no lock: a booking in flight on some row
may or may not be reflected, but each seat is read once, so the counts for a
row always add up to its seat total.
"""

from dataclasses import dataclass
from decimal import Decimal

from seatbook.models.event import Event, Row, Section
from seatbook.services.event_service import EventCatalog


@dataclass(frozen=True)
class RowAvailability:
    row_id: str
    name: str
    total_seats: int
    available_seats: int
    booked_seats: int


@dataclass(frozen=True)
class SectionAvailability:
    section_id: str
    name: str
    price: Decimal
    rows: tuple[RowAvailability, ...]

    @property
    def total_seats(self) -> int:
        return sum(r.total_seats for r in self.rows)

    @property
    def available_seats(self) -> int:
        return sum(r.available_seats for r in self.rows)

    @property
    def booked_seats(self) -> int:
        return sum(r.booked_seats for r in self.rows)


@dataclass(frozen=True)
class EventAvailability:
    event_id: str
    sections: tuple[SectionAvailability, ...]

    @property
    def total_seats(self) -> int:
        return sum(s.total_seats for s in self.sections)

    @property
    def available_seats(self) -> int:
        return sum(s.available_seats for s in self.sections)

    @property
    def booked_seats(self) -> int:
        return sum(s.booked_seats for s in self.sections)


def row_availability(row: Row) -> RowAvailability:
    booked = sum(1 for seat in row.seats if seat.is_booked)
    total = len(row.seats)
    return RowAvailability(
        row_id=row.id,
        name=row.name,
        total_seats=total,
        available_seats=total - booked,
        booked_seats=booked,
    )


def section_availability(section: Section) -> SectionAvailability:
    return SectionAvailability(
        section_id=section.id,
        name=section.name,
        price=section.price,
        rows=tuple(row_availability(r) for r in section.rows),
    )


def event_availability(event: Event) -> EventAvailability:
    return EventAvailability(
        event_id=event.id,
        sections=tuple(section_availability(s) for s in event.sections),
    )


class AvailabilityService:
    def __init__(self, catalog: EventCatalog) -> None:
        self._catalog = catalog

    def get_availability(self, event_id: str) -> EventAvailability:
        """
        Raises:
            EventNotFoundError: If the event does not exist.
        """
        return event_availability(self._catalog.get_event(event_id))
