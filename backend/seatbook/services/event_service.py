"""
Event catalog: owns every event and builds new seat layouts.

The catalog is an explicit store object handed to the booking engine and the
availability service. Writes (event creation) are serialized by a lock and
publish a fresh dict, so readers always iterate a consistent snapshot without
locking.
"""

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Union

from seatbook.core.errors import EventNotFoundError, InvalidInputError
from seatbook.core.logging import get_logger
from seatbook.core.metrics import catalog_events
from seatbook.models.event import Event, Row, Seat, Section

logger = get_logger(__name__)


@dataclass(frozen=True)
class RowLayout:
    name: str
    seat_count: int


@dataclass(frozen=True)
class SectionLayout:
    name: str
    price: Decimal
    rows: tuple[RowLayout, ...]


def _rows(names: Sequence[str], seats_per_row: int) -> tuple[RowLayout, ...]:
    return tuple(RowLayout(name=name, seat_count=seats_per_row) for name in names)


DEFAULT_LAYOUT: tuple[SectionLayout, ...] = (
    SectionLayout(name="VIP", price=Decimal("200"), rows=_rows(["A", "B"], 10)),
    SectionLayout(name="Premium", price=Decimal("150"), rows=_rows(["C", "D", "E"], 12)),
    SectionLayout(name="General", price=Decimal("100"), rows=_rows(["F", "G", "H", "I", "J"], 15)),
)

SAMPLE_EVENTS = (
    {
        "title": "Rock Concert 2024",
        "description": "An amazing rock concert featuring top artists",
        "date": "2024-06-15T19:00:00+00:00",
        "venue": "Narendra Modi Stadium",
    },
    {
        "title": "Classical Music Evening",
        "description": "A sophisticated evening of classical music",
        "date": "2024-07-20T20:00:00+00:00",
        "venue": "Town Hall",
    },
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _parse_date(value: Union[datetime, str, None]) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidInputError(f"Invalid event date: {value!r}")
    raise InvalidInputError("Missing required fields: title, date, venue")


def _build_section(layout: SectionLayout) -> Section:
    if not layout.name or not layout.name.strip():
        raise InvalidInputError("Section name is required")
    try:
        price = Decimal(layout.price)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(f"Invalid price for section {layout.name}")
    if price < 0:
        raise InvalidInputError(f"Section {layout.name} price cannot be negative")
    if not layout.rows:
        raise InvalidInputError(f"Section {layout.name} must have at least one row")

    rows = []
    for row in layout.rows:
        if row.seat_count < 1:
            raise InvalidInputError(f"Row {row.name} must have at least one seat")
        seats = tuple(Seat(id=_new_id(), number=n) for n in range(1, row.seat_count + 1))
        rows.append(Row(id=_new_id(), name=row.name, seats=seats))

    return Section(id=_new_id(), name=layout.name, price=price, rows=tuple(rows))


class EventCatalog:
    """In-memory event store. Events are never deleted."""

    def __init__(self) -> None:
        self._events: dict[str, Event] = {}
        self._write_lock = threading.Lock()

    def create_event(
        self,
        title: Optional[str],
        date: Union[datetime, str, None],
        venue: Optional[str],
        description: Optional[str] = "",
        sections: Optional[Sequence[SectionLayout]] = None,
    ) -> Event:
        """
        Create and store an event.

        When no sections are given (None or empty), the default three-tier
        layout is generated.

        Raises:
            InvalidInputError: If title, date or venue are missing, or the layout is malformed.
        """
        if not title or not title.strip() or not venue or not venue.strip():
            raise InvalidInputError("Missing required fields: title, date, venue")
        event_date = _parse_date(date)

        layout = tuple(sections) if sections else DEFAULT_LAYOUT
        event = Event(
            id=_new_id(),
            title=title,
            description=description or "",
            date=event_date,
            venue=venue,
            sections=tuple(_build_section(s) for s in layout),
            created_at=datetime.now(timezone.utc),
        )

        with self._write_lock:
            events = dict(self._events)
            events[event.id] = event
            self._events = events
            catalog_events.set(len(events))

        logger.info(
            "event_created",
            event_id=event.id,
            title=event.title,
            sections=len(event.sections),
            default_layout=not sections,
        )
        return event

    def list_events(self) -> list[Event]:
        """All events in creation order."""
        return list(self._events.values())

    def find_event(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def get_event(self, event_id: str) -> Event:
        """
        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def seed_sample_events(self) -> list[Event]:
        return [self.create_event(**data) for data in SAMPLE_EVENTS]
