"""
Pytest fixtures for an isolated catalog, lock registry, engine and HTTP client.

Each test gets a fresh in-memory catalog without sample data, wired into the
app through dependency overrides.
"""

from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from seatbook.api.deps import get_catalog, get_lock_registry
from seatbook.main import app
from seatbook.models.booking import BookingRequest
from seatbook.models.event import Event
from seatbook.services.availability_service import AvailabilityService
from seatbook.services.booking_service import BookingEngine
from seatbook.services.event_service import EventCatalog, RowLayout, SectionLayout
from seatbook.services.lock_service import InMemoryRowLockRegistry


@pytest.fixture
def catalog() -> EventCatalog:
    return EventCatalog()


@pytest.fixture
def locks() -> InMemoryRowLockRegistry:
    return InMemoryRowLockRegistry()


@pytest.fixture
def engine(catalog: EventCatalog, locks: InMemoryRowLockRegistry) -> BookingEngine:
    return BookingEngine(catalog, locks)


@pytest.fixture
def availability(catalog: EventCatalog) -> AvailabilityService:
    return AvailabilityService(catalog)


@pytest.fixture
def vip_event(catalog: EventCatalog) -> Event:
    """One VIP section at 200 with a single row A of 10 seats."""
    return catalog.create_event(
        title="Test Concert",
        date="2026-12-01T19:00:00+00:00",
        venue="Test Venue",
        description="A test event",
        sections=[
            SectionLayout(name="VIP", price=Decimal("200"), rows=(RowLayout(name="A", seat_count=10),)),
        ],
    )


@pytest.fixture
def default_event(catalog: EventCatalog) -> Event:
    """An event created without a layout, so it carries the default three tiers."""
    return catalog.create_event(title="Default Layout Show", date="2026-12-02T20:00:00Z", venue="Arena")


@pytest.fixture
def make_request(vip_event: Event):
    """Build a booking request against the VIP row unless ids are overridden."""

    def _make(ticket_count: int = 1, **overrides) -> BookingRequest:
        section = vip_event.sections[0]
        fields = {
            "event_id": vip_event.id,
            "section_id": section.id,
            "row_id": section.rows[0].id,
            "ticket_count": ticket_count,
            "customer_name": "Ada Lovelace",
            "customer_email": "ada@example.com",
        }
        fields.update(overrides)
        return BookingRequest(**fields)

    return _make


@pytest_asyncio.fixture(scope="function")
async def client(
    catalog: EventCatalog, locks: InMemoryRowLockRegistry
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test catalog and lock registry."""
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_lock_registry] = lambda: locks

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
