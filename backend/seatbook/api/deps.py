"""
Dependency providers for the route handlers.

The catalog and lock registry are process-wide singletons. Tests swap them
through app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from seatbook.core.config import get_settings
from seatbook.services.availability_service import AvailabilityService
from seatbook.services.booking_service import BookingEngine
from seatbook.services.event_service import EventCatalog
from seatbook.services.interfaces.row_lock import RowLockRegistry
from seatbook.services.lock_service import InMemoryRowLockRegistry
from seatbook.services.pricing import PricingPolicy


@lru_cache()
def get_catalog() -> EventCatalog:
    catalog = EventCatalog()
    if get_settings().SEED_SAMPLE_EVENTS:
        catalog.seed_sample_events()
    return catalog


@lru_cache()
def get_lock_registry() -> RowLockRegistry:
    return InMemoryRowLockRegistry(lease_seconds=get_settings().ROW_LOCK_LEASE_SECONDS)


def get_booking_engine(
    catalog: EventCatalog = Depends(get_catalog),
    locks: RowLockRegistry = Depends(get_lock_registry),
) -> BookingEngine:
    settings = get_settings()
    return BookingEngine(
        catalog,
        locks,
        pricing=PricingPolicy(
            group_threshold=settings.GROUP_DISCOUNT_THRESHOLD,
            group_rate=settings.GROUP_DISCOUNT_RATE,
        ),
        max_tickets=settings.MAX_TICKETS_PER_BOOKING,
    )


def get_availability_service(catalog: EventCatalog = Depends(get_catalog)) -> AvailabilityService:
    return AvailabilityService(catalog)
