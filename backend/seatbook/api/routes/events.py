"""
Event catalog and availability endpoints.
"""

from fastapi import APIRouter, Depends, status

from seatbook.api.deps import get_availability_service, get_catalog
from seatbook.core.logging import get_logger
from seatbook.schemas.event import AvailabilityResponse, EventCreate, EventListResponse, EventResponse
from seatbook.services.availability_service import AvailabilityService
from seatbook.services.event_service import EventCatalog

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    catalog: EventCatalog = Depends(get_catalog),
):
    """Create an event. Without sections, the default VIP/Premium/General layout is used."""
    event = catalog.create_event(
        title=event_data.title,
        date=event_data.date,
        venue=event_data.venue,
        description=event_data.description,
        sections=[s.to_layout() for s in event_data.sections or []],
    )
    return EventResponse.from_event(event)


@router.get("/", response_model=EventListResponse)
async def list_events_endpoint(catalog: EventCatalog = Depends(get_catalog)):
    """List all events in creation order."""
    events = catalog.list_events()
    return EventListResponse(
        events=[EventResponse.from_event(e) for e in events],
        total=len(events),
    )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(
    event_id: str,
    catalog: EventCatalog = Depends(get_catalog),
):
    """Get a single event with its full seat map."""
    return EventResponse.from_event(catalog.get_event(event_id))


@router.get("/{event_id}/availability", response_model=AvailabilityResponse)
async def get_availability_endpoint(
    event_id: str,
    availability: AvailabilityService = Depends(get_availability_service),
):
    """Per-section and per-row seat counts, computed from live inventory."""
    return AvailabilityResponse.from_availability(availability.get_availability(event_id))
