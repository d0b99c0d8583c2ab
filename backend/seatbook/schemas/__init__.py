from seatbook.schemas.booking import BookingCreate, BookingResponse, CustomerInfo
from seatbook.schemas.event import (
    AvailabilityResponse,
    EventCreate,
    EventListResponse,
    EventResponse,
    SectionCreate,
)

__all__ = [
    "EventCreate", "SectionCreate", "EventResponse", "EventListResponse", "AvailabilityResponse",
    "BookingCreate", "BookingResponse", "CustomerInfo",
]
