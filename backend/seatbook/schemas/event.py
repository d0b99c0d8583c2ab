"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from seatbook.models.event import Event, Seat
from seatbook.services.availability_service import EventAvailability
from seatbook.services.event_service import RowLayout, SectionLayout


class RowCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=20)
    seat_count: int = Field(..., gt=0, le=200)


class SectionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    rows: list[RowCreate] = Field(..., min_length=1)

    def to_layout(self) -> SectionLayout:
        return SectionLayout(
            name=self.name,
            price=self.price,
            rows=tuple(RowLayout(name=r.name, seat_count=r.seat_count) for r in self.rows),
        )


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    date: datetime
    venue: str = Field(..., min_length=1, max_length=255)
    sections: Optional[list[SectionCreate]] = None


class SeatResponse(BaseModel):
    id: str
    number: int
    is_booked: bool
    booked_at: Optional[datetime] = None
    booking_id: Optional[str] = None

    @classmethod
    def from_seat(cls, seat: Seat) -> "SeatResponse":
        booking = seat.booking
        return cls(
            id=seat.id,
            number=seat.number,
            is_booked=booking is not None,
            booked_at=booking.booked_at if booking else None,
            booking_id=booking.booking_id if booking else None,
        )


class RowResponse(BaseModel):
    id: str
    name: str
    seats: list[SeatResponse]


class SectionResponse(BaseModel):
    id: str
    name: str
    price: float
    rows: list[RowResponse]


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    date: datetime
    venue: str
    sections: list[SectionResponse]
    created_at: datetime

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            date=event.date,
            venue=event.venue,
            sections=[
                SectionResponse(
                    id=section.id,
                    name=section.name,
                    price=float(section.price),
                    rows=[
                        RowResponse(
                            id=row.id,
                            name=row.name,
                            seats=[SeatResponse.from_seat(s) for s in row.seats],
                        )
                        for row in section.rows
                    ],
                )
                for section in event.sections
            ],
            created_at=event.created_at,
        )


class EventListResponse(BaseModel):
    events: list[EventResponse]
    total: int


class RowAvailabilityResponse(BaseModel):
    row_id: str
    name: str
    total_seats: int
    available_seats: int
    booked_seats: int


class SectionAvailabilityResponse(BaseModel):
    section_id: str
    name: str
    price: float
    total_seats: int
    available_seats: int
    booked_seats: int
    rows: list[RowAvailabilityResponse]


class AvailabilityResponse(BaseModel):
    event_id: str
    total_seats: int
    available_seats: int
    booked_seats: int
    sections: list[SectionAvailabilityResponse]

    @classmethod
    def from_availability(cls, availability: EventAvailability) -> "AvailabilityResponse":
        return cls(
            event_id=availability.event_id,
            total_seats=availability.total_seats,
            available_seats=availability.available_seats,
            booked_seats=availability.booked_seats,
            sections=[
                SectionAvailabilityResponse(
                    section_id=s.section_id,
                    name=s.name,
                    price=float(s.price),
                    total_seats=s.total_seats,
                    available_seats=s.available_seats,
                    booked_seats=s.booked_seats,
                    rows=[
                        RowAvailabilityResponse(
                            row_id=r.row_id,
                            name=r.name,
                            total_seats=r.total_seats,
                            available_seats=r.available_seats,
                            booked_seats=r.booked_seats,
                        )
                        for r in s.rows
                    ],
                )
                for s in availability.sections
            ],
        )
