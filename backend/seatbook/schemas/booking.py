"""
Pydantic schemas for booking-related request/response validation.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from seatbook.models.booking import BookingResult
from seatbook.schemas.event import SeatResponse


class CustomerInfo(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)


class BookingCreate(BaseModel):
    section_id: str = Field(..., min_length=1)
    row_id: str = Field(..., min_length=1)
    ticket_count: int = Field(..., ge=1, le=10)
    customer: CustomerInfo


class BookingResponse(BaseModel):
    success: bool
    booking_id: Optional[str] = None
    seats: list[SeatResponse] = []
    total_amount: float = 0
    discount_applied: bool = False
    discount_amount: float = 0
    error_code: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: BookingResult) -> "BookingResponse":
        return cls(
            success=result.success,
            booking_id=result.booking_id,
            seats=[SeatResponse.from_seat(s) for s in result.seats],
            total_amount=float(result.total_amount),
            discount_applied=result.discount_applied,
            discount_amount=float(result.discount_amount),
            error_code=result.error_code.value if result.error_code else None,
            error=result.error,
        )
