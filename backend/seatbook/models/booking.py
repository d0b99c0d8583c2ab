"""
Booking request and result records exchanged with the booking engine.

A BookingResult is either a success carrying the assigned seats and the price
breakdown, or a failure carrying an ErrorCode and a human-readable message.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from seatbook.core.errors import ErrorCode
from seatbook.models.event import Seat


@dataclass(frozen=True)
class BookingRequest:
    event_id: str
    section_id: str
    row_id: str
    ticket_count: int
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None


@dataclass(frozen=True)
class BookingResult:
    success: bool
    booking_id: Optional[str] = None
    seats: tuple[Seat, ...] = field(default=())
    total_amount: Decimal = Decimal("0")
    discount_applied: bool = False
    discount_amount: Decimal = Decimal("0")
    error_code: Optional[ErrorCode] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "BookingResult":
        return cls(success=False, error_code=code, error=message)
