"""
Ticket purchase endpoint backed by the row-locked booking engine.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from seatbook.api.deps import get_booking_engine
from seatbook.api.exception_handlers import status_for
from seatbook.core.logging import get_logger
from seatbook.models.booking import BookingRequest
from seatbook.schemas.booking import BookingCreate, BookingResponse
from seatbook.services.booking_service import BookingEngine

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Bookings"])


@router.post(
    "/{event_id}/purchase",
    response_model=BookingResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": BookingResponse},
        status.HTTP_404_NOT_FOUND: {"model": BookingResponse},
    },
)
async def purchase_tickets(
    event_id: str,
    booking_data: BookingCreate,
    engine: BookingEngine = Depends(get_booking_engine),
):
    """
    Book tickets in one row.

    The lowest-numbered free seats are assigned. A row that is already being
    booked by someone else is rejected immediately with 400 rather than
    queued; the client may retry.
    """
    result = engine.book_tickets(
        BookingRequest(
            event_id=event_id,
            section_id=booking_data.section_id,
            row_id=booking_data.row_id,
            ticket_count=booking_data.ticket_count,
            customer_name=booking_data.customer.name,
            customer_email=booking_data.customer.email,
            customer_phone=booking_data.customer.phone,
        )
    )
    response = BookingResponse.from_result(result)
    if not result.success:
        return JSONResponse(status_code=status_for(result.error_code), content=response.model_dump(mode="json"))
    return response
