"""
Booking engine: assigns seats in a row under the row lock.

CONCURRENCY STRATEGY: Fail-fast row lock
========================================

Problem:
  Two customers request 3 seats each in a row that has 4 left.
  Both count 4 free seats, both mark seats booked.
  Result: Overlapping or oversold seats.

Solution:
  Every booking takes the lock for its (event, section, row) first.

  1. try_acquire the row lock; a busy row is rejected with CONTENTION
  2. Resolve event, section, row
  3. Count free seats; too few is INSUFFICIENT_INVENTORY
  4. Take the lowest-numbered free seats and mark them booked
  5. Price the booking
  6. Release the lock on every exit path

  Steps 3 and 4 happen under the same lock, so no other booking on the row
  can slip in between the count and the mutation. Nothing between seat
  selection and marking can fail, so there is no partial booking and no
  rollback path.

Alternative approaches considered:
  - Blocking mutex per row: Serializes waiters instead of rejecting them.
    Unbounded latency when a row is hot.
  - Global lock: Correct, but one busy row would stall every other row.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from seatbook.core.errors import ErrorCode
from seatbook.core.logging import get_logger
from seatbook.core.metrics import (
    booking_latency,
    record_booking_attempt,
    record_seats_sold,
    row_lock_contention,
)
from seatbook.models.booking import BookingRequest, BookingResult
from seatbook.models.event import SeatBooking
from seatbook.services.event_service import EventCatalog
from seatbook.services.interfaces.row_lock import RowLockKey, RowLockRegistry
from seatbook.services.pricing import PricingPolicy

logger = get_logger(__name__)

CONTENTION_MESSAGE = "Another booking is in progress for this row. Please try again."
MAX_TICKETS_PER_BOOKING = 10


class BookingEngine:
    def __init__(
        self,
        catalog: EventCatalog,
        locks: RowLockRegistry,
        pricing: Optional[PricingPolicy] = None,
        max_tickets: int = MAX_TICKETS_PER_BOOKING,
    ):
        self._catalog = catalog
        self._locks = locks
        self._pricing = pricing or PricingPolicy()
        self._max_tickets = max_tickets

    def book_tickets(self, request: BookingRequest) -> BookingResult:
        """
        Book the `ticket_count` lowest-numbered free seats of one row.

        Never raises for expected failures; those come back as a failed
        BookingResult. Unexpected errors propagate after the row lock is released.
        """
        start = time.perf_counter()
        try:
            result = self._book(request)
        except Exception:
            record_booking_attempt("error")
            logger.exception(
                "booking_failed_unexpectedly",
                event_id=request.event_id,
                section_id=request.section_id,
                row_id=request.row_id,
            )
            raise
        finally:
            booking_latency.observe(time.perf_counter() - start)

        if result.success:
            record_booking_attempt("success")
        else:
            record_booking_attempt(result.error_code.value.lower())
        return result

    def _book(self, request: BookingRequest) -> BookingResult:
        invalid = self._validate(request)
        if invalid:
            return BookingResult.failure(ErrorCode.INVALID_INPUT, invalid)

        key = RowLockKey(request.event_id, request.section_id, request.row_id)
        lease = self._locks.try_acquire(key)
        if not lease:
            row_lock_contention.inc()
            logger.info("booking_rejected_contention", key=str(key))
            return BookingResult.failure(ErrorCode.CONTENTION, CONTENTION_MESSAGE)

        try:
            return self._book_locked(request)
        finally:
            self._locks.release(key, lease)

    def _validate(self, request: BookingRequest) -> Optional[str]:
        if not request.event_id or not request.section_id or not request.row_id:
            return "Missing required fields: eventId, sectionId, rowId"
        if not 1 <= request.ticket_count <= self._max_tickets:
            return f"Number of tickets must be between 1 and {self._max_tickets}"
        if not request.customer_name or not request.customer_email:
            return "Customer information (name, email) is required"
        return None

    def _book_locked(self, request: BookingRequest) -> BookingResult:
        event = self._catalog.find_event(request.event_id)
        if event is None:
            return BookingResult.failure(ErrorCode.NOT_FOUND, "Event not found")

        section = event.find_section(request.section_id)
        if section is None:
            return BookingResult.failure(ErrorCode.NOT_FOUND, "Section not found")

        row = section.find_row(request.row_id)
        if row is None:
            return BookingResult.failure(ErrorCode.NOT_FOUND, "Row not found")

        available = row.available_seats()
        if len(available) < request.ticket_count:
            logger.warning(
                "booking_failed_no_seats",
                event_id=event.id,
                row=row.name,
                requested=request.ticket_count,
                available=len(available),
            )
            return BookingResult.failure(
                ErrorCode.INSUFFICIENT_INVENTORY,
                f"Only {len(available)} seats available in this row",
            )

        selected = available[: request.ticket_count]
        booking = SeatBooking(booking_id=str(uuid.uuid4()), booked_at=datetime.now(timezone.utc))
        for seat in selected:
            seat.mark_booked(booking)
        record_seats_sold(len(selected))

        quote = self._pricing.quote(section.price, request.ticket_count)

        logger.info(
            "booking_created",
            booking_id=booking.booking_id,
            event_id=event.id,
            section=section.name,
            row=row.name,
            seats=[s.number for s in selected],
            total_amount=str(quote.total_amount),
            discount_applied=quote.discount_applied,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
        )
        return BookingResult(
            success=True,
            booking_id=booking.booking_id,
            seats=tuple(selected),
            total_amount=quote.total_amount,
            discount_applied=quote.discount_applied,
            discount_amount=quote.discount_amount,
        )
