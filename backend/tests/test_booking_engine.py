"""
Tests for the booking engine: seat selection, pricing, failures and contention.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from seatbook.core.errors import ErrorCode
from seatbook.models.booking import BookingRequest
from seatbook.services.booking_service import CONTENTION_MESSAGE, BookingEngine
from seatbook.services.interfaces.row_lock import RowLockKey
from seatbook.services.lock_service import InMemoryRowLockRegistry
from seatbook.services.pricing import PricingPolicy


def row_key(request: BookingRequest) -> RowLockKey:
    return RowLockKey(request.event_id, request.section_id, request.row_id)


def row_counts(availability, event_id):
    row = availability.get_availability(event_id).sections[0].rows[0]
    return row.available_seats, row.booked_seats


def test_group_booking_scenario(engine, availability, vip_event, make_request):
    """Five VIP seats at 200 get the group discount and seats 1-5."""
    result = engine.book_tickets(make_request(5))

    assert result.success
    assert result.total_amount == Decimal("900")
    assert result.discount_applied is True
    assert result.discount_amount == Decimal("100")
    assert [s.number for s in result.seats] == [1, 2, 3, 4, 5]
    assert row_counts(availability, vip_event.id) == (5, 5)


def test_insufficient_inventory_leaves_row_unchanged(engine, availability, vip_event, make_request):
    engine.book_tickets(make_request(5))

    result = engine.book_tickets(make_request(6))

    assert not result.success
    assert result.error_code is ErrorCode.INSUFFICIENT_INVENTORY
    assert result.error == "Only 5 seats available in this row"
    assert row_counts(availability, vip_event.id) == (5, 5)


def test_all_seats_share_one_booking(engine, make_request):
    result = engine.book_tickets(make_request(3))

    assert {s.booking_id for s in result.seats} == {result.booking_id}
    assert len({s.booked_at for s in result.seats}) == 1


def test_successive_bookings_take_next_lowest_seats(engine, make_request):
    first = engine.book_tickets(make_request(2))
    second = engine.book_tickets(make_request(3))

    assert [s.number for s in first.seats] == [1, 2]
    assert [s.number for s in second.seats] == [3, 4, 5]
    assert first.booking_id != second.booking_id


def test_booking_exactly_remaining_seats(engine, availability, vip_event, make_request):
    engine.book_tickets(make_request(7))
    result = engine.book_tickets(make_request(3))

    assert result.success
    assert row_counts(availability, vip_event.id) == (0, 10)
    assert engine.book_tickets(make_request(1)).error == "Only 0 seats available in this row"


@pytest.mark.parametrize(
    "ticket_count,total,discount,applied",
    [
        (1, "200", "0", False),
        (3, "600", "0", False),
        (4, "720", "80", True),
        (10, "1800", "200", True),
    ],
)
def test_discount_law(engine, make_request, ticket_count, total, discount, applied):
    result = engine.book_tickets(make_request(ticket_count))

    assert result.total_amount == Decimal(total)
    assert result.discount_amount == Decimal(discount)
    assert result.discount_applied is applied


def test_pricing_rounds_to_cents():
    quote = PricingPolicy().quote(Decimal("33.33"), 4)
    assert quote.base_amount == Decimal("133.32")
    assert quote.discount_amount == Decimal("13.33")
    assert quote.total_amount == Decimal("119.99")


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"event_id": "missing"}, "Event not found"),
        ({"section_id": "missing"}, "Section not found"),
        ({"row_id": "missing"}, "Row not found"),
    ],
)
def test_not_found(engine, locks, make_request, overrides, message):
    request = make_request(2, **overrides)

    result = engine.book_tickets(request)

    assert result.error_code is ErrorCode.NOT_FOUND
    assert result.error == message
    assert not locks.is_held(row_key(request))


@pytest.mark.parametrize(
    "overrides",
    [
        {"ticket_count": 0},
        {"ticket_count": 11},
        {"row_id": ""},
        {"customer_email": ""},
        {"customer_name": ""},
    ],
)
def test_invalid_input_rejected_without_locking(engine, locks, make_request, overrides):
    result = engine.book_tickets(make_request(**overrides))

    assert result.error_code is ErrorCode.INVALID_INPUT
    assert locks.held_count() == 0


def test_contention_when_row_is_held(engine, locks, availability, vip_event, make_request):
    request = make_request(2)
    lease = locks.try_acquire(row_key(request))

    result = engine.book_tickets(request)

    assert result.error_code is ErrorCode.CONTENTION
    assert result.error == CONTENTION_MESSAGE
    assert row_counts(availability, vip_event.id) == (10, 0)
    # The engine must not release a lock it did not take
    assert locks.is_held(row_key(request))

    locks.release(row_key(request), lease)
    assert engine.book_tickets(request).success


def test_other_rows_unaffected_by_held_row(catalog, engine, locks, default_event):
    vip = default_event.sections[0]
    row_a, row_b = vip.rows
    locks.try_acquire(RowLockKey(default_event.id, vip.id, row_a.id))

    result = engine.book_tickets(
        BookingRequest(
            event_id=default_event.id,
            section_id=vip.id,
            row_id=row_b.id,
            ticket_count=2,
            customer_name="Grace",
            customer_email="grace@example.com",
        )
    )

    assert result.success


def test_lock_released_after_every_outcome(engine, locks, make_request):
    request = make_request(4)
    engine.book_tickets(request)
    engine.book_tickets(make_request(9))
    engine.book_tickets(make_request(1, event_id="missing"))

    assert locks.held_count() == 0


def test_lock_released_when_pricing_fails(catalog, locks, make_request):
    class BrokenPricing(PricingPolicy):
        def quote(self, unit_price, ticket_count):
            raise ArithmeticError("boom")

    engine = BookingEngine(catalog, locks, pricing=BrokenPricing())
    request = make_request(1)

    with pytest.raises(ArithmeticError):
        engine.book_tickets(request)

    assert not locks.is_held(row_key(request))


def test_concurrent_bookings_for_last_seats(catalog, locks, availability, vip_event, make_request):
    """Racing requests that each want the remaining 6 seats: exactly one wins."""
    engine = BookingEngine(catalog, locks)
    engine.book_tickets(make_request(4))

    workers = 8
    barrier = threading.Barrier(workers)

    def attempt(_):
        barrier.wait()
        return engine.book_tickets(make_request(6))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    winners = [r for r in results if r.success]
    losers = [r for r in results if not r.success]
    assert len(winners) == 1
    assert {r.error_code for r in losers} <= {ErrorCode.CONTENTION, ErrorCode.INSUFFICIENT_INVENTORY}
    assert row_counts(availability, vip_event.id) == (0, 10)
    assert locks.held_count() == 0


def test_concurrent_single_seat_bookings_never_oversell(catalog, locks, availability, vip_event, make_request):
    engine = BookingEngine(catalog, locks)
    workers = 50
    barrier = threading.Barrier(workers)

    def attempt(_):
        barrier.wait()
        return engine.book_tickets(make_request(1))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    booked = [seat for r in results if r.success for seat in r.seats]
    assert len(booked) == len({seat.number for seat in booked})
    assert len(booked) <= 10
    available, booked_count = row_counts(availability, vip_event.id)
    assert booked_count == len(booked)
    assert available + booked_count == 10
