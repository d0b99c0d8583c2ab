"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest

# Booking metrics
booking_attempts = Counter(
    'seat_booking_attempts_total',
    'Total booking attempts',
    ['outcome']  # success, contention, not_found, insufficient_inventory, invalid_input, error
)

booking_latency = Histogram(
    'seat_booking_latency_seconds',
    'Time spent inside book_tickets',
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]
)

seats_sold = Counter(
    'seats_sold_total',
    'Seats marked booked'
)

# Row lock metrics
row_lock_contention = Counter(
    'row_lock_contention_total',
    'Booking attempts rejected because the row lock was held'
)

row_lock_lease_expired = Counter(
    'row_lock_lease_expired_total',
    'Row locks taken over after their lease expired'
)

row_locks_held = Gauge(
    'row_locks_held',
    'Row locks currently held'
)

# Catalog metrics
catalog_events = Gauge(
    'catalog_events',
    'Events currently in the catalog'
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(outcome: str):
    """Record booking attempt by outcome label."""
    booking_attempts.labels(outcome=outcome).inc()


def record_seats_sold(count: int):
    seats_sold.inc(count)
