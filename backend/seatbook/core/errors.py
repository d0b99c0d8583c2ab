"""
Domain error codes and exceptions.

Catalog and availability lookups raise these. The booking engine reports the
same codes inside a BookingResult instead of raising, because every booking
failure is an expected outcome the caller has to handle.
"""

from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CONTENTION = "CONTENTION"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    INVALID_INPUT = "INVALID_INPUT"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    code = ErrorCode.NOT_FOUND


class EventNotFoundError(NotFoundError):
    """Raised when an event id does not resolve to a known event."""

    def __init__(self, event_id: str) -> None:
        super().__init__("Event not found")
        self.event_id = event_id


class InvalidInputError(DomainError):
    code = ErrorCode.INVALID_INPUT
