"""
Row lock registry interface.
Allows swapping the mutual-exclusion backend without changing booking logic.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RowLockKey:
    """Identifies one row of one section of one event."""

    event_id: str
    section_id: str
    row_id: str

    def __str__(self) -> str:
        return f"{self.event_id}-{self.section_id}-{self.row_id}"


@dataclass(frozen=True)
class RowLease:
    """Proof of ownership handed out by try_acquire."""

    key: RowLockKey
    token: str
    acquired_at: float


class RowLockRegistry(ABC):
    """
    Interface for per-row booking locks.

    Contract:
    - try_acquire is an atomic check-and-set. While a caller holds the lease for
      a key, no other caller can acquire that key.
    - Callers never wait. A busy key is reported immediately.
    - Keys are independent; holding one row never blocks another.
    """

    @abstractmethod
    def try_acquire(self, key: RowLockKey) -> Optional[RowLease]:
        """
        Mark the key busy if it is free.

        Returns:
            A lease if acquired, None if another caller holds the key.
        """
        pass

    @abstractmethod
    def release(self, key: RowLockKey, lease: Optional[RowLease] = None) -> bool:
        """
        Mark the key free. Safe to call on a key that is not held.

        Args:
            key: Row to release
            lease: If given, only release when this lease is still the current one

        Returns:
            True if a held lock was released
        """
        pass

    @abstractmethod
    def is_held(self, key: RowLockKey) -> bool:
        pass

    @abstractmethod
    def held_count(self) -> int:
        pass
