"""
In-process row lock registry.

LOCKING STRATEGY: Fail-fast try-lock per row
============================================

Problem:
  Two customers book the last seats of row A at the same moment.
  Both see 3 free seats, both mark them booked, both get a confirmation.
  Result: Oversold seats.

Solution:
  Each (event, section, row) triple maps to at most one lease. Acquiring is an
  insert-if-absent on a dict guarded by a single short critical section, so the
  check and the set cannot interleave with another caller.

  A caller that finds the row busy is rejected immediately. There is no queue
  and no retry: latency stays bounded under contention and the client decides
  whether to try again.

Leases:
  Every lease records when it was taken. If a holder dies without releasing,
  the row would otherwise stay locked for the life of the process. With a
  lease_seconds limit, a later caller may take over an expired lease. The stale
  holder's release then carries an outdated token and is ignored.
"""

import threading
import time
import uuid
from typing import Callable, Optional

from seatbook.core.logging import get_logger
from seatbook.core.metrics import row_lock_lease_expired, row_locks_held
from seatbook.services.interfaces.row_lock import RowLease, RowLockKey, RowLockRegistry

logger = get_logger(__name__)


class InMemoryRowLockRegistry(RowLockRegistry):
    """Row locks shared by every request in this process."""

    def __init__(
        self,
        lease_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._lease_seconds = lease_seconds if lease_seconds and lease_seconds > 0 else None
        self._clock = clock
        self._guard = threading.Lock()
        self._leases: dict[RowLockKey, RowLease] = {}

    def _expired(self, lease: RowLease, now: float) -> bool:
        return self._lease_seconds is not None and now - lease.acquired_at >= self._lease_seconds

    def try_acquire(self, key: RowLockKey) -> Optional[RowLease]:
        with self._guard:
            now = self._clock()
            current = self._leases.get(key)
            if current is not None:
                if not self._expired(current, now):
                    return None
                logger.warning(
                    "row_lock_lease_expired",
                    key=str(key),
                    held_for=round(now - current.acquired_at, 3),
                )
                row_lock_lease_expired.inc()

            lease = RowLease(key=key, token=uuid.uuid4().hex, acquired_at=now)
            self._leases[key] = lease
            row_locks_held.set(len(self._leases))
            return lease

    def release(self, key: RowLockKey, lease: Optional[RowLease] = None) -> bool:
        with self._guard:
            current = self._leases.get(key)
            if current is None:
                return False
            if lease is not None and current.token != lease.token:
                # Lease was taken over after expiry; the new holder keeps it.
                logger.info("row_lock_stale_release_ignored", key=str(key))
                return False
            del self._leases[key]
            row_locks_held.set(len(self._leases))
            return True

    def is_held(self, key: RowLockKey) -> bool:
        with self._guard:
            current = self._leases.get(key)
            return current is not None and not self._expired(current, self._clock())

    def held_count(self) -> int:
        with self._guard:
            return len(self._leases)
