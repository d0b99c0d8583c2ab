"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .row_lock import RowLease, RowLockKey, RowLockRegistry

__all__ = ['RowLease', 'RowLockKey', 'RowLockRegistry']
