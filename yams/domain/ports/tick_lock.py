"""Domain port guaranteeing that at most one tick runs at a time."""

from __future__ import annotations

from typing import Optional, Protocol


class ITickLease(Protocol):
    """Ownership of the tick lock for one acquisition."""

    async def release(self) -> None:
        """Give the lock back; only this acquisition's lock is released."""
        ...


class ITickLock(Protocol):
    """Non-blocking mutual exclusion around a tick."""

    async def acquire(self) -> Optional[ITickLease]:
        """Try to take the lock; return None immediately if it is held."""
        ...
