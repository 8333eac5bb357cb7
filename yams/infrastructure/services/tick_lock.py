"""Tick lock implementations enforcing one in-flight tick."""

from __future__ import annotations

import threading
from typing import Optional

import redis.asyncio as aioredis
import structlog
from redis.asyncio.lock import Lock
from redis.exceptions import LockError

from yams.domain.ports.tick_lock import ITickLease, ITickLock
from yams.shared.consts import TICK_LOCK_NAME

logger = structlog.get_logger(__name__)


class _InProcessLease(ITickLease):
    def __init__(self, lock: threading.Lock) -> None:
        self._lock: Optional[threading.Lock] = lock

    async def release(self) -> None:
        if self._lock is not None:
            self._lock.release()
            self._lock = None


class InProcessTickLock(ITickLock):
    """Lock for a single process; safe across threads and event loops."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    async def acquire(self) -> Optional[ITickLease]:
        if not self._lock.acquire(blocking=False):
            return None
        return _InProcessLease(self._lock)

    @property
    def locked(self) -> bool:
        return self._lock.locked()


class RedisTickLease(ITickLease):
    """One held Redis lock together with the client that took it."""

    def __init__(self, client: aioredis.Redis, lock: Lock, name: str) -> None:
        self._client: Optional[aioredis.Redis] = client
        self._lock = lock
        self._name = name

    async def release(self) -> None:
        if self._client is None:
            return
        try:
            # Only frees the lock if its token is still ours
            await self._lock.release()
        except LockError as exc:
            logger.warning("tick.lock.release_failed", name=self._name, error=str(exc))
        finally:
            await self._client.aclose()
            self._client = None


class RedisTickLock(ITickLock):
    """Distributed lock shared by every worker of the deployment.

    The TTL bounds how long a crashed worker can block later ticks. Every
    acquisition gets its own client and lease, so one instance can be shared.
    """

    def __init__(
        self,
        redis_url: str,
        ttl_seconds: float,
        name: str = TICK_LOCK_NAME,
    ) -> None:
        self._redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self._name = name

    async def acquire(self) -> Optional[ITickLease]:
        client = aioredis.from_url(self._redis_url)
        lock = client.lock(self._name, timeout=self._ttl_seconds, blocking=False)
        try:
            acquired = await lock.acquire()
        except Exception:
            await client.aclose()
            raise

        if not acquired:
            await client.aclose()
            return None
        return RedisTickLease(client, lock, self._name)


def build_tick_lock(redis_url: Optional[str], ttl_seconds: float) -> ITickLock:
    """Redis lock when a URL is configured, otherwise a process-local one."""
    if redis_url:
        return RedisTickLock(redis_url=redis_url, ttl_seconds=ttl_seconds)
    logger.warning("tick.lock.in_process", reason="REDIS_URL not configured")
    return InProcessTickLock()
