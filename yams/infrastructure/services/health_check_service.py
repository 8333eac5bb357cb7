"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Dict, List, Optional

import httpx
import redis.asyncio as aioredis

from yams.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from yams.domain.ports.health_check import IHealthCheckService
from yams.infrastructure.database.mongo_database import MongoDatabase


class HealthCheckService(IHealthCheckService):
    """Checks the prediction store, the lock backend and the data store."""

    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        redis_url: str,
        datastore_url: str,
        *,
        http_timeout: float = 5.0,
        socket_timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._redis_url = redis_url
        self._datastore_url = datastore_url
        self._http_timeout = http_timeout
        self._socket_timeout = socket_timeout

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""
        checks: Dict[str, asyncio.Task] = {
            "mongo": asyncio.create_task(self._check_mongo()),
            "redis": asyncio.create_task(self._check_redis()),
            "datastore": asyncio.create_task(self._check_datastore()),
        }

        statuses: List[DependencyStatus] = []
        for name, task in checks.items():
            try:
                statuses.append(await task)
            except Exception as exc:  # pragma: no cover - defensive fallback
                statuses.append(
                    DependencyStatus(
                        name=name, status=ServiceStatus.DOWN, message=str(exc)
                    )
                )

        return SystemHealth.aggregate(statuses)

    async def _check_mongo(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await asyncio.to_thread(self._mongo_database.client.admin.command, "ping")
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UP,
                message="MongoDB ping successful",
                latency_ms=(perf_counter() - start) * 1000,
                details={"database": self._mongo_database.db.name},
            )
        except Exception as exc:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )

    async def _check_redis(self) -> DependencyStatus:
        if not self._redis_url:
            return DependencyStatus(
                name="redis",
                status=ServiceStatus.UNKNOWN,
                message="Redis URL not configured.",
            )

        start = perf_counter()
        client = aioredis.from_url(
            self._redis_url,
            socket_connect_timeout=self._socket_timeout,
            socket_timeout=self._socket_timeout,
        )
        try:
            await client.ping()
            return DependencyStatus(
                name="redis",
                status=ServiceStatus.UP,
                message="Redis ping successful",
                latency_ms=(perf_counter() - start) * 1000,
            )
        except Exception as exc:
            # The tick lock lives in Redis; predictions can still be served
            return DependencyStatus(
                name="redis",
                status=ServiceStatus.DEGRADED,
                message=f"Redis ping failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )
        finally:
            await client.aclose()

    async def _check_datastore(self) -> DependencyStatus:
        if not self._datastore_url:
            return DependencyStatus(
                name="datastore",
                status=ServiceStatus.UNKNOWN,
                message="Data store URL not configured.",
            )

        url = f"{self._datastore_url.rstrip('/')}/health"
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            return DependencyStatus(
                name="datastore",
                status=ServiceStatus.DEGRADED,
                message=f"HTTP request failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
                details={"url": url},
            )

        status_code = response.status_code
        if status_code >= 500:
            status = ServiceStatus.DEGRADED
        elif status_code >= 400:
            status = ServiceStatus.UNKNOWN
        else:
            status = ServiceStatus.UP
        return DependencyStatus(
            name="datastore",
            status=status,
            message=f"HTTP {status_code}",
            latency_ms=(perf_counter() - start) * 1000,
            details={"url": url, "status_code": status_code},
        )
