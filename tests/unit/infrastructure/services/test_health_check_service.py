from __future__ import annotations

from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import httpx
import pytest

from yams.domain.entities.health import DependencyStatus, ServiceStatus
from yams.infrastructure.database.mongo_database import MongoDatabase
from yams.infrastructure.services.health_check_service import HealthCheckService


@dataclass
class _StubMongoClient:
    class _Admin:
        @staticmethod
        def command(cmd: str) -> None:
            if cmd != "ping":
                raise ValueError("Unexpected command")

    @property
    def admin(self) -> "_StubMongoClient._Admin":
        return self._Admin()


@dataclass
class _StubMongoDatabase:
    name: str = "yams"

    def __post_init__(self) -> None:
        self.client = _StubMongoClient()
        self.db = SimpleNamespace(name=self.name)

    def close(self) -> None:
        pass


class _RedisClient:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.closed = False

    async def ping(self) -> bool:
        if self.error is not None:
            raise self.error
        return True

    async def aclose(self) -> None:
        self.closed = True


class _Response:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code


class _HttpClient:
    def __init__(self, outcome: Any) -> None:
        self.outcome = outcome
        self.urls: list[str] = []

    async def __aenter__(self) -> "_HttpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str):
        self.urls.append(url)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def _make_service(**overrides: Any) -> HealthCheckService:
    params: dict = {
        "mongo_database": cast(MongoDatabase, _StubMongoDatabase()),
        "redis_url": "redis://localhost/1",
        "datastore_url": "http://datastore/",
    }
    params.update(overrides)
    return HealthCheckService(**params)


@pytest.mark.asyncio
async def test_evaluate_collects_dependency_statuses(monkeypatch) -> None:
    service = _make_service()
    monkeypatch.setattr(
        service,
        "_check_mongo",
        AsyncMock(return_value=DependencyStatus(name="mongo", status=ServiceStatus.UP)),
    )
    monkeypatch.setattr(
        service,
        "_check_redis",
        AsyncMock(
            return_value=DependencyStatus(name="redis", status=ServiceStatus.DEGRADED)
        ),
    )
    monkeypatch.setattr(
        service,
        "_check_datastore",
        AsyncMock(
            return_value=DependencyStatus(name="datastore", status=ServiceStatus.UP)
        ),
    )

    health = await service.evaluate()

    assert [item.name for item in health.dependencies] == ["mongo", "redis", "datastore"]
    assert health.status is ServiceStatus.DEGRADED


@pytest.mark.asyncio
async def test_check_mongo_success() -> None:
    status = await _make_service()._check_mongo()

    assert status.status is ServiceStatus.UP
    assert status.details == {"database": "yams"}


@pytest.mark.asyncio
async def test_check_mongo_handles_failure() -> None:
    failing = SimpleNamespace(
        client=SimpleNamespace(
            admin=SimpleNamespace(
                command=lambda cmd: (_ for _ in ()).throw(RuntimeError("mongo error"))
            )
        ),
        db=SimpleNamespace(name="yams"),
    )
    service = _make_service(mongo_database=cast(MongoDatabase, failing))

    status = await service._check_mongo()

    assert status.status is ServiceStatus.DOWN
    assert "mongo error" in (status.message or "")


@pytest.mark.asyncio
async def test_check_mongo_not_configured() -> None:
    status = await _make_service(mongo_database=None)._check_mongo()

    assert status.status is ServiceStatus.UNKNOWN


@pytest.mark.asyncio
async def test_check_redis_success(monkeypatch) -> None:
    client = _RedisClient()
    monkeypatch.setattr(
        "yams.infrastructure.services.health_check_service.aioredis.from_url",
        lambda *args, **kwargs: client,
    )

    status = await _make_service()._check_redis()

    assert status.status is ServiceStatus.UP
    assert client.closed


@pytest.mark.asyncio
async def test_check_redis_failure_degrades(monkeypatch) -> None:
    client = _RedisClient(error=ConnectionError("refused"))
    monkeypatch.setattr(
        "yams.infrastructure.services.health_check_service.aioredis.from_url",
        lambda *args, **kwargs: client,
    )

    status = await _make_service()._check_redis()

    assert status.status is ServiceStatus.DEGRADED
    assert client.closed


@pytest.mark.asyncio
async def test_check_redis_not_configured() -> None:
    status = await _make_service(redis_url="")._check_redis()

    assert status.status is ServiceStatus.UNKNOWN


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "outcome, expected",
    [
        (_Response(200), ServiceStatus.UP),
        (_Response(404), ServiceStatus.UNKNOWN),
        (_Response(503), ServiceStatus.DEGRADED),
        (httpx.ConnectError("refused"), ServiceStatus.DEGRADED),
    ],
)
async def test_check_datastore(monkeypatch, outcome, expected) -> None:
    client = _HttpClient(outcome)
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    status = await _make_service()._check_datastore()

    assert status.status is expected
    assert client.urls == ["http://datastore/health"]


@pytest.mark.asyncio
async def test_check_datastore_not_configured() -> None:
    status = await _make_service(datastore_url="")._check_datastore()

    assert status.status is ServiceStatus.UNKNOWN
