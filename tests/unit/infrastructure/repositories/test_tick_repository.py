from __future__ import annotations

from datetime import timedelta

import pytest

from yams.domain.entities.errors import PersistenceFailure
from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import ModelFailure
from yams.domain.entities.tick import TickReport, TickStatus
from yams.infrastructure.repositories.tick_repository import TickRepository


@pytest.mark.asyncio
async def test_record_and_read_back(fake_mongo_database, tick_time) -> None:
    repository = TickRepository(fake_mongo_database)
    report = TickReport(started_at=tick_time, results_count=2)
    report.persisted.append(ModelIdentity("A", "v1"))
    report.failures.append(
        ModelFailure(ModelIdentity("B", "v1"), "ModelUnavailable", "timed out")
    )
    report.finish()

    await repository.record(report)
    (restored,) = await repository.find_recent()

    assert restored.id == report.id
    assert restored.status is TickStatus.COMPLETED_WITH_FAILURES
    assert restored.started_at == tick_time
    assert restored.persisted == report.persisted
    assert restored.failures == report.failures


@pytest.mark.asyncio
async def test_find_recent_is_newest_first(fake_mongo_database, tick_time) -> None:
    repository = TickRepository(fake_mongo_database)
    for offset in range(3):
        await repository.record(
            TickReport.skipped(tick_time + timedelta(minutes=15 * offset), "busy")
        )

    reports = await repository.find_recent(limit=2)

    assert [report.started_at for report in reports] == [
        tick_time + timedelta(minutes=30),
        tick_time + timedelta(minutes=15),
    ]


@pytest.mark.asyncio
async def test_record_wraps_store_errors(tick_time) -> None:
    class _BrokenDatabase:
        async def insert_one(self, collection_name, document):
            raise ConnectionError("mongo down")

    repository = TickRepository(_BrokenDatabase())  # type: ignore[arg-type]

    with pytest.raises(PersistenceFailure):
        await repository.record(TickReport(started_at=tick_time))
