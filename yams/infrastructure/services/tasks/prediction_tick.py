"""Celery task running one prediction tick."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Dict, Optional

from yams.application.dtos.tick_dto import TickReportDTO
from yams.application.models import TickOptions
from yams.application.use_cases.run_prediction_tick_use_case import (
    RunPredictionTickUseCase,
)
from yams.domain.services.model_registry import StaticModelRegistry
from yams.infrastructure.database.mongo_database import MongoDatabase
from yams.infrastructure.gateways.alert_sinks import build_alert_sink
from yams.infrastructure.gateways.history_api_gateway import HistoryApiInputFetcher
from yams.infrastructure.repositories.prediction_repository import (
    PredictionRepository,
)
from yams.infrastructure.repositories.tick_repository import TickRepository
from yams.infrastructure.services.celery_config import TICK_TASK_NAME, celery_app
from yams.infrastructure.services.model_factory import build_registry
from yams.infrastructure.services.tasks.base import CallbackTask, logger
from yams.infrastructure.services.tick_lock import build_tick_lock
from yams.infrastructure.settings import InfrastructureSettings, get_settings

# Built once per worker process so remote identity caches survive between ticks
_registry: Optional[StaticModelRegistry] = None
_database: Optional[MongoDatabase] = None


def _get_registry(settings: InfrastructureSettings) -> StaticModelRegistry:
    global _registry
    if _registry is None:
        _registry = build_registry(
            settings.models.definitions,
            remote_timeout_seconds=settings.remote.timeout_seconds,
            remote_identity_ttl_seconds=settings.remote.identity_ttl_seconds,
        )
    return _registry


def _get_database(settings: InfrastructureSettings) -> MongoDatabase:
    global _database
    if _database is None:
        database = MongoDatabase(
            mongo_uri=settings.database.mongo_uri,
            db_name=settings.database.database_name,
        )
        asyncio.run(database.create_indexes())
        _database = database
    return _database


def build_tick_use_case(settings: InfrastructureSettings) -> RunPredictionTickUseCase:
    database = _get_database(settings)
    return RunPredictionTickUseCase(
        registry=_get_registry(settings),
        input_fetcher=HistoryApiInputFetcher(
            base_url=settings.datastore.url,
            series=settings.datastore.series,
            timeout=settings.datastore.timeout_seconds,
        ),
        prediction_repository=PredictionRepository(database),
        tick_repository=TickRepository(database),
        alert_sink=build_alert_sink(settings.alerting.webhook_url),
        options=TickOptions(
            lookback_seconds=settings.scheduler.lookback_seconds,
            max_workers=settings.scheduler.max_workers,
            model_timeout_seconds=settings.scheduler.model_timeout_seconds,
        ),
        tick_lock=build_tick_lock(
            redis_url=settings.redis.url,
            ttl_seconds=settings.scheduler.lock_ttl_seconds,
        ),
    )


@celery_app.task(bind=True, base=CallbackTask, name=TICK_TASK_NAME)
def run_prediction_tick(self, tick_time: Optional[str] = None) -> Dict[str, Any]:
    """Fetch the input window, run every model and store the predictions."""

    try:
        moment = datetime.fromisoformat(tick_time) if tick_time else None
        use_case = build_tick_use_case(get_settings())
        report = asyncio.run(use_case.execute(moment))

        logger.info(
            "tick.task.finished",
            tick_id=str(report.id),
            status=report.status.value,
            persisted=len(report.persisted),
            failures=len(report.failures),
        )
        return TickReportDTO.from_domain(report).model_dump(mode="json")

    except Exception as exc:
        logger.error("tick.task.failed", error=str(exc), exc_info=exc)
        raise
