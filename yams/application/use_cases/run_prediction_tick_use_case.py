"""
Application Use Case - Prediction Tick

One tick fetches the input dataset once, invokes every registered model on
it concurrently, persists the successful predictions and reports the
failures. A failing model only affects its own result:

  * Fetching -> a FetchFailure aborts the tick before any model runs
  * RunningModels -> every model yields exactly one RunResult
  * Persisting -> each prediction is written independently
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import structlog

from yams.application.models import TickOptions
from yams.domain.entities.dataset import Dataset, TimeRange, ensure_utc
from yams.domain.entities.errors import (
    DomainError,
    FetchFailure,
    ModelUnavailable,
    PersistenceFailure,
)
from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import ModelFailure, Prediction, RunResult
from yams.domain.entities.tick import TickPhase, TickReport, TickStatus
from yams.domain.gateways.alert_sink import IAlertSink
from yams.domain.gateways.input_fetcher import IInputFetcher
from yams.domain.ports.model import IModel
from yams.domain.ports.tick_lock import ITickLease, ITickLock
from yams.domain.repositories.prediction_repository import IPredictionRepository
from yams.domain.repositories.tick_repository import ITickRepository
from yams.domain.services.model_registry import StaticModelRegistry
from yams.domain.services.prediction_validator import validate_prediction

logger = structlog.get_logger(__name__)

UNRESOLVED_VERSION = "unresolved"


class RunPredictionTickUseCase:
    """Runs one scheduler tick across all registered models."""

    def __init__(
        self,
        registry: StaticModelRegistry,
        input_fetcher: IInputFetcher,
        prediction_repository: IPredictionRepository,
        tick_repository: ITickRepository,
        alert_sink: IAlertSink,
        options: Optional[TickOptions] = None,
        tick_lock: Optional[ITickLock] = None,
    ) -> None:
        self._registry = registry
        self._input_fetcher = input_fetcher
        self._prediction_repository = prediction_repository
        self._tick_repository = tick_repository
        self._alert_sink = alert_sink
        self._options = options or TickOptions()
        self._tick_lock = tick_lock
        self.phase = TickPhase.IDLE

    async def execute(self, tick_time: Optional[datetime] = None) -> TickReport:
        """Run a tick for ``tick_time`` (defaults to now, truncated to seconds)."""
        moment = ensure_utc(tick_time or datetime.now(timezone.utc))
        moment = moment.replace(microsecond=0)

        lease: Optional[ITickLease] = None
        if self._tick_lock is not None:
            lease = await self._tick_lock.acquire()
            if lease is None:
                logger.warning("tick.skipped.in_flight", tick_time=moment.isoformat())
                report = TickReport.skipped(moment, "Previous tick still running")
                await self._record(report)
                return report

        try:
            return await self._run(moment)
        finally:
            self.phase = TickPhase.IDLE
            if lease is not None:
                await lease.release()

    async def _run(self, moment: datetime) -> TickReport:
        report = TickReport(started_at=moment)
        log = logger.bind(tick_id=str(report.id), tick_time=moment.isoformat())
        log.info("tick.started", models=len(self._registry))

        self.phase = TickPhase.FETCHING
        window = TimeRange(
            start=moment - timedelta(seconds=self._options.lookback_seconds),
            end=moment,
        )
        try:
            dataset = await self._input_fetcher.fetch(window)
        except Exception as exc:
            failure = (
                exc
                if isinstance(exc, FetchFailure)
                else FetchFailure(f"Unexpected fetch error: {exc}")
            )
            log.error("tick.fetch_failed", error=failure.message)
            report.status = TickStatus.FETCH_FAILED
            report.message = failure.message
            report.finish()
            await self._alert(report)
            await self._record(report)
            return report

        self.phase = TickPhase.RUNNING_MODELS
        semaphore = asyncio.Semaphore(max(1, self._options.max_workers))
        results: List[RunResult] = await asyncio.gather(
            *(
                self._run_model(model, dataset, semaphore)
                for model in self._registry.list_models()
            )
        )
        report.results_count = len(results)

        self.phase = TickPhase.PERSISTING
        successes = [result for result in results if result.prediction is not None]
        report.failures.extend(
            result.failure for result in results if result.failure is not None
        )
        persist_failures = await asyncio.gather(
            *(self._persist(result.prediction) for result in successes)
        )
        for result, failure in zip(successes, persist_failures):
            if failure is None:
                report.persisted.append(result.identity)
            else:
                report.failures.append(failure)

        report.finish()
        log.info(
            "tick.finished",
            status=report.status.value,
            persisted=len(report.persisted),
            failures=len(report.failures),
        )
        if report.has_failures:
            await self._alert(report)
        await self._record(report)
        return report

    async def _run_model(
        self, model: IModel, dataset: Dataset, semaphore: asyncio.Semaphore
    ) -> RunResult:
        timeout = self._options.model_timeout_seconds
        identity: Optional[ModelIdentity] = None
        async with semaphore:
            try:
                identity = await asyncio.wait_for(model.identity(), timeout)
                prediction = await asyncio.wait_for(model.predict(dataset), timeout)
                prediction = validate_prediction(prediction, identity)
                return RunResult(identity=identity, prediction=prediction)
            except Exception as exc:
                label = str(identity) if identity else model.label
                error: Exception = exc
                if isinstance(exc, asyncio.TimeoutError):
                    error = ModelUnavailable(label, f"timed out after {timeout}s")
                if identity is None:
                    identity = ModelIdentity(
                        name=model.label, version=UNRESOLVED_VERSION
                    )
                failure = ModelFailure.from_exception(identity, error)
                logger.warning(
                    "tick.model.failed",
                    model=label,
                    error_type=failure.error_type,
                    error=failure.message,
                    expected=isinstance(error, DomainError),
                )
                return RunResult(identity=identity, failure=failure)

    async def _persist(self, prediction: Prediction) -> Optional[ModelFailure]:
        try:
            await self._prediction_repository.save(prediction)
            return None
        except Exception as exc:
            error = (
                exc
                if isinstance(exc, PersistenceFailure)
                else PersistenceFailure(f"Unexpected persistence error: {exc}")
            )
            logger.error(
                "tick.persist.failed",
                model=str(prediction.produced_by),
                produced_at=prediction.produced_at.isoformat(),
                error=error.message,
            )
            return ModelFailure.from_exception(prediction.produced_by, error)

    async def _alert(self, report: TickReport) -> None:
        try:
            await self._alert_sink.notify(report)
        except Exception as exc:
            logger.error("tick.alert.failed", tick_id=str(report.id), error=str(exc))

    async def _record(self, report: TickReport) -> None:
        try:
            await self._tick_repository.record(report)
        except Exception as exc:
            logger.error("tick.record.failed", tick_id=str(report.id), error=str(exc))


class GetRecentTicksUseCase:
    """Return the latest tick reports, newest first."""

    def __init__(self, tick_repository: ITickRepository) -> None:
        self._tick_repository = tick_repository

    async def execute(self, limit: int = 20) -> List[TickReport]:
        return await self._tick_repository.find_recent(limit=limit)
