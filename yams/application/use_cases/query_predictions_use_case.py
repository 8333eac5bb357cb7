"""
Application Use Case - Prediction Query

Serves stored predictions of one model over a time range. Omitted
parameters fall back to configured defaults so that the production model
can change without touching consumers.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

import structlog

from yams.application.dtos.prediction_dto import (
    PredictionQueryDTO,
    PredictionRecordDTO,
)
from yams.application.models import QueryDefaults
from yams.domain.entities.dataset import ensure_utc, from_epoch_seconds
from yams.domain.entities.errors import QueryValidationError
from yams.domain.repositories.prediction_repository import IPredictionRepository

logger = structlog.get_logger(__name__)


class QueryPredictionsUseCase:
    """Return predictions ordered by production time."""

    def __init__(
        self,
        prediction_repository: IPredictionRepository,
        defaults: QueryDefaults,
    ) -> None:
        self._prediction_repository = prediction_repository
        self._defaults = defaults

    async def execute(
        self,
        request: PredictionQueryDTO,
        now: Optional[datetime] = None,
    ) -> List[PredictionRecordDTO]:
        """
        Run the query.

        Raises:
            QueryValidationError: If the parameters are inconsistent
            PersistenceFailure: If the store cannot be read
        """
        model_name, model_version = self._resolve_model(request)
        from_ts, to_ts = self._resolve_window(request, now)

        predictions = await self._prediction_repository.query(
            model_name, model_version, from_ts, to_ts
        )

        if not predictions and request.from_ts is None:
            # Stale data is served silently when the default window is empty
            latest = await self._prediction_repository.find_latest(
                model_name, model_version, before=to_ts
            )
            if latest is not None:
                logger.info(
                    "query.stale_fallback",
                    model_name=model_name,
                    model_version=model_version,
                    produced_at=latest.produced_at.isoformat(),
                )
                predictions = [latest]

        logger.debug(
            "query.completed",
            model_name=model_name,
            model_version=model_version,
            from_ts=from_ts.isoformat(),
            to_ts=to_ts.isoformat(),
            count=len(predictions),
        )
        return [PredictionRecordDTO.from_domain(item) for item in predictions]

    def _resolve_model(self, request: PredictionQueryDTO) -> Tuple[str, Optional[str]]:
        if request.model_name is None:
            if request.model_version is not None:
                raise QueryValidationError(
                    "model_version cannot be given without model_name"
                )
            return self._defaults.model_name, self._defaults.model_version

        if request.model_version is not None:
            return request.model_name, request.model_version
        if request.model_name == self._defaults.model_name:
            return request.model_name, self._defaults.model_version
        return request.model_name, None

    def _resolve_window(
        self, request: PredictionQueryDTO, now: Optional[datetime]
    ) -> Tuple[datetime, datetime]:
        if request.to_ts is not None:
            to_ts = self._parse_bound("to_ts", request.to_ts)
        else:
            to_ts = ensure_utc(now or datetime.now(timezone.utc))

        if request.from_ts is not None:
            from_ts = self._parse_bound("from_ts", request.from_ts)
        else:
            from_ts = to_ts - timedelta(seconds=self._defaults.window_seconds)

        if from_ts > to_ts:
            raise QueryValidationError(
                "from_ts must not be after to_ts",
                details={"from_ts": request.from_ts, "to_ts": request.to_ts},
            )
        return from_ts, to_ts

    @staticmethod
    def _parse_bound(name: str, value: float) -> datetime:
        try:
            return from_epoch_seconds(value)
        except (OverflowError, ValueError, OSError) as exc:
            raise QueryValidationError(
                f"{name} is not a representable timestamp",
                details={name: value},
            ) from exc
