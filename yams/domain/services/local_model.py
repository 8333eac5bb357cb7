"""In-process model backed by one of the local forecasting functions."""

from __future__ import annotations

import asyncio

import structlog

from yams.domain.entities.dataset import Dataset
from yams.domain.entities.errors import ModelUnavailable
from yams.domain.entities.model import LocalModelConfig, ModelIdentity, ModelKind
from yams.domain.entities.prediction import Prediction
from yams.domain.ports.model import IModel
from yams.domain.services.forecasters import forecast

logger = structlog.get_logger(__name__)


class LocalModel(IModel):
    """Runs a forecaster in a worker thread and stamps its identity."""

    def __init__(self, identity: ModelIdentity, config: LocalModelConfig) -> None:
        self._identity = identity
        self.config = config

    @property
    def kind(self) -> ModelKind:
        return self.config.kind

    @property
    def label(self) -> str:
        return str(self._identity)

    @property
    def static_identity(self) -> ModelIdentity:
        return self._identity

    async def identity(self) -> ModelIdentity:
        return self._identity

    async def predict(self, dataset: Dataset) -> Prediction:
        try:
            value = await asyncio.to_thread(forecast, self.config, dataset)
        except Exception as exc:
            logger.warning(
                "model.local.predict_failed",
                model=str(self._identity),
                kind=self.config.kind.value,
                error=str(exc),
            )
            raise ModelUnavailable(str(self._identity), str(exc)) from exc

        return Prediction(
            value=value,
            produced_by=self._identity,
            produced_at=dataset.as_of,
        )

    def __repr__(self) -> str:
        return f"LocalModel({self._identity}, {self.config!r})"
