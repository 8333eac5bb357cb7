"""Use cases exposing the registered models."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import structlog

from yams.application.dtos.model_dto import ModelInfoDTO
from yams.domain.ports.model import IModel
from yams.domain.services.model_registry import StaticModelRegistry

logger = structlog.get_logger(__name__)


class ListModelsUseCase:
    """List registered models with their resolved identities."""

    def __init__(
        self,
        registry: StaticModelRegistry,
        identity_timeout_seconds: Optional[float] = 10.0,
    ) -> None:
        self._registry = registry
        self._identity_timeout_seconds = identity_timeout_seconds

    async def execute(self) -> List[ModelInfoDTO]:
        return list(
            await asyncio.gather(
                *(self._describe(model) for model in self._registry.list_models())
            )
        )

    async def _describe(self, model: IModel) -> ModelInfoDTO:
        try:
            identity = await asyncio.wait_for(
                model.identity(), self._identity_timeout_seconds
            )
        except Exception as exc:
            message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
            logger.warning(
                "models.identity_unavailable",
                model=model.label,
                error=message,
            )
            return ModelInfoDTO(kind=model.kind, available=False, error=message)
        return ModelInfoDTO(
            name=identity.name, version=identity.version, kind=model.kind
        )
