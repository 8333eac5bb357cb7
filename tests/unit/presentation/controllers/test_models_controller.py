from __future__ import annotations

from typing import cast

import pytest
from fastapi import HTTPException

from yams.application.use_cases.model_use_cases import ListModelsUseCase
from yams.domain.entities.dataset import Dataset
from yams.domain.entities.errors import ModelUnavailable
from yams.domain.entities.model import ModelIdentity, ModelKind, MovingAverageConfig
from yams.domain.entities.prediction import Prediction
from yams.domain.services.local_model import LocalModel
from yams.domain.services.model_registry import StaticModelRegistry
from yams.presentation.controllers.models_controller import list_models


class _UnreachableRemote:
    kind = ModelKind.REMOTE_HTTP
    label = "http://model"

    async def identity(self) -> ModelIdentity:
        raise ModelUnavailable("http://model", "connection refused")

    async def predict(self, dataset: Dataset) -> Prediction:  # pragma: no cover
        raise AssertionError("not used")


@pytest.mark.asyncio
async def test_list_models_reports_identities_and_availability() -> None:
    registry = StaticModelRegistry(
        [
            LocalModel(ModelIdentity("ma", "v1"), MovingAverageConfig()),
            _UnreachableRemote(),
        ]
    )

    result = await list_models(list_models_use_case=ListModelsUseCase(registry))

    assert [(item.name, item.version, item.available) for item in result] == [
        ("ma", "v1", True),
        (None, None, False),
    ]
    assert result[1].kind is ModelKind.REMOTE_HTTP


@pytest.mark.asyncio
async def test_list_models_failure_maps_to_500() -> None:
    class _Broken:
        async def execute(self):
            raise RuntimeError("boom")

    with pytest.raises(HTTPException) as exc:
        await list_models(list_models_use_case=cast(ListModelsUseCase, _Broken()))

    assert exc.value.status_code == 500
