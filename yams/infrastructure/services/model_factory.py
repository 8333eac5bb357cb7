"""Builds the model registry from configured model definitions."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import structlog

from yams.application.dtos.model_dto import (
    RemoteHTTPDefinitionDTO,
    parse_model_definitions,
)
from yams.domain.ports.model import IModel
from yams.domain.services.local_model import LocalModel
from yams.domain.services.model_registry import StaticModelRegistry
from yams.infrastructure.gateways.remote_model_gateway import RemoteHTTPModel

logger = structlog.get_logger(__name__)


def build_models(
    definitions: Sequence[Dict[str, Any]],
    *,
    remote_timeout_seconds: float = 15.0,
    remote_identity_ttl_seconds: Optional[float] = 300.0,
) -> List[IModel]:
    """Turn raw definitions into executable models.

    Raises:
        ModelValidationError: If a definition is invalid.
    """
    models: List[IModel] = []
    for definition in parse_model_definitions(definitions):
        if isinstance(definition, RemoteHTTPDefinitionDTO):
            models.append(
                RemoteHTTPModel(
                    definition.to_config(
                        remote_timeout_seconds, remote_identity_ttl_seconds
                    )
                )
            )
        else:
            models.append(LocalModel(definition.identity, definition.to_config()))
    return models


def build_registry(
    definitions: Sequence[Dict[str, Any]],
    *,
    remote_timeout_seconds: float = 15.0,
    remote_identity_ttl_seconds: Optional[float] = 300.0,
) -> StaticModelRegistry:
    registry = StaticModelRegistry(
        build_models(
            definitions,
            remote_timeout_seconds=remote_timeout_seconds,
            remote_identity_ttl_seconds=remote_identity_ttl_seconds,
        )
    )
    logger.info(
        "registry.built",
        models=[model.label for model in registry.list_models()],
    )
    return registry
