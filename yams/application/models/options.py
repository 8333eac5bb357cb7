"""Lightweight settings structures consumed by the application layer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from yams.domain.entities.model import ModelIdentity
from yams.shared.consts import (
    DEFAULT_LOOKBACK_SECONDS,
    DEFAULT_QUERY_WINDOW_SECONDS,
)


@dataclass(frozen=True)
class QueryDefaults:
    """Values the query service falls back to when the caller omits them."""

    model_name: str
    model_version: str
    window_seconds: int = DEFAULT_QUERY_WINDOW_SECONDS

    @property
    def identity(self) -> ModelIdentity:
        return ModelIdentity(name=self.model_name, version=self.model_version)


@dataclass(frozen=True)
class TickOptions:
    """Execution limits applied to every tick."""

    lookback_seconds: int = DEFAULT_LOOKBACK_SECONDS
    max_workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    model_timeout_seconds: Optional[float] = 30.0
