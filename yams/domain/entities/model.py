"""
Domain Entities - Model

Model identities and the configuration structs for every supported model
kind. Configurations are plain frozen dataclasses; the forecasting logic for
each kind lives in free functions in ``yams.domain.services.forecasters``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from yams.domain.entities.errors import ModelValidationError


class ModelKind(str, Enum):
    """Kind of model, used as the tag of the configuration union."""

    MOVING_AVERAGE = "moving_average"
    ETS = "ets"
    ARIMA = "arima"
    REMOTE_HTTP = "remote_http"


@dataclass(frozen=True)
class ModelIdentity:
    """Composite (name, version) key identifying a model variant."""

    name: str
    version: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ModelValidationError("Model name must not be empty")
        if not self.version or not self.version.strip():
            raise ModelValidationError("Model version must not be empty")

    def __str__(self) -> str:
        return f"{self.name}:{self.version}"


@dataclass(frozen=True)
class MovingAverageConfig:
    """Mean of the observations inside the trailing lookback window."""

    lookback_seconds: int = 3600
    min_observations: int = 1

    kind = ModelKind.MOVING_AVERAGE

    def __post_init__(self) -> None:
        if self.lookback_seconds <= 0:
            raise ModelValidationError("lookback_seconds must be positive")
        if self.min_observations < 1:
            raise ModelValidationError("min_observations must be at least 1")


@dataclass(frozen=True)
class ETSConfig:
    """Exponential smoothing; Holt's linear trend when ``beta`` is set."""

    alpha: float = 0.5
    beta: Optional[float] = None

    kind = ModelKind.ETS

    def __post_init__(self) -> None:
        if not 0.0 < self.alpha <= 1.0:
            raise ModelValidationError("alpha must be in (0, 1]")
        if self.beta is not None and not 0.0 < self.beta <= 1.0:
            raise ModelValidationError("beta must be in (0, 1]")


@dataclass(frozen=True)
class ARIMAConfig:
    """Autoregressive model of order ``p`` on the ``d``-differenced series."""

    p: int = 1
    d: int = 0

    kind = ModelKind.ARIMA

    def __post_init__(self) -> None:
        if self.p < 1:
            raise ModelValidationError("p must be at least 1")
        if not 0 <= self.d <= 2:
            raise ModelValidationError("d must be between 0 and 2")

    @property
    def min_observations(self) -> int:
        # enough rows for a least-squares fit with an intercept
        return self.d + 2 * self.p + 2


@dataclass(frozen=True)
class RemoteHTTPConfig:
    """A model served behind an HTTP endpoint."""

    api_root: str
    timeout_seconds: float = 15.0
    identity_ttl_seconds: Optional[float] = 300.0

    kind = ModelKind.REMOTE_HTTP

    def __post_init__(self) -> None:
        if not self.api_root.startswith(("http://", "https://")):
            raise ModelValidationError(
                f"api_root must be an http(s) URL, got {self.api_root!r}"
            )
        if self.timeout_seconds <= 0:
            raise ModelValidationError("timeout_seconds must be positive")
        if self.identity_ttl_seconds is not None and self.identity_ttl_seconds < 0:
            raise ModelValidationError("identity_ttl_seconds must not be negative")


LocalModelConfig = Union[MovingAverageConfig, ETSConfig, ARIMAConfig]
ModelConfig = Union[MovingAverageConfig, ETSConfig, ARIMAConfig, RemoteHTTPConfig]
