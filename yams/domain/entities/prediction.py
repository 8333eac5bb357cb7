"""Domain entities for predictions and per-model run results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from yams.domain.entities.dataset import ensure_utc
from yams.domain.entities.model import ModelIdentity


@dataclass(frozen=True)
class Prediction:
    """A value produced by one model at one point in time."""

    value: float
    produced_by: ModelIdentity
    produced_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "produced_at", ensure_utc(self.produced_at))

    @property
    def model_name(self) -> str:
        return self.produced_by.name

    @property
    def model_version(self) -> str:
        return self.produced_by.version


@dataclass(frozen=True)
class ModelFailure:
    """Why a model did not yield a persisted prediction in a tick."""

    identity: ModelIdentity
    error_type: str
    message: str

    @classmethod
    def from_exception(cls, identity: ModelIdentity, exc: BaseException) -> "ModelFailure":
        message = getattr(exc, "message", None) or str(exc) or repr(exc)
        return cls(identity=identity, error_type=type(exc).__name__, message=message)


@dataclass(frozen=True)
class RunResult:
    """Outcome of invoking one model during a tick."""

    identity: ModelIdentity
    prediction: Optional[Prediction] = None
    failure: Optional[ModelFailure] = None

    def __post_init__(self) -> None:
        if (self.prediction is None) == (self.failure is None):
            raise ValueError("RunResult needs exactly one of prediction or failure")

    @property
    def succeeded(self) -> bool:
        return self.prediction is not None
