"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .dataset import (
    Dataset,
    Observation,
    TimeRange,
    ensure_utc,
    from_epoch_seconds,
    to_epoch_seconds,
)
from .errors import (
    DomainError,
    DuplicatePredictionError,
    FetchFailure,
    ModelUnavailable,
    ModelValidationError,
    PersistenceFailure,
    QueryValidationError,
    ValidationFailure,
)
from .health import DependencyStatus, ServiceStatus, SystemHealth
from .model import (
    ARIMAConfig,
    ETSConfig,
    LocalModelConfig,
    ModelConfig,
    ModelIdentity,
    ModelKind,
    MovingAverageConfig,
    RemoteHTTPConfig,
)
from .prediction import ModelFailure, Prediction, RunResult
from .tick import TickPhase, TickReport, TickStatus

__all__ = [
    "ARIMAConfig",
    "Dataset",
    "DependencyStatus",
    "DomainError",
    "DuplicatePredictionError",
    "ETSConfig",
    "FetchFailure",
    "LocalModelConfig",
    "ModelConfig",
    "ModelFailure",
    "ModelIdentity",
    "ModelKind",
    "ModelUnavailable",
    "ModelValidationError",
    "MovingAverageConfig",
    "Observation",
    "PersistenceFailure",
    "Prediction",
    "QueryValidationError",
    "RemoteHTTPConfig",
    "RunResult",
    "ServiceStatus",
    "SystemHealth",
    "TickPhase",
    "TickReport",
    "TickStatus",
    "TimeRange",
    "ValidationFailure",
    "ensure_utc",
    "from_epoch_seconds",
    "to_epoch_seconds",
]
