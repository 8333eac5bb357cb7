"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.

Per-model failures raised while a tick runs (``ModelUnavailable``,
``ValidationFailure``, ``PersistenceFailure``) are caught by the tick use case
and folded into the tick report. ``FetchFailure`` aborts the whole tick.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class FetchFailure(DomainError):
    """Raised when the input dataset for a tick cannot be retrieved."""


class ModelUnavailable(DomainError):
    """Raised when a single model cannot produce a prediction."""

    def __init__(
        self,
        model: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.model = model
        self.reason = reason
        super().__init__(f"Model {model} unavailable: {reason}", details)


class ValidationFailure(DomainError):
    """Raised when a produced prediction violates value constraints."""


class PersistenceFailure(DomainError):
    """Raised when a prediction cannot be written to the store."""


class DuplicatePredictionError(PersistenceFailure):
    """Raised when a prediction collides with an existing row."""

    def __init__(
        self,
        model_name: str,
        model_version: str,
        produced_at: Any,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Prediction for {model_name}:{model_version} at {produced_at} "
            "already exists"
        )
        super().__init__(message, details)


class ModelValidationError(DomainError):
    """Raised when a model definition is invalid."""


class QueryValidationError(DomainError):
    """Raised when prediction query parameters are inconsistent."""
