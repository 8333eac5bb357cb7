"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer. These implementations
handle the details of data persistence.
"""

from .prediction_repository import PredictionRepository
from .tick_repository import TickRepository

__all__ = ["PredictionRepository", "TickRepository"]
