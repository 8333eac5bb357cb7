"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .prediction_repository import IPredictionRepository
from .tick_repository import ITickRepository

__all__ = ["IPredictionRepository", "ITickRepository"]
