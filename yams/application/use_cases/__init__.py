"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .health_use_cases import GetHealthStatusUseCase
from .model_use_cases import ListModelsUseCase
from .query_predictions_use_case import QueryPredictionsUseCase
from .run_prediction_tick_use_case import (
    GetRecentTicksUseCase,
    RunPredictionTickUseCase,
)

__all__ = [
    "GetHealthStatusUseCase",
    "GetRecentTicksUseCase",
    "ListModelsUseCase",
    "QueryPredictionsUseCase",
    "RunPredictionTickUseCase",
]
