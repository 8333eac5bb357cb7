"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .health_dto import DependencyStatusDTO, SystemHealthDTO
from .model_dto import (
    ARIMADefinitionDTO,
    ETSDefinitionDTO,
    ModelDefinitionDTO,
    ModelInfoDTO,
    MovingAverageDefinitionDTO,
    RemoteHTTPDefinitionDTO,
    parse_model_definitions,
)
from .prediction_dto import PredictionQueryDTO, PredictionRecordDTO
from .tick_dto import ModelFailureDTO, TickReportDTO

__all__ = [
    "ARIMADefinitionDTO",
    "DependencyStatusDTO",
    "ETSDefinitionDTO",
    "ModelDefinitionDTO",
    "ModelFailureDTO",
    "ModelInfoDTO",
    "MovingAverageDefinitionDTO",
    "PredictionQueryDTO",
    "PredictionRecordDTO",
    "RemoteHTTPDefinitionDTO",
    "SystemHealthDTO",
    "TickReportDTO",
    "parse_model_definitions",
]
