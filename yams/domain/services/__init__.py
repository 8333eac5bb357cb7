"""Domain services: forecasting functions, local models and the registry."""

from .forecasters import forecast
from .local_model import LocalModel
from .model_registry import StaticModelRegistry
from .prediction_validator import validate_prediction, validate_prediction_value

__all__ = [
    "LocalModel",
    "StaticModelRegistry",
    "forecast",
    "validate_prediction",
    "validate_prediction_value",
]
