"""Celery task implementations for infrastructure services."""

from .base import CallbackTask, logger
from .prediction_tick import build_tick_use_case, run_prediction_tick

__all__ = [
    "CallbackTask",
    "build_tick_use_case",
    "logger",
    "run_prediction_tick",
]
