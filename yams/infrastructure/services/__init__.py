"""Infrastructure services package."""

from . import tasks
from .celery_config import celery_app
from .health_check_service import HealthCheckService
from .model_factory import build_models, build_registry
from .tick_lock import (
    InProcessTickLock,
    RedisTickLease,
    RedisTickLock,
    build_tick_lock,
)

__all__ = [
    "celery_app",
    "tasks",
    "HealthCheckService",
    "InProcessTickLock",
    "RedisTickLease",
    "RedisTickLock",
    "build_models",
    "build_registry",
    "build_tick_lock",
]
