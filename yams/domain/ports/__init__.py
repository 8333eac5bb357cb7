"""Domain ports package."""

from .health_check import IHealthCheckService
from .model import IModel
from .tick_lock import ITickLease, ITickLock

__all__ = ["IHealthCheckService", "IModel", "ITickLease", "ITickLock"]
