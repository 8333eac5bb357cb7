"""
Health domain entities.

Value objects describing the availability of the service's dependencies
(prediction store, tick lock backend and the observation data store).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ServiceStatus(str, Enum):
    """High-level availability for a dependency or the system."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class DependencyStatus:
    """Health status for a single external dependency."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health for the application."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def aggregate(cls, statuses: Iterable[DependencyStatus]) -> "SystemHealth":
        """DOWN wins over DEGRADED, which wins over UNKNOWN."""
        dependencies = list(statuses)
        present = {item.status for item in dependencies}
        for candidate in (
            ServiceStatus.DOWN,
            ServiceStatus.DEGRADED,
            ServiceStatus.UNKNOWN,
        ):
            if candidate in present:
                return cls(status=candidate, dependencies=dependencies)
        return cls(status=ServiceStatus.UP, dependencies=dependencies)
