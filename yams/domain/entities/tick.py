"""Domain entities describing scheduler ticks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import ModelFailure


class TickStatus(str, Enum):
    """Final state of a tick."""

    COMPLETED = "completed"
    COMPLETED_WITH_FAILURES = "completed_with_failures"
    FETCH_FAILED = "fetch_failed"
    SKIPPED = "skipped"


class TickPhase(str, Enum):
    """Phases a tick moves through, starting and ending in IDLE."""

    IDLE = "idle"
    FETCHING = "fetching"
    RUNNING_MODELS = "running_models"
    PERSISTING = "persisting"


@dataclass
class TickReport:
    """Aggregate outcome of one tick, recorded for auditing and alerting."""

    started_at: datetime
    id: UUID = field(default_factory=uuid4)
    status: TickStatus = TickStatus.COMPLETED
    finished_at: Optional[datetime] = None
    results_count: int = 0
    persisted: List[ModelIdentity] = field(default_factory=list)
    failures: List[ModelFailure] = field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def skipped(cls, started_at: datetime, reason: str) -> "TickReport":
        return cls(
            started_at=started_at,
            status=TickStatus.SKIPPED,
            finished_at=started_at,
            message=reason,
        )

    @property
    def has_failures(self) -> bool:
        return bool(self.failures) or self.status == TickStatus.FETCH_FAILED

    def finish(self) -> None:
        self.finished_at = datetime.now(timezone.utc)
        if self.status == TickStatus.COMPLETED and self.failures:
            self.status = TickStatus.COMPLETED_WITH_FAILURES
