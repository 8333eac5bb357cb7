"""Tick Repository Interface"""

from abc import ABC, abstractmethod
from typing import List

from yams.domain.entities.tick import TickReport


class ITickRepository(ABC):
    """Interface for storing tick reports."""

    @abstractmethod
    async def record(self, report: TickReport) -> None:
        """Persist the report of a finished or skipped tick."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int = 20) -> List[TickReport]:
        """Return the latest reports, newest first."""
        pass
