"""
Domain Gateway - Alert Sink

Interface for surfacing failed ticks to an external alerting system.
"""

from abc import ABC, abstractmethod

from yams.domain.entities.tick import TickReport


class IAlertSink(ABC):
    """Receives one aggregate report per tick that had failures."""

    @abstractmethod
    async def notify(self, report: TickReport) -> None:
        """
        Deliver the report.

        Implementations must not raise: alerting problems are logged and
        never affect the tick outcome.
        """
        pass
