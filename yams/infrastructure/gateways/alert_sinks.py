"""Alert sinks receiving the aggregate report of failed ticks."""

from __future__ import annotations

from typing import Iterable, List, Optional

import httpx
import structlog

from yams.application.dtos.tick_dto import TickReportDTO
from yams.domain.entities.tick import TickReport
from yams.domain.gateways.alert_sink import IAlertSink

logger = structlog.get_logger(__name__)


class LoggingAlertSink(IAlertSink):
    """Writes the report to the error log."""

    async def notify(self, report: TickReport) -> None:
        logger.error(
            "tick.alert",
            tick_id=str(report.id),
            status=report.status.value,
            started_at=report.started_at.isoformat(),
            message=report.message,
            failures=[
                {
                    "model": str(failure.identity),
                    "error_type": failure.error_type,
                    "message": failure.message,
                }
                for failure in report.failures
            ],
        )


class WebhookAlertSink(IAlertSink):
    """POSTs the report as JSON to an alerting webhook."""

    def __init__(self, webhook_url: str, timeout: float = 10.0) -> None:
        self._webhook_url = webhook_url
        self._timeout = timeout

    async def notify(self, report: TickReport) -> None:
        payload = TickReportDTO.from_domain(report).model_dump(mode="json")
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "alert.webhook.http_error",
                url=self._webhook_url,
                status_code=exc.response.status_code,
                tick_id=str(report.id),
            )
        except httpx.RequestError as exc:
            logger.error(
                "alert.webhook.request_error",
                url=self._webhook_url,
                error=str(exc),
                tick_id=str(report.id),
            )


class CompositeAlertSink(IAlertSink):
    """Fans a report out to several sinks."""

    def __init__(self, sinks: Iterable[IAlertSink]) -> None:
        self._sinks: List[IAlertSink] = list(sinks)

    async def notify(self, report: TickReport) -> None:
        for sink in self._sinks:
            try:
                await sink.notify(report)
            except Exception as exc:
                logger.error(
                    "alert.sink.failed",
                    sink=type(sink).__name__,
                    error=str(exc),
                )


def build_alert_sink(webhook_url: Optional[str] = None) -> IAlertSink:
    """Logging always, plus the webhook when one is configured."""
    if not webhook_url:
        return LoggingAlertSink()
    return CompositeAlertSink([LoggingAlertSink(), WebhookAlertSink(webhook_url)])
