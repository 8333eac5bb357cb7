from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import ModelFailure
from yams.domain.entities.tick import TickReport, TickStatus
from yams.infrastructure.gateways import alert_sinks
from yams.infrastructure.gateways.alert_sinks import (
    CompositeAlertSink,
    LoggingAlertSink,
    WebhookAlertSink,
    build_alert_sink,
)


class _RecordingLogger:
    def __init__(self) -> None:
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    def error(self, event: str, **kwargs: Any) -> None:
        self.events.append(("error", event, kwargs))

    def warning(self, event: str, **kwargs: Any) -> None:
        self.events.append(("warning", event, kwargs))

    def info(self, event: str, **kwargs: Any) -> None:
        self.events.append(("info", event, kwargs))


class _StubResponse:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("POST", "http://hooks")
            response = httpx.Response(self.status_code, request=request)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, outcome: Any) -> None:
        self._outcome = outcome
        self.posts: List[Dict[str, Any]] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def post(self, url: str, json: Any = None):
        self.posts.append({"url": url, "json": json})
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return self._outcome


class _FailingSink:
    async def notify(self, report: TickReport) -> None:
        raise RuntimeError("sink down")


class _CollectingSink:
    def __init__(self) -> None:
        self.reports: List[TickReport] = []

    async def notify(self, report: TickReport) -> None:
        self.reports.append(report)


@pytest.fixture()
def report() -> TickReport:
    return TickReport(
        started_at=datetime(2026, 1, 9, 12, 0, tzinfo=timezone.utc),
        status=TickStatus.COMPLETED_WITH_FAILURES,
        results_count=2,
        persisted=[ModelIdentity("A", "v1")],
        failures=[
            ModelFailure(
                identity=ModelIdentity("B", "v1"),
                error_type="ModelUnavailable",
                message="timed out",
            )
        ],
    )


@pytest.fixture()
def log(monkeypatch) -> _RecordingLogger:
    recorder = _RecordingLogger()
    monkeypatch.setattr(alert_sinks, "logger", recorder)
    return recorder


@pytest.mark.asyncio
async def test_logging_sink_writes_failures(report, log) -> None:
    await LoggingAlertSink().notify(report)

    level, event, fields = log.events[0]
    assert (level, event) == ("error", "tick.alert")
    assert fields["status"] == "completed_with_failures"
    assert fields["failures"] == [
        {"model": "B:v1", "error_type": "ModelUnavailable", "message": "timed out"}
    ]


@pytest.mark.asyncio
async def test_webhook_posts_report_as_json(monkeypatch, report) -> None:
    client = _StubAsyncClient(_StubResponse(200))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    await WebhookAlertSink("http://hooks/yams").notify(report)

    assert client.posts[0]["url"] == "http://hooks/yams"
    payload = client.posts[0]["json"]
    assert payload["id"] == str(report.id)
    assert payload["persisted"] == ["A:v1"]
    assert payload["failures"][0]["model_name"] == "B"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "outcome, event",
    [
        (_StubResponse(502), "alert.webhook.http_error"),
        (httpx.ConnectError("refused"), "alert.webhook.request_error"),
    ],
)
async def test_webhook_errors_are_logged_not_raised(
    monkeypatch, report, log, outcome, event
) -> None:
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: _StubAsyncClient(outcome))

    await WebhookAlertSink("http://hooks/yams").notify(report)

    assert [entry[1] for entry in log.events] == [event]


@pytest.mark.asyncio
async def test_composite_isolates_failing_sinks(report, log) -> None:
    collecting = _CollectingSink()
    sink = CompositeAlertSink([_FailingSink(), collecting])

    await sink.notify(report)

    assert collecting.reports == [report]
    assert log.events[0][1] == "alert.sink.failed"
    assert log.events[0][2]["sink"] == "_FailingSink"


def test_build_alert_sink_without_webhook_logs_only() -> None:
    assert isinstance(build_alert_sink(None), LoggingAlertSink)
    assert isinstance(build_alert_sink(""), LoggingAlertSink)


def test_build_alert_sink_with_webhook_is_composite() -> None:
    sink = build_alert_sink("http://hooks/yams")

    assert isinstance(sink, CompositeAlertSink)
    kinds = [type(item) for item in sink._sinks]
    assert kinds == [LoggingAlertSink, WebhookAlertSink]
