from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
import pytest

from yams.domain.entities.errors import ModelUnavailable
from yams.domain.entities.model import ModelIdentity, ModelKind, RemoteHTTPConfig
from yams.infrastructure.gateways.remote_model_gateway import RemoteHTTPModel

_INVALID_JSON = object()


class _StubResponse:
    def __init__(self, status_code: int, json_data: Any = None):
        self.status_code = status_code
        self._json = json_data
        self.text = "error"

    def json(self) -> Any:
        if self._json is _INVALID_JSON:
            raise ValueError("Expecting value")
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "http://model")
            response = httpx.Response(self.status_code, request=request, text=self.text)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubRemote:
    """Routes requests by path and records them."""

    def __init__(self, routes: Dict[str, Any]) -> None:
        self.routes = routes
        self.calls: List[Dict[str, Any]] = []

    def client(self, timeout: float) -> "_StubAsyncClient":
        return _StubAsyncClient(self, timeout)


class _StubAsyncClient:
    def __init__(self, remote: _StubRemote, timeout: float):
        self._remote = remote
        self.timeout = timeout

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def request(self, method: str, url: str, **kwargs: Any):
        path = url.split("://", 1)[1].split("/", 1)[1]
        self._remote.calls.append(
            {"method": method, "path": f"/{path}", "timeout": self.timeout, **kwargs}
        )
        outcome = self._remote.routes[f"/{path}"]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _model(
    remote: _StubRemote,
    monkeypatch,
    ttl: Optional[float] = 300.0,
    clock: Optional[_Clock] = None,
) -> RemoteHTTPModel:
    monkeypatch.setattr("httpx.AsyncClient", remote.client)
    config = RemoteHTTPConfig(
        api_root="http://model", timeout_seconds=2.0, identity_ttl_seconds=ttl
    )
    return RemoteHTTPModel(config, clock=clock or _Clock())


def _metadata(name: str = "remote-a", version: str = "v1") -> _StubResponse:
    return _StubResponse(200, {"name": name, "version": version})


@pytest.mark.asyncio
async def test_predict_posts_dataset_and_reads_wait_seconds(
    monkeypatch, make_dataset, tick_time
) -> None:
    remote = _StubRemote(
        {"/metadata": _metadata(), "/predict": _StubResponse(200, {"wait_seconds": 95})}
    )
    model = _model(remote, monkeypatch)
    dataset = make_dataset([100.0, 90.0])

    prediction = await model.predict(dataset)

    assert prediction.value == 95
    assert prediction.produced_by == ModelIdentity("remote-a", "v1")
    assert prediction.produced_at == tick_time
    post = remote.calls[-1]
    assert post["method"] == "POST"
    assert post["json"] == dataset.to_payload()
    assert post["timeout"] == 2.0


@pytest.mark.asyncio
async def test_predict_accepts_value_field(monkeypatch, make_dataset) -> None:
    remote = _StubRemote(
        {"/metadata": _metadata(), "/predict": _StubResponse(200, {"value": 12.5})}
    )

    prediction = await _model(remote, monkeypatch).predict(make_dataset([1.0]))

    assert prediction.value == 12.5


@pytest.mark.asyncio
async def test_predict_without_value_is_unavailable(monkeypatch, make_dataset) -> None:
    remote = _StubRemote(
        {"/metadata": _metadata(), "/predict": _StubResponse(200, {"eta": 1})}
    )

    with pytest.raises(ModelUnavailable):
        await _model(remote, monkeypatch).predict(make_dataset([1.0]))


@pytest.mark.asyncio
async def test_identity_is_cached_within_ttl(monkeypatch) -> None:
    clock = _Clock()
    remote = _StubRemote({"/metadata": _metadata()})
    model = _model(remote, monkeypatch, ttl=60.0, clock=clock)

    await model.identity()
    clock.now += 59
    await model.identity()

    assert len(remote.calls) == 1


@pytest.mark.asyncio
async def test_identity_is_refreshed_after_ttl(monkeypatch) -> None:
    clock = _Clock()
    remote = _StubRemote({"/metadata": _metadata(version="v1")})
    model = _model(remote, monkeypatch, ttl=60.0, clock=clock)

    assert await model.identity() == ModelIdentity("remote-a", "v1")
    remote.routes["/metadata"] = _metadata(version="v2")
    clock.now += 61

    assert await model.identity() == ModelIdentity("remote-a", "v2")
    assert len(remote.calls) == 2


@pytest.mark.asyncio
async def test_identity_without_ttl_is_cached_forever(monkeypatch) -> None:
    clock = _Clock()
    remote = _StubRemote({"/metadata": _metadata()})
    model = _model(remote, monkeypatch, ttl=None, clock=clock)

    await model.identity()
    clock.now += 10**9
    await model.identity()

    assert len(remote.calls) == 1


@pytest.mark.asyncio
async def test_invalidate_identity_forces_refresh(monkeypatch) -> None:
    remote = _StubRemote({"/metadata": _metadata()})
    model = _model(remote, monkeypatch)

    await model.identity()
    model.invalidate_identity()
    await model.identity()

    assert len(remote.calls) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "outcome",
    [
        _StubResponse(500),
        _StubResponse(200, _INVALID_JSON),
        _StubResponse(200, ["remote-a", "v1"]),
        _StubResponse(200, {"name": "remote-a"}),
        _StubResponse(200, {"name": "", "version": "v1"}),
        httpx.ConnectTimeout("connect timeout"),
        httpx.ConnectError("refused"),
    ],
)
async def test_metadata_errors_are_unavailable(monkeypatch, outcome) -> None:
    model = _model(_StubRemote({"/metadata": outcome}), monkeypatch)

    with pytest.raises(ModelUnavailable) as exc:
        await model.identity()

    assert exc.value.model == "http://model"


@pytest.mark.asyncio
async def test_failed_refresh_does_not_cache(monkeypatch) -> None:
    remote = _StubRemote({"/metadata": _StubResponse(503)})
    model = _model(remote, monkeypatch)

    with pytest.raises(ModelUnavailable):
        await model.identity()
    remote.routes["/metadata"] = _metadata()

    assert await model.identity() == ModelIdentity("remote-a", "v1")


def test_kind_and_label() -> None:
    model = RemoteHTTPModel(RemoteHTTPConfig(api_root="http://model"))

    assert model.kind is ModelKind.REMOTE_HTTP
    assert model.label == "http://model"
    assert model.timeout == 15.0
