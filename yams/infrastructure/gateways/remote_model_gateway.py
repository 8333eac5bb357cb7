"""
Infrastructure Gateway - Remote HTTP Model

A model served by another process. Its contract:

    GET  {api_root}/metadata -> {"name": str, "version": str}
    POST {api_root}/predict  <- serialized dataset
                             -> {"wait_seconds": number} (or {"value": number})

The identity is resolved lazily and cached for ``identity_ttl_seconds``;
``None`` caches it for the lifetime of the process, so a redeployed remote
model is reported under its old identity until restart.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import httpx
import structlog

from yams.domain.entities.dataset import Dataset
from yams.domain.entities.errors import ModelUnavailable, ModelValidationError
from yams.domain.entities.model import ModelIdentity, ModelKind, RemoteHTTPConfig
from yams.domain.entities.prediction import Prediction
from yams.domain.ports.model import IModel

logger = structlog.get_logger(__name__)

PREDICTION_FIELDS = ("wait_seconds", "value")


class RemoteHTTPModel(IModel):
    """Delegates predictions to a remote model API."""

    def __init__(
        self,
        config: RemoteHTTPConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self._clock = clock
        self._identity: Optional[ModelIdentity] = None
        self._identity_fetched_at: Optional[float] = None

    @property
    def kind(self) -> ModelKind:
        return self.config.kind

    @property
    def label(self) -> str:
        return self.config.api_root

    @property
    def timeout(self) -> float:
        return self.config.timeout_seconds

    def _cache_valid(self) -> bool:
        if self._identity is None or self._identity_fetched_at is None:
            return False
        ttl = self.config.identity_ttl_seconds
        if ttl is None:
            return True
        return self._clock() - self._identity_fetched_at < ttl

    def invalidate_identity(self) -> None:
        self._identity = None
        self._identity_fetched_at = None

    async def identity(self) -> ModelIdentity:
        if self._cache_valid() and self._identity is not None:
            return self._identity

        data = await self._request("GET", "/metadata")
        name = data.get("name")
        version = data.get("version")
        if not isinstance(name, str) or not isinstance(version, str):
            raise ModelUnavailable(
                self.label,
                "metadata response lacks string 'name' and 'version'",
                details={"response": data},
            )
        try:
            identity = ModelIdentity(name=name, version=version)
        except ModelValidationError as exc:
            raise ModelUnavailable(self.label, exc.message) from exc

        if self._identity is not None and identity != self._identity:
            logger.info(
                "model.remote.identity_changed",
                api_root=self.label,
                previous=str(self._identity),
                current=str(identity),
            )
        self._identity = identity
        self._identity_fetched_at = self._clock()
        return identity

    async def predict(self, dataset: Dataset) -> Prediction:
        identity = await self.identity()
        data = await self._request("POST", "/predict", json=dataset.to_payload())

        for field in PREDICTION_FIELDS:
            if field in data:
                value = data[field]
                break
        else:
            raise ModelUnavailable(
                str(identity),
                f"predict response has none of {', '.join(PREDICTION_FIELDS)}",
                details={"response": data},
            )

        # Non-numeric values are left for the tick's validation step
        return Prediction(value=value, produced_by=identity, produced_at=dataset.as_of)

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        url = f"{self.config.api_root}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "model.remote.http_error",
                url=url,
                status_code=e.response.status_code,
            )
            raise ModelUnavailable(
                self.label,
                f"HTTP {e.response.status_code} from {path}",
                details={"response": e.response.text},
            ) from e

        except httpx.TimeoutException as e:
            logger.warning("model.remote.timeout", url=url, timeout=self.timeout)
            raise ModelUnavailable(
                self.label, f"{path} timed out after {self.timeout}s"
            ) from e

        except httpx.RequestError as e:
            logger.warning("model.remote.request_error", url=url, error=str(e))
            raise ModelUnavailable(self.label, f"request failed: {str(e)}") from e

        except ValueError as e:
            raise ModelUnavailable(self.label, f"{path} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ModelUnavailable(self.label, f"{path} did not return an object")
        return data

    def __repr__(self) -> str:
        return f"RemoteHTTPModel({self.config.api_root!r})"
