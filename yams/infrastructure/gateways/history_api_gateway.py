"""
Infrastructure Gateway - History API Input Fetcher

Reads the observations a tick needs from the external data store's
read-only HTTP API:

    GET {base_url}/observations?series=..&from_ts=..&to_ts=..
    -> {"observations": [{"timestamp": <epoch|ISO8601>, "value": <number>}]}
"""

import math
from datetime import datetime, timezone
from typing import Any, List, Optional

import httpx
import structlog

from yams.domain.entities.dataset import (
    Dataset,
    Observation,
    TimeRange,
    from_epoch_seconds,
    to_epoch_seconds,
)
from yams.domain.entities.errors import FetchFailure
from yams.domain.gateways.input_fetcher import IInputFetcher

logger = structlog.get_logger(__name__)


class HistoryApiInputFetcher(IInputFetcher):
    """Implementation of the input fetcher using an HTTP client."""

    def __init__(self, base_url: str, series: str, timeout: float = 30.0):
        """
        Initialize the fetcher.

        Args:
            base_url: Base URL of the data store API (e.g. "http://history:8080")
            series: Name of the observation series to read
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.series = series
        self.timeout = timeout

    async def fetch(self, window: TimeRange) -> Dataset:
        """Fetch every observation inside ``window``."""

        url = f"{self.base_url}/observations"
        params = {
            "series": self.series,
            "from_ts": str(to_epoch_seconds(window.start)),
            "to_ts": str(to_epoch_seconds(window.end)),
        }

        logger.info(
            "history.fetch.started",
            url=url,
            series=self.series,
            start=window.start.isoformat(),
            end=window.end.isoformat(),
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "history.fetch.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise FetchFailure(
                f"Data store HTTP error {e.response.status_code}",
                details={"url": url, "response": e.response.text},
            ) from e

        except httpx.RequestError as e:
            logger.error("history.fetch.request_error", error=str(e), url=url)
            raise FetchFailure(f"Data store request failed: {str(e)}") from e

        except ValueError as e:
            logger.error("history.fetch.invalid_json", error=str(e), url=url)
            raise FetchFailure("Data store returned invalid JSON") from e

        observations = self._parse_observations(data, window)
        logger.info("history.fetch.completed", count=len(observations))
        return Dataset.from_observations(window, observations)

    def _parse_observations(self, data: Any, window: TimeRange) -> List[Observation]:
        """Extract observations, dropping malformed or out-of-window entries."""

        if not isinstance(data, dict) or not isinstance(
            data.get("observations"), list
        ):
            raise FetchFailure(
                "Data store response has no 'observations' list",
                details={"response": data},
            )

        observations: List[Observation] = []
        dropped = 0
        for entry in data["observations"]:
            observation = self._parse_entry(entry)
            if observation is None or not window.contains(observation.timestamp):
                dropped += 1
                continue
            observations.append(observation)

        if dropped:
            logger.warning("history.fetch.entries_dropped", dropped=dropped)
        return observations

    def _parse_entry(self, entry: Any) -> Optional[Observation]:
        if not isinstance(entry, dict):
            return None
        timestamp = self._parse_timestamp(entry.get("timestamp"))
        value = entry.get("value")
        if timestamp is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        return Observation(timestamp=timestamp, value=number)

    @staticmethod
    def _parse_timestamp(raw: Any) -> Optional[datetime]:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, (int, float)):
            try:
                return from_epoch_seconds(raw)
            except (OverflowError, ValueError, OSError):
                return None
        if isinstance(raw, str):
            try:
                parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            except ValueError:
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
        return None
