"""
Domain Entities - Dataset

Input data handed to every model of a tick. A dataset is immutable so that
concurrent model invocations can share one instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Tuple

import numpy as np


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive values are UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_epoch_seconds(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


def to_epoch_seconds(value: datetime) -> float:
    return ensure_utc(value).timestamp()


@dataclass(frozen=True)
class TimeRange:
    """Closed interval ``[start, end]`` in UTC."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", ensure_utc(self.start))
        object.__setattr__(self, "end", ensure_utc(self.end))
        if self.start > self.end:
            raise ValueError("TimeRange start must not be after end")

    def contains(self, moment: datetime) -> bool:
        return self.start <= ensure_utc(moment) <= self.end

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()


@dataclass(frozen=True)
class Observation:
    """A single measured value, e.g. a queue wait time in seconds."""

    timestamp: datetime
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))


@dataclass(frozen=True)
class Dataset:
    """Observations covering ``window``, sorted by timestamp."""

    window: TimeRange
    observations: Tuple[Observation, ...] = field(default_factory=tuple)

    @classmethod
    def from_observations(
        cls, window: TimeRange, observations: Iterable[Observation]
    ) -> "Dataset":
        ordered = sorted(observations, key=lambda item: item.timestamp)
        return cls(window=window, observations=tuple(ordered))

    def __len__(self) -> int:
        return len(self.observations)

    @property
    def as_of(self) -> datetime:
        """Reference time of predictions made from this dataset."""
        return self.window.end

    def values(self) -> np.ndarray:
        """Observation values as a read-only float array."""
        array = np.fromiter(
            (item.value for item in self.observations),
            dtype=float,
            count=len(self.observations),
        )
        array.flags.writeable = False
        return array

    def since(self, start: datetime) -> "Dataset":
        """Sub-dataset with the observations at or after ``start``."""
        start = max(ensure_utc(start), self.window.start)
        window = TimeRange(start=start, end=self.window.end)
        return Dataset(
            window=window,
            observations=tuple(
                item for item in self.observations if item.timestamp >= start
            ),
        )

    def to_payload(self) -> dict:
        """Serialize with epoch-second timestamps for remote models."""
        return {
            "window": {
                "start": to_epoch_seconds(self.window.start),
                "end": to_epoch_seconds(self.window.end),
            },
            "observations": [
                {"timestamp": to_epoch_seconds(item.timestamp), "value": item.value}
                for item in self.observations
            ],
        }
