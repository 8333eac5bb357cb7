"""
One-step-ahead forecasting functions, one per local model kind.

Every function takes its configuration struct and a dataset and returns the
forecast for ``dataset.as_of``. Insufficient data raises ``ValueError``.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, Dict, List, Type

import numpy as np

from yams.domain.entities.dataset import Dataset
from yams.domain.entities.model import (
    ARIMAConfig,
    ETSConfig,
    LocalModelConfig,
    MovingAverageConfig,
)


def moving_average(config: MovingAverageConfig, dataset: Dataset) -> float:
    recent = dataset.since(
        dataset.as_of - timedelta(seconds=config.lookback_seconds)
    ).values()
    if recent.size < config.min_observations:
        raise ValueError(
            f"moving average needs {config.min_observations} observations "
            f"in the last {config.lookback_seconds}s, got {recent.size}"
        )
    return float(np.mean(recent))


def exponential_smoothing(config: ETSConfig, dataset: Dataset) -> float:
    values = dataset.values()
    needed = 1 if config.beta is None else 2
    if values.size < needed:
        raise ValueError(
            f"exponential smoothing needs {needed} observations, got {values.size}"
        )

    alpha = config.alpha
    level = float(values[0])

    if config.beta is None:
        for value in values[1:]:
            level = alpha * float(value) + (1.0 - alpha) * level
        return level

    beta = config.beta
    trend = float(values[1] - values[0])
    for value in values[1:]:
        previous_level = level
        level = alpha * float(value) + (1.0 - alpha) * (level + trend)
        trend = beta * (level - previous_level) + (1.0 - beta) * trend
    return level + trend


def autoregressive(config: ARIMAConfig, dataset: Dataset) -> float:
    values = dataset.values()
    if values.size < config.min_observations:
        raise ValueError(
            f"ARIMA({config.p},{config.d},0) needs {config.min_observations} "
            f"observations, got {values.size}"
        )

    # levels[k] is the series differenced k times
    levels: List[np.ndarray] = [values]
    for _ in range(config.d):
        levels.append(np.diff(levels[-1]))
    series = levels[-1]

    p = config.p
    rows = series.size - p
    design = np.ones((rows, p + 1))
    for lag in range(1, p + 1):
        design[:, lag] = series[p - lag : series.size - lag]
    target = series[p:]

    coefficients, *_ = np.linalg.lstsq(design, target, rcond=None)
    latest_lags = np.concatenate(([1.0], series[::-1][:p]))
    step = float(latest_lags @ coefficients)

    for level in reversed(levels[:-1]):
        step = float(level[-1]) + step
    return step


_FORECASTERS: Dict[Type, Callable[..., float]] = {
    MovingAverageConfig: moving_average,
    ETSConfig: exponential_smoothing,
    ARIMAConfig: autoregressive,
}


def forecast(config: LocalModelConfig, dataset: Dataset) -> float:
    """Dispatch to the forecasting function for the configuration's kind."""
    try:
        function = _FORECASTERS[type(config)]
    except KeyError:
        raise TypeError(
            f"No local forecaster for {type(config).__name__}"
        ) from None
    return function(config, dataset)
