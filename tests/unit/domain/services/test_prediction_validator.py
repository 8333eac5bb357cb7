from __future__ import annotations

import math

import pytest

from yams.domain.entities.errors import ValidationFailure
from yams.domain.entities.model import ModelIdentity
from yams.domain.services.prediction_validator import (
    validate_prediction,
    validate_prediction_value,
)


@pytest.mark.parametrize("value", [0, 0.0, 120, 3.5])
def test_accepts_non_negative_numbers(value) -> None:
    assert validate_prediction_value(value) == float(value)


@pytest.mark.parametrize(
    "value", [-1.0, math.nan, math.inf, -math.inf, "120", None, True]
)
def test_rejects_unusable_values(value) -> None:
    with pytest.raises(ValidationFailure):
        validate_prediction_value(value)


def test_validate_prediction_checks_identity(make_prediction) -> None:
    prediction = make_prediction(name="A", version="v2")

    with pytest.raises(ValidationFailure) as exc:
        validate_prediction(prediction, ModelIdentity(name="A", version="v1"))

    assert exc.value.details == {"expected": "A:v1", "actual": "A:v2"}


def test_validate_prediction_returns_float_value(make_prediction) -> None:
    prediction = make_prediction(value=120)

    validated = validate_prediction(prediction, prediction.produced_by)

    assert isinstance(validated.value, float)
    assert validated.produced_at == prediction.produced_at
