"""Domain service helpers for validating produced predictions."""

import math
from dataclasses import replace
from numbers import Real
from typing import Any

from yams.domain.entities.errors import ValidationFailure
from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import Prediction


def validate_prediction_value(value: Any) -> float:
    """Check that a produced wait time is a finite, non-negative number.

    Raises:
        ValidationFailure: If the value is not usable.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationFailure(
            f"Prediction value must be numeric, got {type(value).__name__}",
            details={"value": repr(value)},
        )
    number = float(value)
    if not math.isfinite(number):
        raise ValidationFailure(
            "Prediction value must be finite", details={"value": repr(value)}
        )
    if number < 0:
        raise ValidationFailure(
            "Prediction value must not be negative", details={"value": number}
        )
    return number


def validate_prediction(prediction: Prediction, expected: ModelIdentity) -> Prediction:
    """Validate a prediction before persisting it.

    The prediction must carry the identity of the model that was invoked.

    Raises:
        ValidationFailure: If the value or the identity is wrong.
    """
    if prediction.produced_by != expected:
        raise ValidationFailure(
            f"Prediction identity {prediction.produced_by} does not match "
            f"model {expected}",
            details={
                "expected": str(expected),
                "actual": str(prediction.produced_by),
            },
        )
    return replace(prediction, value=validate_prediction_value(prediction.value))
