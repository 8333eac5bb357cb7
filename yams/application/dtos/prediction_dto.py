"""
Application DTOs - Prediction

Data Transfer Objects for the prediction query endpoint. Timestamps cross
the API boundary as epoch seconds.
"""

from typing import Optional

from pydantic import BaseModel, Field

from yams.domain.entities.dataset import to_epoch_seconds
from yams.domain.entities.prediction import Prediction


class PredictionQueryDTO(BaseModel):
    """Optional filters of a prediction query; omitted ones use defaults."""

    model_name: Optional[str] = Field(
        default=None, min_length=1, description="Model name"
    )
    model_version: Optional[str] = Field(
        default=None, min_length=1, description="Model version"
    )
    from_ts: Optional[float] = Field(
        default=None, ge=0, description="Inclusive start (epoch seconds)"
    )
    to_ts: Optional[float] = Field(
        default=None, ge=0, description="Inclusive end (epoch seconds)"
    )

    model_config = {"protected_namespaces": ()}


class PredictionRecordDTO(BaseModel):
    """A stored prediction as returned to consumers."""

    value: float = Field(description="Predicted wait time in seconds")
    model_name: str
    model_version: str
    produced_at: float = Field(description="Production time (epoch seconds)")

    @classmethod
    def from_domain(cls, prediction: Prediction) -> "PredictionRecordDTO":
        return cls(
            value=prediction.value,
            model_name=prediction.model_name,
            model_version=prediction.model_version,
            produced_at=to_epoch_seconds(prediction.produced_at),
        )

    model_config = {
        "protected_namespaces": (),
        "json_schema_extra": {
            "example": {
                "value": 120.0,
                "model_name": "moving-average-1h",
                "model_version": "v1",
                "produced_at": 1767960000.0,
            }
        },
    }
