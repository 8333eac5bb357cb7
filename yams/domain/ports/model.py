"""Domain port implemented by every executable prediction model."""

from __future__ import annotations

from typing import Protocol

from yams.domain.entities.dataset import Dataset
from yams.domain.entities.model import ModelIdentity, ModelKind
from yams.domain.entities.prediction import Prediction


class IModel(Protocol):
    """A named, versioned unit producing a prediction from a dataset."""

    #: Tag of the model configuration union
    kind: ModelKind
    #: Label used in logs before the identity is resolved
    label: str

    async def identity(self) -> ModelIdentity:
        """Return the identity stamped on every prediction of this model."""
        ...

    async def predict(self, dataset: Dataset) -> Prediction:
        """Produce a prediction for ``dataset.as_of``.

        Raises:
            ModelUnavailable: When the model cannot produce a value.
        """
        ...
