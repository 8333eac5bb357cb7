"""
Prediction Repository Interface

Append-only storage for predictions, keyed by
(model name, model version, produced_at).
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from yams.domain.entities.prediction import Prediction


class IPredictionRepository(ABC):
    """Interface for Prediction repository implementations."""

    @abstractmethod
    async def save(self, prediction: Prediction) -> None:
        """
        Persist a prediction atomically.

        Args:
            prediction: The prediction to append

        Raises:
            DuplicatePredictionError: If the composite key already exists
            PersistenceFailure: If the write fails
        """
        pass

    @abstractmethod
    async def query(
        self,
        model_name: str,
        model_version: Optional[str],
        from_ts: datetime,
        to_ts: datetime,
    ) -> List[Prediction]:
        """
        Find predictions of a model inside a closed time range.

        Args:
            model_name: Model name to match
            model_version: Model version to match, None for every version
            from_ts: Inclusive lower bound on produced_at
            to_ts: Inclusive upper bound on produced_at

        Returns:
            Predictions ordered by produced_at ascending

        Raises:
            PersistenceFailure: If the store cannot be read
        """
        pass

    @abstractmethod
    async def find_latest(
        self,
        model_name: str,
        model_version: Optional[str],
        before: datetime,
    ) -> Optional[Prediction]:
        """
        Find the newest prediction produced at or before ``before``.

        Returns:
            The prediction if any exists, None otherwise
        """
        pass
