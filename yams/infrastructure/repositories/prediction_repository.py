"""
MongoDB Prediction Repository - Infrastructure Layer

This module implements the IPredictionRepository interface using MongoDB
as the underlying data store. Predictions are only ever inserted.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import pymongo
import pymongo.errors
import structlog

from yams.domain.entities.dataset import ensure_utc
from yams.domain.entities.errors import DuplicatePredictionError, PersistenceFailure
from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import Prediction
from yams.domain.repositories.prediction_repository import IPredictionRepository
from yams.infrastructure.database import PREDICTIONS_COLLECTION, MongoDatabase

logger = structlog.get_logger(__name__)


class PredictionRepository(IPredictionRepository):
    """MongoDB implementation of the PredictionRepository."""

    COLLECTION_NAME = PREDICTIONS_COLLECTION

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB prediction repository.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    def _to_document(self, prediction: Prediction) -> Dict[str, Any]:
        """Convert a Prediction entity to a MongoDB document."""
        return {
            "model_name": prediction.model_name,
            "model_version": prediction.model_version,
            "value": prediction.value,
            "produced_at": prediction.produced_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> Prediction:
        """Convert a MongoDB document to a Prediction entity."""
        return Prediction(
            value=float(document["value"]),
            produced_by=ModelIdentity(
                name=document["model_name"], version=document["model_version"]
            ),
            produced_at=ensure_utc(document["produced_at"]),
        )

    def _identity_query(
        self, model_name: str, model_version: Optional[str]
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {"model_name": model_name}
        if model_version is not None:
            query["model_version"] = model_version
        return query

    async def save(self, prediction: Prediction) -> None:
        """
        Insert a prediction as a single document.

        Raises:
            DuplicatePredictionError: If (model, produced_at) already exists
            PersistenceFailure: If the insert fails
        """
        try:
            await self.db.insert_one(self.COLLECTION_NAME, self._to_document(prediction))
        except pymongo.errors.DuplicateKeyError as e:
            raise DuplicatePredictionError(
                prediction.model_name,
                prediction.model_version,
                prediction.produced_at.isoformat(),
            ) from e
        except Exception as e:
            raise PersistenceFailure(
                f"Failed to save prediction for {prediction.produced_by}: {str(e)}"
            ) from e

    async def query(
        self,
        model_name: str,
        model_version: Optional[str],
        from_ts: datetime,
        to_ts: datetime,
    ) -> List[Prediction]:
        """
        Find predictions of a model between two instants, both inclusive.

        Returns:
            Predictions ordered by produced_at ascending

        Raises:
            PersistenceFailure: If the query fails
        """
        query = self._identity_query(model_name, model_version)
        query["produced_at"] = {
            "$gte": ensure_utc(from_ts),
            "$lte": ensure_utc(to_ts),
        }
        try:
            documents = await self.db.find_many(
                self.COLLECTION_NAME,
                query,
                sort_by=[
                    ("produced_at", pymongo.ASCENDING),
                    ("model_version", pymongo.ASCENDING),
                ],
            )
        except Exception as e:
            raise PersistenceFailure(f"Failed to query predictions: {str(e)}") from e

        return [self._to_entity(document) for document in documents]

    async def find_latest(
        self,
        model_name: str,
        model_version: Optional[str],
        before: datetime,
    ) -> Optional[Prediction]:
        """Find the newest prediction produced at or before ``before``."""
        query = self._identity_query(model_name, model_version)
        query["produced_at"] = {"$lte": ensure_utc(before)}
        try:
            document = await self.db.find_one(
                self.COLLECTION_NAME,
                query,
                sort=[("produced_at", pymongo.DESCENDING)],
            )
        except Exception as e:
            raise PersistenceFailure(
                f"Failed to read latest prediction: {str(e)}"
            ) from e

        if document is None:
            return None
        return self._to_entity(document)
