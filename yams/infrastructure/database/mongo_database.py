"""
MongoDB Database - Infrastructure Layer

This module provides a MongoDB database client for interacting with MongoDB.
It handles connection, collections, basic queries and index management.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pymongo.errors
import structlog
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = structlog.get_logger(__name__)

SortSpec = Union[str, Sequence[Tuple[str, int]]]

PREDICTIONS_COLLECTION = "predictions"
TICKS_COLLECTION = "ticks"


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        """Get a collection from the database."""
        return self.db[collection_name]

    async def find_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single document in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort: Optional sort specification, first match wins

        Returns:
            The document if found, None otherwise
        """
        return self.db[collection_name].find_one(query, sort=sort)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[SortSpec] = None,
        sort_direction: int = ASCENDING,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort_by: Field (or list of field/direction pairs) to sort by
            sort_direction: Direction used when ``sort_by`` is a single field
            skip: Number of documents to skip
            limit: Maximum number of documents to return, 0 for no limit

        Returns:
            List of documents
        """
        cursor = self.db[collection_name].find(query)

        if isinstance(sort_by, str):
            cursor = cursor.sort(sort_by, sort_direction)
        elif sort_by:
            cursor = cursor.sort(list(sort_by))

        cursor = cursor.skip(skip).limit(limit)

        return list(cursor)

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Insert a document into a collection.

        Raises:
            pymongo.errors.DuplicateKeyError: If a unique index is violated
            Exception: If the insert is not acknowledged
        """
        result = self.db[collection_name].insert_one(document)
        if not result.acknowledged:
            raise Exception(f"Failed to insert document in {collection_name}")
        return document

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """
        Create all indexes the repositories rely on.

        The unique predictions index is what makes (model, produced_at)
        collisions fail instead of silently duplicating rows.
        """
        try:
            self.db[PREDICTIONS_COLLECTION].create_index(
                [
                    ("model_name", ASCENDING),
                    ("model_version", ASCENDING),
                    ("produced_at", ASCENDING),
                ],
                name="model_identity_produced_at_uniq",
                unique=True,
            )
            self.db[PREDICTIONS_COLLECTION].create_index(
                [("model_name", ASCENDING), ("produced_at", ASCENDING)],
                name="model_name_produced_at_idx",
            )
            self.db[TICKS_COLLECTION].create_index(
                [("started_at", DESCENDING)], name="started_at_idx"
            )
        except pymongo.errors.OperationFailure as e:
            logger.warning("mongo.indexes.failed", error=str(e))
