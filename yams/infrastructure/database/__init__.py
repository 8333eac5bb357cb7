"""
Database package - Infrastructure Layer

This package contains database-related implementations.
"""

from yams.infrastructure.database.mongo_database import (
    PREDICTIONS_COLLECTION,
    TICKS_COLLECTION,
    MongoDatabase,
)

__all__ = ["MongoDatabase", "PREDICTIONS_COLLECTION", "TICKS_COLLECTION"]
