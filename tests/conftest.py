from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pymongo
import pymongo.errors
import pytest

from yams.domain.entities.dataset import Dataset, Observation, TimeRange
from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import Prediction

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Unique keys enforced by the fake, mirroring MongoDatabase.create_indexes
_UNIQUE_KEYS: Dict[str, Tuple[str, ...]] = {
    "predictions": ("model_name", "model_version", "produced_at"),
}

_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "$gte": lambda actual, bound: actual >= bound,
    "$gt": lambda actual, bound: actual > bound,
    "$lte": lambda actual, bound: actual <= bound,
    "$lt": lambda actual, bound: actual < bound,
}


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, condition in query.items():
        actual = document.get(key)
        if isinstance(condition, dict):
            if actual is None:
                return False
            for operator, bound in condition.items():
                if not _OPERATORS[operator](actual, bound):
                    return False
        elif actual != condition:
            return False
    return True


def _sorted(
    documents: List[Dict[str, Any]], sort: Sequence[Tuple[str, int]]
) -> List[Dict[str, Any]]:
    ordered = list(documents)
    for field, direction in reversed(list(sort)):
        ordered.sort(
            key=lambda doc: doc.get(field),
            reverse=direction == pymongo.DESCENDING,
        )
    return ordered


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.created_indexes: List[Tuple[Any, ...]] = []

    def insert_one(self, document: Dict[str, Any]) -> None:
        unique = _UNIQUE_KEYS.get(self.name)
        if unique:
            key = tuple(document.get(field) for field in unique)
            for existing in self.documents:
                if tuple(existing.get(field) for field in unique) == key:
                    raise pymongo.errors.DuplicateKeyError("E11000 duplicate key")
        self.documents.append(dict(document))

    def find(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [dict(doc) for doc in self.documents if _matches(doc, query)]

    def create_index(self, keys: Any, name: Optional[str] = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys


class FakeMongoDatabase:
    """In-memory stand-in for MongoDatabase's async API."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.indexes_created = False
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(name))

    async def find_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
    ) -> Optional[Dict[str, Any]]:
        documents = self.get_collection(collection_name).find(query)
        if sort:
            documents = _sorted(documents, sort)
        return documents[0] if documents else None

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Any = None,
        sort_direction: int = pymongo.ASCENDING,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        documents = self.get_collection(collection_name).find(query)
        if isinstance(sort_by, str):
            documents = _sorted(documents, [(sort_by, sort_direction)])
        elif sort_by:
            documents = _sorted(documents, sort_by)
        documents = documents[skip:]
        if limit:
            documents = documents[:limit]
        return documents

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        self.get_collection(collection_name).insert_one(document)
        return document

    async def create_indexes(self) -> None:
        self.indexes_created = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def tick_time() -> datetime:
    return datetime(2026, 1, 9, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def make_dataset(tick_time: datetime) -> Callable[..., Dataset]:
    """Build a dataset ending at ``end`` with one observation per ``step``."""

    def _make(
        values: Sequence[float],
        end: Optional[datetime] = None,
        step_seconds: int = 60,
        lookback_seconds: int = 21600,
    ) -> Dataset:
        window_end = end or tick_time
        window = TimeRange(
            start=window_end - timedelta(seconds=lookback_seconds), end=window_end
        )
        count = len(values)
        observations = [
            Observation(
                timestamp=window_end - timedelta(seconds=step_seconds * (count - 1 - i)),
                value=value,
            )
            for i, value in enumerate(values)
        ]
        return Dataset.from_observations(window, observations)

    return _make


@pytest.fixture()
def make_prediction() -> Callable[..., Prediction]:
    def _make(
        value: float = 120.0,
        name: str = "A",
        version: str = "v1",
        produced_at: Optional[datetime] = None,
    ) -> Prediction:
        return Prediction(
            value=value,
            produced_by=ModelIdentity(name=name, version=version),
            produced_at=produced_at or datetime(2026, 1, 9, 12, 0, tzinfo=timezone.utc),
        )

    return _make
