"""
MongoDB Tick Repository - Infrastructure Layer

Stores one document per tick report, including skipped ticks.
"""

from typing import Any, Dict, List
from uuid import UUID

import pymongo

from yams.domain.entities.dataset import ensure_utc
from yams.domain.entities.errors import PersistenceFailure
from yams.domain.entities.model import ModelIdentity
from yams.domain.entities.prediction import ModelFailure
from yams.domain.entities.tick import TickReport, TickStatus
from yams.domain.repositories.tick_repository import ITickRepository
from yams.infrastructure.database import TICKS_COLLECTION, MongoDatabase


class TickRepository(ITickRepository):
    """MongoDB implementation of the TickRepository."""

    COLLECTION_NAME = TICKS_COLLECTION

    def __init__(self, database: MongoDatabase):
        self.db = database

    def _to_document(self, report: TickReport) -> Dict[str, Any]:
        return {
            "id": str(report.id),
            "status": report.status.value,
            "started_at": report.started_at,
            "finished_at": report.finished_at,
            "results_count": report.results_count,
            "persisted": [
                {"name": identity.name, "version": identity.version}
                for identity in report.persisted
            ],
            "failures": [
                {
                    "model_name": failure.identity.name,
                    "model_version": failure.identity.version,
                    "error_type": failure.error_type,
                    "message": failure.message,
                }
                for failure in report.failures
            ],
            "message": report.message,
        }

    def _to_entity(self, document: Dict[str, Any]) -> TickReport:
        finished_at = document.get("finished_at")
        return TickReport(
            id=UUID(document["id"]),
            started_at=ensure_utc(document["started_at"]),
            status=TickStatus(document["status"]),
            finished_at=ensure_utc(finished_at) if finished_at else None,
            results_count=int(document.get("results_count", 0)),
            persisted=[
                ModelIdentity(name=item["name"], version=item["version"])
                for item in document.get("persisted") or []
            ],
            failures=[
                ModelFailure(
                    identity=ModelIdentity(
                        name=item["model_name"], version=item["model_version"]
                    ),
                    error_type=item.get("error_type", "Exception"),
                    message=item.get("message", ""),
                )
                for item in document.get("failures") or []
            ],
            message=document.get("message"),
        )

    async def record(self, report: TickReport) -> None:
        try:
            await self.db.insert_one(self.COLLECTION_NAME, self._to_document(report))
        except Exception as e:
            raise PersistenceFailure(f"Failed to record tick: {str(e)}") from e

    async def find_recent(self, limit: int = 20) -> List[TickReport]:
        try:
            documents = await self.db.find_many(
                self.COLLECTION_NAME,
                {},
                sort_by="started_at",
                sort_direction=pymongo.DESCENDING,
                limit=limit,
            )
        except Exception as e:
            raise PersistenceFailure(f"Failed to read ticks: {str(e)}") from e
        return [self._to_entity(document) for document in documents]
