"""DTOs describing tick reports."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from yams.domain.entities.prediction import ModelFailure
from yams.domain.entities.tick import TickReport, TickStatus


class ModelFailureDTO(BaseModel):
    model_name: str
    model_version: str
    error_type: str
    message: str

    model_config = {"protected_namespaces": ()}

    @classmethod
    def from_domain(cls, failure: ModelFailure) -> "ModelFailureDTO":
        return cls(
            model_name=failure.identity.name,
            model_version=failure.identity.version,
            error_type=failure.error_type,
            message=failure.message,
        )


class TickReportDTO(BaseModel):
    """Outcome of one scheduler tick."""

    id: UUID
    status: TickStatus
    started_at: datetime
    finished_at: Optional[datetime] = None
    results_count: int = Field(ge=0, description="Models invoked in the tick")
    persisted: List[str] = Field(
        default_factory=list, description="Identities whose prediction was stored"
    )
    failures: List[ModelFailureDTO] = Field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def from_domain(cls, report: TickReport) -> "TickReportDTO":
        return cls(
            id=report.id,
            status=report.status,
            started_at=report.started_at,
            finished_at=report.finished_at,
            results_count=report.results_count,
            persisted=[str(identity) for identity in report.persisted],
            failures=[ModelFailureDTO.from_domain(item) for item in report.failures],
            message=report.message,
        )
