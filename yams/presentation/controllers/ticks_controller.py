"""
Ticks Router - Presentation Layer

Inspect recent scheduler ticks and trigger one on demand.
"""

from typing import List

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from yams.application.dtos.tick_dto import TickReportDTO
from yams.application.use_cases.run_prediction_tick_use_case import (
    GetRecentTicksUseCase,
    RunPredictionTickUseCase,
)
from yams.domain.entities.errors import PersistenceFailure
from yams.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/ticks", tags=["Ticks"])


@router.get("", response_model=List[TickReportDTO])
@inject
async def list_ticks(
    limit: int = Query(20, ge=1, le=500, description="Maximum reports to return"),
    get_recent_ticks_use_case: GetRecentTicksUseCase = Depends(
        Provide[AppContainer.get_recent_ticks_use_case]
    ),
) -> List[TickReportDTO]:
    """Return the most recent tick reports, newest first."""
    try:
        reports = await get_recent_ticks_use_case.execute(limit=limit)
    except PersistenceFailure as exc:
        logger.error("ticks.list.store_error", error=exc.message)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Tick store unavailable",
        )
    return [TickReportDTO.from_domain(report) for report in reports]


@router.post(
    "",
    response_model=TickReportDTO,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Run a tick now",
)
@inject
async def run_tick(
    run_prediction_tick_use_case: RunPredictionTickUseCase = Depends(
        Provide[AppContainer.run_prediction_tick_use_case]
    ),
) -> TickReportDTO:
    """Run one tick immediately; it is skipped if another one is in flight."""
    try:
        report = await run_prediction_tick_use_case.execute()
    except Exception as exc:
        logger.error("ticks.run.unexpected_error", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return TickReportDTO.from_domain(report)
