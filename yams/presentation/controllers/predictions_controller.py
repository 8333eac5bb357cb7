"""
Presentation Layer - Predictions Controller

Exposes stored predictions to consumers.
"""

from typing import List, Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from yams.application.dtos.prediction_dto import (
    PredictionQueryDTO,
    PredictionRecordDTO,
)
from yams.application.use_cases.query_predictions_use_case import (
    QueryPredictionsUseCase,
)
from yams.domain.entities.errors import PersistenceFailure, QueryValidationError
from yams.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/predictions", tags=["Predictions"])


@router.get(
    "",
    response_model=List[PredictionRecordDTO],
    summary="Query stored predictions",
    description="""
    Return the predictions of one model ordered by production time. Omitted
    parameters fall back to the configured default model and to a window
    ending now. When the default window is empty the latest older
    prediction is returned instead.
    """,
)
@inject
async def query_predictions(
    model_name: Optional[str] = Query(None, min_length=1, description="Model name"),
    model_version: Optional[str] = Query(
        None, min_length=1, description="Model version (requires model_name)"
    ),
    from_ts: Optional[float] = Query(
        None, ge=0, description="Inclusive start (epoch seconds)"
    ),
    to_ts: Optional[float] = Query(
        None, ge=0, description="Inclusive end (epoch seconds)"
    ),
    query_use_case: QueryPredictionsUseCase = Depends(
        Provide[AppContainer.query_predictions_use_case]
    ),
) -> List[PredictionRecordDTO]:
    request = PredictionQueryDTO(
        model_name=model_name,
        model_version=model_version,
        from_ts=from_ts,
        to_ts=to_ts,
    )
    try:
        return await query_use_case.execute(request)
    except QueryValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message
        )
    except PersistenceFailure as exc:
        logger.error("predictions.query.store_error", error=exc.message)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Prediction store unavailable",
        )
    except Exception as exc:
        logger.error("predictions.query.unexpected_error", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
