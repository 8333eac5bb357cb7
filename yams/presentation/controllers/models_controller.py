"""
Models Router - Presentation Layer

This module defines the FastAPI router for model endpoints.
"""

from typing import List

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from yams.application.dtos.model_dto import ModelInfoDTO
from yams.application.use_cases.model_use_cases import ListModelsUseCase
from yams.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/models", tags=["Models"])


@router.get("", response_model=List[ModelInfoDTO])
@inject
async def list_models(
    list_models_use_case: ListModelsUseCase = Depends(
        Provide[AppContainer.list_models_use_case]
    ),
) -> List[ModelInfoDTO]:
    """
    List the registered models with their current identities.

    Remote models whose metadata endpoint cannot be reached are listed
    with ``available: false``.
    """
    try:
        return await list_models_use_case.execute()
    except Exception as e:
        logger.error("models.list.failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
