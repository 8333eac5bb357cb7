"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error handling, and mapping between API DTOs
and application layer use cases.
"""

from .models_controller import router as models_router
from .predictions_controller import router as predictions_router
from .system_controller import router as system_router
from .ticks_controller import router as ticks_router

__all__ = ["models_router", "predictions_router", "system_router", "ticks_router"]
