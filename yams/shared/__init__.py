"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Following Clean Architecture principles:
- Shared module contains only *cross-cutting concerns*
- It must not depend on Infrastructure or Frameworks
"""

from .consts import (
    DEFAULT_LOOKBACK_SECONDS,
    DEFAULT_QUERY_WINDOW_SECONDS,
    DEFAULT_TICK_INTERVAL_SECONDS,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "DEFAULT_LOOKBACK_SECONDS",
    "DEFAULT_QUERY_WINDOW_SECONDS",
    "DEFAULT_TICK_INTERVAL_SECONDS",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
