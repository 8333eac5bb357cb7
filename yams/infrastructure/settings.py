"""Infrastructure-level configuration shared by the API and background workers."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from yams.shared.consts import (
    DEFAULT_LOOKBACK_SECONDS,
    DEFAULT_QUERY_WINDOW_SECONDS,
    DEFAULT_TICK_INTERVAL_SECONDS,
    TICK_LOCK_GRACE_SECONDS,
)

DEFAULT_MODEL_DEFINITIONS: List[Dict[str, Any]] = [
    {"kind": "moving_average", "name": "moving-average-1h", "version": "v1"},
]


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/yams",
        validation_alias=AliasChoices("DB_MONGO_URI", "MONGO_URI"),
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="yams",
        validation_alias=AliasChoices("DB_DATABASE_NAME", "DATABASE_NAME"),
        description="MongoDB database name",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class RedisSettings(BaseSettings):
    """Redis holds the distributed tick lock."""

    url: str = Field(default="redis://localhost:6379/1", description="Redis URL")

    model_config = SettingsConfigDict(
        env_prefix="REDIS_", case_sensitive=False, extra="ignore"
    )


class SchedulerSettings(BaseSettings):
    """Tick cadence and execution limits."""

    tick_interval_seconds: int = Field(
        default=DEFAULT_TICK_INTERVAL_SECONDS,
        gt=0,
        description="Seconds between two prediction ticks",
    )
    lookback_seconds: int = Field(
        default=DEFAULT_LOOKBACK_SECONDS,
        gt=0,
        description="Width of the input window fetched for every tick",
    )
    max_workers: int = Field(
        default_factory=lambda: os.cpu_count() or 1,
        ge=1,
        description="Maximum number of models evaluated at the same time",
    )
    model_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Hard limit for a single model run"
    )

    model_config = SettingsConfigDict(
        env_prefix="SCHEDULER_", case_sensitive=False, extra="ignore"
    )

    @property
    def lock_ttl_seconds(self) -> int:
        return self.tick_interval_seconds + TICK_LOCK_GRACE_SECONDS


class QuerySettings(BaseSettings):
    """Defaults applied to prediction queries."""

    default_model_name: str = Field(default="moving-average-1h")
    default_model_version: str = Field(default="v1")
    default_window_seconds: int = Field(default=DEFAULT_QUERY_WINDOW_SECONDS, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="QUERY_", case_sensitive=False, extra="ignore"
    )


class DataStoreSettings(BaseSettings):
    """External read-only store providing the input observations."""

    url: str = Field(default="http://localhost:8080", description="Data store URL")
    series: str = Field(default="waiting-time", description="Series to read")
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="DATASTORE_", case_sensitive=False, extra="ignore"
    )


class RemoteModelSettings(BaseSettings):
    """Defaults for remote HTTP models."""

    timeout_seconds: float = Field(default=15.0, gt=0)
    identity_ttl_seconds: Optional[float] = Field(
        default=300.0,
        ge=0,
        description="How long a resolved identity is reused; empty caches forever",
    )

    model_config = SettingsConfigDict(
        env_prefix="REMOTE_", case_sensitive=False, extra="ignore"
    )

    @field_validator("identity_ttl_seconds", mode="before")
    @classmethod
    def _empty_ttl_is_forever(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in ("", "none", "null"):
            return None
        return value


class AlertingSettings(BaseSettings):
    webhook_url: Optional[str] = Field(
        default=None, description="Webhook receiving tick failure reports"
    )

    model_config = SettingsConfigDict(
        env_prefix="ALERTING_", case_sensitive=False, extra="ignore"
    )


class ModelsSettings(BaseSettings):
    definitions: List[Dict[str, Any]] = Field(
        default_factory=lambda: [dict(item) for item in DEFAULT_MODEL_DEFINITIONS],
        description="Model definitions, tagged by kind",
    )

    model_config = SettingsConfigDict(
        env_prefix="MODELS__", case_sensitive=False, extra="ignore"
    )


class InfrastructureSettings(BaseSettings):
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    datastore: DataStoreSettings = Field(default_factory=DataStoreSettings)
    remote: RemoteModelSettings = Field(default_factory=RemoteModelSettings)
    alerting: AlertingSettings = Field(default_factory=AlertingSettings)
    models: ModelsSettings = Field(default_factory=ModelsSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


_settings: InfrastructureSettings | None = None


def get_settings() -> InfrastructureSettings:
    """Lazy-load infrastructure settings for Celery workers."""
    global _settings
    if _settings is None:
        _settings = InfrastructureSettings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
