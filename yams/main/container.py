"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from yams.application.models import QueryDefaults, TickOptions
from yams.application.use_cases.health_use_cases import GetHealthStatusUseCase
from yams.application.use_cases.model_use_cases import ListModelsUseCase
from yams.application.use_cases.query_predictions_use_case import (
    QueryPredictionsUseCase,
)
from yams.application.use_cases.run_prediction_tick_use_case import (
    GetRecentTicksUseCase,
    RunPredictionTickUseCase,
)
from yams.infrastructure.database import MongoDatabase
from yams.infrastructure.gateways.alert_sinks import build_alert_sink
from yams.infrastructure.gateways.history_api_gateway import HistoryApiInputFetcher
from yams.infrastructure.repositories.prediction_repository import (
    PredictionRepository,
)
from yams.infrastructure.repositories.tick_repository import TickRepository
from yams.infrastructure.services.health_check_service import HealthCheckService
from yams.infrastructure.services.model_factory import build_registry
from yams.infrastructure.services.tick_lock import build_tick_lock
from yams.shared import get_logger
from yams.shared.consts import TICK_LOCK_GRACE_SECONDS

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    prediction_repository = providers.Singleton(
        PredictionRepository,
        mongo_database=mongo_database,
    )

    tick_repository = providers.Singleton(
        TickRepository,
        database=mongo_database,
    )

    # Gateways
    input_fetcher = providers.Singleton(
        HistoryApiInputFetcher,
        base_url=config.datastore.url,
        series=config.datastore.series,
        timeout=config.datastore.timeout_seconds,
    )

    alert_sink = providers.Singleton(
        build_alert_sink,
        webhook_url=config.alerting.webhook_url,
    )

    # Models are built once so remote identity caches are shared
    model_registry = providers.Singleton(
        build_registry,
        definitions=config.models.definitions,
        remote_timeout_seconds=config.remote.timeout_seconds,
        remote_identity_ttl_seconds=config.remote.identity_ttl_seconds,
    )

    tick_lock = providers.Singleton(
        build_tick_lock,
        redis_url=config.redis.url,
        ttl_seconds=providers.Callable(
            lambda interval: int(interval) + TICK_LOCK_GRACE_SECONDS,
            config.scheduler.tick_interval_seconds,
        ),
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        redis_url=config.redis.url,
        datastore_url=config.datastore.url,
    )

    query_defaults = providers.Singleton(
        QueryDefaults,
        model_name=config.query.default_model_name,
        model_version=config.query.default_model_version,
        window_seconds=config.query.default_window_seconds,
    )

    tick_options = providers.Singleton(
        TickOptions,
        lookback_seconds=config.scheduler.lookback_seconds,
        max_workers=config.scheduler.max_workers,
        model_timeout_seconds=config.scheduler.model_timeout_seconds,
    )

    # Application (use cases)
    query_predictions_use_case = providers.Factory(
        QueryPredictionsUseCase,
        prediction_repository=prediction_repository,
        defaults=query_defaults,
    )

    list_models_use_case = providers.Factory(
        ListModelsUseCase,
        registry=model_registry,
    )

    run_prediction_tick_use_case = providers.Factory(
        RunPredictionTickUseCase,
        registry=model_registry,
        input_fetcher=input_fetcher,
        prediction_repository=prediction_repository,
        tick_repository=tick_repository,
        alert_sink=alert_sink,
        options=tick_options,
        tick_lock=tick_lock,
    )

    get_recent_ticks_use_case = providers.Factory(
        GetRecentTicksUseCase,
        tick_repository=tick_repository,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Creates the MongoDB indexes on startup and builds the model registry
    so that configuration errors surface before the first request.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_connection")
        await mongo_database.create_indexes()

        registry = container.model_registry()
        logger.info("container.registry.ready", models=len(registry))

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")
