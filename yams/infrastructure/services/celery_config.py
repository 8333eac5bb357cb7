"""
Infrastructure Services - Celery Configuration

This module contains the Celery application and the beat schedule that
triggers the prediction tick.
"""

import os
from typing import Optional

from celery import Celery

from yams.shared.consts import DEFAULT_TICK_INTERVAL_SECONDS

TICK_TASK_NAME = "run_prediction_tick"
TICK_QUEUE = "predictions"


def create_celery_app(
    broker_url: Optional[str] = None,
    backend_url: Optional[str] = None,
    tick_interval_seconds: Optional[int] = None,
) -> Celery:
    """
    Create and configure Celery application.

    Args:
        broker_url: Message broker URL (uses env var if not provided)
        backend_url: Result backend URL (uses env var if not provided)
        tick_interval_seconds: Seconds between ticks (uses env var if not provided)

    Returns:
        Configured Celery application
    """
    effective_broker = broker_url or os.getenv(
        "CELERY_BROKER_URL", "redis://redis:6379/0"
    )
    effective_backend = backend_url or os.getenv(
        "CELERY_RESULT_BACKEND", "redis://redis:6379/0"
    )
    interval = tick_interval_seconds or int(
        os.getenv("SCHEDULER_TICK_INTERVAL_SECONDS", DEFAULT_TICK_INTERVAL_SECONDS)
    )

    app = Celery(
        "yams_worker",
        broker=effective_broker,
        backend=effective_backend,
        include=["yams.infrastructure.services.tasks.prediction_tick"],
    )

    app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        result_expires=3600,  # 1 hour
        task_routes={TICK_TASK_NAME: {"queue": TICK_QUEUE}},
        worker_prefetch_multiplier=1,
        task_acks_late=True,
        worker_max_tasks_per_child=100,
        # A late tick is worthless once the next one is due
        beat_schedule={
            "run-prediction-tick": {
                "task": TICK_TASK_NAME,
                "schedule": float(interval),
                "options": {"queue": TICK_QUEUE, "expires": float(interval)},
            }
        },
    )

    return app


celery_app = create_celery_app()
