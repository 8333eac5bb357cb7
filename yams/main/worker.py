#!/usr/bin/env python3
"""
Worker Entry Point - Main Layer

This module serves as the entry point for the Celery worker and the beat
scheduler that triggers prediction ticks. Both API and Worker are
application entry points that belong to the Main layer.
"""

import os
import sys
from typing import List, Optional

from yams.main.config import AppSettings, get_settings
from yams.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

# Configure logging with basic settings first
configure_logging()

logger = get_logger(__name__)


def create_worker(settings: Optional[AppSettings] = None):
    """
    Configure and return the Celery application.

    Similar to create_app() in app.py, this function configures
    the worker with proper settings and environment.
    """
    settings = settings or get_settings()
    update_logging_from_settings(settings)

    os.environ.setdefault("CELERY_BROKER_URL", settings.celery.broker_url)
    os.environ.setdefault("CELERY_RESULT_BACKEND", settings.celery.result_backend_url)
    os.environ.setdefault(
        "SCHEDULER_TICK_INTERVAL_SECONDS",
        str(settings.scheduler.tick_interval_seconds),
    )

    from yams.infrastructure.services.celery_config import create_celery_app

    worker_app = create_celery_app(
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        tick_interval_seconds=settings.scheduler.tick_interval_seconds,
    )

    logger.info(
        "Configuring Celery worker",
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        tick_interval_seconds=settings.scheduler.tick_interval_seconds,
        app_name=worker_app.main,
    )

    return worker_app


def build_worker_argv(with_beat: bool = False) -> List[str]:
    """Command line handed to Celery's worker_main."""
    from yams.infrastructure.services.celery_config import TICK_QUEUE

    argv = [
        "worker",
        "--loglevel=info",
        f"--queues={TICK_QUEUE}",
        # A single tick already fans out over the models internally
        "--concurrency=1",
        "--max-tasks-per-child=100",
    ]
    if with_beat:
        argv.append("--beat")
    return argv


def main(argv: Optional[List[str]] = None):
    """Main entry point for Celery worker; pass --beat to embed the scheduler."""
    args = sys.argv[1:] if argv is None else argv
    with_beat = "--beat" in args

    logger.info("Starting Celery worker", beat=with_beat)

    worker_app = create_worker()
    worker_app.worker_main(build_worker_argv(with_beat=with_beat))


if __name__ == "__main__":
    main()
