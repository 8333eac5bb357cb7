"""
API Server Entry Point - Main Layer

Serves the FastAPI application with uvicorn using the GE_* settings.
"""

from typing import Optional

import uvicorn

from yams.main.config import AppSettings, get_settings
from yams.shared import get_logger

logger = get_logger(__name__)


def main(settings: Optional[AppSettings] = None) -> None:
    """Run the API; the app itself is built by ``create_app`` in the server process."""
    settings = settings or get_settings()

    logger.info(
        "Starting API server",
        host=settings.ge.host,
        port=settings.ge.port,
        reload=settings.ge.reload,
    )
    uvicorn.run(
        "yams.main.app:create_app",
        factory=True,
        host=settings.ge.host,
        port=settings.ge.port,
        reload=settings.ge.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
