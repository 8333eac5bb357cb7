from __future__ import annotations

import pytest
from dependency_injector import providers

from yams.main.app import create_app
from yams.main.config import AppSettings
from yams.main.container import get_container


class _StubMongoDatabase:
    def __init__(self) -> None:
        self.indexes_created = False
        self.closed = False

    async def create_indexes(self) -> None:
        self.indexes_created = True

    def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan() -> None:
    app = create_app(AppSettings())
    stub_db = _StubMongoDatabase()
    get_container().mongo_database.override(providers.Object(stub_db))

    assert app.title == "YAMS"

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None
        assert app.state.container is get_container()
        assert stub_db.indexes_created

    assert stub_db.closed


def test_create_app_registers_routes() -> None:
    app = create_app(AppSettings())

    paths = {route.path for route in app.routes}

    assert {"/predictions", "/models", "/ticks", "/health"} <= paths
