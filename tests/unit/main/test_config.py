from __future__ import annotations

from yams.main.config import AppSettings, get_settings
from yams.shared.consts import EnumEnvironment, TICK_LOCK_GRACE_SECONDS


def test_get_settings_loads_defaults(monkeypatch) -> None:
    monkeypatch.delenv("DB_MONGO_URI", raising=False)
    monkeypatch.delenv("MONGO_URI", raising=False)
    settings = get_settings()
    assert settings.database.mongo_uri.startswith("mongodb://")
    assert settings.environment == EnumEnvironment.DEVELOPMENT
    assert settings.query.default_model_name == "moving-average-1h"
    assert settings.models.definitions[0]["kind"] == "moving_average"


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("DB_MONGO_URI", "mongodb://test")
    monkeypatch.setenv("GE_TITLE", "Testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SCHEDULER_TICK_INTERVAL_SECONDS", "120")
    monkeypatch.setenv("QUERY_DEFAULT_MODEL_NAME", "ets-fast")
    monkeypatch.setenv("DATASTORE_URL", "http://history:8080")

    settings = AppSettings()

    assert settings.database.mongo_uri == "mongodb://test"
    assert settings.ge.title == "Testing"
    assert settings.logging.level.value == "DEBUG"
    assert settings.scheduler.tick_interval_seconds == 120
    assert settings.scheduler.lock_ttl_seconds == 120 + TICK_LOCK_GRACE_SECONDS
    assert settings.query.default_model_name == "ets-fast"
    assert settings.datastore.url == "http://history:8080"


def test_model_definitions_from_json_environment(monkeypatch) -> None:
    monkeypatch.setenv(
        "MODELS__DEFINITIONS",
        '[{"kind": "remote_http", "api_root": "http://model:8000"}]',
    )

    settings = AppSettings()

    assert settings.models.definitions == [
        {"kind": "remote_http", "api_root": "http://model:8000"}
    ]
