from __future__ import annotations

import logging
from typing import Iterator

import pytest

from datastore.sensor_registry import build_default_registry
from logging_config import ContextualFormatter, build_logging_config
from settings import get_settings


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    get_settings.cache_clear()
    build_default_registry.cache_clear()
    yield
    build_default_registry.cache_clear()
    get_settings.cache_clear()


def test_defaults_apply_without_environment(monkeypatch) -> None:
    for name in ("SENSOR_API_HOST", "SENSOR_API_PORT", "SENSOR_REGISTRY_SEED", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.host == "localhost"
    assert settings.port == 8080
    assert settings.seed_registry is True
    assert settings.log_level == "INFO"


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_API_HOST", "0.0.0.0")
    monkeypatch.setenv("SENSOR_API_PORT", "9090")
    monkeypatch.setenv("SENSOR_REGISTRY_SEED", "off")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()
    registry = build_default_registry()

    assert settings.host == "0.0.0.0"
    assert settings.port == 9090
    assert settings.seed_registry is False
    assert settings.log_level == "DEBUG"
    assert len(registry) == 0


@pytest.mark.parametrize("raw", ["", "  ", "eighty", "-1", "0"])
def test_invalid_port_falls_back_to_default(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("SENSOR_API_PORT", raw)

    assert get_settings().port == 8080


def test_formatter_appends_known_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname=__file__, lineno=1,
        msg="Sensor updated", args=(), exc_info=None,
    )
    record.sensor_name = "probe"
    record.x = 1.5
    record.unrelated = "ignored"

    assert formatter.format(record) == "Sensor updated | sensor_name=probe x=1.5"


def test_logging_config_routes_uvicorn_through_contextual_handler() -> None:
    config = build_logging_config("WARNING")

    assert config["root"]["level"] == "WARNING"
    assert config["loggers"]["uvicorn"]["handlers"] == ["default"]
    assert config["formatters"]["contextual"]["()"] == "logging_config.ContextualFormatter"
