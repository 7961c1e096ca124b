from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_HOST_ENV = "SENSOR_API_HOST"
_PORT_ENV = "SENSOR_API_PORT"
_SEED_ENV = "SENSOR_REGISTRY_SEED"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    seed_registry: bool
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_port(default: int) -> int:
    value = os.getenv(_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    return candidate not in _FALSE_VALUES


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        host=_read_str_env(_HOST_ENV, "localhost"),
        port=_read_port(8080),
        seed_registry=_read_flag(_SEED_ENV, True),
        log_level=_read_log_level("INFO"),
    )
