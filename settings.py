from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


DEFAULT_HISTORY_URL = "http://localhost:6729/history"
DEFAULT_REQUEST_TIMEOUT = 5.0

_HISTORY_URL_ENV = "TEMPURR_HISTORY_URL"
_ENVIRONMENT_ENV = "TEMPURR_ENV"
_INSECURE_TLS_ENV = "TEMPURR_DEV_INSECURE_TLS"
_TIMEOUT_ENV = "TEMPURR_REQUEST_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    history_url: str
    environment: str
    dev_insecure_tls: bool
    request_timeout: float
    log_level: str

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    return candidate in _TRUTHY


def _read_timeout(default: float) -> float:
    value = os.getenv(_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


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
        history_url=_read_str_env(_HISTORY_URL_ENV, DEFAULT_HISTORY_URL),
        environment=_read_str_env(_ENVIRONMENT_ENV, "production").lower(),
        dev_insecure_tls=_read_bool_env(_INSECURE_TLS_ENV, False),
        request_timeout=_read_timeout(DEFAULT_REQUEST_TIMEOUT),
        log_level=_read_log_level("INFO"),
    )
