from __future__ import annotations

import pytest

from cli.config import load_config
from services.history import TransportMode, build_history_client
from settings import DEFAULT_HISTORY_URL, get_settings

_ENV_NAMES = (
    "TEMPURR_HISTORY_URL",
    "TEMPURR_ENV",
    "TEMPURR_DEV_INSECURE_TLS",
    "TEMPURR_REQUEST_TIMEOUT",
    "LOG_LEVEL",
    "TEMPURR_REFRESH_INTERVAL",
    "TEMPURR_THRESHOLD_LOW",
    "TEMPURR_THRESHOLD_HIGH",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_without_environment() -> None:
    settings = get_settings()

    assert settings.history_url == DEFAULT_HISTORY_URL
    assert settings.environment == "production"
    assert settings.dev_insecure_tls is False
    assert settings.request_timeout == 5.0
    assert settings.log_level == "INFO"
    assert settings.is_development is False


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("TEMPURR_HISTORY_URL", "https://sensor.local/history")
    monkeypatch.setenv("TEMPURR_ENV", " Development ")
    monkeypatch.setenv("TEMPURR_DEV_INSECURE_TLS", "yes")
    monkeypatch.setenv("TEMPURR_REQUEST_TIMEOUT", "1.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()
    client = build_history_client()

    try:
        assert settings.history_url == "https://sensor.local/history"
        assert settings.is_development is True
        assert settings.dev_insecure_tls is True
        assert settings.request_timeout == 1.5
        assert settings.log_level == "DEBUG"
        assert client.url == "https://sensor.local/history"
        assert client.mode is TransportMode.dev_insecure
    finally:
        client.close()


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("TEMPURR_HISTORY_URL", "   ")
    monkeypatch.setenv("TEMPURR_REQUEST_TIMEOUT", "-3")
    monkeypatch.setenv("TEMPURR_DEV_INSECURE_TLS", "")
    monkeypatch.setenv("TEMPURR_REFRESH_INTERVAL", "soon")

    settings = get_settings()
    config = load_config()

    assert settings.history_url == DEFAULT_HISTORY_URL
    assert settings.request_timeout == 5.0
    assert settings.dev_insecure_tls is False
    assert config.refresh_interval == 30.0


def test_cli_config_reads_thresholds(monkeypatch) -> None:
    monkeypatch.setenv("TEMPURR_THRESHOLD_LOW", "-1.5")
    monkeypatch.setenv("TEMPURR_THRESHOLD_HIGH", "4")
    monkeypatch.setenv("TEMPURR_REFRESH_INTERVAL", "10")

    config = load_config()
    thresholds = config.thresholds(high=6.0)

    assert config.refresh_interval == 10.0
    assert thresholds.low == -1.5
    assert thresholds.high == 6.0
    assert load_config(refresh_interval=2.0).refresh_interval == 2.0
