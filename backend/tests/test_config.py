from __future__ import annotations

import logging

import pytest

from essay_grader.config import get_settings
from essay_grader.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in ("ESSAY_RESULT_TTL_DAYS", "ESSAY_SUBMISSION_TIMEOUT_SECONDS", "ESSAY_SEED_ON_STARTUP"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.result_ttl_days == 30
    assert settings.submission_timeout_seconds == 30.0
    assert settings.seed_on_startup is True


def test_cors_origins_are_split_and_trimmed(monkeypatch) -> None:
    monkeypatch.setenv("ESSAY_CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example ,")
    assert get_settings().cors_origins == ["https://a.example", "https://b.example"]


def test_invalid_configuration_raises_runtime_error(monkeypatch) -> None:
    monkeypatch.setenv("ESSAY_RESULT_TTL_DAYS", "0")
    with pytest.raises(RuntimeError):
        get_settings()


def test_configure_logging_levels(monkeypatch) -> None:
    monkeypatch.setenv("ESSAY_DEBUG_SQL", "1")
    configure_logging("debug")
    try:
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
    finally:
        monkeypatch.delenv("ESSAY_DEBUG_SQL")
        configure_logging("INFO")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
