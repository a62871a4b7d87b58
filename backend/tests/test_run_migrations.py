from __future__ import annotations

import types

import pytest
from alembic.config import Config

from scripts import run_migrations as runner


def _config(url: str = "%%(ESSAY_DATABASE_URL)s") -> Config:
    config = Config()
    config.set_main_option("sqlalchemy.url", url)
    config.set_main_option("script_location", "alembic")
    return config


def test_resolve_database_url_prefers_env(monkeypatch) -> None:
    monkeypatch.setenv("ESSAY_DATABASE_URL", "sqlite://")
    config = _config()
    assert runner.resolve_database_url(config) == "sqlite://"
    assert config.get_main_option("sqlalchemy.url") == "sqlite://"


def test_resolve_database_url_keeps_explicit_value(monkeypatch) -> None:
    monkeypatch.delenv("ESSAY_DATABASE_URL", raising=False)
    assert runner.resolve_database_url(_config("sqlite:///explicit.db")) == "sqlite:///explicit.db"


def test_resolve_database_url_requires_a_url(monkeypatch) -> None:
    monkeypatch.delenv("ESSAY_DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        runner.resolve_database_url(_config())


def test_wait_for_database_succeeds_with_sqlite(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrations.sqlite'}"
    runner.wait_for_database(url, timeout=2, poll_interval=0.1)


def test_wait_for_database_times_out(monkeypatch) -> None:
    class DummyEngine:
        def connect(self) -> types.SimpleNamespace:
            raise runner.OperationalError("SELECT 1", {}, Exception("boom"))

        def dispose(self) -> None:
            pass

    monkeypatch.setattr(runner, "create_engine", lambda *_, **__: DummyEngine())
    with pytest.raises(RuntimeError):
        runner.wait_for_database("postgresql://example", timeout=0, poll_interval=0)


def test_run_migrations_waits_then_upgrades(monkeypatch) -> None:
    monkeypatch.setenv("ESSAY_DATABASE_URL", "sqlite://")
    recorded: dict[str, object] = {}

    def fake_wait(url: str, *, timeout: int, poll_interval: float) -> None:
        recorded["wait"] = (url, timeout, poll_interval)

    def fake_upgrade(cfg, revision: str, **kwargs) -> None:
        recorded["revision"] = revision
        recorded["kwargs"] = kwargs
        recorded["script_location"] = cfg.get_main_option("script_location")

    monkeypatch.setattr(runner, "wait_for_database", fake_wait)
    monkeypatch.setattr(runner.command, "upgrade", fake_upgrade)

    runner.run_migrations("head", timeout=5, poll_interval=0.1, config=_config())

    assert recorded["wait"] == ("sqlite://", 5, 0.1)
    assert recorded["revision"] == "head"
    assert recorded["kwargs"] == {}
    assert recorded["script_location"] == "alembic"


def test_sql_only_skips_readiness_check(monkeypatch) -> None:
    monkeypatch.setenv("ESSAY_DATABASE_URL", "sqlite://")
    recorded: dict[str, object] = {}

    def fail_wait(*_, **__) -> None:
        raise AssertionError("database should not be contacted")

    def fake_upgrade(cfg, revision: str, **kwargs) -> None:
        recorded["kwargs"] = kwargs

    monkeypatch.setattr(runner, "wait_for_database", fail_wait)
    monkeypatch.setattr(runner.command, "upgrade", fake_upgrade)

    runner.run_migrations("head", timeout=5, poll_interval=0.1, config=_config(), sql_only=True)

    assert recorded["kwargs"] == {"sql": True}


def test_main_reports_failure(monkeypatch) -> None:
    monkeypatch.delenv("ESSAY_DATABASE_URL", raising=False)
    monkeypatch.setattr(runner, "load_config", lambda path: _config())
    assert runner.main(["--timeout", "0"]) == 1
