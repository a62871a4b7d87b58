from __future__ import annotations

from essay_grader import __main__ as entrypoint


def test_main_runs_uvicorn_with_env_overrides(monkeypatch) -> None:
    recorded: dict[str, object] = {}

    def fake_run(app: str, **kwargs) -> None:
        recorded["app"] = app
        recorded.update(kwargs)

    monkeypatch.setattr(entrypoint.uvicorn, "run", fake_run)
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9001")

    entrypoint.main()

    assert recorded["app"] == "essay_grader.main:app"
    assert recorded["host"] == "127.0.0.1"
    assert recorded["port"] == 9001
    assert recorded["log_config"] is None


def test_invalid_port_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    assert entrypoint._resolve_port() == 8000
