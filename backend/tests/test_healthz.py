from __future__ import annotations

from fastapi.testclient import TestClient

from essay_grader.config import get_settings
from essay_grader.db.session import dispose_engine
from essay_grader.main import app


def _client(monkeypatch) -> TestClient:
    monkeypatch.setenv("ESSAY_DATABASE_URL", "sqlite://")
    get_settings.cache_clear()
    dispose_engine()
    return TestClient(app)


def teardown_module() -> None:  # pragma: no cover - test cleanup
    dispose_engine()
    get_settings.cache_clear()


def test_health_endpoint(monkeypatch) -> None:
    response = _client(monkeypatch).get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_database_health_endpoint_success(monkeypatch) -> None:
    response = _client(monkeypatch).get("/healthz/database")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["dialect"] == "sqlite"
    assert "pool" in payload


def test_database_health_endpoint_failure(monkeypatch) -> None:
    client = _client(monkeypatch)

    def raise_runtime_error():
        raise RuntimeError("missing database url")

    monkeypatch.setattr("essay_grader.main.get_engine", raise_runtime_error)
    response = client.get("/healthz/database")
    assert response.status_code == 503
    assert response.json()["detail"] == "missing database url"


def test_legacy_health_endpoint_uses_envelope(monkeypatch) -> None:
    response = _client(monkeypatch).get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"status": "healthy", "service": "essay-test-backend"},
        "message": "サーバーは正常に動作しています",
    }
