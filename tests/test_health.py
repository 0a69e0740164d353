"""Tests for the /health endpoint."""

from fastapi.testclient import TestClient

from app.config import Settings
from app.main import app, create_app

client = TestClient(app)


def test_health_endpoint():
    """/health returns 200 with the service version."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["version"] == "0.1.0"


def test_health_does_not_touch_workspace(tmp_path):
    """/health answers even when the service requires a bearer token."""
    settings = Settings(_env_file=None, api_key="service-secret", preferences_path=tmp_path / "prefs.json")
    secured = TestClient(create_app(settings))

    response = secured.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "version": "0.1.0"}
