import logging

from fastapi.testclient import TestClient

from dolet.main import app


client = TestClient(app)


def test_health_check():
    """Test that health check endpoint is accessible without credentials."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_unknown_route_uses_error_envelope():
    """Test that HTTP errors are returned in the success/message envelope."""
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Not Found"


def test_startup_survives_unusable_credentials(monkeypatch, caplog, broken_credentials):
    """Test that a failed credential check at startup is logged, not fatal."""
    from dolet.config import settings

    monkeypatch.setattr(settings, "verify_credentials_on_startup", True)

    with caplog.at_level(logging.ERROR, logger="dolet.main"):
        with TestClient(app) as startup_client:
            response = startup_client.get("/health")

    assert response.status_code == 200
    assert "Vertex AI credentials unavailable" in caplog.text
    assert "key file missing" in caplog.text
