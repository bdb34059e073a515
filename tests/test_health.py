"""Tests for /health and /ready observability endpoints."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_contact.health import register_health_routes

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_app(services: dict | None = None) -> FastAPI:
    """Create a minimal FastAPI app with health routes and given services."""
    app = FastAPI()
    app.state.services = services or {}
    register_health_routes(app)
    return app


class TestHealthEndpoint:
    """GET /health liveness check."""

    def test_health_returns_200(self) -> None:
        client = TestClient(_make_app())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestReadyEndpoint:
    """GET /ready readiness check."""

    def test_ready_returns_200_when_services_ok(self) -> None:
        client = TestClient(_make_app({"anthropic_client": object(), "email_sender": object()}))

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "checks": {"completion": "ok", "email": "ok"},
        }

    def test_ready_returns_503_when_completion_missing(self) -> None:
        client = TestClient(_make_app({"anthropic_client": None, "email_sender": object()}))

        response = client.get("/ready")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "not_ready"
        assert body["checks"]["completion"] == "fail"
        assert body["checks"]["email"] == "ok"

    def test_ready_returns_503_when_email_missing(self) -> None:
        client = TestClient(_make_app({"anthropic_client": object(), "email_sender": None}))

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["email"] == "fail"

    def test_ready_returns_503_when_both_missing(self) -> None:
        client = TestClient(_make_app())

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["checks"] == {"completion": "fail", "email": "fail"}
