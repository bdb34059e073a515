"""Tests for Request ID middleware."""

from __future__ import annotations

import uuid

import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_contact.observability.middleware import SERVICE_NAME, RequestIdMiddleware


def _make_app() -> FastAPI:
    """Minimal app whose endpoint reports the bound log context."""
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)

    @app.post("/api/contact")
    async def contact() -> dict[str, str]:
        return dict(structlog.contextvars.get_contextvars())

    return app


def test_generated_request_id_is_uuid4() -> None:
    resp = TestClient(_make_app()).post("/api/contact")

    request_id = resp.headers["X-Request-ID"]
    assert uuid.UUID(request_id).version == 4


def test_client_request_id_is_echoed() -> None:
    resp = TestClient(_make_app()).post("/api/contact", headers={"X-Request-ID": "form-42"})

    assert resp.headers["X-Request-ID"] == "form-42"


def test_request_id_bound_for_handler_logs() -> None:
    resp = TestClient(_make_app()).post("/api/contact", headers={"X-Request-ID": "form-42"})

    assert resp.json() == {"request_id": "form-42", "service": SERVICE_NAME}
