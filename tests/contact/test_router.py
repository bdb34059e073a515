"""Tests for ``POST /api/contact`` through FastAPI's TestClient.

Collaborators are mocked; the pipeline itself is real.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_contact.config import Settings
from portfolio_contact.contact.pipeline import ContactPipeline
from portfolio_contact.contact.router import router
from portfolio_contact.email.models import OutboundEmail

VALID_BODY = {"name": "Ana", "email": "ana@x.com", "message": "Are you hiring for a backend role?"}

REPLY_JSON = json.dumps(
    {
        "subject": "Re: Your job opportunity - Thank you, Ana!",
        "html": "<p>Hi Ana!</p><p>Best regards,<br>Luis Guillen</p>",
    }
)


def _make_completion(*responses: str | BaseException) -> MagicMock:
    completion = MagicMock()
    completion.invoke = AsyncMock(side_effect=list(responses))
    return completion


def _make_app(services: dict[str, Any]) -> FastAPI:
    app = FastAPI()
    app.state.services = services
    app.include_router(router)
    return app


class _Harness:
    """Bundle of mocked collaborators wired into a real pipeline."""

    def __init__(
        self,
        settings: Settings,
        classifier_responses: tuple[str | BaseException, ...] = ("job",),
        composer_responses: tuple[str | BaseException, ...] = (REPLY_JSON,),
        send: Any = None,
    ) -> None:
        self.classifier = _make_completion(*classifier_responses)
        self.composer = _make_completion(*composer_responses)
        self.sender = MagicMock()
        self.sender.send = AsyncMock(side_effect=send, return_value={"id": "email_123"})
        pipeline = ContactPipeline(
            classifier=self.classifier,
            composer=self.composer,
            email_sender=self.sender,
            settings=settings,
        )
        self.client = TestClient(_make_app({"pipeline": pipeline}))

    @property
    def sent(self) -> list[OutboundEmail]:
        return [call.args[0] for call in self.sender.send.await_args_list]


def test_successful_submission(settings: Settings) -> None:
    harness = _Harness(settings)

    response = harness.client.post("/api/contact", json=VALID_BODY)

    assert response.status_code == 200
    assert response.json() == {"success": True, "intent": "job"}
    assert len(harness.sent) == 2
    assert harness.sent[0].subject == "New Contact Form Submission - job"
    assert "<strong>Intent:</strong> job" in harness.sent[0].html
    assert harness.sent[1].to == "ana@x.com"


def test_completion_outage_still_succeeds(settings: Settings) -> None:
    harness = _Harness(
        settings,
        classifier_responses=(RuntimeError("down"),),
        composer_responses=(RuntimeError("down"),),
    )

    response = harness.client.post("/api/contact", json=VALID_BODY)

    assert response.status_code == 200
    assert response.json() == {"success": True, "intent": "other"}
    assert harness.sent[1].subject == "Thank you for reaching out!"
    assert "Hi Ana," in harness.sent[1].html


def test_email_timeout_returns_504(settings: Settings) -> None:
    async def hang(outbound: OutboundEmail) -> dict[str, str]:
        await asyncio.sleep(5)
        return {"id": "never"}

    harness = _Harness(settings, send=hang)

    response = harness.client.post("/api/contact", json=VALID_BODY)

    assert response.status_code == 504
    body = response.json()
    assert body["success"] is False
    assert "timed out" in body["error"]
    assert "timed out" in body["details"]


def test_email_failure_returns_500(settings: Settings) -> None:
    harness = _Harness(settings, send=ConnectionError("smtp down"))

    response = harness.client.post("/api/contact", json=VALID_BODY)

    assert response.status_code == 500
    body = response.json()
    assert body == {
        "success": False,
        "error": "Failed to process contact form",
        "details": "Failed to deliver notification email: smtp down",
    }


@pytest.mark.parametrize(
    "body",
    [
        {"name": "Ana", "message": "Hello"},
        {"name": "Ana", "email": "not-an-email", "message": "Hello"},
        {"name": "", "email": "ana@x.com", "message": "Hello"},
        {"name": "Ana", "email": "ana@x.com", "message": "   "},
        {"name": 42, "email": "ana@x.com", "message": "Hello"},
    ],
)
def test_invalid_payload_returns_400_without_side_effects(
    settings: Settings, body: dict[str, Any]
) -> None:
    harness = _Harness(settings)

    response = harness.client.post("/api/contact", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"] == "Invalid submission"
    assert isinstance(payload["details"], list)
    harness.classifier.invoke.assert_not_awaited()
    harness.composer.invoke.assert_not_awaited()
    harness.sender.send.assert_not_awaited()


def test_missing_email_detail_names_field(settings: Settings) -> None:
    harness = _Harness(settings)

    response = harness.client.post("/api/contact", json={"name": "Ana", "message": "Hello"})

    assert any(err["field"] == "email" for err in response.json()["details"])


@pytest.mark.parametrize("content", [b"", b"not json", b"[1, 2, 3]"])
def test_non_object_body_returns_400(settings: Settings, content: bytes) -> None:
    harness = _Harness(settings)

    response = harness.client.post(
        "/api/contact", content=content, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    harness.sender.send.assert_not_awaited()


def test_unconfigured_pipeline_returns_500() -> None:
    client = TestClient(_make_app({"pipeline": None}))

    response = client.post("/api/contact", json=VALID_BODY)

    assert response.status_code == 500
    assert response.json()["success"] is False


def test_error_body_does_not_leak_prompt(settings: Settings) -> None:
    harness = _Harness(settings, send=ConnectionError("smtp down"))

    response = harness.client.post("/api/contact", json=VALID_BODY)

    assert "Respond with" not in response.text
    assert "Traceback" not in response.text
