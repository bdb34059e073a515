"""FastAPI route for contact form submissions.

``POST /api/contact`` with ``{name, email, message}``.  Responses always carry
``success`` and, on failure, a short ``error`` summary plus ``details``; no
stack traces or prompt text are returned.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from portfolio_contact.contact.pipeline import ContactPipeline
from portfolio_contact.errors import DeliveryTimeoutError
from portfolio_contact.llm.models import Submission

logger = structlog.get_logger()

router = APIRouter()


def _failure(status_code: int, error: str, details: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "details": details},
    )


def _validation_details(exc: ValidationError) -> list[dict[str, str]]:
    """Reduce pydantic errors to field/message pairs without echoing input."""
    return [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


@router.post("/api/contact")
async def submit_contact(request: Request) -> JSONResponse:
    """Validate a submission and run it through the contact pipeline.

    Returns:
        200 ``{success, intent}`` on success, 400 on an invalid payload,
        504 when an email send times out, 500 for any other failure.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("contact_payload_not_json")
        return _failure(400, "Invalid submission", "Request body must be a JSON object")

    if not isinstance(payload, dict):
        return _failure(400, "Invalid submission", "Request body must be a JSON object")

    try:
        submission = Submission.model_validate(
            {key: payload.get(key) for key in ("name", "email", "message")}
        )
    except ValidationError as exc:
        details = _validation_details(exc)
        logger.warning("contact_payload_invalid", errors=details)
        return _failure(400, "Invalid submission", details)

    pipeline: ContactPipeline | None = request.app.state.services.get("pipeline")
    if pipeline is None:
        logger.error("contact_pipeline_not_configured")
        return _failure(500, "Failed to process contact form", "Contact service is not configured")

    try:
        result = await pipeline.process(submission)
    except DeliveryTimeoutError as exc:
        return _failure(504, "Request timed out while sending email", str(exc))
    except Exception as exc:
        logger.exception("contact_processing_failed")
        return _failure(500, "Failed to process contact form", str(exc))

    return JSONResponse(content={"success": True, "intent": result.intent})
