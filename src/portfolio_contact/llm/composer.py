"""Reply composition for contact form submissions.

Asks the model for a JSON ``{subject, html}`` reply tailored to the
classified intent, then stamps the structured signature block onto it.  Any
failure along the way (completion error, timeout, unparseable output) yields
the deterministic fallback reply instead.  Model output and fallback are
never mixed.
"""

from __future__ import annotations

import html
import json
import re

import structlog
from pydantic import ValidationError

from portfolio_contact.errors import ReplyParseError
from portfolio_contact.llm.client import CompletionService
from portfolio_contact.llm.models import ClassifiedSubmission, ComposedReply, ContactSignature
from portfolio_contact.llm.prompts import INTENT_REPLY_GUIDANCE, REPLY_COMPOSITION_PROMPT

logger = structlog.get_logger()

FALLBACK_SUBJECT = "Thank you for reaching out!"

_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


def build_reply_prompt(submission: ClassifiedSubmission, signature: ContactSignature) -> str:
    """Render the composition prompt for *submission*.

    Unrecognized intents use the ``other`` guidance.
    """
    subject_template, tone_guidance = INTENT_REPLY_GUIDANCE[submission.recognized_intent]
    return REPLY_COMPOSITION_PROMPT.format(
        owner_name=signature.name,
        owner_email=signature.email,
        owner_phone=signature.phone,
        linkedin_url=signature.linkedin_url,
        github_url=signature.github_url,
        sender_name=submission.name,
        sender_email=submission.email,
        intent=submission.intent,
        message=submission.message,
        subject_template=subject_template.format(sender_name=submission.name),
        tone_guidance=tone_guidance,
        sign_off_marker=signature.sign_off_marker,
    )


def render_signature_block(signature: ContactSignature) -> str:
    """Render the structured contact signature as HTML."""
    name = html.escape(signature.name, quote=False)
    email = html.escape(signature.email, quote=True)
    phone = html.escape(signature.phone, quote=False)
    tel = re.sub(r"[^\d+]", "", signature.phone)
    linkedin = html.escape(signature.linkedin_url, quote=True)
    github = html.escape(signature.github_url, quote=True)
    return (
        '<div style="margin-top:24px;font-family:Arial,sans-serif;font-size:14px;color:#333">'
        f"<p>Best regards,<br><strong>{name}</strong></p>"
        "<p>"
        f'Email: <a href="mailto:{email}">{email}</a><br>'
        f'Phone: <a href="tel:{tel}">{phone}</a><br>'
        f'LinkedIn: <a href="{linkedin}">{linkedin}</a><br>'
        f'GitHub: <a href="{github}">{github}</a>'
        "</p>"
        "</div>"
    )


def apply_signature(body: str, signature: ContactSignature) -> str:
    """Attach the structured signature block to a model-written HTML body.

    The plain sign-off marker, when present, is replaced by the block in
    place.  Otherwise the block is appended, so every reply ends with the
    same contact details regardless of what the model wrote.
    """
    block = render_signature_block(signature)
    marker = signature.sign_off_marker
    if marker in body:
        return body.replace(marker, block)

    closing = body.rfind("</body>")
    if closing != -1:
        return body[:closing] + block + body[closing:]
    return body + block


def _candidate_payloads(raw: str) -> list[str]:
    text = raw.strip()
    candidates = [text]
    fenced = _CODE_FENCE.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])
    return candidates


def parse_reply_json(raw: str) -> ComposedReply:
    """Parse model output into a ``ComposedReply``.

    Accepts a bare JSON object, one wrapped in a Markdown code fence, or one
    surrounded by extra prose.

    Raises:
        ReplyParseError: If no JSON object with non-empty string ``subject``
            and ``html`` fields can be recovered.
    """
    for candidate in _candidate_payloads(raw):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if not isinstance(data, dict):
            raise ReplyParseError("expected a JSON object", raw)
        subject, body = data.get("subject"), data.get("html")
        if not isinstance(subject, str) or not isinstance(body, str):
            raise ReplyParseError("subject and html must be strings", raw)
        try:
            return ComposedReply(subject=subject.strip(), html=body)
        except ValidationError as exc:
            raise ReplyParseError("subject and html must be non-empty", raw) from exc
    raise ReplyParseError("no JSON object found", raw)


def build_fallback_reply(name: str, signature: ContactSignature) -> ComposedReply:
    """Return the static reply used whenever generation fails.

    Deterministic for a given *name* and *signature*; contains no model output.
    """
    body = (
        "<h2>Thank you for reaching out!</h2>"
        f"<p>Hi {html.escape(name, quote=False)},</p>"
        "<p>I've received your message and will get back to you as soon as possible.</p>"
        f"{render_signature_block(signature)}"
    )
    return ComposedReply(subject=FALLBACK_SUBJECT, html=body, generated=False)


async def compose_reply(
    submission: ClassifiedSubmission,
    completion: CompletionService,
    signature: ContactSignature,
) -> ComposedReply:
    """Compose the visitor-facing confirmation email.

    Never raises.  Completion errors, timeouts and unparseable output all
    return ``build_fallback_reply(submission.name, signature)``.

    Args:
        submission: The classified submission to reply to.
        completion: The completion collaborator.
        signature: Contact details for the prompt and signature block.

    Returns:
        The generated reply with signature applied, or the fallback.
    """
    prompt = build_reply_prompt(submission, signature)
    try:
        raw = await completion.invoke(prompt)
        parsed = parse_reply_json(raw)
    except Exception as exc:
        logger.warning(
            "reply_composition_failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return build_fallback_reply(submission.name, signature)

    return parsed.model_copy(update={"html": apply_signature(parsed.html, signature)})
