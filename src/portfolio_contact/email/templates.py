"""Builders for the two outbound emails sent per contact submission."""

from __future__ import annotations

import html

from portfolio_contact.config import Settings
from portfolio_contact.email.models import OutboundEmail
from portfolio_contact.llm.models import ClassifiedSubmission, ComposedReply


def build_notification_email(
    submission: ClassifiedSubmission, settings: Settings
) -> OutboundEmail:
    """Build the internal notification sent to the site owner.

    Every visitor-supplied field is HTML-escaped; the message keeps its
    line breaks.
    """
    message_html = html.escape(submission.message, quote=False).replace("\n", "<br>")
    body = (
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>From:</strong> {html.escape(submission.name, quote=False)}</p>"
        f"<p><strong>Email:</strong> {html.escape(submission.email, quote=False)}</p>"
        f"<p><strong>Intent:</strong> {html.escape(submission.intent, quote=False)}</p>"
        "<p><strong>Message:</strong></p>"
        f"<p>{message_html}</p>"
    )
    intent_line = " ".join(submission.intent.split())
    return OutboundEmail(
        sender=settings.notification_sender,
        to=settings.notification_email,
        subject=f"New Contact Form Submission - {intent_line}",
        html=body,
    )


def build_confirmation_email(
    submission: ClassifiedSubmission, reply: ComposedReply, settings: Settings
) -> OutboundEmail:
    """Build the visitor-facing confirmation from the composed reply."""
    return OutboundEmail(
        sender=settings.reply_sender,
        to=submission.email,
        subject=reply.subject,
        html=reply.html,
    )
