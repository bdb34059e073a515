"""Contact submission pipeline: classify, compose, then deliver two emails.

Each step depends on the previous step's output, so everything runs in
sequence within one request.  Classification and composition degrade on
their own; only email delivery can fail the request.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from portfolio_contact.config import Settings
from portfolio_contact.email.client import EmailSender
from portfolio_contact.email.models import OutboundEmail
from portfolio_contact.email.templates import build_confirmation_email, build_notification_email
from portfolio_contact.errors import DeliveryTimeoutError, EmailDeliveryError
from portfolio_contact.llm.client import CompletionService
from portfolio_contact.llm.composer import compose_reply
from portfolio_contact.llm.intent import classify_intent
from portfolio_contact.llm.models import ComposedReply, ContactSignature, Submission
from portfolio_contact.observability.metrics import (
    EMAIL_DELIVERY_FAILURES,
    REPLY_FALLBACKS,
    SUBMISSIONS_PROCESSED,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class ContactResult:
    """Outcome of a fully processed submission."""

    intent: str
    reply: ComposedReply


def signature_from_settings(settings: Settings) -> ContactSignature:
    """Build the contact signature from configured owner details."""
    return ContactSignature(
        name=settings.owner_name,
        email=settings.owner_email,
        phone=settings.owner_phone,
        linkedin_url=settings.linkedin_url,
        github_url=settings.github_url,
    )


class ContactPipeline:
    """Runs one contact submission end to end.

    Args:
        classifier: Completion collaborator used for intent classification.
        composer: Completion collaborator used for reply composition.
        email_sender: Delivery collaborator for both outbound emails.
        settings: Application settings (senders, recipient, deadlines).
        signature: Contact details for replies.  Defaults to the owner
            details in *settings*.
    """

    def __init__(
        self,
        classifier: CompletionService,
        composer: CompletionService,
        email_sender: EmailSender,
        settings: Settings,
        signature: ContactSignature | None = None,
    ) -> None:
        self._classifier = classifier
        self._composer = composer
        self._email_sender = email_sender
        self._settings = settings
        self._signature = signature or signature_from_settings(settings)

    async def process(self, submission: Submission) -> ContactResult:
        """Classify, compose, and deliver both emails for *submission*.

        Returns:
            The classified intent and the reply sent to the visitor.

        Raises:
            DeliveryTimeoutError: If either send exceeds its deadline.
            EmailDeliveryError: If either send fails otherwise.
        """
        intent = await classify_intent(submission.message, self._classifier)
        classified = submission.with_intent(intent)
        structlog.contextvars.bind_contextvars(intent=intent)
        logger.info("contact_classified")

        reply = await compose_reply(classified, self._composer, self._signature)
        if not reply.generated:
            REPLY_FALLBACKS.inc()
        logger.info("contact_reply_composed", generated=reply.generated)

        await self.send_with_deadline(
            build_notification_email(classified, self._settings), "notification email"
        )
        await self.send_with_deadline(
            build_confirmation_email(classified, reply, self._settings), "confirmation email"
        )

        SUBMISSIONS_PROCESSED.labels(intent=classified.recognized_intent.value).inc()
        logger.info("contact_processed")
        return ContactResult(intent=intent, reply=reply)

    async def send_with_deadline(self, outbound: OutboundEmail, label: str) -> None:
        """Send *outbound*, aborting once the email deadline passes.

        No retry: a failed or late send fails the request.

        Raises:
            DeliveryTimeoutError: If the send does not finish in time.
            EmailDeliveryError: If the sender raises.
        """
        timeout = self._settings.email_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                result = await self._email_sender.send(outbound)
        except TimeoutError as exc:
            EMAIL_DELIVERY_FAILURES.labels(email=label, reason="timeout").inc()
            logger.error("email_send_timed_out", email=label, timeout=timeout)
            raise DeliveryTimeoutError(label, timeout) from exc
        except EmailDeliveryError:
            EMAIL_DELIVERY_FAILURES.labels(email=label, reason="error").inc()
            logger.exception("email_send_failed", email=label)
            raise
        except Exception as exc:
            EMAIL_DELIVERY_FAILURES.labels(email=label, reason="error").inc()
            logger.exception("email_send_failed", email=label)
            raise EmailDeliveryError(label, str(exc) or type(exc).__name__) from exc

        logger.info("email_sent", email=label, message_id=result.get("id"))
