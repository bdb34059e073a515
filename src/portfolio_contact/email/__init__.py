"""Email domain: Resend delivery client, outbound models, and templates."""

from portfolio_contact.email.client import EmailSender, ResendClient
from portfolio_contact.email.models import OutboundEmail
from portfolio_contact.email.templates import build_confirmation_email, build_notification_email

__all__ = [
    "EmailSender",
    "OutboundEmail",
    "ResendClient",
    "build_confirmation_email",
    "build_notification_email",
]
