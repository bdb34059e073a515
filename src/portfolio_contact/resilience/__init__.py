"""Resilience infrastructure for outbound API calls with retry."""

from portfolio_contact.resilience.retry import resilient_api_call

__all__ = [
    "resilient_api_call",
]
