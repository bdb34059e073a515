"""Contact submission handling: the pipeline and its HTTP route."""

from portfolio_contact.contact.pipeline import (
    ContactPipeline,
    ContactResult,
    signature_from_settings,
)
from portfolio_contact.contact.router import router

__all__ = [
    "ContactPipeline",
    "ContactResult",
    "router",
    "signature_from_settings",
]
