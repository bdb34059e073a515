"""Pydantic v2 models for the email domain."""

from pydantic import BaseModel, ConfigDict, Field


class OutboundEmail(BaseModel):
    """A single transactional email to be handed to the delivery provider.

    ``sender`` serializes as ``from`` to match the provider's wire format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: str = Field(alias="from")
    to: str
    subject: str
    html: str
