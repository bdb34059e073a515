"""Pydantic models defining the contact pipeline's data contracts.

These models are used for:
- Validating the untrusted contact form payload (``Submission``)
- Carrying the classified intent forward (``ClassifiedSubmission``)
- The reply produced by the composer (``ComposedReply``)
- Signature data embedded in prompts and fallbacks (``ContactSignature``)
"""

from __future__ import annotations

import string
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class IntentLabel(StrEnum):
    """The recognized reasons a visitor writes in.

    The classifier output is an open string; these values are the ones the
    composer knows how to branch on.
    """

    JOB = "job"
    COLLABORATION = "collaboration"
    QUESTION = "question"
    OTHER = "other"

    @classmethod
    def recognize(cls, raw: str) -> IntentLabel:
        """Map a raw model label onto a recognized intent.

        Matching ignores case, surrounding whitespace, and punctuation.
        Anything unrecognized falls through to ``OTHER``.
        """
        cleaned = raw.strip().strip(string.punctuation + string.whitespace).lower()
        try:
            return cls(cleaned)
        except ValueError:
            return cls.OTHER


class Submission(BaseModel):
    """A visitor's contact form submission, validated once at the boundary."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, description="Visitor's display name")
    email: EmailStr = Field(description="Visitor's reply-to address")
    message: str = Field(min_length=1, description="Free-text message body")

    def with_intent(self, intent: str) -> ClassifiedSubmission:
        """Return a classified copy of this submission."""
        return ClassifiedSubmission(
            name=self.name,
            email=self.email,
            message=self.message,
            intent=intent,
        )


class ClassifiedSubmission(Submission):
    """A submission plus the classifier's intent label.

    ``intent`` is whatever the classifier returned and may fall outside
    ``IntentLabel``; use ``recognized_intent`` for branching.
    """

    intent: str = Field(description="Raw intent label from the classifier")

    @property
    def recognized_intent(self) -> IntentLabel:
        return IntentLabel.recognize(self.intent)


class ComposedReply(BaseModel):
    """The visitor-facing reply: either model-generated or the static fallback."""

    model_config = ConfigDict(frozen=True)

    subject: str = Field(min_length=1, description="Email subject line")
    html: str = Field(min_length=1, description="HTML email body")
    generated: bool = Field(
        default=True,
        description="True when produced by the model, False for the fallback",
    )


class ContactSignature(BaseModel):
    """Contact details appended to every reply."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str
    linkedin_url: str
    github_url: str

    @property
    def sign_off_marker(self) -> str:
        """The plain sign-off the model is asked to end its HTML with."""
        return f"Best regards,<br>{self.name}"
