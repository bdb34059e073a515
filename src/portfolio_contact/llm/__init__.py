"""LLM integration package for the contact pipeline.

Provides the Anthropic-backed completion collaborator, Pydantic models for
the pipeline's data, prompt templates, intent classification, and reply
composition with its deterministic fallback.
"""

from portfolio_contact.llm.client import (
    AnthropicCompletionClient,
    CompletionService,
    build_completion_clients,
    get_anthropic_client,
)
from portfolio_contact.llm.composer import (
    FALLBACK_SUBJECT,
    apply_signature,
    build_fallback_reply,
    compose_reply,
    parse_reply_json,
)
from portfolio_contact.llm.intent import classify_intent
from portfolio_contact.llm.models import (
    ClassifiedSubmission,
    ComposedReply,
    ContactSignature,
    IntentLabel,
    Submission,
)

__all__ = [
    "FALLBACK_SUBJECT",
    "AnthropicCompletionClient",
    "ClassifiedSubmission",
    "CompletionService",
    "ComposedReply",
    "ContactSignature",
    "IntentLabel",
    "Submission",
    "apply_signature",
    "build_completion_clients",
    "build_fallback_reply",
    "classify_intent",
    "compose_reply",
    "get_anthropic_client",
    "parse_reply_json",
]
