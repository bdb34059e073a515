"""Intent classification of contact form messages.

Asks the model for a single-word label.  The label is trusted as returned
(after trimming), so callers must not assume it is one of ``IntentLabel``.
"""

from __future__ import annotations

import structlog

from portfolio_contact.llm.client import CompletionService
from portfolio_contact.llm.models import IntentLabel
from portfolio_contact.llm.prompts import INTENT_CLASSIFICATION_PROMPT
from portfolio_contact.observability.metrics import CLASSIFICATION_FALLBACKS

logger = structlog.get_logger()

_QUOTE_CHARS = "\"'`"
_KNOWN_LABELS = frozenset(label.value for label in IntentLabel)


def normalize_label(raw: str) -> str:
    """Trim whitespace and wrapping quotes from a raw model label.

    Returns ``"other"`` for an empty response.
    """
    label = raw.strip().strip(_QUOTE_CHARS).strip()
    return label or IntentLabel.OTHER.value


async def classify_intent(message: str, completion: CompletionService) -> str:
    """Classify why a visitor wrote in.

    Never raises: any completion failure (timeout, network, provider error)
    degrades to ``"other"`` and the pipeline continues.

    Args:
        message: The visitor's raw message text.
        completion: The completion collaborator.

    Returns:
        The model's label, normally one of ``job``, ``collaboration``,
        ``question`` or ``other``.
    """
    prompt = INTENT_CLASSIFICATION_PROMPT.format(message=message)
    try:
        raw = await completion.invoke(prompt)
    except Exception as exc:
        CLASSIFICATION_FALLBACKS.inc()
        logger.warning(
            "intent_classification_failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return IntentLabel.OTHER.value

    label = normalize_label(raw)
    if label.lower() not in _KNOWN_LABELS:
        logger.info("intent_label_unrecognized", label=label)
    return label
