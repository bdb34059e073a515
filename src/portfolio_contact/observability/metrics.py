"""Prometheus metrics instrumentation for the contact service.

Provides:
- ``setup_metrics(app)``: Attach prometheus-fastapi-instrumentator to a FastAPI app,
  exposing ``/metrics`` with HTTP request duration/count plus custom business counters.
- ``SUBMISSIONS_PROCESSED``: Counter of fully delivered submissions by recognized intent.
- ``CLASSIFICATION_FALLBACKS``: Counter of classifications that degraded to ``other``.
- ``REPLY_FALLBACKS``: Counter of replies that used the static fallback.
- ``EMAIL_DELIVERY_FAILURES``: Counter of failed sends by email and reason.
"""

from __future__ import annotations

from fastapi import FastAPI
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

SUBMISSIONS_PROCESSED: Counter = Counter(
    "contact_submissions_processed_total",
    "Contact submissions whose emails were both delivered",
    ["intent"],
)

CLASSIFICATION_FALLBACKS: Counter = Counter(
    "contact_classification_fallbacks_total",
    "Intent classifications that failed and defaulted to other",
)

REPLY_FALLBACKS: Counter = Counter(
    "contact_reply_fallbacks_total",
    "Confirmation replies that used the static fallback instead of model output",
)

EMAIL_DELIVERY_FAILURES: Counter = Counter(
    "contact_email_delivery_failures_total",
    "Outbound emails that failed or timed out",
    ["email", "reason"],
)


def setup_metrics(app: FastAPI) -> None:
    """Instrument *app* with Prometheus HTTP metrics and expose ``/metrics``.

    Excludes health/ready/metrics endpoints from instrumentation to avoid
    noise in dashboards.

    Args:
        app: The FastAPI application to instrument.
    """
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/health", "/ready", "/metrics"],
    ).instrument(app).expose(app, include_in_schema=False, should_gzip=True)
