"""Sentry error reporting for failed email deliveries and pipeline errors.

Events reach Sentry only through structlog: ``email_send_failed``,
``email_send_timed_out`` and ``contact_processing_failed`` are logged at
ERROR level and forwarded by the processor from ``get_sentry_processor``.
"""

from __future__ import annotations

import logging

import sentry_sdk
import structlog
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog_sentry import SentryProcessor


def init_sentry(dsn: str, traces_sample_rate: float = 0.1) -> None:
    """Start the Sentry SDK, or do nothing when *dsn* is empty.

    Contact submissions carry visitor names, addresses and free text, so
    default PII capture stays off.
    """
    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=traces_sample_rate,
        send_default_pii=False,
        # stdlib logging capture off; structlog-sentry reports instead.
        integrations=[LoggingIntegration(event_level=None, level=None)],
    )


def get_sentry_processor() -> structlog.types.Processor:
    """structlog processor forwarding ERROR events; place it before the renderer."""
    return SentryProcessor(event_level=logging.ERROR)
