"""Shared pytest fixtures for the contact service test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from portfolio_contact.config import Settings
from portfolio_contact.llm.models import ClassifiedSubmission, ContactSignature, Submission


@pytest.fixture(autouse=True)
def _clear_log_context() -> Iterator[None]:
    """Keep structlog contextvars from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def settings() -> Settings:
    """Settings with every credential filled and short deadlines."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        anthropic_api_key="sk-ant-test",  # type: ignore[arg-type]
        resend_api_key="re_test",  # type: ignore[arg-type]
        notification_email="owner@example.com",
        email_timeout_seconds=0.2,
    )


@pytest.fixture
def signature() -> ContactSignature:
    """The owner's contact signature."""
    return ContactSignature(
        name="Luis Guillen",
        email="luigi@guiar.com.mx",
        phone="+1 (817) 6594871",
        linkedin_url="https://www.linkedin.com/in/luis-guillen-arc",
        github_url="https://github.com/Lu1gi21",
    )


@pytest.fixture
def submission() -> Submission:
    """A representative visitor submission."""
    return Submission(
        name="Ana",
        email="ana@x.com",
        message="Are you hiring for a backend role?",
    )


@pytest.fixture
def classified(submission: Submission) -> ClassifiedSubmission:
    """The representative submission classified as a job inquiry."""
    return submission.with_intent("job")




@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only; the service code relies on asyncio APIs."""
    return "asyncio"
