"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables, a cached ``get_settings()`` accessor, and a ``validate_credentials()``
startup gate that enforces credential presence in production mode.

IMPORTANT: This module has ZERO imports from the ``portfolio_contact`` package
to prevent circular imports.  Only stdlib, pydantic, pydantic_settings, and
structlog are used.
"""

from __future__ import annotations

import sys
from functools import lru_cache

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file.

    Timeouts and retry counts are plain settings rather than constants so they
    can be tuned per deployment.  ``SecretStr`` fields prevent accidental leaks
    in logs or error output.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    port: int = 8000
    cors_allowed_origins: list[str] = ["http://localhost:3000"]
    sentry_dsn: str = ""

    # -- LLM / Anthropic -------------------------------------------------------
    anthropic_api_key: SecretStr = SecretStr("")
    classify_model: str = "claude-haiku-4-5-20251001"
    compose_model: str = "claude-haiku-4-5-20251001"
    completion_timeout_seconds: float = 10.0
    completion_max_retries: int = 2

    # -- Email delivery (Resend) -----------------------------------------------
    resend_api_key: SecretStr = SecretStr("")
    resend_base_url: str = "https://api.resend.com"
    email_timeout_seconds: float = 5.0
    notification_email: str = ""
    notification_sender: str = "Contact Form <onboarding@resend.dev>"
    reply_sender: str = "Luis Guillen <LuisAGuillen@itfocus.tech>"

    # -- Contact signature -----------------------------------------------------
    owner_name: str = "Luis Guillen"
    owner_email: str = "luigi@guiar.com.mx"
    owner_phone: str = "+1 (817) 6594871"
    linkedin_url: str = "https://www.linkedin.com/in/luis-guillen-arc"
    github_url: str = "https://github.com/Lu1gi21"


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    The ``@lru_cache`` decorator ensures environment variables are parsed
    exactly once.  Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # Log only the structured errors list -- never the full exception
        # which may contain raw SecretStr values.
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)


def validate_credentials(settings: Settings) -> None:
    """Enforce credential presence at startup.

    In **production** mode (``settings.production is True``), the application
    exits with a clear error block if any required credential is missing.

    In **development** mode, each missing credential is logged as a warning
    but the application continues to start.

    Args:
        settings: The loaded application settings.
    """
    errors: list[str] = []

    if not settings.anthropic_api_key.get_secret_value():
        errors.append("ANTHROPIC_API_KEY is empty or not set")

    if not settings.resend_api_key.get_secret_value():
        errors.append("RESEND_API_KEY is empty or not set")

    if not settings.notification_email:
        errors.append("NOTIFICATION_EMAIL is empty or not set")

    if not errors:
        logger.info("credential_validation_passed")
        return

    if settings.production:
        for err in errors:
            logger.error("credential_missing", detail=err)
        print("\n=== STARTUP FAILED ===", file=sys.stderr)
        print("Missing required credentials for production mode:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        print("======================\n", file=sys.stderr)
        sys.exit(1)
    else:
        for err in errors:
            logger.warning("credential_missing_dev", detail=err)
