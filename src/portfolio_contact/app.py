"""Application entry point serving the contact API with FastAPI and uvicorn.

Configures:
- **structlog** with JSON rendering (production) or colored console (development)
- **Sentry** error reporting through the structlog processor chain
- **Anthropic** completion clients for classification and composition
- **Resend** email delivery client
- **Request ID**, CORS, and Prometheus middleware plus health checks
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_contact.config import Settings, get_settings, validate_credentials
from portfolio_contact.contact.pipeline import ContactPipeline
from portfolio_contact.contact.router import router as contact_router
from portfolio_contact.email.client import ResendClient
from portfolio_contact.health import register_health_routes
from portfolio_contact.llm.client import build_completion_clients, get_anthropic_client
from portfolio_contact.observability.metrics import setup_metrics
from portfolio_contact.observability.middleware import SERVICE_NAME, RequestIdMiddleware
from portfolio_contact.observability.sentry import get_sentry_processor, init_sentry

logger = structlog.get_logger()


def configure_logging(production: bool = False, sentry_enabled: bool = False) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level.

    Args:
        production: Enable production mode if ``True``.
        sentry_enabled: Forward ERROR events to Sentry if ``True``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
    ]
    if sentry_enabled:
        shared_processors.append(get_sentry_processor())
    shared_processors += [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service=SERVICE_NAME)


def initialize_services(settings: Settings | None = None) -> dict[str, Any]:
    """Set up the collaborators the contact pipeline needs.

    Creates the Anthropic client and its two completion wrappers (if an API
    key is available), the Resend client (if an API key and notification
    address are available), and the ``ContactPipeline`` when both exist.

    Args:
        settings: Application settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        A dict of initialized service instances keyed by name.
    """
    if settings is None:
        settings = get_settings()

    services: dict[str, Any] = {"_settings": settings}

    anthropic_client = None
    if settings.anthropic_api_key.get_secret_value():
        anthropic_client = get_anthropic_client(settings)
        classify_client, compose_client = build_completion_clients(settings, anthropic_client)
        services["classify_client"] = classify_client
        services["compose_client"] = compose_client
        logger.info(
            "Completion clients initialized",
            classify_model=settings.classify_model,
            compose_model=settings.compose_model,
        )
    else:
        logger.info("ANTHROPIC_API_KEY not set, completion clients disabled")
    services["anthropic_client"] = anthropic_client

    email_sender = None
    resend_key = settings.resend_api_key.get_secret_value()
    if resend_key and settings.notification_email:
        email_sender = ResendClient(resend_key, base_url=settings.resend_base_url)
        logger.info("ResendClient initialized")
    else:
        logger.info("RESEND_API_KEY or NOTIFICATION_EMAIL not set, email delivery disabled")
    services["email_sender"] = email_sender

    pipeline = None
    if anthropic_client is not None and email_sender is not None:
        pipeline = ContactPipeline(
            classifier=services["classify_client"],
            composer=services["compose_client"],
            email_sender=email_sender,
            settings=settings,
        )
        logger.info("ContactPipeline initialized")
    else:
        logger.warning("ContactPipeline disabled; /api/contact will return 500")
    services["pipeline"] = pipeline

    return services


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Lifespan context manager for FastAPI startup and shutdown.

    On shutdown: closes the Resend and Anthropic HTTP clients.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application.
    """
    services = app.state.services
    logger.info("FastAPI application starting")
    yield
    email_sender = services.get("email_sender")
    if email_sender is not None and hasattr(email_sender, "aclose"):
        await email_sender.aclose()
    anthropic_client = services.get("anthropic_client")
    if anthropic_client is not None:
        await anthropic_client.close()
    logger.info("HTTP clients closed")


def create_app(services: dict[str, Any]) -> FastAPI:
    """Create the FastAPI app with lifespan, middleware, and routes.

    Args:
        services: The initialized services dict from ``initialize_services``.

    Returns:
        The configured FastAPI application.
    """
    settings: Settings = services.get("_settings") or get_settings()

    fastapi_app = FastAPI(title="Portfolio Contact API", lifespan=lifespan)
    fastapi_app.state.services = services
    fastapi_app.state.settings = settings

    fastapi_app.add_middleware(RequestIdMiddleware)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    fastapi_app.include_router(contact_router)
    register_health_routes(fastapi_app)
    setup_metrics(fastapi_app)
    return fastapi_app


async def main() -> None:
    """Main entry point: configure, wire services, and serve with uvicorn.

    1. Load settings and configure logging / Sentry
    2. Validate credentials
    3. Initialize services and create the FastAPI app
    4. Serve until shutdown
    """
    settings = get_settings()
    init_sentry(settings.sentry_dsn)
    configure_logging(production=settings.production, sentry_enabled=bool(settings.sentry_dsn))
    logger.info("Application starting")

    validate_credentials(settings)

    services = initialize_services(settings)
    fastapi_app = create_app(services)

    config = uvicorn.Config(
        fastapi_app,
        host="0.0.0.0",
        port=settings.port,
        log_level="info",
    )
    server = uvicorn.Server(config)
    await server.serve()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
