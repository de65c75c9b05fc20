"""Logfire setup for the bot process.

Modules log through ``logging.getLogger(__name__)``; the root handler
installed by configure_logfire forwards those records to Logfire. Each
handled Telegram event runs inside a span so its log lines group together.
"""

import logging

import logfire
from fastapi import FastAPI

from src.core.config import settings


def configure_logfire() -> None:
    """Set up Logfire and route the root logger through it. Exports only when LOGFIRE_TOKEN is set."""
    logfire.configure(
        token=settings.logfire_token,
        service_name="shoplistr",
        service_version="0.1.0",
        environment="production",
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(level=logging.INFO, handlers=[logfire.LogfireLoggingHandler()])

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured", extra={"service": "shoplistr"})


def instrument_fastapi(app: FastAPI) -> None:
    """Trace webhook and health requests."""
    logfire.instrument_fastapi(app)
    logger = logging.getLogger(__name__)
    logger.info("FastAPI instrumentation configured")


def span(name: str) -> logfire.LogfireSpan:
    """Span wrapping the handling of one inbound event."""
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log ``message`` at ``level`` with ``context`` attached as record attributes."""
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
