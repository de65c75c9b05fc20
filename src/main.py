"""shoplistr - a shopping list and recipe book living in one Telegram message."""

import asyncio
import contextlib
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.document_store import load_document
from src.core.logging import configure_logfire, instrument_fastapi
from src.interface import telegram_sender
from src.interface.poller import run_polling
from src.interface.webhook import router as webhook_router
from src.services.event_service import ShoppingBot


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> None:
    """Validate required credentials, exiting with a clear message if missing."""
    try:
        settings.require_credential("telegram_bot_token", "Telegram bot token")
        logger.info("startup_validation", extra={"stage": "credentials", "status": "ok"})
    except ValueError as e:
        logger.error("startup_validation_failed", extra={"error": str(e)})
        print(f"\n❌ Startup validation failed: {e}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)


async def register_update_source() -> None:
    """Point Telegram at the webhook, or clear it when long polling."""
    if settings.telegram_use_polling:
        await telegram_sender.delete_webhook()
    elif settings.telegram_webhook_url:
        if await telegram_sender.set_webhook(
            url=settings.telegram_webhook_url, secret_token=settings.telegram_webhook_secret
        ):
            logger.info("Webhook registered", extra={"url": settings.telegram_webhook_url})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()
    validate_startup_configuration()
    logger.info("Starting shoplistr...")

    bot = ShoppingBot(
        document=load_document(settings.data_file_path),
        sender=telegram_sender,
        data_file_path=settings.data_file_path,
        comment_prefix=settings.comment_prefix,
    )
    app.state.bot = bot
    await bot.start()
    await register_update_source()

    polling_task = asyncio.create_task(run_polling(bot)) if settings.telegram_use_polling else None
    yield
    # Shutdown
    if polling_task is not None:
        polling_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await polling_task
    await bot.stop()


app = FastAPI(
    title="shoplistr",
    description="Shopping list and recipe book living in one Telegram message",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(webhook_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
