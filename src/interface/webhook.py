"""Telegram webhook endpoint."""

import logging
import secrets

from fastapi import APIRouter, HTTPException, Request

from src.core.config import constants, settings
from src.interface import telegram_parser
from src.services.event_service import ShoppingBot


router = APIRouter(prefix="/webhook", tags=["webhook"])
logger = logging.getLogger(__name__)


def _verify_secret_token(request: Request) -> None:
    """Reject requests without the configured secret token.

    Raises:
        HTTPException: 403 if a secret is configured and the header does not match
    """
    expected = settings.telegram_webhook_secret
    if not expected:
        return

    received = request.headers.get(constants.WEBHOOK_SECRET_HEADER, "")
    if not secrets.compare_digest(received, expected):
        logger.warning("Webhook secret token mismatch")
        raise HTTPException(status_code=403, detail="Invalid secret token")


@router.post("")
async def receive_webhook(request: Request) -> dict[str, str]:
    """Receive a Telegram update and queue it for processing.

    This endpoint:
    1. Verifies the secret token header
    2. Parses the JSON update
    3. Queues the event and returns immediately

    Raises:
        HTTPException: If the secret token or payload is invalid
    """
    _verify_secret_token(request)

    try:
        payload = await request.json()
    except Exception as e:
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from e

    event = telegram_parser.parse_update(payload)
    if event is None:
        # Edited messages, media, channel posts and other update kinds
        return {"status": "ignored"}

    if not settings.is_allowed_chat(event.chat_id):
        logger.warning("Ignoring update from chat %s", event.chat_id, extra={"update_id": event.update_id})
        return {"status": "ignored"}

    bot: ShoppingBot = request.app.state.bot
    await bot.submit(event)
    return {"status": "queued"}
