"""Long-polling update source, used when no public webhook URL is available."""

import asyncio
import logging

from src.core.config import constants, settings
from src.interface import telegram_parser, telegram_sender
from src.services.event_service import ShoppingBot


logger = logging.getLogger(__name__)


async def poll_once(bot: ShoppingBot, *, offset: int | None) -> int | None:
    """Fetch one batch of updates and queue the handled ones.

    Args:
        bot: Bot receiving the parsed events
        offset: Next update ID to request, None for the first call

    Returns:
        The offset to use on the next call

    Raises:
        ConnectionError: If getUpdates fails
    """
    updates = await telegram_sender.get_updates(offset=offset, timeout=constants.POLL_TIMEOUT_SECONDS)

    for update in updates:
        update_id = update.get("update_id")
        if isinstance(update_id, int):
            offset = max(offset or 0, update_id + 1)

        event = telegram_parser.parse_update(update)
        if event is None:
            continue
        if not settings.is_allowed_chat(event.chat_id):
            logger.warning("Ignoring update from chat %s", event.chat_id, extra={"update_id": event.update_id})
            continue
        await bot.submit(event)

    return offset


async def run_polling(bot: ShoppingBot) -> None:
    """Poll Telegram until cancelled."""
    logger.info("Starting long polling")
    offset: int | None = None
    while True:
        try:
            offset = await poll_once(bot, offset=offset)
        except ConnectionError as e:
            logger.error("Polling failed, retrying in %ss: %s", constants.POLL_RETRY_DELAY_SECONDS, e)
            await asyncio.sleep(constants.POLL_RETRY_DELAY_SECONDS)
