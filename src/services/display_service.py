"""Single-active-message display: edit the current screen in place or replace it."""

import logging
from enum import StrEnum

from src.core.errors import DisplayError
from src.domain.document import ActiveMessage, Document
from src.domain.keyboard import View
from src.interface.telegram_sender import EditStatus, MessageSender


logger = logging.getLogger(__name__)


class ReconcileOutcome(StrEnum):
    """How the screen was brought up to date."""

    EDITED = "EDITED"
    UNCHANGED = "UNCHANGED"
    SENT = "SENT"


async def reconcile(
    document: Document,
    *,
    chat_id: int,
    view: View,
    sender: MessageSender,
) -> ReconcileOutcome:
    """Make the chat show exactly one bot message with the given view.

    The active message is edited when possible. A failed edit (deleted
    message, unreachable chat, network error) falls back to sending a new
    message, which becomes the active message.

    Args:
        document: Document whose ``active_message`` is read and updated
        chat_id: Chat to send to if a new message is needed
        view: Text and buttons to display
        sender: Transport used for edit and send

    Returns:
        ReconcileOutcome describing what happened

    Raises:
        DisplayError: If the fallback send fails as well
    """
    active = document.active_message
    if active is not None:
        result = await sender.edit_message_text(
            chat_id=active.chat_id,
            message_id=active.message_id,
            text=view.text,
            buttons=view.buttons,
        )

        if result.status == EditStatus.EDITED:
            if result.chat_id is not None and result.message_id is not None:
                document.active_message = ActiveMessage(chat_id=result.chat_id, message_id=result.message_id)
            return ReconcileOutcome.EDITED

        if result.status == EditStatus.UNCHANGED:
            logger.warning("Message has the same content", extra={"message_id": active.message_id})
            return ReconcileOutcome.UNCHANGED

        logger.error(
            "Couldn't replace message, sending a new one: %s",
            result.error,
            extra={"message_id": active.message_id, "category": result.category},
        )

    sent = await sender.send_message(chat_id=chat_id, text=view.text, buttons=view.buttons)
    if not sent.success or sent.message_id is None:
        raise DisplayError(f"Failed to send message to chat {chat_id}: {sent.error}")

    document.active_message = ActiveMessage(chat_id=sent.chat_id or chat_id, message_id=sent.message_id)
    return ReconcileOutcome.SENT
