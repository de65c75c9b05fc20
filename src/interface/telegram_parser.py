"""Telegram update payload parser."""

from typing import Any

from pydantic import BaseModel, Field


class TextEvent(BaseModel):
    """A text message typed by the user."""

    update_id: int = Field(..., description="Telegram update ID")
    chat_id: int = Field(..., description="Chat the message was sent in")
    message_id: int = Field(..., description="ID of the user's message, used to delete it")
    sender_id: int | None = Field(None, description="Telegram user ID of the sender")
    sender_name: str = Field("", description="Sender display name (first name)")
    text: str = Field(..., description="Message text")


class CallbackEvent(BaseModel):
    """A press on one of the bot's inline buttons."""

    update_id: int = Field(..., description="Telegram update ID")
    callback_query_id: str = Field(..., description="ID to acknowledge with answerCallbackQuery")
    chat_id: int = Field(..., description="Chat of the message carrying the button")
    message_id: int = Field(..., description="Message carrying the button")
    sender_id: int | None = Field(None, description="Telegram user ID of the presser")
    sender_name: str = Field("", description="Presser display name (first name)")
    data: str = Field(..., description="Raw callback data of the button")


InboundEvent = TextEvent | CallbackEvent


def _sender(payload: dict[str, Any]) -> tuple[int | None, str]:
    user = payload.get("from") or {}
    return (user.get("id"), user.get("first_name", ""))


def _parse_message(update_id: int, message: dict[str, Any]) -> TextEvent | None:
    text = message.get("text")
    chat_id = (message.get("chat") or {}).get("id")
    message_id = message.get("message_id")
    if text is None or chat_id is None or message_id is None:
        return None

    sender_id, sender_name = _sender(message)
    return TextEvent(
        update_id=update_id,
        chat_id=chat_id,
        message_id=message_id,
        sender_id=sender_id,
        sender_name=sender_name,
        text=text,
    )


def _parse_callback_query(update_id: int, query: dict[str, Any]) -> CallbackEvent | None:
    data = query.get("data")
    message = query.get("message")
    if not isinstance(message, dict):
        return None
    chat_id = (message.get("chat") or {}).get("id")
    message_id = message.get("message_id")
    if data is None or chat_id is None or message_id is None or "id" not in query:
        return None

    sender_id, sender_name = _sender(query)
    return CallbackEvent(
        update_id=update_id,
        callback_query_id=str(query["id"]),
        chat_id=chat_id,
        message_id=message_id,
        sender_id=sender_id,
        sender_name=sender_name,
        data=data,
    )


def parse_update(data: Any) -> InboundEvent | None:
    """Parse a Telegram Update object.

    Telegram sends updates with structure:
    {
        "update_id": 10000,
        "message": {"message_id": 1, "chat": {"id": 42}, "from": {...}, "text": "Milk"}
    }
    or
    {
        "update_id": 10001,
        "callback_query": {"id": "abc", "from": {...}, "message": {...}, "data": "toggle:0"}
    }

    Args:
        data: Parsed JSON body, normally an Update object

    Returns:
        TextEvent or CallbackEvent, None for updates the bot does not handle
    """
    if not isinstance(data, dict):
        return None

    update_id = data.get("update_id")
    if update_id is None:
        return None

    if isinstance(data.get("message"), dict):
        return _parse_message(update_id, data["message"])

    if isinstance(data.get("callback_query"), dict):
        return _parse_callback_query(update_id, data["callback_query"])

    return None
