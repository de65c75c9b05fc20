"""Telegram Bot API client for sending, editing and deleting messages."""

import logging
from enum import StrEnum
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, Field

from src.core.config import constants, settings
from src.core.errors import ErrorCategory, classify_telegram_error
from src.domain.keyboard import ButtonLayout, to_inline_keyboard


logger = logging.getLogger(__name__)


class SendMessageResult(BaseModel):
    """Result of sending a Telegram message."""

    success: bool = Field(..., description="Whether the message was sent successfully")
    chat_id: int | None = Field(None, description="Chat the message landed in")
    message_id: int | None = Field(None, description="Telegram message ID if successful")
    error: str | None = Field(None, description="Error message if failed")


class EditStatus(StrEnum):
    """Outcome of an in-place edit."""

    EDITED = "EDITED"
    UNCHANGED = "UNCHANGED"
    FAILED = "FAILED"


class EditResult(BaseModel):
    """Result of editing a Telegram message.

    UNCHANGED means the message already shows exactly this content. It is a
    success, not an error.
    """

    status: EditStatus = Field(..., description="Edited, unchanged or failed")
    chat_id: int | None = Field(None, description="Chat of the edited message")
    message_id: int | None = Field(None, description="Message ID returned by the edit")
    error: str | None = Field(None, description="Error message if failed")
    category: ErrorCategory | None = Field(None, description="Classified failure reason")


class ApiResponse(BaseModel):
    """Decoded Bot API envelope."""

    ok: bool
    result: Any = None
    status_code: int | None = None
    description: str | None = None

    @property
    def category(self) -> ErrorCategory:
        return classify_telegram_error(status_code=self.status_code, description=self.description)


class MessageSender(Protocol):
    """Transport operations the display and event services depend on."""

    async def send_message(
        self, *, chat_id: int, text: str, buttons: ButtonLayout | None = None
    ) -> SendMessageResult: ...

    async def edit_message_text(
        self, *, chat_id: int, message_id: int, text: str, buttons: ButtonLayout | None = None
    ) -> EditResult: ...

    async def delete_message(self, *, chat_id: int, message_id: int) -> bool: ...

    async def answer_callback_query(self, *, callback_query_id: str) -> bool: ...


def _api_url(method: str) -> str:
    token = settings.require_credential("telegram_bot_token", "Telegram bot token")
    return f"{settings.telegram_api_base_url}/bot{token}/{method}"


async def call_api(method: str, payload: dict[str, Any], *, timeout: float | None = None) -> ApiResponse:
    """POST one Bot API method. Never raises for HTTP or network failures.

    Args:
        method: Bot API method name (e.g., "sendMessage")
        payload: JSON body
        timeout: Request timeout, defaults to API_TIMEOUT_SECONDS

    Returns:
        ApiResponse; ``status_code`` is None when no response was received
    """
    try:
        async with httpx.AsyncClient(timeout=timeout or constants.API_TIMEOUT_SECONDS) as client:
            response = await client.post(_api_url(method), json=payload)
    except httpx.HTTPError as e:
        return ApiResponse(ok=False, description=f"{type(e).__name__}: {e}")

    try:
        data = response.json()
    except ValueError:
        return ApiResponse(ok=False, status_code=response.status_code, description=response.text)

    if response.is_success and data.get("ok"):
        return ApiResponse(ok=True, result=data.get("result"), status_code=response.status_code)

    return ApiResponse(
        ok=False,
        status_code=data.get("error_code", response.status_code),
        description=data.get("description"),
    )


def _with_markup(payload: dict[str, Any], buttons: ButtonLayout | None) -> dict[str, Any]:
    if buttons is not None:
        payload["reply_markup"] = to_inline_keyboard(buttons)
    return payload


def _message_ids(result: Any) -> tuple[int | None, int | None]:
    if not isinstance(result, dict):
        return (None, None)
    chat = result.get("chat") or {}
    return (chat.get("id"), result.get("message_id"))


async def send_message(*, chat_id: int, text: str, buttons: ButtonLayout | None = None) -> SendMessageResult:
    """Send a new text message, optionally with an inline keyboard."""
    response = await call_api("sendMessage", _with_markup({"chat_id": chat_id, "text": text}, buttons))

    if not response.ok:
        logger.error(
            "Failed to send message: %s",
            response.description,
            extra={"chat_id": chat_id, "category": response.category.value},
        )
        return SendMessageResult(success=False, error=response.description or "sendMessage failed")

    sent_chat_id, message_id = _message_ids(response.result)
    return SendMessageResult(success=True, chat_id=sent_chat_id or chat_id, message_id=message_id)


async def edit_message_text(
    *,
    chat_id: int,
    message_id: int,
    text: str,
    buttons: ButtonLayout | None = None,
) -> EditResult:
    """Replace the text and keyboard of an existing message."""
    payload = _with_markup({"chat_id": chat_id, "message_id": message_id, "text": text}, buttons)
    response = await call_api("editMessageText", payload)

    if response.ok:
        edited_chat_id, edited_message_id = _message_ids(response.result)
        return EditResult(
            status=EditStatus.EDITED,
            chat_id=edited_chat_id or chat_id,
            message_id=edited_message_id or message_id,
        )

    category = response.category
    if category == ErrorCategory.MESSAGE_NOT_MODIFIED:
        return EditResult(status=EditStatus.UNCHANGED, chat_id=chat_id, message_id=message_id)

    return EditResult(
        status=EditStatus.FAILED,
        error=response.description or "editMessageText failed",
        category=category,
    )


async def delete_message(*, chat_id: int, message_id: int) -> bool:
    """Delete a message. Returns False if Telegram refused or was unreachable."""
    response = await call_api("deleteMessage", {"chat_id": chat_id, "message_id": message_id})
    if not response.ok:
        logger.warning(
            "Failed to delete message %s: %s",
            message_id,
            response.description,
            extra={"chat_id": chat_id, "category": response.category.value},
        )
    return response.ok


async def answer_callback_query(*, callback_query_id: str) -> bool:
    """Acknowledge a button press so the client stops showing progress."""
    response = await call_api("answerCallbackQuery", {"callback_query_id": callback_query_id})
    if not response.ok:
        logger.warning("Failed to answer callback query %s: %s", callback_query_id, response.description)
    return response.ok


async def get_updates(*, offset: int | None, timeout: int) -> list[dict[str, Any]]:
    """Long-poll for new updates.

    Raises:
        ConnectionError: If the call fails, so the poller can back off
    """
    payload: dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message", "callback_query"]}
    if offset is not None:
        payload["offset"] = offset

    response = await call_api("getUpdates", payload, timeout=timeout + constants.API_TIMEOUT_SECONDS)
    if not response.ok:
        raise ConnectionError(f"getUpdates failed: {response.description}")
    return list(response.result or [])


async def set_webhook(*, url: str, secret_token: str | None = None) -> bool:
    """Register the webhook URL with Telegram."""
    payload: dict[str, Any] = {"url": url, "allowed_updates": ["message", "callback_query"]}
    if secret_token:
        payload["secret_token"] = secret_token

    response = await call_api("setWebhook", payload)
    if not response.ok:
        logger.error("Failed to set webhook: %s", response.description)
    return response.ok


async def delete_webhook() -> bool:
    """Remove any registered webhook so getUpdates can be used."""
    response = await call_api("deleteWebhook", {})
    if not response.ok:
        logger.error("Failed to delete webhook: %s", response.description)
    return response.ok
