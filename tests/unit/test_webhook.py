"""Tests for the Telegram webhook endpoint."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException

from src.interface.telegram_parser import TextEvent
from src.interface.webhook import receive_webhook


UPDATE = {
    "update_id": 10000,
    "message": {"message_id": 55, "from": {"id": 7, "first_name": "Alex"}, "chat": {"id": 4242}, "text": "Milk"},
}


def _request(payload=None, headers=None, json_error=None) -> MagicMock:
    request = MagicMock()
    request.headers = headers or {}
    request.json = AsyncMock(return_value=payload, side_effect=json_error)
    request.app.state.bot.submit = AsyncMock()
    return request


class TestReceiveWebhook:
    """Test webhook endpoint."""

    @pytest.mark.asyncio
    @patch("src.interface.webhook.settings")
    async def test_receive_webhook_queues_event(self, mock_settings):
        mock_settings.telegram_webhook_secret = None
        mock_settings.is_allowed_chat.return_value = True
        request = _request(UPDATE)

        result = await receive_webhook(request)

        assert result == {"status": "queued"}
        request.app.state.bot.submit.assert_awaited_once()
        event = request.app.state.bot.submit.call_args.args[0]
        assert isinstance(event, TextEvent)
        assert event.text == "Milk"

    @pytest.mark.asyncio
    async def test_receive_webhook_invalid_json(self):
        request = _request(json_error=ValueError("Invalid JSON"))

        with pytest.raises(HTTPException) as exc_info:
            await receive_webhook(request)

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_receive_webhook_ignored_update(self):
        request = _request({"update_id": 1, "edited_message": {"text": "x"}})

        result = await receive_webhook(request)

        assert result == {"status": "ignored"}
        request.app.state.bot.submit.assert_not_called()

    @pytest.mark.asyncio
    @patch("src.interface.webhook.settings")
    async def test_receive_webhook_other_chat_ignored(self, mock_settings):
        mock_settings.telegram_webhook_secret = None
        mock_settings.is_allowed_chat.return_value = False
        request = _request(UPDATE)

        result = await receive_webhook(request)

        assert result == {"status": "ignored"}
        mock_settings.is_allowed_chat.assert_called_once_with(4242)
        request.app.state.bot.submit.assert_not_called()

    @pytest.mark.asyncio
    @patch("src.interface.webhook.settings")
    async def test_receive_webhook_rejects_wrong_secret(self, mock_settings):
        mock_settings.telegram_webhook_secret = "s3cret"
        request = _request(UPDATE, headers={"X-Telegram-Bot-Api-Secret-Token": "guess"})

        with pytest.raises(HTTPException) as exc_info:
            await receive_webhook(request)

        assert exc_info.value.status_code == 403
        request.app.state.bot.submit.assert_not_called()

    @pytest.mark.asyncio
    @patch("src.interface.webhook.settings")
    async def test_receive_webhook_accepts_matching_secret(self, mock_settings):
        mock_settings.telegram_webhook_secret = "s3cret"
        mock_settings.is_allowed_chat.return_value = True
        request = _request(UPDATE, headers={"X-Telegram-Bot-Api-Secret-Token": "s3cret"})

        result = await receive_webhook(request)

        assert result == {"status": "queued"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[1, 2], {"update_id": 1, "message": None}])
    async def test_receive_webhook_malformed_update_ignored(self, payload):
        request = _request(payload)

        result = await receive_webhook(request)

        assert result == {"status": "ignored"}
        request.app.state.bot.submit.assert_not_called()
