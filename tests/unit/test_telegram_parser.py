"""Tests for Telegram update parser."""

from src.interface.telegram_parser import CallbackEvent, TextEvent, parse_update


def test_parse_text_message():
    """Test parsing a standard text message."""
    data = {
        "update_id": 10000,
        "message": {
            "message_id": 55,
            "from": {"id": 7, "is_bot": False, "first_name": "Alex"},
            "chat": {"id": 4242, "type": "private"},
            "date": 1678900000,
            "text": "Milk",
        },
    }
    result = parse_update(data)
    assert isinstance(result, TextEvent)
    assert result.update_id == 10000
    assert result.chat_id == 4242
    assert result.message_id == 55
    assert result.sender_id == 7
    assert result.sender_name == "Alex"
    assert result.text == "Milk"


def test_parse_callback_query():
    """Test parsing an inline button press."""
    data = {
        "update_id": 10001,
        "callback_query": {
            "id": "4382bfdwdsb323b2d9",
            "from": {"id": 7, "first_name": "Alex"},
            "message": {"message_id": 101, "chat": {"id": 4242}, "text": "Einkaufsliste:"},
            "chat_instance": "-123",
            "data": "toggle:0",
        },
    }
    result = parse_update(data)
    assert isinstance(result, CallbackEvent)
    assert result.callback_query_id == "4382bfdwdsb323b2d9"
    assert result.chat_id == 4242
    assert result.message_id == 101
    assert result.data == "toggle:0"


def test_parse_message_without_sender():
    """Test that messages without a 'from' field still parse."""
    data = {"update_id": 1, "message": {"message_id": 2, "chat": {"id": 3}, "text": "Eggs"}}
    result = parse_update(data)
    assert isinstance(result, TextEvent)
    assert result.sender_id is None
    assert result.sender_name == ""


def test_parse_ignores_media_message():
    """Test that messages without text are ignored."""
    data = {"update_id": 1, "message": {"message_id": 2, "chat": {"id": 3}, "photo": [{"file_id": "x"}]}}
    assert parse_update(data) is None


def test_parse_ignores_edited_message():
    """Test that edited messages are ignored."""
    data = {"update_id": 1, "edited_message": {"message_id": 2, "chat": {"id": 3}, "text": "Milk"}}
    assert parse_update(data) is None


def test_parse_ignores_callback_without_message():
    """Test that inline-mode callbacks (no message attached) are ignored."""
    data = {"update_id": 1, "callback_query": {"id": "a", "from": {"id": 7}, "data": "remove_done"}}
    assert parse_update(data) is None


def test_parse_ignores_callback_without_data():
    """Test that game callbacks without data are ignored."""
    data = {
        "update_id": 1,
        "callback_query": {"id": "a", "message": {"message_id": 2, "chat": {"id": 3}}, "game_short_name": "g"},
    }
    assert parse_update(data) is None


def test_parse_requires_update_id():
    """Test that payloads without an update_id are ignored."""
    assert parse_update({"message": {"message_id": 2, "chat": {"id": 3}, "text": "Milk"}}) is None


def test_parse_ignores_non_object_body():
    """Test that a JSON body that is not an object is ignored."""
    assert parse_update([1, 2]) is None
    assert parse_update("Milk") is None


def test_parse_ignores_null_message():
    """Test that null or non-object message payloads are ignored."""
    assert parse_update({"update_id": 1, "message": None}) is None
    assert parse_update({"update_id": 1, "callback_query": "toggle:0"}) is None
    assert parse_update({"update_id": 1, "callback_query": {"id": "a", "message": 5, "data": "toggle:0"}}) is None
