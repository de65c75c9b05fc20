"""Unit tests for document persistence."""

import json

import pytest

from src.core.document_store import load_document, save_document
from src.domain.document import ActiveMessage, Document, RecipeDraft, ShoppingItem


@pytest.mark.unit
class TestLoadDocument:
    def test_missing_file_gives_empty_document(self, data_file):
        assert load_document(data_file) == Document()

    def test_malformed_json_gives_empty_document(self, data_file):
        data_file.write_text("{not json", encoding="utf-8")

        assert load_document(data_file) == Document()

    def test_invalid_utf8_gives_empty_document(self, data_file):
        data_file.write_bytes(b"\xff\xfe\x00garbage")

        assert load_document(data_file) == Document()

    def test_wrong_shape_gives_empty_document(self, data_file):
        data_file.write_text(json.dumps({"items": "Milk"}), encoding="utf-8")

        assert load_document(data_file) == Document()

    def test_directory_gives_empty_document(self, tmp_path):
        assert load_document(tmp_path) == Document()

    def test_reads_persisted_layout(self, data_file):
        data_file.write_text(
            json.dumps(
                {
                    "items": [{"name": "Milk", "checked": True}],
                    "recipes": {"Pasta": ["Noodles"]},
                    "active_message": {"chat_id": 1, "message_id": 2},
                    "current_recipe": None,
                }
            ),
            encoding="utf-8",
        )

        document = load_document(data_file)

        assert document.items == [ShoppingItem(name="Milk", checked=True)]
        assert document.recipes == {"Pasta": ["Noodles"]}
        assert document.active_message == ActiveMessage(chat_id=1, message_id=2)
        assert document.current_recipe is None


@pytest.mark.unit
class TestSaveDocument:
    async def test_document_survives_restart(self, data_file, shopping_document):
        shopping_document.active_message = ActiveMessage(chat_id=4242, message_id=7)
        shopping_document.current_recipe = RecipeDraft(name="Soup", ingredients=["Water"])

        assert await save_document(shopping_document, data_file) is True

        assert load_document(data_file) == shopping_document

    async def test_writes_pretty_json_layout(self, data_file, shopping_document):
        await save_document(shopping_document, data_file)

        raw = data_file.read_text(encoding="utf-8")
        data = json.loads(raw)

        assert "\n  " in raw
        assert set(data) == {"items", "recipes", "active_message", "current_recipe"}
        assert data["items"][1] == {"name": "Eggs", "checked": True}
        assert data["recipes"] == {"Pasta": ["Noodles", "Sauce"]}
        assert data["active_message"] is None

    async def test_replaces_previous_file_without_leftovers(self, data_file):
        await save_document(Document(items=[ShoppingItem(name="Old")]), data_file)
        await save_document(Document(items=[ShoppingItem(name="New")]), data_file)

        assert load_document(data_file).items == [ShoppingItem(name="New")]
        assert [path.name for path in data_file.parent.iterdir()] == [data_file.name]

    async def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "bot.json"

        assert await save_document(Document(), path) is True
        assert path.exists()

    async def test_failure_is_reported_not_raised(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        assert await save_document(Document(), blocker / "bot.json") is False
