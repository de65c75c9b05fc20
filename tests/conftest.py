"""Pytest configuration and shared fixtures."""

import os


# Settings are read at import time; provide a token before any src module loads.
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:TEST-TOKEN")

from pathlib import Path  # noqa: E402

import pytest  # noqa: E402

from src.domain.document import Document, ShoppingItem  # noqa: E402
from tests.unit.mocks import InMemoryTelegram  # noqa: E402


CHAT_ID = 4242


@pytest.fixture
def telegram() -> InMemoryTelegram:
    """Provides a fresh in-memory Telegram transport for each test."""
    return InMemoryTelegram()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path of a document file inside a per-test temporary directory."""
    return tmp_path / "shopping_list_bot.json"


@pytest.fixture
def shopping_document() -> Document:
    """Document with three items, the middle one checked, and one recipe."""
    return Document(
        items=[
            ShoppingItem(name="Milk"),
            ShoppingItem(name="Eggs", checked=True),
            ShoppingItem(name="Bread"),
        ],
        recipes={"Pasta": ["Noodles", "Sauce"]},
    )
