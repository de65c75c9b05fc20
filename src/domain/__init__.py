"""Domain models and DTOs."""

from src.domain.document import ActiveMessage, ConversationMode, Document, Recipe, RecipeDraft, ShoppingItem
from src.domain.keyboard import Button, ButtonLayout, CallbackAction, CallbackData, View


__all__ = [
    "ActiveMessage",
    "Button",
    "ButtonLayout",
    "CallbackAction",
    "CallbackData",
    "ConversationMode",
    "Document",
    "Recipe",
    "RecipeDraft",
    "ShoppingItem",
    "View",
]
