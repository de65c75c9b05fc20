"""Inline keyboard models and callback data encoding."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


CALLBACK_SEPARATOR = ":"


class CallbackAction(StrEnum):
    """Action tags carried in button callback data."""

    START_RECIPE = "start_recipe"
    START_REMOVE = "start_remove"
    RECIPE_DONE = "recipe_done"
    TOGGLE = "toggle"
    REMOVE_DONE = "remove_done"
    LIST_RECIPES = "list_recipes"
    ADD = "add"
    RETURN_TO_MAIN_LIST = "return_to_main_list"


class CallbackData(BaseModel):
    """Parsed callback data: an action tag with an optional parameter."""

    action: str = Field(..., description="Action tag, normally a CallbackAction value")
    param: str | None = Field(default=None, description="Item index for toggle, recipe name for add")

    def encode(self) -> str:
        if self.param is None:
            return self.action
        return f"{self.action}{CALLBACK_SEPARATOR}{self.param}"

    @classmethod
    def parse(cls, raw: str) -> "CallbackData":
        """Split raw callback data at the first separator.

        Everything after the first separator is the parameter, so recipe
        names containing the separator survive the round trip.
        """
        action, separator, param = raw.partition(CALLBACK_SEPARATOR)
        return cls(action=action.strip(), param=param if separator else None)


class Button(BaseModel):
    """A labelled inline button."""

    label: str = Field(..., description="Text shown on the button")
    callback_data: str = Field(..., description="Encoded CallbackData sent back when pressed")

    @classmethod
    def for_action(cls, label: str, action: CallbackAction, param: str | int | None = None) -> "Button":
        data = CallbackData(action=action, param=None if param is None else str(param))
        return cls(label=label, callback_data=data.encode())


ButtonLayout = list[list[Button]]


class View(BaseModel):
    """What the active message should show after an event."""

    text: str = Field(..., description="Message text")
    buttons: ButtonLayout | None = Field(default=None, description="Inline keyboard, None for no markup")


def to_inline_keyboard(layout: ButtonLayout) -> dict[str, Any]:
    """Convert a layout into a Telegram InlineKeyboardMarkup payload."""
    return {
        "inline_keyboard": [
            [{"text": button.label, "callback_data": button.callback_data} for button in row] for row in layout
        ]
    }
