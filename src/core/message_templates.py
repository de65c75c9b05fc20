"""Centralized message texts and keyboards for the shopping list screen.

All user-facing strings and button layouts are defined here so the bot's
vocabulary can be changed in one place. Every function is pure.
"""

from src.domain.document import Document
from src.domain.keyboard import Button, ButtonLayout, CallbackAction


SHOPPING_LIST_HEADER = "Einkaufsliste:"
NEW_RECIPE_PROMPT = "Neues Rezept:"
RECIPE_PICKER_PROMPT = "Click the recipe to add:"
RECIPE_SAVED = "\U0001f44d"

CHECKED_MARKER = "\u2764 "
CONFIRM_LABEL = "\U0001f49a"
REMOVE_LABEL = "\U0001f6d2"
RECIPES_LABEL = "\U0001f4dd\U0001f6d2"
NEW_RECIPE_LABEL = "\U0001f4dd\u2795"


def _bullets(lines: list[str]) -> str:
    return "".join(f"\n - {line}" for line in lines)


def render_shopping_list_text(document: Document) -> str:
    return SHOPPING_LIST_HEADER + _bullets([item.name for item in document.items])


def render_recipe_draft_text(document: Document) -> str:
    """Render the recipe being captured, or "" while no name has been given."""
    draft = document.current_recipe
    if draft is None or draft.name is None:
        return ""
    return f"{draft.name}:" + _bullets(draft.ingredients)


def build_shopping_list_buttons(document: Document) -> ButtonLayout:
    """One toggle button per item, then the confirm-removal row."""
    layout: ButtonLayout = [
        [
            Button.for_action(
                f"{CHECKED_MARKER if item.checked else ''}{item.name}",
                CallbackAction.TOGGLE,
                index,
            )
        ]
        for index, item in enumerate(document.items)
    ]
    layout.append([Button.for_action(CONFIRM_LABEL, CallbackAction.REMOVE_DONE)])
    return layout


def build_recipe_picker_buttons(document: Document) -> ButtonLayout:
    """One add button per recipe, then the back-to-list row."""
    layout: ButtonLayout = [
        [Button.for_action(recipe.name, CallbackAction.ADD, recipe.name)] for recipe in document.recipe_list()
    ]
    layout.append([Button.for_action(CONFIRM_LABEL, CallbackAction.RETURN_TO_MAIN_LIST)])
    return layout


def build_main_menu_buttons() -> ButtonLayout:
    return [
        [
            Button.for_action(REMOVE_LABEL, CallbackAction.START_REMOVE),
            Button.for_action(RECIPES_LABEL, CallbackAction.LIST_RECIPES),
        ],
        [Button.for_action(NEW_RECIPE_LABEL, CallbackAction.START_RECIPE)],
    ]


def build_recipe_capture_buttons() -> ButtonLayout:
    return [[Button.for_action(CONFIRM_LABEL, CallbackAction.RECIPE_DONE)]]
