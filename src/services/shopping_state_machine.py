"""Conversation state machine for the shopping list and recipe capture.

Pure transitions over the Document: every handler mutates the document in
place and returns the View the active message should show next, or None
when the screen must not change.
"""

import logging

from src.core import message_templates
from src.core.config import constants
from src.core.errors import InvalidCallbackError
from src.domain.document import ConversationMode, Document, RecipeDraft, ShoppingItem
from src.domain.keyboard import CallbackAction, CallbackData, View


logger = logging.getLogger(__name__)


def shopping_list_view(document: Document) -> View:
    return View(
        text=message_templates.render_shopping_list_text(document),
        buttons=message_templates.build_main_menu_buttons(),
    )


def remove_view(document: Document) -> View:
    return View(
        text=message_templates.SHOPPING_LIST_HEADER,
        buttons=message_templates.build_shopping_list_buttons(document),
    )


def recipe_draft_view(document: Document) -> View:
    return View(
        text=message_templates.render_recipe_draft_text(document),
        buttons=message_templates.build_recipe_capture_buttons(),
    )


def add_item(document: Document, name: str) -> None:
    """Add a recipe's ingredients if ``name`` is a recipe, else a single item."""
    ingredients = document.recipes.get(name)
    if ingredients is not None:
        document.items.extend(ShoppingItem(name=ingredient) for ingredient in ingredients)
        logger.info("Added recipe %s", name, extra={"ingredients": len(ingredients)})
        return

    document.items.append(ShoppingItem(name=name))
    logger.info("Added item %s", name)


def toggle_item(document: Document, index: int) -> None:
    """Flip the checked flag of the item at ``index``.

    Raises:
        InvalidCallbackError: If index is outside the current list
    """
    if not 0 <= index < len(document.items):
        raise InvalidCallbackError(f"Item index {index} out of range for {len(document.items)} items")

    item = document.items[index]
    item.checked = not item.checked


def remove_checked_items(document: Document) -> int:
    """Remove checked items, keeping the order of the rest. Returns the number removed."""
    to_remove = [index for index in reversed(range(len(document.items))) if document.items[index].checked]
    for index in to_remove:
        logger.debug("Removing item %s", index)
        del document.items[index]
    return len(to_remove)


def start_recipe(document: Document) -> None:
    document.current_recipe = RecipeDraft()


def finish_recipe(document: Document) -> str | None:
    """Store the draft if it has a name and leave capture mode.

    A recipe with an existing name replaces the stored one.

    Returns:
        Name of the stored recipe, None if nothing was stored
    """
    draft = document.current_recipe
    document.current_recipe = None
    if draft is None or draft.name is None:
        return None

    picker_data = CallbackData(action=CallbackAction.ADD, param=draft.name).encode()
    if len(picker_data.encode()) > constants.CALLBACK_DATA_MAX_BYTES:
        logger.warning("Recipe name %s is too long for a recipe picker button", draft.name)
    document.recipes[draft.name] = list(draft.ingredients)
    logger.info("Stored recipe %s", draft.name, extra={"ingredients": len(draft.ingredients)})
    return draft.name


def handle_text(document: Document, text: str, *, comment_prefix: str = "#") -> View | None:
    """Apply a text message to the document.

    Args:
        document: Document to mutate
        text: Message text
        comment_prefix: Prefix marking messages the bot ignores in normal mode

    Returns:
        Next view, or None if the message was ignored
    """
    mode = document.mode
    draft = document.current_recipe

    if mode == ConversationMode.CAPTURING_RECIPE_NAME and draft is not None:
        draft.name = text
        return recipe_draft_view(document)

    if mode == ConversationMode.CAPTURING_INGREDIENTS and draft is not None:
        draft.ingredients.append(text)
        return recipe_draft_view(document)

    if comment_prefix and text.startswith(comment_prefix):
        return None

    add_item(document, text)
    return shopping_list_view(document)


def _parse_index(param: str | None) -> int:
    if param is None:
        raise InvalidCallbackError("Missing item index")
    try:
        return int(param)
    except ValueError as e:
        raise InvalidCallbackError(f"Invalid item index: {param!r}") from e


def handle_callback(document: Document, raw_data: str) -> View | None:  # noqa: PLR0911
    """Apply a button press to the document.

    Args:
        document: Document to mutate
        raw_data: Callback data of the pressed button

    Returns:
        Next view, or None for unknown actions

    Raises:
        InvalidCallbackError: If the action's parameter does not fit the document
    """
    callback = CallbackData.parse(raw_data)

    match callback.action:
        case CallbackAction.START_RECIPE:
            start_recipe(document)
            return View(
                text=message_templates.NEW_RECIPE_PROMPT,
                buttons=message_templates.build_recipe_capture_buttons(),
            )

        case CallbackAction.START_REMOVE:
            return remove_view(document)

        case CallbackAction.RECIPE_DONE:
            finish_recipe(document)
            return View(
                text=message_templates.RECIPE_SAVED,
                buttons=message_templates.build_main_menu_buttons(),
            )

        case CallbackAction.TOGGLE:
            toggle_item(document, _parse_index(callback.param))
            return remove_view(document)

        case CallbackAction.REMOVE_DONE:
            remove_checked_items(document)
            return shopping_list_view(document)

        case CallbackAction.LIST_RECIPES:
            return View(
                text=message_templates.RECIPE_PICKER_PROMPT,
                buttons=message_templates.build_recipe_picker_buttons(document),
            )

        case CallbackAction.ADD:
            if callback.param is None:
                raise InvalidCallbackError("Missing item name")
            add_item(document, callback.param)
            return shopping_list_view(document)

        case CallbackAction.RETURN_TO_MAIN_LIST:
            return shopping_list_view(document)

        case _:
            logger.warning("Unknown callback query data: %s", raw_data)
            return None
