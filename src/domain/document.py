"""Shopping list document models and enums."""

from enum import StrEnum

from pydantic import BaseModel, Field


class ConversationMode(StrEnum):
    """Conversation state, derived from the recipe draft."""

    NORMAL = "NORMAL"
    CAPTURING_RECIPE_NAME = "CAPTURING_RECIPE_NAME"
    CAPTURING_INGREDIENTS = "CAPTURING_INGREDIENTS"


class ShoppingItem(BaseModel):
    """One entry on the shopping list."""

    name: str = Field(..., description="Item name as typed by the user")
    checked: bool = Field(default=False, description="Marked for removal")


class Recipe(BaseModel):
    """A named recipe as an ordered list of ingredients."""

    name: str = Field(..., description="Recipe name, unique among recipes")
    ingredients: list[str] = Field(default_factory=list, description="Ingredients in dictation order")


class RecipeDraft(BaseModel):
    """Recipe being dictated. ``name`` is None until the first line arrives."""

    name: str | None = Field(default=None, description="Recipe name, None while awaiting the name line")
    ingredients: list[str] = Field(default_factory=list, description="Ingredients captured so far")


class ActiveMessage(BaseModel):
    """The message currently used as the bot's screen."""

    chat_id: int = Field(..., description="Telegram chat ID")
    message_id: int = Field(..., description="Telegram message ID within the chat")


class Document(BaseModel):
    """Root persisted aggregate: the whole state of the bot."""

    items: list[ShoppingItem] = Field(default_factory=list, description="Shopping list in display order")
    recipes: dict[str, list[str]] = Field(default_factory=dict, description="Recipe name -> ingredients")
    active_message: ActiveMessage | None = Field(default=None, description="Message currently displayed")
    current_recipe: RecipeDraft | None = Field(default=None, description="Recipe draft while capturing")

    @property
    def mode(self) -> ConversationMode:
        if self.current_recipe is None:
            return ConversationMode.NORMAL
        if self.current_recipe.name is None:
            return ConversationMode.CAPTURING_RECIPE_NAME
        return ConversationMode.CAPTURING_INGREDIENTS

    def recipe_list(self) -> list[Recipe]:
        """Recipes in insertion order."""
        return [Recipe(name=name, ingredients=list(ingredients)) for name, ingredients in self.recipes.items()]
