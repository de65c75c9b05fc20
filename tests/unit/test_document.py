"""Unit tests for the shopping list document models."""

import pytest

from src.domain.document import ConversationMode, Document, RecipeDraft


@pytest.mark.unit
class TestConversationMode:
    """Mode is derived from the recipe draft alone."""

    def test_empty_document_is_normal(self):
        assert Document().mode == ConversationMode.NORMAL

    def test_draft_without_name_awaits_name(self):
        document = Document(current_recipe=RecipeDraft())

        assert document.mode == ConversationMode.CAPTURING_RECIPE_NAME

    def test_named_draft_captures_ingredients(self):
        document = Document(current_recipe=RecipeDraft(name="Pasta"))

        assert document.mode == ConversationMode.CAPTURING_INGREDIENTS


@pytest.mark.unit
class TestRecipeList:
    def test_recipes_in_insertion_order(self):
        document = Document(recipes={"Soup": ["Water"], "Pasta": ["Noodles", "Sauce"]})

        recipes = document.recipe_list()

        assert [recipe.name for recipe in recipes] == ["Soup", "Pasta"]
        assert recipes[1].ingredients == ["Noodles", "Sauce"]

    def test_recipe_list_is_a_copy(self):
        document = Document(recipes={"Pasta": ["Noodles"]})

        document.recipe_list()[0].ingredients.append("Cheese")

        assert document.recipes["Pasta"] == ["Noodles"]
