"""Shared fixtures for recipe-colab tests."""

import os
import tempfile

# Keep the import-time data directory out of the real home directory
os.environ.setdefault("RECIPE_COLAB_HOME", tempfile.mkdtemp(prefix="recipe-colab-tests-"))

import pytest  # noqa: E402

from recipe_colab.recipes import Recipe  # noqa: E402


@pytest.fixture
def temp_data_files(tmp_path, monkeypatch):
    """Point the recipe and shopping list stores at temporary files."""
    recipes_file = tmp_path / "recipes.json"
    lists_file = tmp_path / "shopping_lists.json"

    monkeypatch.setattr("recipe_colab.recipes.RECIPES_FILE", recipes_file)
    monkeypatch.setattr("recipe_colab.shopping_lists.SHOPPING_LISTS_FILE", lists_file)

    return recipes_file, lists_file


@pytest.fixture
def pancake_recipe():
    """A recipe dict in the shape the aggregator accepts."""
    return {
        "id": "recipe1",
        "title": "Pasta Recipe",
        "ingredients": ["2 cups flour", "1 cup sugar"],
    }


@pytest.fixture
def cake_recipe():
    """A second recipe sharing ingredients with the first."""
    return {
        "id": "recipe2",
        "title": "Cake Recipe",
        "ingredients": ["1 cup flour", "1/2 cup sugar"],
    }


@pytest.fixture
def stored_recipe_objects():
    """Recipe objects as returned by the recipe store."""
    return [
        Recipe(
            id="r-omelette",
            title="Omelette",
            ingredients=["3 large eggs", "1 tbsp butter", "salt to taste"],
        ),
        Recipe(
            id="r-frittata",
            title="Frittata",
            ingredients=["6 large eggs", "2 tbsp butter", "1 cup cheddar cheese"],
        ),
    ]
