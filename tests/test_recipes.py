"""Tests for the recipe store."""

import json

import pytest

from recipe_colab.recipes import (
    Recipe,
    RecipeError,
    RecipeValidationError,
    create_recipe,
    delete_recipe,
    find_recipes,
    get_recipe,
    list_recipes,
    update_recipe,
    validate_recipe,
)


class TestValidateRecipe:
    """Tests for recipe form validation."""

    def test_valid(self):
        assert validate_recipe("Pancakes", ["2 cups flour", "3 large eggs"]) == {}

    def test_missing_title(self):
        errors = validate_recipe("   ", ["2 cups flour"])

        assert errors == {"title": "Recipe title is required"}

    def test_short_title(self):
        errors = validate_recipe("Ab", ["2 cups flour"])

        assert errors["title"] == "Title must be at least 3 characters"

    def test_long_title(self):
        errors = validate_recipe("x" * 101, ["2 cups flour"])

        assert errors["title"] == "Title must be less than 100 characters"

    def test_no_ingredients(self):
        errors = validate_recipe("Pancakes", ["", "  "])

        assert errors == {"ingredients": "At least one ingredient is required"}

    def test_too_many_ingredients(self):
        errors = validate_recipe("Pancakes", [f"{i} cups flour" for i in range(51)])

        assert errors["ingredients"] == "Maximum 50 ingredients allowed"

    def test_short_ingredient(self):
        errors = validate_recipe("Pancakes", ["2 cups flour", "eg"])

        assert errors["ingredients"].startswith("Some ingredients seem too short.")

    def test_reports_both_fields(self):
        errors = validate_recipe("", [])

        assert set(errors) == {"title", "ingredients"}


class TestRecipe:
    """Tests for the Recipe dataclass."""

    def test_round_trip(self):
        recipe = Recipe(
            id="r1",
            title="Soup",
            ingredients=["1 onion"],
            instructions="Boil.",
            category="Dinner",
            servings=2,
        )

        assert Recipe.from_dict(recipe.to_dict()) == recipe

    def test_from_dict_with_bad_ingredients(self):
        recipe = Recipe.from_dict({"id": "r1", "title": "Soup", "ingredients": "1 onion"})

        assert recipe.ingredients == []
        assert recipe.instructions == ""


class TestRecipeStore:
    """Tests for recipe persistence."""

    def test_create_and_get(self, temp_data_files):
        recipe = create_recipe(
            "  Pancakes  ", ["2 cups flour", "  3 large eggs ", ""], servings=4
        )

        assert recipe.title == "Pancakes"
        assert recipe.ingredients == ["2 cups flour", "3 large eggs"]
        assert recipe.created_at == recipe.updated_at

        loaded = get_recipe(recipe.id)
        assert loaded == recipe

    def test_create_writes_json(self, temp_data_files):
        recipes_file, _ = temp_data_files
        recipe = create_recipe("Pancakes", ["2 cups flour"])

        data = json.loads(recipes_file.read_text(encoding="utf-8"))
        assert data[recipe.id]["title"] == "Pancakes"

    def test_create_invalid(self, temp_data_files):
        recipes_file, _ = temp_data_files

        with pytest.raises(RecipeValidationError) as exc_info:
            create_recipe("Ab", ["2 cups flour"])

        assert "title" in exc_info.value.errors
        assert not recipes_file.exists()

    def test_validation_error_is_recipe_error(self):
        assert issubclass(RecipeValidationError, RecipeError)

    def test_get_missing(self, temp_data_files):
        with pytest.raises(RecipeError, match="not found"):
            get_recipe("nope")

    def test_list_sorted_by_title(self, temp_data_files):
        create_recipe("waffles", ["2 cups flour"])
        create_recipe("Apple Pie", ["3 apples"])
        create_recipe("Muffins", ["1 cup sugar"])

        assert [r.title for r in list_recipes()] == ["Apple Pie", "Muffins", "waffles"]

    def test_list_empty(self, temp_data_files):
        assert list_recipes() == []

    def test_update(self, temp_data_files):
        recipe = create_recipe("Pancakes", ["2 cups flour"])

        updated = update_recipe(recipe.id, title="Fluffy Pancakes", servings=2)

        assert updated.title == "Fluffy Pancakes"
        assert updated.servings == 2
        assert updated.ingredients == ["2 cups flour"]
        assert get_recipe(recipe.id).title == "Fluffy Pancakes"

    def test_update_validates(self, temp_data_files):
        recipe = create_recipe("Pancakes", ["2 cups flour"])

        with pytest.raises(RecipeValidationError):
            update_recipe(recipe.id, ingredients=[])

        assert get_recipe(recipe.id).ingredients == ["2 cups flour"]

    def test_update_unknown_field(self, temp_data_files):
        recipe = create_recipe("Pancakes", ["2 cups flour"])

        with pytest.raises(RecipeError, match="Unknown recipe field"):
            update_recipe(recipe.id, id="other")

    def test_update_missing(self, temp_data_files):
        with pytest.raises(RecipeError, match="not found"):
            update_recipe("nope", title="Soup")

    def test_delete(self, temp_data_files):
        recipe = create_recipe("Pancakes", ["2 cups flour"])

        delete_recipe(recipe.id)

        with pytest.raises(RecipeError):
            get_recipe(recipe.id)

    def test_delete_missing(self, temp_data_files):
        with pytest.raises(RecipeError, match="not found"):
            delete_recipe("nope")

    def test_corrupt_file(self, temp_data_files):
        recipes_file, _ = temp_data_files
        recipes_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(RecipeError, match="Failed to load recipes"):
            list_recipes()


class TestFindRecipes:
    """Tests for fuzzy recipe search."""

    def test_finds_with_typo(self, temp_data_files):
        create_recipe("Banana Bread", ["3 bananas"])
        create_recipe("Chicken Curry", ["1 chicken"])

        found = find_recipes("bananna bread")

        assert [r.title for r in found] == ["Banana Bread"]

    def test_partial_title(self, temp_data_files):
        create_recipe("Chocolate Chip Cookies", ["1 cup sugar"])

        assert find_recipes("cookies")[0].title == "Chocolate Chip Cookies"

    def test_no_match(self, temp_data_files):
        create_recipe("Banana Bread", ["3 bananas"])

        assert find_recipes("zzzz") == []

    def test_empty_query(self, temp_data_files):
        create_recipe("Banana Bread", ["3 bananas"])

        assert find_recipes("  ") == []

    def test_limit(self, temp_data_files):
        for title in ("Pasta One", "Pasta Two", "Pasta Three"):
            create_recipe(title, ["1 lb pasta"])

        assert len(find_recipes("pasta", limit=2)) == 2
