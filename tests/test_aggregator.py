"""Tests for ingredient aggregation across recipes."""

from recipe_colab.aggregator import (
    AggregatedShoppingItem,
    SourceTaggedIngredient,
    aggregate_ingredients,
    get_recipe_field,
    tag_recipe_ingredients,
)


class TestTagRecipeIngredients:
    """Tests for tag_recipe_ingredients."""

    def test_tags_in_recipe_then_line_order(self, pancake_recipe, cake_recipe):
        tagged = tag_recipe_ingredients([pancake_recipe, cake_recipe])

        assert [t.original for t in tagged] == [
            "2 cups flour",
            "1 cup sugar",
            "1 cup flour",
            "1/2 cup sugar",
        ]
        assert [t.source_recipe_id for t in tagged] == ["recipe1", "recipe1", "recipe2", "recipe2"]
        assert tagged[0].source_recipe_name == "Pasta Recipe"

    def test_skips_recipes_without_ingredient_list(self):
        recipes = [
            {"id": "a", "title": "No ingredients"},
            {"id": "b", "title": "String ingredients", "ingredients": "2 cups flour"},
            {"id": "c", "title": "Good", "ingredients": ("1 cup milk",)},
        ]

        tagged = tag_recipe_ingredients(recipes)

        assert len(tagged) == 1
        assert tagged[0].source_recipe_id == "c"

    def test_accepts_recipe_objects(self, stored_recipe_objects):
        tagged = tag_recipe_ingredients(stored_recipe_objects)

        assert len(tagged) == 6
        assert isinstance(tagged[0], SourceTaggedIngredient)
        assert tagged[0].source_recipe_name == "Omelette"


class TestGetRecipeField:
    """Tests for get_recipe_field."""

    def test_mapping(self):
        assert get_recipe_field({"title": "Soup"}, "title") == "Soup"
        assert get_recipe_field({}, "title") is None

    def test_object(self, stored_recipe_objects):
        assert get_recipe_field(stored_recipe_objects[0], "id") == "r-omelette"
        assert get_recipe_field(object(), "id") is None


class TestAggregateIngredients:
    """Tests for aggregate_ingredients."""

    def test_merges_shared_ingredients(self, pancake_recipe, cake_recipe):
        items = aggregate_ingredients([pancake_recipe, cake_recipe])

        assert len(items) == 2

        flour, sugar = items
        assert flour.name == "flour"
        assert flour.quantity == "3"
        assert flour.unit == "cups"
        assert flour.source_recipe_ids == ["recipe1", "recipe2"]
        assert flour.source_recipe_names == ["Pasta Recipe", "Cake Recipe"]

        assert sugar.name == "sugar"
        assert sugar.quantity == "1 1/2"
        assert sugar.unit == "cup"

    def test_empty_input(self):
        assert aggregate_ingredients([]) == []

    def test_single_recipe_passes_through(self, pancake_recipe):
        items = aggregate_ingredients([pancake_recipe])

        assert [str(item) for item in items] == ["2 cups flour", "1 cup sugar"]
        assert all(item.source_recipe_ids == ["recipe1"] for item in items)

    def test_different_units_stay_separate(self):
        recipes = [
            {"id": "a", "title": "A", "ingredients": ["1 cup flour"]},
            {"id": "b", "title": "B", "ingredients": ["1 tbsp flour"]},
        ]

        items = aggregate_ingredients(recipes)

        assert [(item.quantity, item.unit) for item in items] == [("1", "cup"), ("1", "tbsp")]

    def test_variants_merge_under_first_name(self):
        recipes = [
            {"id": "a", "title": "A", "ingredients": ["2 cups all purpose flour"]},
            {"id": "b", "title": "B", "ingredients": ["1 cup flour"]},
        ]

        items = aggregate_ingredients(recipes)

        assert len(items) == 1
        assert items[0].name == "all purpose flour"
        assert items[0].quantity == "3"

    def test_unitless_counts_merge(self, stored_recipe_objects):
        items = aggregate_ingredients(stored_recipe_objects)
        by_name = {item.name: item for item in items}

        assert by_name["large eggs"].quantity == "9"
        assert by_name["large eggs"].source_recipe_names == ["Omelette", "Frittata"]
        assert by_name["butter"].quantity == "3"
        assert by_name["butter"].unit == "tbsp"

    def test_uncombinable_quantities_stay_separate(self):
        recipes = [
            {"id": "a", "title": "A", "ingredients": ["salt to taste"]},
            {"id": "b", "title": "B", "ingredients": ["salt to taste"]},
        ]

        items = aggregate_ingredients(recipes)

        assert len(items) == 2
        assert items[0].source_recipe_ids == ["a"]
        assert items[1].source_recipe_ids == ["b"]

    def test_range_is_not_summed(self):
        recipes = [
            {"id": "a", "title": "A", "ingredients": ["2-3 cloves garlic"]},
            {"id": "b", "title": "B", "ingredients": ["2 cloves garlic"]},
        ]

        items = aggregate_ingredients(recipes)

        assert [item.quantity for item in items] == ["2-3", "2"]

    def test_oversized_quantities_stay_separate(self):
        huge = "9" * 308
        recipes = [
            {"id": "a", "title": "A", "ingredients": ["1" * 400 + "/1 cups flour", "1 cup flour"]},
            {"id": "b", "title": "B", "ingredients": [f"{huge} cups sugar", f"{huge} cups sugar"]},
        ]

        items = aggregate_ingredients(recipes)

        assert [item.name for item in items] == ["flour", "flour", "sugar", "sugar"]
        assert items[1].quantity == "1"
        assert items[2].quantity == huge

    def test_no_amount_is_lost(self):
        recipes = [
            {"id": "a", "title": "A", "ingredients": ["1 cup milk", "1 tbsp butter"]},
            {"id": "b", "title": "B", "ingredients": ["2 cups whole milk", "pepper"]},
            {"id": "c", "title": "C", "ingredients": ["1/2 cup milk", "1 onion"]},
        ]

        items = aggregate_ingredients(recipes)

        milk = items[0]
        assert milk.quantity == "3 1/2"
        assert milk.source_recipe_ids == ["a", "b", "c"]
        assert [item.name for item in items] == ["milk", "butter", "pepper", "onion"]

    def test_preserves_first_encounter_order(self):
        recipes = [
            {"id": "a", "title": "A", "ingredients": ["1 onion", "2 cups rice"]},
            {"id": "b", "title": "B", "ingredients": ["1 cup beans", "1 cup rice", "1 onion"]},
        ]

        items = aggregate_ingredients(recipes)

        assert [item.name for item in items] == ["onion", "rice", "beans"]

    def test_does_not_mutate_input(self, pancake_recipe, cake_recipe):
        before = [dict(pancake_recipe), dict(cake_recipe)]

        aggregate_ingredients([pancake_recipe, cake_recipe])

        assert [pancake_recipe, cake_recipe] == before

    def test_item_to_dict(self, pancake_recipe):
        item = aggregate_ingredients([pancake_recipe])[0]

        assert isinstance(item, AggregatedShoppingItem)
        assert item.to_dict() == {
            "quantity": "2",
            "unit": "cups",
            "name": "flour",
            "original": "2 cups flour",
            "source_recipe_ids": ["recipe1"],
            "source_recipe_names": ["Pasta Recipe"],
        }
