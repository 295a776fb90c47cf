"""Recipe Colab - recipes and shopping lists built from their ingredients."""

__version__ = "1.0.0"

from .aggregator import AggregatedShoppingItem, SourceTaggedIngredient, aggregate_ingredients
from .equivalence import are_ingredients_same, normalize_ingredient_name
from .ingredient_parser import ParsedIngredient, parse_ingredient
from .quantities import combine_quantities
from .recipes import Recipe, RecipeError, RecipeValidationError
from .shopping_lists import ShoppingList, ShoppingListError, ShoppingListItem, build_shopping_list

__all__ = [
    "ParsedIngredient",
    "parse_ingredient",
    "normalize_ingredient_name",
    "are_ingredients_same",
    "combine_quantities",
    "SourceTaggedIngredient",
    "AggregatedShoppingItem",
    "aggregate_ingredients",
    "Recipe",
    "RecipeError",
    "RecipeValidationError",
    "ShoppingList",
    "ShoppingListItem",
    "ShoppingListError",
    "build_shopping_list",
]
