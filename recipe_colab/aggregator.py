"""Aggregate ingredients from several recipes into shopping list entries."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .equivalence import are_ingredients_same
from .ingredient_parser import ParsedIngredient, parse_ingredient
from .quantities import combine_quantities
from .units import same_unit

logger = logging.getLogger(__name__)


@dataclass
class SourceTaggedIngredient(ParsedIngredient):
    """A parsed ingredient line tagged with the recipe it came from."""

    source_recipe_id: str = ""
    source_recipe_name: str = ""


@dataclass
class AggregatedShoppingItem(ParsedIngredient):
    """A shopping list entry merged from one or more recipe lines."""

    source_recipe_ids: list[str] = field(default_factory=list)
    source_recipe_names: list[str] = field(default_factory=list)

    @classmethod
    def from_tagged(cls, item: SourceTaggedIngredient) -> "AggregatedShoppingItem":
        return cls(
            quantity=item.quantity,
            unit=item.unit,
            name=item.name,
            original=item.original,
            source_recipe_ids=[item.source_recipe_id],
            source_recipe_names=[item.source_recipe_name],
        )


def get_recipe_field(recipe: Any, key: str) -> Any:
    """Read a field from a recipe mapping or recipe object."""
    if isinstance(recipe, Mapping):
        return recipe.get(key)
    return getattr(recipe, key, None)


def tag_recipe_ingredients(recipes: Iterable[Any]) -> list[SourceTaggedIngredient]:
    """
    Parse every ingredient line of every recipe and tag it with its source.

    Recipes may be mappings or objects exposing ``id``, ``title`` and
    ``ingredients``. A recipe whose ingredients are missing or not a list
    contributes nothing.

    Returns:
        Tagged ingredients in recipe order, then line order
    """
    tagged: list[SourceTaggedIngredient] = []

    for recipe in recipes:
        recipe_id = get_recipe_field(recipe, "id")
        title = get_recipe_field(recipe, "title")
        ingredients = get_recipe_field(recipe, "ingredients")

        if not isinstance(ingredients, (list, tuple)):
            logger.debug(
                "Skipping recipe %r: ingredients is %s", recipe_id, type(ingredients).__name__
            )
            continue

        for line in ingredients:
            parsed = parse_ingredient(line)
            tagged.append(
                SourceTaggedIngredient(
                    quantity=parsed.quantity,
                    unit=parsed.unit,
                    name=parsed.name,
                    original=parsed.original,
                    source_recipe_id=recipe_id,
                    source_recipe_name=title,
                )
            )

    return tagged


def _find_matching_item(
    items: list[AggregatedShoppingItem], item: SourceTaggedIngredient
) -> AggregatedShoppingItem | None:
    for existing in items:
        if are_ingredients_same(existing, item) and same_unit(existing.unit, item.unit):
            return existing
    return None


def aggregate_ingredients(recipes: Iterable[Any]) -> list[AggregatedShoppingItem]:
    """
    Aggregate ingredients from multiple recipes into shopping list items.

    Lines naming the same item with the same unit ("cup" and "cups" count as
    one unit) are merged and their quantities summed. Different units are
    never converted. When quantities cannot be
    summed (empty, ranges, free text) the line is kept as a separate entry
    rather than dropping an amount.

    Args:
        recipes: Recipe mappings or objects with id, title and ingredients

    Returns:
        Aggregated items in order of first appearance
    """
    aggregated: list[AggregatedShoppingItem] = []

    for item in tag_recipe_ingredients(recipes):
        existing = _find_matching_item(aggregated, item)

        if existing is not None:
            combined = combine_quantities(existing.quantity, item.quantity)
            if combined is not None:
                logger.debug(
                    "Merged %r into %r: %s + %s = %s",
                    item.original,
                    existing.name,
                    existing.quantity,
                    item.quantity,
                    combined,
                )
                existing.quantity = combined
                existing.source_recipe_ids.append(item.source_recipe_id)
                existing.source_recipe_names.append(item.source_recipe_name)
                continue

            logger.debug(
                "Cannot combine %r with %r, keeping separate entry",
                item.quantity,
                existing.quantity,
            )

        aggregated.append(AggregatedShoppingItem.from_tagged(item))

    return aggregated
