"""Ingredient name normalization and equivalence for aggregation."""

import re
from collections.abc import Mapping
from typing import Any

# Base term -> textual variants that denote the same shopping item.
# Matching is exact on normalized names; extend by adding entries here.
INGREDIENT_VARIATIONS: dict[str, frozenset[str]] = {
    "flour": frozenset({"all purpose flour", "plain flour", "wheat flour"}),
    "sugar": frozenset({"granulated sugar", "white sugar"}),
    "salt": frozenset({"table salt", "kosher salt"}),
    "pepper": frozenset({"black pepper", "ground pepper"}),
    "oil": frozenset({"olive oil", "vegetable oil", "cooking oil"}),
    "butter": frozenset({"unsalted butter", "salted butter"}),
    "milk": frozenset({"whole milk", "skim milk", "2 milk"}),
    "eggs": frozenset({"egg", "large eggs", "medium eggs"}),
    "onion": frozenset({"yellow onion", "white onion", "red onion"}),
    "garlic": frozenset({"garlic cloves", "minced garlic"}),
    "tomato": frozenset({"tomatoes", "tomato sauce", "tomato paste"}),
    "cheese": frozenset({"cheddar cheese", "parmesan cheese", "mozzarella cheese"}),
}

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_ingredient_name(name: Any) -> str:
    """
    Normalize an ingredient name for matching.

    Lowercases, removes punctuation, and collapses whitespace.
    Idempotent; returns "" for empty or non-string input.
    """
    if not name or not isinstance(name, str):
        return ""

    name = _NON_WORD_RE.sub("", name.lower())
    return _WHITESPACE_RE.sub(" ", name).strip()


def _name_of(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("name")
    return getattr(item, "name", None)


def are_ingredients_same(item1: Any, item2: Any) -> bool:
    """
    Check if two ingredients denote the same shopping item.

    Items may be mappings with a "name" key or objects with a ``name``
    attribute. Names match when they normalize to the same text, or when
    both are the base term or a known variant of the same base term.
    """
    name1 = normalize_ingredient_name(_name_of(item1))
    name2 = normalize_ingredient_name(_name_of(item2))

    if name1 == name2:
        return True

    for base, variants in INGREDIENT_VARIATIONS.items():
        if (name1 == base or name1 in variants) and (name2 == base or name2 in variants):
            return True

    return False
