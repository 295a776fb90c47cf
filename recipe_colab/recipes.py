"""Recipe model, validation and local storage."""

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from rapidfuzz import fuzz

from .config import (
    MAX_INGREDIENTS,
    MIN_INGREDIENT_LENGTH,
    RECIPES_FILE,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)

logger = logging.getLogger(__name__)

# Minimum fuzzy score for a title to count as a search hit
FIND_SCORE_THRESHOLD = 60


class RecipeError(Exception):
    """Exception raised for recipe storage errors."""

    pass


class RecipeValidationError(RecipeError):
    """Raised when recipe fields fail validation."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(errors.values()))


@dataclass
class Recipe:
    """A user recipe with free-text ingredient lines."""

    id: str
    title: str
    ingredients: list[str] = field(default_factory=list)
    instructions: str = ""
    category: str | None = None
    servings: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert recipe to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "ingredients": list(self.ingredients),
            "instructions": self.instructions,
            "category": self.category,
            "servings": self.servings,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        """Create recipe from dictionary."""
        ingredients = data.get("ingredients")
        return cls(
            id=data["id"],
            title=data["title"],
            ingredients=list(ingredients) if isinstance(ingredients, list) else [],
            instructions=data.get("instructions", ""),
            category=data.get("category"),
            servings=data.get("servings"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


def validate_recipe(title: str, ingredients: list[str]) -> dict[str, str]:
    """
    Check recipe fields against the form rules.

    Args:
        title: Recipe title
        ingredients: Ingredient lines

    Returns:
        Mapping of field name to error message; empty when valid
    """
    errors: dict[str, str] = {}

    title = (title or "").strip()
    if not title:
        errors["title"] = "Recipe title is required"
    elif len(title) < TITLE_MIN_LENGTH:
        errors["title"] = f"Title must be at least {TITLE_MIN_LENGTH} characters"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Title must be less than {TITLE_MAX_LENGTH} characters"

    lines = [line.strip() for line in ingredients if line and line.strip()]
    if not lines:
        errors["ingredients"] = "At least one ingredient is required"
    elif len(lines) > MAX_INGREDIENTS:
        errors["ingredients"] = f"Maximum {MAX_INGREDIENTS} ingredients allowed"
    elif any(len(line) < MIN_INGREDIENT_LENGTH for line in lines):
        errors["ingredients"] = (
            "Some ingredients seem too short. "
            'Consider adding quantities (e.g., "1 cup flour")'
        )

    return errors


def _load_recipes() -> dict[str, Any]:
    """Load recipes from disk."""
    if not RECIPES_FILE.exists():
        return {}

    try:
        with open(RECIPES_FILE, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RecipeError(f"Failed to load recipes: {e}") from e


def _save_recipes(recipes: dict[str, Any]) -> None:
    """Save recipes to disk."""
    try:
        with open(RECIPES_FILE, "w", encoding="utf-8") as f:
            json.dump(recipes, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise RecipeError(f"Failed to save recipes: {e}") from e


def create_recipe(
    title: str,
    ingredients: list[str],
    instructions: str = "",
    category: str | None = None,
    servings: int | None = None,
) -> Recipe:
    """
    Validate and store a new recipe.

    Raises:
        RecipeValidationError: If the title or ingredients are invalid
    """
    errors = validate_recipe(title, ingredients)
    if errors:
        raise RecipeValidationError(errors)

    now = datetime.now().isoformat()
    recipe = Recipe(
        id=str(uuid.uuid4()),
        title=title.strip(),
        ingredients=[line.strip() for line in ingredients if line and line.strip()],
        instructions=instructions.strip(),
        category=category,
        servings=servings,
        created_at=now,
        updated_at=now,
    )

    recipes = _load_recipes()
    recipes[recipe.id] = recipe.to_dict()
    _save_recipes(recipes)

    logger.info("Created recipe %s (%s)", recipe.id, recipe.title)
    return recipe


def get_recipe(recipe_id: str) -> Recipe:
    """
    Get a recipe by id.

    Raises:
        RecipeError: If the recipe is not found
    """
    recipes = _load_recipes()

    if recipe_id not in recipes:
        raise RecipeError(f"Recipe '{recipe_id}' not found")

    return Recipe.from_dict(recipes[recipe_id])


def list_recipes() -> list[Recipe]:
    """List all stored recipes sorted by title."""
    recipes = [Recipe.from_dict(data) for data in _load_recipes().values()]
    return sorted(recipes, key=lambda r: r.title.lower())


def update_recipe(recipe_id: str, **fields: Any) -> Recipe:
    """
    Update fields of a stored recipe.

    Title and ingredient changes are validated like new recipes.

    Raises:
        RecipeError: If the recipe is not found or a field is unknown
        RecipeValidationError: If the updated recipe is invalid
    """
    recipes = _load_recipes()

    if recipe_id not in recipes:
        raise RecipeError(f"Recipe '{recipe_id}' not found")

    data = dict(recipes[recipe_id])
    allowed = {"title", "ingredients", "instructions", "category", "servings"}
    unknown = set(fields) - allowed
    if unknown:
        raise RecipeError(f"Unknown recipe field(s): {', '.join(sorted(unknown))}")

    data.update(fields)

    errors = validate_recipe(data["title"], data.get("ingredients") or [])
    if errors:
        raise RecipeValidationError(errors)

    data["title"] = data["title"].strip()
    data["ingredients"] = [line.strip() for line in data["ingredients"] if line and line.strip()]
    data["updated_at"] = datetime.now().isoformat()

    recipes[recipe_id] = data
    _save_recipes(recipes)

    logger.info("Updated recipe %s", recipe_id)
    return Recipe.from_dict(data)


def delete_recipe(recipe_id: str) -> None:
    """
    Delete a recipe.

    Raises:
        RecipeError: If the recipe is not found
    """
    recipes = _load_recipes()

    if recipe_id not in recipes:
        raise RecipeError(f"Recipe '{recipe_id}' not found")

    del recipes[recipe_id]
    _save_recipes(recipes)
    logger.info("Deleted recipe %s", recipe_id)


def find_recipes(query: str, limit: int = 5) -> list[Recipe]:
    """
    Find recipes whose title resembles the query.

    Args:
        query: Search text (typos and partial titles are fine)
        limit: Maximum number of results

    Returns:
        Matching recipes, best match first
    """
    query = query.lower().strip()
    if not query:
        return []

    scored = []
    for recipe in list_recipes():
        score = fuzz.WRatio(query, recipe.title.lower())
        if score >= FIND_SCORE_THRESHOLD:
            scored.append((score, recipe))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [recipe for _, recipe in scored[:limit]]
