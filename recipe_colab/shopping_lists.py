"""Shopping lists built from aggregated recipe ingredients."""

import json
import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .aggregator import aggregate_ingredients, get_recipe_field
from .config import SHOPPING_LISTS_FILE

logger = logging.getLogger(__name__)


class ShoppingListError(Exception):
    """Exception raised for shopping list errors."""

    pass


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class ShoppingListItem:
    """One line on a stored shopping list."""

    id: str
    name: str
    quantity: str = ""
    unit: str = ""
    checked: bool = False
    source_recipe_ids: list[str] = field(default_factory=list)
    source_recipe_names: list[str] = field(default_factory=list)
    is_custom: bool = False

    def __str__(self) -> str:
        parts = [part for part in (self.quantity, self.unit, self.name) if part]
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "checked": self.checked,
            "source_recipe_ids": list(self.source_recipe_ids),
            "source_recipe_names": list(self.source_recipe_names),
            "is_custom": self.is_custom,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShoppingListItem":
        return cls(
            id=data["id"],
            name=data["name"],
            quantity=data.get("quantity", ""),
            unit=data.get("unit", ""),
            checked=data.get("checked", False),
            source_recipe_ids=list(data.get("source_recipe_ids", [])),
            source_recipe_names=list(data.get("source_recipe_names", [])),
            is_custom=data.get("is_custom", False),
        )


@dataclass
class ShoppingList:
    """A named shopping list and the recipes it was built from."""

    id: str
    name: str
    items: list[ShoppingListItem] = field(default_factory=list)
    recipes: list[dict[str, str]] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.checked)

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def progress(self) -> int:
        """Percentage of items checked off."""
        if not self.items:
            return 0
        return round(self.checked_count / self.total_count * 100)

    def get_item(self, item_id: str) -> ShoppingListItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise ShoppingListError(f"Item '{item_id}' not found in list '{self.name}'")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "items": [item.to_dict() for item in self.items],
            "recipes": [dict(r) for r in self.recipes],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShoppingList":
        return cls(
            id=data["id"],
            name=data["name"],
            items=[ShoppingListItem.from_dict(item) for item in data.get("items", [])],
            recipes=[dict(r) for r in data.get("recipes", [])],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


def build_shopping_list(name: str, recipes: Iterable[Any]) -> ShoppingList:
    """
    Build a shopping list from recipes without storing it.

    Ingredients are aggregated across recipes and each resulting entry gets
    its own id.

    Args:
        name: List name
        recipes: Recipe mappings or objects with id, title and ingredients

    Raises:
        ShoppingListError: If the name is blank
    """
    name = (name or "").strip()
    if not name:
        raise ShoppingListError("Shopping list name is required")

    recipes = list(recipes)
    items = [
        ShoppingListItem(
            id=_new_id(),
            name=entry.name,
            quantity=entry.quantity,
            unit=entry.unit,
            source_recipe_ids=list(entry.source_recipe_ids),
            source_recipe_names=list(entry.source_recipe_names),
        )
        for entry in aggregate_ingredients(recipes)
    ]

    now = datetime.now().isoformat()
    return ShoppingList(
        id=_new_id(),
        name=name,
        items=items,
        recipes=[
            {
                "recipe_id": get_recipe_field(recipe, "id"),
                "recipe_name": get_recipe_field(recipe, "title"),
            }
            for recipe in recipes
        ],
        created_at=now,
        updated_at=now,
    )


def _load_lists() -> dict[str, Any]:
    """Load shopping lists from disk."""
    if not SHOPPING_LISTS_FILE.exists():
        return {}

    try:
        with open(SHOPPING_LISTS_FILE, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ShoppingListError(f"Failed to load shopping lists: {e}") from e


def _save_lists(lists: dict[str, Any]) -> None:
    """Save shopping lists to disk."""
    try:
        with open(SHOPPING_LISTS_FILE, "w", encoding="utf-8") as f:
            json.dump(lists, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ShoppingListError(f"Failed to save shopping lists: {e}") from e


def save_shopping_list(shopping_list: ShoppingList) -> None:
    """Store a shopping list, replacing any list with the same id."""
    lists = _load_lists()
    lists[shopping_list.id] = shopping_list.to_dict()
    _save_lists(lists)


def create_shopping_list(name: str, recipes: Iterable[Any]) -> ShoppingList:
    """Build a shopping list from recipes and store it."""
    shopping_list = build_shopping_list(name, recipes)
    save_shopping_list(shopping_list)

    logger.info(
        "Created shopping list %s (%s) with %d items",
        shopping_list.id,
        shopping_list.name,
        shopping_list.total_count,
    )
    return shopping_list


def get_shopping_list(list_id: str) -> ShoppingList:
    """
    Get a shopping list by id.

    Raises:
        ShoppingListError: If the list is not found
    """
    lists = _load_lists()

    if list_id not in lists:
        raise ShoppingListError(f"Shopping list '{list_id}' not found")

    return ShoppingList.from_dict(lists[list_id])


def list_shopping_lists() -> list[ShoppingList]:
    """List all stored shopping lists, newest first."""
    lists = [ShoppingList.from_dict(data) for data in _load_lists().values()]
    return sorted(lists, key=lambda sl: sl.created_at or "", reverse=True)


def delete_shopping_list(list_id: str) -> None:
    """
    Delete a shopping list.

    Raises:
        ShoppingListError: If the list is not found
    """
    lists = _load_lists()

    if list_id not in lists:
        raise ShoppingListError(f"Shopping list '{list_id}' not found")

    del lists[list_id]
    _save_lists(lists)
    logger.info("Deleted shopping list %s", list_id)


def touch_and_save(shopping_list: ShoppingList) -> ShoppingList:
    """Stamp the list as modified now and store it."""
    shopping_list.updated_at = datetime.now().isoformat()
    save_shopping_list(shopping_list)
    return shopping_list


def toggle_item(list_id: str, item_id: str) -> ShoppingListItem:
    """Flip the checked state of an item and store the list."""
    shopping_list = get_shopping_list(list_id)
    item = shopping_list.get_item(item_id)
    item.checked = not item.checked
    touch_and_save(shopping_list)
    return item


def add_item(list_id: str, name: str, quantity: str = "", unit: str = "") -> ShoppingListItem:
    """
    Add a custom item that did not come from a recipe.

    Raises:
        ShoppingListError: If the name is blank or the list is not found
    """
    name = (name or "").strip()
    if not name:
        raise ShoppingListError("Item name is required")

    shopping_list = get_shopping_list(list_id)
    item = ShoppingListItem(
        id=_new_id(),
        name=name,
        quantity=(quantity or "").strip(),
        unit=(unit or "").strip(),
        is_custom=True,
    )
    shopping_list.items.append(item)
    touch_and_save(shopping_list)

    logger.info("Added item %r to shopping list %s", name, list_id)
    return item


def update_item(
    list_id: str,
    item_id: str,
    name: str | None = None,
    quantity: str | None = None,
    unit: str | None = None,
) -> ShoppingListItem:
    """Edit the name, quantity or unit of an item. None leaves a field as is."""
    shopping_list = get_shopping_list(list_id)
    item = shopping_list.get_item(item_id)

    if name is not None:
        if not name.strip():
            raise ShoppingListError("Item name is required")
        item.name = name.strip()
    if quantity is not None:
        item.quantity = quantity.strip()
    if unit is not None:
        item.unit = unit.strip()

    touch_and_save(shopping_list)
    return item


def remove_item(list_id: str, item_id: str) -> None:
    """Remove an item from a shopping list."""
    shopping_list = get_shopping_list(list_id)
    item = shopping_list.get_item(item_id)
    shopping_list.items.remove(item)
    touch_and_save(shopping_list)


def _format_item_line(box: str, item: ShoppingListItem) -> str:
    quantity = f"{item.quantity} " if item.quantity else ""
    unit = f"{item.unit} " if item.unit else ""
    return f"{box} {quantity}{unit}{item.name}"


def format_list_for_sharing(shopping_list: ShoppingList) -> str:
    """Render a shopping list as plain text for copying or sending."""
    unchecked = [item for item in shopping_list.items if not item.checked]
    checked = [item for item in shopping_list.items if item.checked]

    lines = [shopping_list.name, ""]

    if unchecked:
        lines.append("To Buy:")
        lines.extend(_format_item_line("☐", item) for item in unchecked)

    if checked:
        if unchecked:
            lines.append("")
        lines.append("Purchased:")
        lines.extend(_format_item_line("☑", item) for item in checked)

    return "\n".join(lines) + "\n"
