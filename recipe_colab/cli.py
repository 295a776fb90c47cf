"""CLI entry point for Recipe Colab."""

import json
from pathlib import Path
from typing import NoReturn

import click

from . import __version__
from .aggregator import AggregatedShoppingItem, aggregate_ingredients
from .config import DATA_DIR
from .export import export_shopping_list
from .ingredient_parser import parse_ingredient, parse_ingredient_lines
from .logging_config import configure_logging
from .recipes import (
    Recipe,
    RecipeError,
    RecipeValidationError,
    create_recipe,
    delete_recipe,
    find_recipes,
    get_recipe,
    list_recipes,
)
from .shopping_lists import (
    ShoppingList,
    ShoppingListError,
    add_item,
    create_shopping_list,
    delete_shopping_list,
    format_list_for_sharing,
    get_shopping_list,
    list_shopping_lists,
    remove_item,
    toggle_item,
    touch_and_save,
)


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(f"✗ {message}", err=True)
    raise SystemExit(1)


def display_recipe(recipe: Recipe) -> None:
    """Display a stored recipe."""
    click.echo()
    click.echo("=" * 60)
    click.echo(f"RECIPE: {recipe.title}")
    click.echo("=" * 60)
    click.echo(f"ID: {recipe.id}")

    if recipe.category:
        click.echo(f"Category: {recipe.category}")
    if recipe.servings:
        click.echo(f"Servings: {recipe.servings}")

    click.echo("\nIngredients:")
    for i, line in enumerate(recipe.ingredients, 1):
        click.echo(f"  {i}. {line}")

    if recipe.instructions:
        click.echo("\nInstructions:")
        click.echo(recipe.instructions)

    click.echo()


def display_aggregated(items: list[AggregatedShoppingItem]) -> None:
    """Display aggregated shopping items with their source recipes."""
    click.echo()
    click.echo("SHOPPING ITEMS")
    click.echo("=" * 60)

    for i, item in enumerate(items, 1):
        click.echo(f"  {i}. {item}")
        click.echo(f"     from: {', '.join(str(n) for n in item.source_recipe_names)}")

    click.echo("-" * 60)
    click.echo(f"Total: {len(items)} items")
    click.echo()


def display_shopping_list(shopping_list: ShoppingList) -> None:
    """Display a shopping list with check state and item ids."""
    click.echo()
    click.echo("=" * 60)
    click.echo(f"SHOPPING LIST: {shopping_list.name}")
    click.echo("=" * 60)
    click.echo(f"ID: {shopping_list.id}")

    if shopping_list.recipes:
        names = ", ".join(str(r.get("recipe_name")) for r in shopping_list.recipes)
        click.echo(f"Recipes: {names}")

    click.echo()
    if not shopping_list.items:
        click.echo("  No items yet")
    for item in shopping_list.items:
        box = "☑" if item.checked else "☐"
        custom = " (custom)" if item.is_custom else ""
        click.echo(f"  {box} {item}{custom}  [{item.id}]")

    click.echo()
    click.echo(
        f"Progress: {shopping_list.checked_count} of {shopping_list.total_count} items "
        f"({shopping_list.progress}%)"
    )
    click.echo()


# ============================================================================
# Main CLI Group
# ============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="recipe-colab")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Recipe Colab - recipes and shopping lists.

    Store recipes, combine their ingredients into shopping lists,
    and check items off as you shop.
    """
    configure_logging("DEBUG" if verbose else None)


# ============================================================================
# Parsing Commands
# ============================================================================


@cli.command("parse")
@click.argument("lines", nargs=-1)
@click.option("--text", "-t", "input_text", help="Multi-line ingredient text")
def parse_cmd(lines: tuple[str, ...], input_text: str | None):
    """Show how ingredient lines are parsed.

    Examples:

    \b
        recipe-colab parse "2 cups flour" "3 large eggs"
        recipe-colab parse --text "1/2 teaspoon salt
        salt to taste"
    """
    all_lines = list(lines)
    if input_text:
        all_lines.extend(parse_ingredient_lines(input_text))

    if not all_lines:
        fail("Provide ingredient lines or use --text.")

    for line in all_lines:
        parsed = parse_ingredient(line)
        click.echo(
            f"{parsed.original!r}: quantity={parsed.quantity!r} "
            f"unit={parsed.unit!r} name={parsed.name!r}"
        )


@cli.command("aggregate")
@click.argument("recipe_ids", nargs=-1)
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with a list of recipes (id, title, ingredients)",
)
@click.option("--json", "as_json", is_flag=True, help="Print items as JSON")
def aggregate_cmd(recipe_ids: tuple[str, ...], file_path: str | None, as_json: bool):
    """Combine ingredients from several recipes.

    Examples:

    \b
        recipe-colab aggregate <recipe-id> <recipe-id>
        recipe-colab aggregate --file recipes.json --json
    """
    recipes: list = []

    try:
        recipes.extend(get_recipe(recipe_id) for recipe_id in recipe_ids)
    except RecipeError as e:
        fail(str(e))

    if file_path:
        try:
            data = json.loads(Path(file_path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            fail(f"Failed to read {file_path}: {e}")
        if not isinstance(data, list):
            fail(f"{file_path} must contain a JSON list of recipes")
        recipes.extend(data)

    if not recipes:
        fail("Provide recipe ids or --file.")

    items = aggregate_ingredients(recipes)

    if as_json:
        click.echo(json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False))
    else:
        display_aggregated(items)


# ============================================================================
# Recipe Commands
# ============================================================================


@cli.group()
def recipes():
    """Manage stored recipes."""
    pass


@recipes.command("add")
@click.option("--title", "-t", required=True, help="Recipe title")
@click.option("--ingredient", "-i", "ingredients", multiple=True, help="Ingredient line")
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Text file with one ingredient per line",
)
@click.option("--instructions", default="", help="Preparation instructions")
@click.option("--category", help="Recipe category")
@click.option("--servings", type=int, help="Number of servings")
def recipes_add(
    title: str,
    ingredients: tuple[str, ...],
    file_path: str | None,
    instructions: str,
    category: str | None,
    servings: int | None,
):
    """Add a recipe.

    Examples:

    \b
        recipe-colab recipes add -t "Pancakes" -i "2 cups flour" -i "3 large eggs"
        recipe-colab recipes add -t "Soup" --file soup.txt
    """
    lines = list(ingredients)
    if file_path:
        lines.extend(parse_ingredient_lines(Path(file_path).read_text(encoding="utf-8")))

    try:
        recipe = create_recipe(
            title, lines, instructions=instructions, category=category, servings=servings
        )
    except RecipeValidationError as e:
        for message in e.errors.values():
            click.echo(f"✗ {message}", err=True)
        raise SystemExit(1) from None
    except RecipeError as e:
        fail(str(e))

    click.echo(f"✓ Saved recipe '{recipe.title}' ({len(recipe.ingredients)} ingredients)")
    click.echo(f"  ID: {recipe.id}")


@recipes.command("list")
def recipes_list():
    """List stored recipes."""
    try:
        all_recipes = list_recipes()
    except RecipeError as e:
        fail(str(e))

    if not all_recipes:
        click.echo("No recipes yet.")
        click.echo("\nUse 'recipe-colab recipes add' to create one.")
        return

    click.echo()
    click.echo("RECIPES")
    click.echo("=" * 60)
    for recipe in all_recipes:
        click.echo(f"  {recipe.title} ({len(recipe.ingredients)} ingredients)")
        click.echo(f"    {recipe.id}")
    click.echo()
    click.echo(f"Data: {DATA_DIR}")


@recipes.command("show")
@click.argument("recipe_id")
def recipes_show(recipe_id: str):
    """Show a recipe."""
    try:
        display_recipe(get_recipe(recipe_id))
    except RecipeError as e:
        fail(str(e))


@recipes.command("delete")
@click.argument("recipe_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def recipes_delete(recipe_id: str, yes: bool):
    """Delete a recipe."""
    if not yes and not click.confirm(f"Delete recipe {recipe_id}?"):
        click.echo("Cancelled.")
        return

    try:
        delete_recipe(recipe_id)
    except RecipeError as e:
        fail(str(e))

    click.echo("✓ Recipe deleted")


@recipes.command("find")
@click.argument("query")
@click.option("--limit", "-l", default=5, help="Maximum results to show")
def recipes_find(query: str, limit: int):
    """Find recipes by title (typos are fine)."""
    try:
        found = find_recipes(query, limit=limit)
    except RecipeError as e:
        fail(str(e))

    if not found:
        click.echo("No matching recipes.")
        return

    for recipe in found:
        click.echo(f"  {recipe.title}")
        click.echo(f"    {recipe.id}")


# ============================================================================
# Shopping List Commands
# ============================================================================


@cli.group()
def lists():
    """Manage shopping lists."""
    pass


@lists.command("create")
@click.argument("name")
@click.argument("recipe_ids", nargs=-1, required=True)
def lists_create(name: str, recipe_ids: tuple[str, ...]):
    """Create a shopping list from stored recipes.

    Ingredients shared between recipes are combined into one item.

    Examples:

        recipe-colab lists create "Weekend" <recipe-id> <recipe-id>
    """
    try:
        selected = [get_recipe(recipe_id) for recipe_id in recipe_ids]
        shopping_list = create_shopping_list(name, selected)
    except (RecipeError, ShoppingListError) as e:
        fail(str(e))

    click.echo(f"✓ Created shopping list '{shopping_list.name}'")
    display_shopping_list(shopping_list)


@lists.command("list")
def lists_list():
    """List shopping lists."""
    try:
        all_lists = list_shopping_lists()
    except ShoppingListError as e:
        fail(str(e))

    if not all_lists:
        click.echo("No shopping lists yet.")
        return

    click.echo()
    click.echo("SHOPPING LISTS")
    click.echo("=" * 60)
    for shopping_list in all_lists:
        click.echo(
            f"  {shopping_list.name} "
            f"({shopping_list.checked_count}/{shopping_list.total_count} checked)"
        )
        click.echo(f"    {shopping_list.id}")
    click.echo()


@lists.command("show")
@click.argument("list_id")
def lists_show(list_id: str):
    """Show a shopping list."""
    try:
        display_shopping_list(get_shopping_list(list_id))
    except ShoppingListError as e:
        fail(str(e))


@lists.command("check")
@click.argument("list_id")
@click.argument("item_id", required=False)
def lists_check(list_id: str, item_id: str | None):
    """Check or uncheck items.

    With an ITEM_ID the item is toggled directly; without one an
    interactive checklist opens.
    """
    try:
        if item_id:
            item = toggle_item(list_id, item_id)
            state = "checked" if item.checked else "unchecked"
            click.echo(f"✓ {item.name} {state}")
            return

        from .tui import interactive_checklist

        result = interactive_checklist(get_shopping_list(list_id))
        if result.saved:
            touch_and_save(result.shopping_list)
            click.echo(
                f"✓ Saved: {result.shopping_list.checked_count} of "
                f"{result.shopping_list.total_count} items checked"
            )
        else:
            click.echo("Cancelled.")
    except ShoppingListError as e:
        fail(str(e))


@lists.command("add-item")
@click.argument("list_id")
@click.argument("name")
@click.option("--quantity", "-q", default="", help="Quantity (e.g., 2 or 1/2)")
@click.option("--unit", "-u", default="", help="Unit (e.g., cups)")
def lists_add_item(list_id: str, name: str, quantity: str, unit: str):
    """Add a custom item to a shopping list."""
    try:
        item = add_item(list_id, name, quantity=quantity, unit=unit)
    except ShoppingListError as e:
        fail(str(e))

    click.echo(f"✓ Added {item}")


@lists.command("remove-item")
@click.argument("list_id")
@click.argument("item_id")
def lists_remove_item(list_id: str, item_id: str):
    """Remove an item from a shopping list."""
    try:
        remove_item(list_id, item_id)
    except ShoppingListError as e:
        fail(str(e))

    click.echo("✓ Item removed")


@lists.command("delete")
@click.argument("list_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def lists_delete(list_id: str, yes: bool):
    """Delete a shopping list."""
    if not yes and not click.confirm(f"Delete shopping list {list_id}?"):
        click.echo("Cancelled.")
        return

    try:
        delete_shopping_list(list_id)
    except ShoppingListError as e:
        fail(str(e))

    click.echo("✓ Shopping list deleted")


@lists.command("share")
@click.argument("list_id")
def lists_share(list_id: str):
    """Print a shopping list as plain text for sharing."""
    try:
        click.echo(format_list_for_sharing(get_shopping_list(list_id)), nl=False)
    except ShoppingListError as e:
        fail(str(e))


@lists.command("export")
@click.argument("list_id")
@click.argument("output", type=click.Path())
@click.option(
    "--format", "-f", "fmt", type=click.Choice(["json", "md", "txt", "pdf"]), help="Output format"
)
def lists_export(list_id: str, output: str, fmt: str | None):
    """Export a shopping list to a file.

    Format is detected from the file extension unless --format is given.

    Examples:

    \b
        recipe-colab lists export <list-id> groceries.md
        recipe-colab lists export <list-id> groceries.pdf
    """
    try:
        used = export_shopping_list(get_shopping_list(list_id), output, format=fmt)
    except (ShoppingListError, ImportError) as e:
        fail(str(e))
    except OSError as e:
        fail(f"Failed to write {output}: {e}")

    click.echo(f"✓ Exported to {output} ({used})")


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
