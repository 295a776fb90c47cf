"""Shopping list export to files.

Supported formats are json, md (Markdown task list), txt (the sharing text)
and pdf. PDF export needs the optional reportlab dependency.
"""

import json
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from .shopping_lists import ShoppingList, ShoppingListItem, format_list_for_sharing

# File extension -> format used when none is given
EXTENSION_FORMATS = {
    ".json": "json",
    ".md": "md",
    ".markdown": "md",
    ".txt": "txt",
    ".pdf": "pdf",
}

FORMAT_ALIASES = {"markdown": "md", "text": "txt"}

DEFAULT_FORMAT = "md"


def _item_label(item: ShoppingListItem) -> str:
    parts = [part for part in (item.quantity, item.unit) if part]
    amount = " ".join(parts)
    return f"{amount} {item.name}" if amount else item.name


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M")


def export_to_json(shopping_list: ShoppingList, filepath: str | Path) -> None:
    """Write the list, its items and a checked/remaining summary as JSON."""
    remaining = shopping_list.total_count - shopping_list.checked_count
    payload = {
        "exported_at": datetime.now().isoformat(),
        "name": shopping_list.name,
        "recipes": [dict(recipe) for recipe in shopping_list.recipes],
        "items": [
            {
                "name": item.name,
                "quantity": item.quantity,
                "unit": item.unit,
                "checked": item.checked,
                "source_recipe_names": list(item.source_recipe_names),
                "is_custom": item.is_custom,
            }
            for item in shopping_list.items
        ],
        "summary": {
            "total_items": shopping_list.total_count,
            "checked": shopping_list.checked_count,
            "remaining": remaining,
        },
    }

    Path(filepath).write_text(
        json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
    )


def export_to_markdown(shopping_list: ShoppingList, filepath: str | Path) -> None:
    """
    Write the list as a Markdown task list.

    Each item is a checkbox line; the recipes it came from are nested
    underneath.
    """
    out = [f"# {shopping_list.name}", "", f"*Generated: {_timestamp()}*", ""]

    if shopping_list.recipes:
        out += ["## Recipes", ""]
        out += [f"- {recipe.get('recipe_name')}" for recipe in shopping_list.recipes]
        out.append("")

    out += ["## Items", ""]
    for item in shopping_list.items:
        mark = "x" if item.checked else " "
        out.append(f"- [{mark}] **{_item_label(item)}**")
        if item.source_recipe_names:
            out.append(f"  - From: {', '.join(item.source_recipe_names)}")

    out += [
        "",
        f"*Progress: {shopping_list.checked_count} of {shopping_list.total_count} items "
        f"({shopping_list.progress}%)*",
        "",
    ]

    Path(filepath).write_text("\n".join(out), encoding="utf-8")


def export_to_text(shopping_list: ShoppingList, filepath: str | Path) -> None:
    """Write the plain sharing text."""
    Path(filepath).write_text(format_list_for_sharing(shopping_list), encoding="utf-8")


def export_to_pdf(shopping_list: ShoppingList, filepath: str | Path) -> None:
    """
    Write a printable PDF with "To buy" and "Purchased" sections.

    Requires reportlab package.
    """
    try:
        from reportlab.lib import colors  # type: ignore[import-untyped]
        from reportlab.lib.pagesizes import A4  # type: ignore[import-untyped]
        from reportlab.lib.styles import getSampleStyleSheet  # type: ignore[import-untyped]
        from reportlab.lib.units import cm  # type: ignore[import-untyped]
        from reportlab.platypus import (  # type: ignore[import-untyped]
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError as e:
        raise ImportError(
            "PDF export requires reportlab. Install with: pip install 'recipe-colab[pdf]'"
        ) from e

    styles = getSampleStyleSheet()
    story: list[Any] = [
        Paragraph(shopping_list.name, styles["Title"]),
        Paragraph(
            f"{_timestamp()} · {shopping_list.checked_count} of "
            f"{shopping_list.total_count} items purchased",
            styles["Italic"],
        ),
        Spacer(1, 0.5 * cm),
    ]

    sections = [
        ("To buy", [item for item in shopping_list.items if not item.checked]),
        ("Purchased", [item for item in shopping_list.items if item.checked]),
    ]
    for heading, items in sections:
        if not items:
            continue

        rows = [["Item", "Recipes"]]
        rows += [
            [_item_label(item), ", ".join(item.source_recipe_names) or "-"] for item in items
        ]

        table = Table(rows, colWidths=[9 * cm, 8 * cm], repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("LINEBELOW", (0, 0), (-1, 0), 1, colors.black),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ]
            )
        )

        story += [Paragraph(heading, styles["Heading2"]), table, Spacer(1, 0.5 * cm)]

    doc = SimpleDocTemplate(
        str(filepath),
        pagesize=A4,
        title=shopping_list.name,
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
    )
    doc.build(story)


EXPORTERS: dict[str, Callable[[ShoppingList, str | Path], None]] = {
    "json": export_to_json,
    "md": export_to_markdown,
    "txt": export_to_text,
    "pdf": export_to_pdf,
}


def export_shopping_list(
    shopping_list: ShoppingList,
    filepath: str | Path,
    *,
    format: str | None = None,
) -> str:
    """
    Export a shopping list, picking the format from the file extension
    unless one is given.

    Args:
        shopping_list: The list to export
        filepath: Output file path
        format: json, md, txt or pdf ("markdown" and "text" also accepted)

    Returns:
        The canonical format name that was written

    Raises:
        ValueError: If the format is not supported
    """
    if format is None:
        format = EXTENSION_FORMATS.get(Path(filepath).suffix.lower(), DEFAULT_FORMAT)

    fmt = FORMAT_ALIASES.get(format, format)
    exporter = EXPORTERS.get(fmt)
    if exporter is None:
        raise ValueError(f"Unsupported format: {format}")

    exporter(shopping_list, filepath)
    return fmt
