"""Free-text ingredient line parsing."""

import re
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any

from .units import is_unit


@dataclass
class ParsedIngredient:
    """Structured decomposition of one ingredient line.

    Quantities are kept as text so ranges ("2-3") and fractions ("1/2")
    survive for display.
    """

    quantity: str
    unit: str
    name: str
    original: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        parts = [part for part in (self.quantity, self.unit, self.name) if part]
        return " ".join(parts) or self.original


# Integer, simple fraction, or a range of either ("2", "1/2", "2-3", "2 - 3")
QUANTITY_PATTERN = r"\d+(?:/\d+)?(?:\s*-\s*\d+(?:/\d+)?)?"

QUANTITY_UNIT_NAME_RE = re.compile(rf"^({QUANTITY_PATTERN})\s+(\w+)\s+(.+)$")
QUANTITY_NAME_RE = re.compile(r"^(\d+)\s+(.+)$")
NAME_ONLY_RE = re.compile(r"^(.+)$")

BULLET_RE = re.compile(r"^[\-\*•]\s*")


def _match_quantity_unit_name(text: str) -> ParsedIngredient | None:
    """'2 cups flour' -> quantity '2', unit 'cups', name 'flour'."""
    match = QUANTITY_UNIT_NAME_RE.match(text)
    if not match:
        return None

    unit = match.group(2).lower()
    if not is_unit(unit):
        return None

    return ParsedIngredient(
        quantity=match.group(1).strip(),
        unit=unit,
        name=match.group(3).strip(),
        original=text,
    )


def _match_quantity_name(text: str) -> ParsedIngredient | None:
    """'3 large eggs' -> quantity '3', no unit, name 'large eggs'."""
    match = QUANTITY_NAME_RE.match(text)
    if not match:
        return None

    return ParsedIngredient(
        quantity=match.group(1).strip(),
        unit="",
        name=match.group(2).strip(),
        original=text,
    )


def _match_name_only(text: str) -> ParsedIngredient | None:
    """'salt to taste' -> name only."""
    match = NAME_ONLY_RE.match(text)
    if not match:
        return None

    return ParsedIngredient(quantity="", unit="", name=match.group(1).strip(), original=text)


# Tried in order, first match wins. The patterns overlap, so order matters.
MATCHERS: list[Callable[[str], ParsedIngredient | None]] = [
    _match_quantity_unit_name,
    _match_quantity_name,
    _match_name_only,
]


def parse_ingredient(line: Any) -> ParsedIngredient:
    """
    Parse a single free-text ingredient line.

    Never raises: input without recognizable structure becomes a name-only
    record, and empty or non-string input becomes an all-empty record.

    Args:
        line: Raw ingredient text (e.g., "2 cups flour")

    Returns:
        ParsedIngredient with quantity, unit, name and the untouched original
    """
    if not line or not isinstance(line, str):
        return ParsedIngredient(quantity="", unit="", name="", original=str(line) if line else "")

    text = line.strip()

    for matcher in MATCHERS:
        parsed = matcher(text)
        if parsed is not None:
            parsed.original = line
            return parsed

    # Whitespace-only input
    return ParsedIngredient(quantity="", unit="", name=text, original=line)


def parse_ingredient_lines(text: str) -> list[str]:
    """
    Split multi-line ingredient input into clean ingredient lines.

    Blank lines are dropped and leading bullet markers removed.
    """
    lines = []

    for line in text.splitlines():
        line = BULLET_RE.sub("", line.strip()).strip()
        if line:
            lines.append(line)

    return lines
