"""Quantity math for merging shopping list entries.

This is the only module that reads a quantity as a number. Everywhere else a
quantity is an opaque display string. The arithmetic is kitchen-precision:
sums are rendered back as whole numbers, common fractions, or one decimal.
"""

import math

# Fractional remainder (rounded to 2 places) -> display fraction
COMMON_FRACTIONS: dict[float, str] = {
    0.25: "1/4",
    0.5: "1/2",
    0.75: "3/4",
    0.33: "1/3",
    0.67: "2/3",
}


def _parse_fraction(text: str) -> float:
    numerator, denominator = text.split("/")
    return int(numerator) / int(denominator)


def parse_quantity_value(text: str | None) -> float | None:
    """
    Parse a quantity string into a number.

    Handles plain numbers ("2", "1.5"), simple fractions ("1/2") and mixed
    numbers ("1 1/2"). Ranges and free text are not numbers.

    Returns:
        The value, or None if the text is empty or not parseable
    """
    if not text or not isinstance(text, str):
        return None

    text = text.strip()

    try:
        if "/" in text:
            parts = text.split()
            if len(parts) == 2:
                value = int(parts[0]) + _parse_fraction(parts[1])
            else:
                value = _parse_fraction(text)
        else:
            value = float(text)
    except (ValueError, ZeroDivisionError, OverflowError):
        return None

    if not math.isfinite(value):
        return None

    return value


def format_quantity(value: float) -> str:
    """
    Render a number as a kitchen quantity.

    Examples:
        3.0 -> "3"
        1.5 -> "1 1/2"
        0.75 -> "3/4"
        2.3 -> "2.3"
    """
    if value < 0:
        return f"-{format_quantity(-value)}"

    if value == math.floor(value):
        return str(int(value))

    whole = math.floor(value)
    remainder = round(value - whole, 2)

    fraction = COMMON_FRACTIONS.get(remainder)
    if fraction:
        return f"{whole} {fraction}" if whole > 0 else fraction

    return f"{value:.1f}"


def combine_quantities(quantity1: str | None, quantity2: str | None) -> str | None:
    """
    Add two quantity strings.

    Args:
        quantity1: First quantity (e.g., "1")
        quantity2: Second quantity (e.g., "1/2")

    Returns:
        Combined quantity (e.g., "1 1/2"), or None if either side is empty or
        not a number, or the sum overflows, which means the entries cannot be
        merged
    """
    value1 = parse_quantity_value(quantity1)
    value2 = parse_quantity_value(quantity2)

    if value1 is None or value2 is None:
        return None

    total = value1 + value2
    if not math.isfinite(total):
        return None

    return format_quantity(total)
