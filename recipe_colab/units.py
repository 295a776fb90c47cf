"""Recipe unit vocabulary and spelling normalization.

Units are only ever compared, never converted: "cups" and "c" are the same
unit as "cup", but "cup" and "tablespoon" stay different.
"""

# Canonical unit -> spellings used in recipes
UNIT_ALIASES: dict[str, tuple[str, ...]] = {
    # Volume
    "cup": ("cup", "cups", "c"),
    "tablespoon": ("tablespoon", "tablespoons", "tbsp", "tbs", "tb"),
    "teaspoon": ("teaspoon", "teaspoons", "tsp", "ts"),
    "milliliter": ("milliliter", "milliliters", "millilitre", "millilitres", "ml"),
    "deciliter": ("deciliter", "deciliters", "dl"),
    "liter": ("liter", "liters", "litre", "litres", "l"),
    "pint": ("pint", "pints", "pt"),
    "quart": ("quart", "quarts", "qt"),
    "gallon": ("gallon", "gallons", "gal"),
    # Weight
    "gram": ("gram", "grams", "g"),
    "kilogram": ("kilogram", "kilograms", "kg"),
    "ounce": ("ounce", "ounces", "oz"),
    "pound": ("pound", "pounds", "lb", "lbs"),
    # Count and small measures
    "pinch": ("pinch", "pinches"),
    "dash": ("dash", "dashes"),
    "piece": ("piece", "pieces", "pcs"),
    "clove": ("clove", "cloves"),
    "slice": ("slice", "slices"),
    "bunch": ("bunch", "bunches"),
    "can": ("can", "cans"),
    "jar": ("jar", "jars"),
    "package": ("package", "packages", "pkg"),
    "bag": ("bag", "bags"),
    "bottle": ("bottle", "bottles"),
    "head": ("head", "heads"),
    "stalk": ("stalk", "stalks"),
    "stick": ("stick", "sticks"),
    "sprig": ("sprig", "sprigs"),
    "handful": ("handful", "handfuls"),
}

# Reverse mapping for lookup
UNIT_LOOKUP: dict[str, str] = {
    alias: canonical for canonical, aliases in UNIT_ALIASES.items() for alias in aliases
}

# Every word accepted as a unit
UNITS = frozenset(UNIT_LOOKUP)


def is_unit(word: str) -> bool:
    """Check if a word is a known recipe unit."""
    return word.lower().strip() in UNITS


def normalize_unit(unit: str | None) -> str:
    """
    Map a unit spelling to its canonical name.

    Unknown units are returned lowercased and stripped; "" stays "".

    Examples:
        "cups" -> "cup"
        "Tbsp" -> "tablespoon"
        "large" -> "large"
    """
    if not unit:
        return ""

    unit_lower = unit.lower().strip()
    return UNIT_LOOKUP.get(unit_lower, unit_lower)


def same_unit(unit1: str | None, unit2: str | None) -> bool:
    """Check if two unit spellings denote the same unit."""
    return normalize_unit(unit1) == normalize_unit(unit2)
