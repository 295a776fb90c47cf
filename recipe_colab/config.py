"""Configuration and data file locations for Recipe Colab."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# App directories
APP_NAME = "recipe-colab"
DATA_DIR = Path(os.getenv("RECIPE_COLAB_HOME") or Path.home() / f".{APP_NAME}")
RECIPES_FILE = DATA_DIR / "recipes.json"
SHOPPING_LISTS_FILE = DATA_DIR / "shopping_lists.json"

# Ensure data directory exists
DATA_DIR.mkdir(parents=True, exist_ok=True)

# Recipe form limits
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
MAX_INGREDIENTS = 50
MIN_INGREDIENT_LENGTH = 3

DEFAULT_LOG_LEVEL = "WARNING"


def get_log_level() -> str:
    """Get the log level from the environment."""
    return os.getenv("RECIPE_COLAB_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
