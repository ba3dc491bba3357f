"""
Recipe loader — reads termdrop.yml into a GenerationRecipe.

A recipe stores the arguments of a ``termdrop generate`` call so an app
can be regenerated (after changing the command, say) without retyping
them. It reads YAML and validates it against the pydantic schema.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from termdrop.core.errors import ConfigError
from termdrop.core.models.recipe import GenerationRecipe

logger = logging.getLogger(__name__)

# Default recipe filename
RECIPE_FILE = "termdrop.yml"


def find_recipe_file(start_dir: Path | None = None) -> Path | None:
    """Search for termdrop.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to termdrop.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / RECIPE_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_recipe(path: Path) -> GenerationRecipe:
    """Load and validate a generation recipe.

    Relative ``output``, ``icon`` and ``shim_path`` entries are resolved
    against the recipe's directory.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Recipe file not found: {path}")

    logger.debug("Loading recipe from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        recipe = GenerationRecipe.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid recipe: {e}") from e

    base = path.parent.resolve()
    updates = {}
    for key in ("output", "icon", "shim_path"):
        value = getattr(recipe, key)
        if value:
            updates[key] = str(base / Path(value).expanduser())
    if updates:
        recipe = recipe.model_copy(update=updates)

    logger.info("Loaded recipe %s (command=%r)", path, recipe.command)
    return recipe
