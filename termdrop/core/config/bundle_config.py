"""
Bundle config persistence — ``Contents/Resources/config.json``.

The generator writes it once. The shim reads it at every launch and
refuses to start if it is missing or invalid.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from termdrop.core.errors import BundleIOError, ConfigError
from termdrop.core.models.config import Config

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def write_config(config: Config, resources: Path) -> Path:
    """Serialize *config* into the bundle's Resources directory.

    Raises:
        BundleIOError: If the file cannot be written.
    """
    path = resources / CONFIG_FILE_NAME
    try:
        path.write_text(config.model_dump_json(), encoding="utf-8")
    except OSError as e:
        raise BundleIOError(
            f"Error writing config to temporary directory '{path}': {e}", path,
        ) from e
    logger.debug("Wrote config to %s", path)
    return path


def load_config(path: Path) -> Config:
    """Load and validate a shim config file.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.info("Loaded config from %s: %r", path, config.command)
    return config


def bundle_config_path(executable: str | Path | None = None) -> Path:
    """Locate config.json for the running shim.

    The shim lives at ``<Name>.app/Contents/MacOS/<Name>``, so its
    Resources directory is ``../Resources`` relative to the executable.
    """
    exe = Path(executable if executable is not None else sys.argv[0])
    return exe.parent.parent / "Resources" / CONFIG_FILE_NAME
