"""
Command composer — (config, paths) → shell scripts for the terminal.

Every script starts by changing to the directory of the first path, so
the command runs "from where the files are". With
``GroupingPolicy.NONE`` each per-path script repeats that same prefix.
"""

from __future__ import annotations

import logging
import os
from pathlib import PurePosixPath

from termdrop.core.models.config import Config, GroupingPolicy
from termdrop.core.services.quoting import quote, quote_all

logger = logging.getLogger(__name__)


def cd_prefix(first_path: str | bytes | os.PathLike) -> str:
    """``cd '<parent>'; `` for the parent of *first_path*, or "" at the root."""
    path = PurePosixPath(os.fsdecode(first_path))
    parent = path.parent
    if parent == path:
        return ""
    return f"cd {quote(str(parent))}; "


def compose(config: Config, paths: list[str | bytes | os.PathLike]) -> list[str]:
    """Compose the scripts to run for one batch of paths.

    Returns:
        One script under ``GroupingPolicy.ALL``, one per path under
        ``GroupingPolicy.NONE``, and none for an empty batch.
    """
    if not paths:
        return []

    prefix = cd_prefix(paths[0])

    if config.group_open_by == GroupingPolicy.ALL:
        scripts = [f"{prefix}{config.command} {quote_all(paths)}"]
    else:
        scripts = [f"{prefix}{config.command} {quote(p)}" for p in paths]

    logger.debug("Composed %d script(s) for %d path(s)", len(scripts), len(paths))
    return scripts
