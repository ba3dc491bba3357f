"""
Generate use case — config in, installed app bundle out.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

from termdrop.core.errors import AlreadyExistsError, GenerationError
from termdrop.core.models.config import Config
from termdrop.core.models.doc_types import DocumentTypeSpec
from termdrop.core.services.generation import GenerationSession
from termdrop.core.services.packaging import BundlePackager

logger = logging.getLogger(__name__)

SHIM_EXECUTABLE = "termdrop-shim"
REVEAL_COMMAND = ("open", "-R")


def locate_shim(explicit: Path | None = None) -> Path:
    """Find the shim executable to copy into new bundles.

    Without an explicit path: ``termdrop-shim`` on PATH, else next to the
    running interpreter (a virtualenv's ``bin/``).

    Raises:
        GenerationError: If the shim does not exist.
    """
    if explicit is not None:
        shim = Path(explicit)
    else:
        found = shutil.which(SHIM_EXECUTABLE)
        shim = Path(found) if found else Path(sys.executable).parent / SHIM_EXECUTABLE

    if not shim.exists():
        raise GenerationError(f"Couldn't find shim executable at '{shim}'")
    return shim


def generate_app(
    config: Config,
    doc_types: DocumentTypeSpec,
    app_path: Path,
    *,
    shim_path: Path | None = None,
    identifier: str | None = None,
    icon_path: Path | None = None,
    force: bool = False,
    confirm_overwrite: Callable[[Path], bool] | None = None,
    packager: BundlePackager | None = None,
) -> Path:
    """Generate and install an app bundle.

    Args:
        config: What the shim will run.
        doc_types: Which files the app opens.
        app_path: Desired bundle path; ``.app`` is added when missing.
        shim_path: Explicit shim executable (see ``locate_shim``).
        identifier: Bundle identifier; synthesized when None.
        icon_path: Custom icon; a default one is drawn when None.
        force: Overwrite an existing bundle without asking.
        confirm_overwrite: Asked, with the destination, whether an
            existing bundle may be replaced. None means never.
        packager: Platform packager override.

    Returns:
        The installed bundle's path.

    Raises:
        GenerationError: Including AlreadyExistsError when the bundle
            exists and overwriting was neither forced nor confirmed.
    """
    shim = locate_shim(shim_path)

    with GenerationSession.generate(
        config,
        doc_types,
        shim,
        identifier,
        icon_path,
        app_path=app_path,
        packager=packager,
    ) as session:
        try:
            return session.save(overwrite=force)
        except AlreadyExistsError:
            if force or confirm_overwrite is None:
                raise
            if not confirm_overwrite(session.final_bundle_path):
                raise
            logger.info("Overwriting %s", session.final_bundle_path)
            return session.save(overwrite=True)


def reveal_bundle(path: Path) -> bool:
    """Select *path* in a Finder window (``open -R``).

    Failure does no real harm, so it is logged and never raised.

    Returns:
        True if ``open`` succeeded.
    """
    try:
        result = subprocess.run(
            [*REVEAL_COMMAND, str(path)],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        logger.warning("Could not reveal %s: %s", path, e)
        return False
    if result.returncode != 0:
        logger.warning("Could not reveal %s: %s", path, result.stderr.strip())
        return False
    return True
