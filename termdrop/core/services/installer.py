"""
Bundle installer — move a staged bundle to its destination.

Not atomic. The install is a small saga with one compensating action:

    1. overwrite=False → rename staged → dest; a non-empty dest is
       AlreadyExistsError, anything else BundleIOError.
    2. overwrite=True and dest exists → rename dest aside to
       ``<staged>.bak`` in the scratch area (best effort, may not happen).
    3. rename staged → dest.
    4. step 3 failed and a backup exists → rename the backup back to
       dest (best effort, silent; the step-3 error is what is raised).

The backup lives next to the staged bundle, so a successful overwrite
discards it together with the staging area.

Concurrent writers to the destination are not fenced. A bundle created
between steps can surface as a spurious AlreadyExistsError or be
replaced.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Callable
from pathlib import Path

from termdrop.core.errors import AlreadyExistsError, BundleIOError

logger = logging.getLogger(__name__)

Rename = Callable[[Path, Path], None]

_ALREADY_EXISTS_ERRNOS = frozenset({errno.ENOTEMPTY, errno.EEXIST})


def _os_rename(src: Path, dst: Path) -> None:
    os.rename(src, dst)


class BundleInstaller:
    """Runs the install saga.

    Args:
        rename: The rename primitive. Tests inject failures through it.
    """

    def __init__(self, rename: Rename | None = None):
        self._rename = rename or _os_rename

    def install(self, staged: Path, destination: Path, overwrite: bool = False) -> None:
        """Move *staged* onto *destination*.

        Raises:
            AlreadyExistsError: The destination is a non-empty directory.
            BundleIOError: Any other failure of the final move.
        """
        backup = None
        if overwrite and destination.exists() and destination.name == staged.name:
            backup = self._set_aside(destination, staged.with_name(staged.name + ".bak"))

        try:
            self._rename(staged, destination)
        except OSError as e:
            if backup is not None:
                self._restore(backup, destination)
            if e.errno in _ALREADY_EXISTS_ERRNOS:
                raise AlreadyExistsError(destination) from e
            raise BundleIOError(
                f"Error moving temporary app '{staged}' to out_dir '{destination}': {e}",
                destination,
            ) from e

        if backup is not None:
            logger.info("Replaced existing bundle at %s", destination)
        else:
            logger.info("Installed bundle at %s", destination)

    def _set_aside(self, destination: Path, backup: Path) -> Path | None:
        try:
            self._rename(destination, backup)
        except OSError as e:
            logger.debug("Could not back up %s (continuing without): %s", destination, e)
            return None
        logger.debug("Backed up %s → %s", destination, backup)
        return backup

    def _restore(self, backup: Path, destination: Path) -> None:
        try:
            self._rename(backup, destination)
        except OSError as e:
            # never raised: the failed move is the error the caller needs
            logger.debug("Could not restore %s from %s: %s", destination, backup, e)
