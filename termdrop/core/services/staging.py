"""
Bundle staging area — a private scratch tree shaped like the final app.

    <tmp>/termdrop-XXXX/
        <Name>.app/                 app_root
            Contents/               contents
                MacOS/              mac_os
                Resources/          resources

A new bundle is assembled here in full before anything touches the real
destination. Each generation attempt owns its own staging area, and
``close()`` removes it together with whatever is still inside.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from termdrop.core.errors import BundleIOError

logger = logging.getLogger(__name__)

_TMP_PREFIX = "termdrop-"


class BundleStagingArea:
    """Scratch directory tree for one bundle.

    Args:
        bundle_file_name: Final bundle directory name, e.g. ``"Cat.app"``.
    """

    def __init__(self, bundle_file_name: str):
        try:
            self._tmp = tempfile.TemporaryDirectory(prefix=_TMP_PREFIX)
        except OSError as e:
            raise BundleIOError(f"Error creating temporary directory: {e}") from e

        self._root = Path(self._tmp.name)
        self._app_root = self._root / bundle_file_name
        self._contents = self._app_root / "Contents"
        self._mac_os = self._contents / "MacOS"
        self._resources = self._contents / "Resources"

        try:
            for path in (self._app_root, self._contents, self._mac_os, self._resources):
                self._create_dir(path)
        except BundleIOError:
            self.close()
            raise

        logger.debug("Staging bundle in %s", self._app_root)

    # ── Accessors ───────────────────────────────────────────────

    @property
    def root(self) -> Path:
        """The scratch directory itself."""
        return self._root

    @property
    def app_root(self) -> Path:
        return self._app_root

    @property
    def contents(self) -> Path:
        return self._contents

    @property
    def mac_os(self) -> Path:
        return self._mac_os

    @property
    def resources(self) -> Path:
        return self._resources

    # ── Lifecycle ───────────────────────────────────────────────

    def close(self) -> None:
        """Remove the scratch directory (idempotent)."""
        self._tmp.cleanup()

    def __enter__(self) -> BundleStagingArea:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _create_dir(self, path: Path) -> None:
        try:
            path.mkdir()
        except OSError as e:
            relative = path.relative_to(self._root)
            raise BundleIOError(f"cannot create directory {relative}: {e}", path) from e
