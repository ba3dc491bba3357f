"""
Bundle packagers — platform boundary for placing the shim executable.

App bundles only launch on macOS, but any POSIX host can assemble one
(a Linux CI box building bundles to ship, for instance). Other platforms
get an explicit UnsupportedPlatformError instead of a half-written bundle.
"""

from __future__ import annotations

import logging
import shutil
import stat
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from termdrop.core.errors import BundleIOError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class BundlePackager(ABC):
    """Capability: put the shim executable into ``Contents/MacOS``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Packager identifier (e.g., 'posix')."""

    @abstractmethod
    def install_shim(self, shim_binary: Path, mac_os: Path, app_name: str) -> Path:
        """Copy *shim_binary* to ``mac_os/app_name`` and return the new path.

        Raises:
            BundleIOError: If the copy fails.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class PosixBundlePackager(BundlePackager):
    """Plain file copy with the executable bits forced on."""

    @property
    def name(self) -> str:
        return "posix"

    def install_shim(self, shim_binary: Path, mac_os: Path, app_name: str) -> Path:
        dest = mac_os / app_name
        try:
            shutil.copy2(shim_binary, dest)
            mode = dest.stat().st_mode
            dest.chmod(mode | _EXEC_BITS)
        except OSError as e:
            raise BundleIOError(
                f"Error copying shim binary '{shim_binary}' to temporary directory '{mac_os}': {e}",
                shim_binary,
            ) from e
        logger.debug("Installed shim %s → %s", shim_binary, dest)
        return dest


_PACKAGERS: dict[str, type[BundlePackager]] = {
    "darwin": PosixBundlePackager,
    "linux": PosixBundlePackager,
}


def get_packager(platform: str | None = None) -> BundlePackager:
    """Return the packager for *platform* (default: the running one).

    Raises:
        UnsupportedPlatformError: If no packager exists for the platform.
    """
    platform = platform or sys.platform
    for prefix, cls in _PACKAGERS.items():
        if platform.startswith(prefix):
            return cls()
    raise UnsupportedPlatformError(platform)
