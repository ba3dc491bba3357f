"""
Driver registry — the ordered table of supported terminals.

Built once at startup and passed to whoever needs it. Order is part of
the contract: the first registered driver is the default terminal.
"""

from __future__ import annotations

import logging

from termdrop.adapters.base import TerminalDriver
from termdrop.adapters.osascript import OsascriptRunner
from termdrop.adapters.terminals import GenericTerminalDriver, iterm_driver, terminal_app_driver
from termdrop.core.errors import UnsupportedTerminalError
from termdrop.core.models.config import TerminalSelection

logger = logging.getLogger(__name__)


class DriverRegistry:
    """Insertion-ordered name → driver table."""

    def __init__(self, runner: OsascriptRunner | None = None):
        self._drivers: dict[str, TerminalDriver] = {}
        self._runner = runner

    def register(self, driver: TerminalDriver) -> None:
        name = driver.name
        if name in self._drivers:
            logger.warning("Overwriting existing driver: %s", name)
        self._drivers[name] = driver
        logger.debug("Registered driver: %s", name)

    def get(self, name: str) -> TerminalDriver | None:
        return self._drivers.get(name)

    def names(self) -> list[str]:
        """Registered names, default first."""
        return list(self._drivers)

    def is_supported(self, name: str) -> bool:
        return name in self._drivers

    def default_name(self) -> str:
        if not self._drivers:
            raise LookupError("No terminal drivers registered")
        return next(iter(self._drivers))

    def resolve(self, selection: TerminalSelection) -> TerminalDriver:
        """Driver for a config's terminal selection.

        Raises:
            UnsupportedTerminalError: A ``Supported`` name that isn't registered.
        """
        if selection.is_generic:
            return GenericTerminalDriver(selection.name, self._runner)

        driver = self.get(selection.name)
        if driver is None:
            raise UnsupportedTerminalError(selection.name, self.names())
        return driver

    def __len__(self) -> int:
        return len(self._drivers)

    def __contains__(self, name: object) -> bool:
        return name in self._drivers


def build_default_registry(runner: OsascriptRunner | None = None) -> DriverRegistry:
    """Terminal.app (default), then iTerm2."""
    registry = DriverRegistry(runner)
    registry.register(terminal_app_driver(runner))
    registry.register(iterm_driver(runner))
    return registry
