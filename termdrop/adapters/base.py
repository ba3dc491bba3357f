"""
Terminal driver base — the contract between the shim and a terminal.

A driver takes a finished shell script and gets it running in a new
terminal window or tab. Drivers raise DispatchError subclasses; the
open-event handler decides which of those end a batch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TerminalDriver(ABC):
    """Abstract base class for all terminal drivers.

    To add a terminal:
        1. Subclass TerminalDriver
        2. Implement name and run_in_new_window
        3. Register it in build_default_registry()
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The user-facing terminal name (e.g., 'Terminal.app')."""

    @abstractmethod
    def run_in_new_window(self, script: str) -> None:
        """Run *script* in a new window or tab.

        Raises:
            DispatchError: If the terminal could not be driven.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
