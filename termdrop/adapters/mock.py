"""
Mock driver — test double for terminal dispatch.

Records every script it is asked to run. Failures can be queued per call
so a test can script "fail on the first path, succeed on the rest".
"""

from __future__ import annotations

from termdrop.adapters.base import TerminalDriver
from termdrop.core.errors import DispatchError


class MockTerminalDriver(TerminalDriver):
    """Records scripts instead of opening terminals."""

    def __init__(self, driver_name: str = "mock"):
        self._name = driver_name
        self._call_log: list[str] = []
        self._failures: dict[int, DispatchError] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[str]:
        """Every script this mock was asked to run, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_failure(self, call_index: int, error: DispatchError) -> None:
        """Raise *error* on the given (0-based) call."""
        self._failures[call_index] = error

    def run_in_new_window(self, script: str) -> None:
        index = len(self._call_log)
        self._call_log.append(script)
        if index in self._failures:
            raise self._failures[index]

    def reset(self) -> None:
        self._call_log.clear()
        self._failures.clear()
