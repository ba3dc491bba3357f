"""Adapters — terminal drivers and the osascript bridge.

Public re-exports for convenient access.
"""

from termdrop.adapters.alerts import AlertReporter
from termdrop.adapters.base import TerminalDriver
from termdrop.adapters.mock import MockTerminalDriver
from termdrop.adapters.osascript import OsascriptRunner
from termdrop.adapters.registry import DriverRegistry, build_default_registry
from termdrop.adapters.terminals import GenericTerminalDriver, JxaTerminalDriver

__all__ = [
    "AlertReporter",
    "DriverRegistry",
    "GenericTerminalDriver",
    "JxaTerminalDriver",
    "MockTerminalDriver",
    "OsascriptRunner",
    "TerminalDriver",
    "build_default_registry",
]
