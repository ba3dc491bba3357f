"""
Shared test fixtures and configuration.
"""

import logging
import stat
from pathlib import Path

import pytest

from termdrop.adapters.mock import MockTerminalDriver
from termdrop.adapters.registry import DriverRegistry
from termdrop.core.models.config import Config, GroupingPolicy, TerminalSelection


_SETUP_HANDLER_TYPES = (logging.StreamHandler, logging.FileHandler, logging.NullHandler)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop handlers installed by the logging setup functions, restore the level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        # exact types only: pytest's capture handlers are subclasses
        if type(handler) in _SETUP_HANDLER_TYPES:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def shim_binary(tmp_path: Path) -> Path:
    """A stand-in shim executable."""
    path = tmp_path / "bin" / "termdrop-shim"
    path.parent.mkdir()
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


@pytest.fixture
def config() -> Config:
    return Config(
        command="cat",
        group_open_by=GroupingPolicy.ALL,
        terminal=TerminalSelection.supported("Terminal.app"),
    )


@pytest.fixture
def mock_driver() -> MockTerminalDriver:
    return MockTerminalDriver("Terminal.app")


@pytest.fixture
def mock_registry(mock_driver: MockTerminalDriver) -> DriverRegistry:
    """Registry whose only (default) terminal is a mock named Terminal.app."""
    registry = DriverRegistry()
    registry.register(mock_driver)
    return registry
