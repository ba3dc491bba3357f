"""
termdrop-shim — the executable inside every generated app.

Copied to ``<Name>.app/Contents/MacOS/<Name>``. At launch it reads
``../Resources/config.json``, turns its arguments (file URLs or plain
paths) into one open event, dispatches it, and exits.

Environment:
    TERMDROP_SHIM_LOG_LEVEL   trace|debug|info|warn|error (unset: no log)
    TERMDROP_SHIM_LOG_PATH    log file or directory (default: $HOME)
    TERMDROP_SHIM_CONFIG      config.json override (development)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from urllib.parse import urlsplit

import click

from termdrop.adapters.alerts import AlertReporter
from termdrop.adapters.registry import build_default_registry
from termdrop.core.config.bundle_config import bundle_config_path, load_config
from termdrop.core.errors import ConfigError
from termdrop.core.models.events import OpenEvent
from termdrop.core.observability.logging_config import setup_shim_logging
from termdrop.core.use_cases.dispatch import OpenEventHandler

logger = logging.getLogger(__name__)

CONFIG_ENV = "TERMDROP_SHIM_CONFIG"


def event_from_args(args: list[str]) -> OpenEvent:
    """Build an open event from argv; plain paths become ``file:`` URLs.

    Finder's legacy ``-psn_…`` process-serial argument is ignored. An
    argument naming an existing file is always a path, so ``file:notes.txt``
    in the working directory stays a file name.
    """
    urls: list[str] = []
    for arg in args:
        if arg.startswith("-psn_"):
            continue
        if not os.path.exists(arg) and _is_url(arg):
            urls.append(arg)
        else:
            urls.extend(OpenEvent.from_paths([arg]).urls)
    return OpenEvent(urls=urls)


def _is_url(arg: str) -> bool:
    # hierarchical URLs only: "file:///x" or "https://x", not "file:notes.txt"
    scheme = urlsplit(arg).scheme
    return bool(scheme) and arg[len(scheme) + 1:].startswith("/")


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("targets", nargs=-1, type=click.UNPROCESSED)
def shim(targets: tuple[str, ...]) -> None:
    """Run the configured command on TARGETS in a terminal."""
    log_path = setup_shim_logging()
    if log_path:
        logger.debug("Logging to %s", log_path)

    reporter = AlertReporter()
    override = os.environ.get(CONFIG_ENV)
    config_path = Path(override) if override else bundle_config_path()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        reporter("Error loading config", str(e))
        sys.exit(1)

    handler = OpenEventHandler(config, build_default_registry(), reporter)
    handler.handle(event_from_args(list(targets)))


def main() -> None:
    shim()


if __name__ == "__main__":
    main()
