"""
Dispatch use case — what the shim does with an "open documents" event.

    urls ─▶ file paths ─▶ composed scripts ─▶ terminal driver

Invalid URLs are reported and dropped. Under ``GroupingPolicy.NONE`` the
per-path scripts run strictly in order, and a fatal DispatchError
(automation permission denied, terminal not found) stops the batch with
one report. Any other failure is reported and the next path still runs.
Windows opened for earlier paths are left as they are.

Whatever happens, the process is told to exit with status 0 afterwards:
the shim launches, dispatches, and dies. An unexpected exception is
logged and reported before that exit, which would otherwise hide it.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote_to_bytes, urlsplit

from termdrop.adapters.base import TerminalDriver
from termdrop.adapters.registry import DriverRegistry
from termdrop.core.errors import DispatchError
from termdrop.core.models.config import Config, GroupingPolicy
from termdrop.core.models.events import OpenEvent
from termdrop.core.services.composer import compose

logger = logging.getLogger(__name__)

Reporter = Callable[[str, str], None]
"""Surfaces a problem to the user: ``reporter(title, message)``."""

_LOCAL_HOSTS = ("", "localhost")


@dataclass
class DispatchReport:
    """Outcome of one open event."""

    paths: list[str] = field(default_factory=list)
    rejected_urls: list[str] = field(default_factory=list)
    attempts: int = 0
    succeeded: int = 0
    errors: list[str] = field(default_factory=list)
    aborted: bool = False
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors and not self.rejected_urls

    def to_dict(self) -> dict[str, Any]:
        return {
            "paths": self.paths,
            "rejected_urls": self.rejected_urls,
            "attempts": self.attempts,
            "succeeded": self.succeeded,
            "errors": self.errors,
            "aborted": self.aborted,
            "skipped": self.skipped,
        }


def log_reporter(title: str, message: str) -> None:
    """Reporter that only logs; used where no UI is available."""
    logger.error("%s: %s", title, message)


class OpenEventHandler:
    """Turns open events into terminal invocations.

    Args:
        config: The shim's immutable config.
        registry: Supported terminal drivers.
        reporter: Where user-facing errors go.
        exit_process: Called with 0 once dispatch concludes.
    """

    def __init__(
        self,
        config: Config,
        registry: DriverRegistry,
        reporter: Reporter = log_reporter,
        exit_process: Callable[[int], Any] = sys.exit,
    ):
        self._config = config
        self._registry = registry
        self._reporter = reporter
        self._exit_process = exit_process

    def handle(self, event: OpenEvent) -> DispatchReport:
        """Dispatch one event, then exit the process."""
        logger.info("Got urls %s", event.urls)
        report = DispatchReport()
        try:
            report.paths = self._file_paths(event.urls, report)
            if not report.paths:
                logger.info("No file paths to open")
                return report
            self._dispatch(report)
            return report
        except Exception as e:
            # the exit below replaces the exception, so report it first
            logger.exception("Unexpected error while dispatching %s", report.paths)
            self._fail(report, f"Unexpected error: {e}")
            raise
        finally:
            logger.info(
                "Dispatch finished: %d/%d succeeded, aborted=%s",
                report.succeeded, report.attempts, report.aborted,
            )
            self._exit_process(0)

    # ── URL filtering ───────────────────────────────────────────

    def _file_paths(self, urls: list[str], report: DispatchReport) -> list[str]:
        paths: list[str] = []
        for url in urls:
            parts = urlsplit(url)
            if parts.scheme != "file":
                self._reject(
                    report, url,
                    f"Only 'file' schemes are supported, '{url}''s scheme is '{parts.scheme}'",
                )
            elif parts.netloc not in _LOCAL_HOSTS or not parts.path:
                self._reject(report, url, f"'{url}' has no path")
            else:
                paths.append(os.fsdecode(unquote_to_bytes(parts.path)))
        return paths

    def _reject(self, report: DispatchReport, url: str, message: str) -> None:
        report.rejected_urls.append(url)
        self._reporter("Error", message)

    # ── Dispatch ────────────────────────────────────────────────

    def _dispatch(self, report: DispatchReport) -> None:
        try:
            driver = self._registry.resolve(self._config.terminal)
        except DispatchError as e:
            self._fail(report, str(e))
            return

        scripts = compose(self._config, report.paths)

        if self._config.group_open_by == GroupingPolicy.ALL:
            self._run(driver, scripts[0], report)
            return

        for index, script in enumerate(scripts):
            error = self._run(driver, script, report)
            if error is not None and error.fatal:
                report.aborted = True
                report.skipped = len(scripts) - index - 1
                if report.skipped:
                    logger.warning("Skipping %d remaining file(s) after: %s", report.skipped, error)
                break

    def _run(self, driver: TerminalDriver, script: str, report: DispatchReport) -> DispatchError | None:
        report.attempts += 1
        try:
            driver.run_in_new_window(script)
        except DispatchError as e:
            self._fail(report, f"Error running `{script}`: {e}")
            return e
        report.succeeded += 1
        return None

    def _fail(self, report: DispatchReport, message: str) -> None:
        report.errors.append(message)
        self._reporter("Error", message)
