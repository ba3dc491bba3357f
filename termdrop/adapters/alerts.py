"""
Alert reporter — tells the shim's user what went wrong.

The shim has no terminal of its own, so errors are logged and then shown
as a modal alert through osascript. If the alert itself fails, the log
line is all that remains.
"""

from __future__ import annotations

import logging

from termdrop.adapters.osascript import OsascriptRunner
from termdrop.core.errors import ScriptExecutionError

logger = logging.getLogger(__name__)

_ALERT_JXA = """\
function run(argv) {
    var app = Application.currentApplication();
    app.includeStandardAdditions = true;
    app.displayAlert(argv[0], {message: argv[1], as: "critical"});
}
"""


class AlertReporter:
    """``reporter(title, message)`` that logs, then shows a modal alert."""

    def __init__(self, runner: OsascriptRunner | None = None):
        self._runner = runner or OsascriptRunner()

    def __call__(self, title: str, message: str) -> None:
        logger.error("modal %s: %s", title, message)
        try:
            self._runner.run(_ALERT_JXA, title, message)
        except ScriptExecutionError as e:
            logger.warning("Could not show alert %r: %s", title, e)
