"""
Terminal drivers — Terminal.app, iTerm2, and any other app by keystroke.

Every program is a fixed JXA template. ``argv[0]`` is the application
to drive and ``argv[1]`` the shell script (see ``osascript`` adapter).

Supported drivers use the terminal's own scripting dictionary. The generic
driver can only pretend to be a user: it activates the app, opens a
window (Cmd-N) if the app was already running, waits for the window, then
types the script and presses Return through System Events. That needs
the Accessibility permission, and a missing permission or a missing app
surfaces as a fatal DispatchError.
"""

from __future__ import annotations

import logging

from termdrop.adapters.base import TerminalDriver
from termdrop.adapters.osascript import OsascriptRunner, classify
from termdrop.core.errors import ScriptExecutionError

logger = logging.getLogger(__name__)

# ── JXA programs ────────────────────────────────────────────────────

_TERMINAL_APP_JXA = """\
function run(argv) {
    var app = Application(argv[0]);
    app.activate();
    app.doScript(argv[1]);
}
"""

_ITERM_JXA = """\
function run(argv) {
    var app = Application(argv[0]);
    app.activate();
    var window = app.createWindowWithDefaultProfile({});
    window.currentSession().write({text: argv[1]});
}
"""

GENERIC_WINDOW_DELAY = 0.5

_GENERIC_JXA = """\
function run(argv) {
    var app = Application(argv[0]);
    var wasRunning = app.running();
    app.activate();
    var events = Application("System Events");
    if (wasRunning) {
        events.keystroke("n", {using: "command down"});
    }
    delay(%s);
    events.keystroke(argv[1]);
    events.keyCode(36);
}
""" % GENERIC_WINDOW_DELAY


# ── Supported terminals ─────────────────────────────────────────────


class JxaTerminalDriver(TerminalDriver):
    """A terminal driven through its own scripting dictionary.

    Args:
        name: Registry name shown to users (``"Terminal.app"``).
        app_name: Name JXA resolves the application by (``"Terminal"``).
        program: The fixed JXA program.
        runner: osascript runner (injectable for tests).
    """

    def __init__(
        self,
        name: str,
        app_name: str,
        program: str,
        runner: OsascriptRunner | None = None,
    ):
        self._name = name
        self._app_name = app_name
        self._program = program
        self._runner = runner or OsascriptRunner()

    @property
    def name(self) -> str:
        return self._name

    @property
    def app_name(self) -> str:
        return self._app_name

    def run_in_new_window(self, script: str) -> None:
        logger.info("Running in %s: %s", self._name, script[:120])
        self._runner.run(self._program, self._app_name, script)


def terminal_app_driver(runner: OsascriptRunner | None = None) -> JxaTerminalDriver:
    """macOS's built-in Terminal: ``doScript`` opens a new window."""
    return JxaTerminalDriver("Terminal.app", "Terminal", _TERMINAL_APP_JXA, runner)


def iterm_driver(runner: OsascriptRunner | None = None) -> JxaTerminalDriver:
    """iTerm2: new window with the default profile, then write the text."""
    return JxaTerminalDriver("iTerm2", "iTerm", _ITERM_JXA, runner)


# ── Generic terminals ───────────────────────────────────────────────


class GenericTerminalDriver(TerminalDriver):
    """Any application, driven by simulated keystrokes."""

    def __init__(self, app_name: str, runner: OsascriptRunner | None = None):
        self._app_name = app_name
        self._runner = runner or OsascriptRunner()

    @property
    def name(self) -> str:
        return self._app_name

    def run_in_new_window(self, script: str) -> None:
        logger.info("Typing into %s: %s", self._app_name, script[:120])
        try:
            self._runner.run(_GENERIC_JXA, self._app_name, script)
        except ScriptExecutionError as e:
            refined = classify(e)
            if refined is e:
                raise
            raise refined from e
