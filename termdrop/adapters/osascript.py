"""
osascript adapter — run JavaScript for Automation (JXA) programs.

The program text goes in on stdin (``osascript -l JavaScript -``) and the
values it works on go in as separate argv entries, which JXA receives as
``run(argv)``. User input is never spliced into program text, so a
command containing quotes or backticks cannot change what the program
does, and long commands do not hit argument-quoting limits.

No timeout: a hung osascript hangs the caller.
"""

from __future__ import annotations

import logging
import re
import subprocess

from termdrop.core.errors import (
    AutomationPermissionDeniedError,
    ScriptExecutionError,
    TerminalNotFoundError,
)

logger = logging.getLogger(__name__)

OSASCRIPT = "osascript"

# osascript reports "execution error: <message> (<code>)"
_ERROR_CODE_RE = re.compile(r"\((-?\d+)\)\s*$", re.MULTILINE)

# -1743: not authorized to send Apple events
# -25211: assistive access denied; 1002: "not allowed to send keystrokes"
_PERMISSION_CODES = frozenset({-1743, -25211, 1002})

# -2700: "Application can't be found."; -10814: no app for bundle;
# -600: application isn't running (launch failed)
_NOT_FOUND_CODES = frozenset({-2700, -10814, -600})


class OsascriptRunner:
    """Runs a JXA program with positional arguments and waits for it."""

    def __init__(self, executable: str = OSASCRIPT):
        self._executable = executable

    def run(self, program: str, *args: str) -> str:
        """Run *program* with *args* as ``argv``.

        Returns:
            The program's stdout, stripped.

        Raises:
            ScriptExecutionError: osascript failed to start or exited non-zero.
        """
        argv = [self._executable, "-l", "JavaScript", "-", *args]
        logger.debug("Running %s with %d argument(s)", self._executable, len(args))

        try:
            result = subprocess.run(
                argv,
                input=program,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise ScriptExecutionError(None, str(e)) from e

        if result.returncode != 0:
            logger.debug("osascript failed (rc=%d): %s", result.returncode, result.stderr.strip())
            raise ScriptExecutionError(result.returncode, result.stderr)

        return result.stdout.strip()


def error_codes(stderr: str) -> list[int]:
    """AppleScript error numbers found in osascript's stderr."""
    return [int(m) for m in _ERROR_CODE_RE.findall(stderr)]


def classify(error: ScriptExecutionError) -> ScriptExecutionError:
    """Refine a generic failure into the fatal classes where the codes say so."""
    codes = set(error_codes(error.stderr))
    if codes & _PERMISSION_CODES:
        return AutomationPermissionDeniedError(error.exit_status, error.stderr)
    if codes & _NOT_FOUND_CODES:
        return TerminalNotFoundError(error.exit_status, error.stderr)
    return error
