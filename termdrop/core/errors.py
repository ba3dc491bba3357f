"""
Error taxonomy — every failure termdrop raises on purpose.

Generation errors propagate to the caller unrecovered. The one exception
is AlreadyExistsError, which callers catch to offer an overwrite.

Dispatch errors carry a ``fatal`` flag: the shim's open-event handler
aborts a per-file batch only on fatal errors and reports everything else.
"""

from __future__ import annotations

from pathlib import Path


class TermdropError(Exception):
    """Base class for all termdrop errors."""


# ── Generation ──────────────────────────────────────────────────────


class GenerationError(TermdropError):
    """A bundle could not be generated or installed."""


class AlreadyExistsError(GenerationError):
    """The destination bundle exists and overwriting was not requested."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(
            f"App already exists at '{self.path}'. Run with --force to overwrite."
        )


class BundleIOError(GenerationError):
    """A file or directory operation on the bundle failed.

    Always names the path involved so the message is actionable.
    """

    def __init__(self, message: str, path: Path | None = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class TemplateRenderError(GenerationError):
    """The Info.plist template could not be rendered."""


class UnsupportedPlatformError(GenerationError):
    """No bundle packager exists for the running platform."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Generating app bundles is not supported on '{platform}'")


# ── Configuration ───────────────────────────────────────────────────


class ConfigError(TermdropError):
    """A recipe or bundle config file is missing or invalid."""


# ── Dispatch ────────────────────────────────────────────────────────


class DispatchError(TermdropError):
    """Running a script in a terminal failed."""

    fatal: bool = False


class UnsupportedTerminalError(DispatchError):
    """The configured terminal is not in the driver registry."""

    def __init__(self, name: str, supported: list[str] | None = None):
        self.name = name
        msg = f"Terminal '{name}' is not supported"
        if supported:
            msg += f" (supported: {', '.join(supported)})"
        super().__init__(msg)


class ScriptExecutionError(DispatchError):
    """The osascript child process failed or could not be started."""

    def __init__(self, exit_status: int | None, stderr: str):
        self.exit_status = exit_status
        self.stderr = stderr
        if exit_status is None:
            msg = f"Could not run osascript: {stderr}"
        else:
            msg = f"osascript exited with status {exit_status}: {stderr.strip()}"
        super().__init__(msg)


class AutomationPermissionDeniedError(ScriptExecutionError):
    """macOS privacy controls blocked keystroke injection or Apple events."""

    fatal = True


class TerminalNotFoundError(ScriptExecutionError):
    """The named terminal application could not be found or launched."""

    fatal = True
