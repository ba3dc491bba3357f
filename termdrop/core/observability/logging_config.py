"""
Logging configuration — central setup for both entrypoints.

The generator CLI calls ``setup_logging`` once at startup. Levels are
resolved in precedence order:
    CLI flag  >  TERMDROP_LOG_LEVEL env var  >  WARNING (default)
with optional file output via TERMDROP_LOG_FILE / TERMDROP_LOG_FILE_LEVEL.

The shim has no terminal to write to, so ``setup_shim_logging`` logs to a
file and stays silent unless TERMDROP_SHIM_LOG_LEVEL is set.

Both read level names through the same table (``parse_level``), so
``trace`` or ``warn`` mean the same thing to the generator and the shim.
A name neither understands is logged once logging is up.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

# ── Format strings ──────────────────────────────────────────────

# WARNING level — minimal, no noise
_FMT_MINIMAL = "%(message)s"

# INFO level — timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output — always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_NOISY_LOGGERS = ("PIL",)

# ── Level names ─────────────────────────────────────────────────

LEVELS: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

GENERATOR_LEVEL_ENV = "TERMDROP_LOG_LEVEL"

# ── Shim environment ────────────────────────────────────────────

SHIM_LEVEL_ENV = "TERMDROP_SHIM_LOG_LEVEL"
SHIM_PATH_ENV = "TERMDROP_SHIM_LOG_PATH"
SHIM_DEFAULT_FILE = "termdrop_shim_log.txt"

logger = logging.getLogger(__name__)


def parse_level(name: str | None) -> int | None:
    """Numeric level for *name* (case-insensitive), or None if unknown."""
    if not name:
        return None
    return LEVELS.get(name.strip().lower())


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure Python logging for the generator process.

    Args:
        level: Level name from ``LEVELS``. Unknown names fall back to
            WARNING with a warning.
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
        quiet_third_party: If True, keep Pillow's loggers at WARNING
            unless we're at DEBUG level.
    """
    console_level = parse_level(level)
    bad = [] if console_level is not None else [(GENERATOR_LEVEL_ENV, level)]
    if console_level is None:
        console_level = logging.WARNING

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    handlers: list[logging.Handler] = [console]

    # ── File handler (optional) ─────────────────────────────────
    effective_level = console_level
    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        if file_level is None:
            bad.append(("TERMDROP_LOG_FILE_LEVEL", log_file_level))
            file_level = console_level
        effective_level = min(effective_level, file_level)
        handlers.append(_file_handler(Path(log_file), file_level))

    _install(handlers, effective_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    for var, value in bad:
        logger.warning("Invalid %s value %r, using %s", var, value,
                       logging.getLevelName(console_level))


def setup_shim_logging(environ: Mapping[str, str] | None = None) -> Path | None:
    """Configure file logging for the shim from its environment.

    No level variable means no logging at all. An unparsable level forces
    DEBUG and logs the parse failure itself.

    Returns:
        The log file in use, or None when logging is off.
    """
    env = os.environ if environ is None else environ

    raw_level = env.get(SHIM_LEVEL_ENV)
    if raw_level is None:
        _install([logging.NullHandler()], logging.WARNING)
        return None

    path = shim_log_path(env)
    level = parse_level(raw_level)
    _install([_file_handler(path, level or logging.DEBUG)], level or logging.DEBUG)

    if level is None:
        logger.error("Invalid %s value %r, logging everything", SHIM_LEVEL_ENV, raw_level)
    return path


def shim_log_path(environ: Mapping[str, str]) -> Path:
    """Resolve the shim's log file: env path, else $HOME; directories get a default name."""
    raw = environ.get(SHIM_PATH_ENV)
    if raw:
        path = Path(raw).expanduser()
    else:
        home = environ.get("HOME")
        path = Path(home) if home else Path("/")

    if path.is_dir():
        path = path / SHIM_DEFAULT_FILE
    return path


def _install(handlers: list[logging.Handler], level: int) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
    if level <= logging.INFO:
        return logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_VERBOSE)
    return logging.Formatter(_FMT_MINIMAL)


def _file_handler(path: Path, level: int) -> logging.Handler:
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    return fh
