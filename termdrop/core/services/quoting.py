"""
Shell quoting for composed terminal scripts.

Unlike ``shlex.quote``, every word is wrapped in single quotes, even when
it only contains safe characters, so ``/Users/x`` becomes ``'/Users/x'``.
Embedded single quotes use the ``'"'"'`` idiom.

Bytes and path-likes go through ``os.fsdecode``. A non-UTF-8 byte becomes
a lone surrogate, which ``subprocess`` turns back into the original byte
when it encodes argv, so the shell sees exactly the bytes on disk.
"""

from __future__ import annotations

import os


def quote(value: str | bytes | os.PathLike) -> str:
    """Return *value* as a single POSIX-shell word."""
    text = os.fsdecode(value)
    return "'" + text.replace("'", "'\"'\"'") + "'"


def quote_all(values: list[str | bytes | os.PathLike]) -> str:
    """Quote each value and join them with single spaces."""
    return " ".join(quote(v) for v in values)
