"""
Open events — the batch of documents macOS hands to a running shim.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field


class OpenEvent(BaseModel):
    """One "open these documents" delivery, as a list of URLs."""

    urls: list[str] = Field(default_factory=list)

    @classmethod
    def from_paths(cls, paths: list[str | bytes | os.PathLike]) -> OpenEvent:
        """Build an event from local paths (made absolute, then ``file:`` URLs)."""
        urls = [Path(os.path.abspath(os.fsdecode(p))).as_uri() for p in paths]
        return cls(urls=urls)
