"""
Runtime config — what a generated shim needs to know at launch.

Serialized into ``Contents/Resources/config.json`` by the generator and
read back, unmodified, by the shim:

    {"command": "...", "group_open_by": "all" | "none",
     "terminal": {"Supported": "Terminal.app"} | {"Generic": "Alacritty"}}
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_serializer, model_validator


class GroupingPolicy(StrEnum):
    """How a batch of opened files maps onto terminal invocations."""

    ALL = "all"     # one invocation with every path
    NONE = "none"   # one invocation per path


class TerminalKind(StrEnum):
    SUPPORTED = "Supported"
    GENERIC = "Generic"


class TerminalSelection(BaseModel):
    """Which terminal the shim drives.

    ``Supported`` names an entry of the driver registry. ``Generic`` names
    any other application, driven by simulated keystrokes.
    """

    model_config = ConfigDict(frozen=True)

    kind: TerminalKind
    name: str

    @classmethod
    def supported(cls, name: str) -> TerminalSelection:
        return cls(kind=TerminalKind.SUPPORTED, name=name)

    @classmethod
    def generic(cls, name: str) -> TerminalSelection:
        return cls(kind=TerminalKind.GENERIC, name=name)

    @property
    def is_generic(self) -> bool:
        return self.kind == TerminalKind.GENERIC

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, data: Any) -> Any:
        # {"Supported": "Terminal.app"} → {"kind": "Supported", "name": "Terminal.app"}
        if isinstance(data, dict) and len(data) == 1:
            ((key, value),) = data.items()
            if key in (TerminalKind.SUPPORTED, TerminalKind.GENERIC):
                return {"kind": key, "name": value}
        return data

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("terminal name must not be empty")
        return v

    @model_serializer
    def _to_tagged(self) -> dict[str, str]:
        return {self.kind.value: self.name}

    def __str__(self) -> str:
        if self.is_generic:
            return f"{self.name} (generic)"
        return self.name


class Config(BaseModel):
    """Immutable shim configuration."""

    model_config = ConfigDict(frozen=True)

    command: str
    group_open_by: GroupingPolicy = GroupingPolicy.ALL
    terminal: TerminalSelection

    @field_validator("command")
    @classmethod
    def _command_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Config's 'command' field may not be empty")
        return v
