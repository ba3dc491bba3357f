"""
Generation recipe — a reusable, YAML-declared ``termdrop generate`` call.

Example ``termdrop.yml``::

    command: bat --paging=always
    output: ~/Applications/Bat.app
    group_open_by: none
    terminal: iTerm2
    document_types:
      extensions: [rs, py, md]
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator

from termdrop.core.models.config import GroupingPolicy
from termdrop.core.models.doc_types import DocumentTypeKind, DocumentTypeSpec


class GenerationRecipe(BaseModel):
    """Every generator option; all optional so CLI arguments can fill gaps."""

    command: str | None = None
    output: str | None = None
    group_open_by: GroupingPolicy | None = None
    terminal: str | None = None
    generic_terminal: str | None = None
    document_types: DocumentTypeSpec | None = None
    identifier: str | None = None
    icon: str | None = None
    shim_path: str | None = None
    force: bool = False
    reveal: bool = False

    @model_validator(mode="before")
    @classmethod
    def _shorthand_document_types(cls, data: Any) -> Any:
        # document_types: {extensions: [...]} / {utis: "a,b"} / all_documents / text_files
        if not isinstance(data, dict):
            return data
        spec = data.get("document_types")
        if isinstance(spec, str):
            return {**data, "document_types": {"kind": spec}}
        if isinstance(spec, dict) and "kind" not in spec and len(spec) == 1:
            ((key, value),) = spec.items()
            if key in (DocumentTypeKind.UTIS, DocumentTypeKind.EXTENSIONS):
                return {**data, "document_types": {"kind": key, "entries": value}}
        return data
