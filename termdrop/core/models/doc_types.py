"""
Document types — which files a generated app claims it can open.

Only drives Info.plist rendering. Nothing here is ever executed.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

TEXT_FILE_UTIS = ("public.text", "public.data")
ALL_DOCUMENT_UTIS = ("public.content", "public.data")


class DocumentTypeKind(StrEnum):
    TEXT_FILES = "text_files"
    ALL_DOCUMENTS = "all_documents"
    UTIS = "utis"
    EXTENSIONS = "extensions"


class DocumentTypeSpec(BaseModel):
    """Tagged document-type selector.

    The list variants accept either a list or a comma-delimited string.
    Entries are trimmed and empties dropped; extensions also lose any
    leading dots, so ``" .txt, md,,"`` becomes ``("txt", "md")``.
    """

    model_config = ConfigDict(frozen=True)

    kind: DocumentTypeKind = DocumentTypeKind.TEXT_FILES
    entries: tuple[str, ...] = ()

    @classmethod
    def text_files(cls) -> DocumentTypeSpec:
        return cls(kind=DocumentTypeKind.TEXT_FILES)

    @classmethod
    def all_documents(cls) -> DocumentTypeSpec:
        return cls(kind=DocumentTypeKind.ALL_DOCUMENTS)

    @classmethod
    def utis(cls, entries: str | list[str] | tuple[str, ...]) -> DocumentTypeSpec:
        return cls(kind=DocumentTypeKind.UTIS, entries=entries)

    @classmethod
    def extensions(cls, entries: str | list[str] | tuple[str, ...]) -> DocumentTypeSpec:
        return cls(kind=DocumentTypeKind.EXTENSIONS, entries=entries)

    @model_validator(mode="before")
    @classmethod
    def _normalize_entries(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        kind = data.get("kind", DocumentTypeKind.TEXT_FILES)
        if kind not in (DocumentTypeKind.UTIS, DocumentTypeKind.EXTENSIONS):
            return {**data, "entries": ()}

        raw = data.get("entries") or ()
        if isinstance(raw, str):
            raw = raw.split(",")

        cleaned = []
        for entry in raw:
            entry = str(entry).strip()
            if kind == DocumentTypeKind.EXTENSIONS:
                entry = entry.lstrip(".")
            if entry:
                cleaned.append(entry)
        return {**data, "entries": tuple(cleaned)}

    @property
    def uses_extensions(self) -> bool:
        return self.kind == DocumentTypeKind.EXTENSIONS

    def manifest_entries(self) -> list[str]:
        """The UTIs or extensions written into Info.plist, in order."""
        if self.kind == DocumentTypeKind.TEXT_FILES:
            return list(TEXT_FILE_UTIS)
        if self.kind == DocumentTypeKind.ALL_DOCUMENTS:
            return list(ALL_DOCUMENT_UTIS)
        return list(self.entries)
