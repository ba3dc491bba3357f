"""
Domain models — Pydantic types for termdrop.

    from termdrop.core.models import Config, GroupingPolicy, TerminalSelection
"""

from termdrop.core.models.config import (
    Config,
    GroupingPolicy,
    TerminalKind,
    TerminalSelection,
)
from termdrop.core.models.doc_types import DocumentTypeKind, DocumentTypeSpec
from termdrop.core.models.events import OpenEvent
from termdrop.core.models.recipe import GenerationRecipe

__all__ = [
    # config.py
    "Config",
    # doc_types.py
    "DocumentTypeKind",
    "DocumentTypeSpec",
    # recipe.py
    "GenerationRecipe",
    "GroupingPolicy",
    # events.py
    "OpenEvent",
    "TerminalKind",
    "TerminalSelection",
]
