"""
Tests for domain models — Config, TerminalSelection, DocumentTypeSpec, OpenEvent.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from termdrop.core.models import (
    Config,
    DocumentTypeKind,
    DocumentTypeSpec,
    GenerationRecipe,
    GroupingPolicy,
    OpenEvent,
    TerminalKind,
    TerminalSelection,
)


class TestTerminalSelection:
    """Tests for the tagged terminal selection."""

    def test_supported_serializes_tagged(self):
        assert TerminalSelection.supported("iTerm2").model_dump() == {"Supported": "iTerm2"}

    def test_generic_serializes_tagged(self):
        assert TerminalSelection.generic("Alacritty").model_dump() == {"Generic": "Alacritty"}

    def test_parse_tagged(self):
        sel = TerminalSelection.model_validate({"Generic": "kitty"})
        assert sel.kind == TerminalKind.GENERIC
        assert sel.name == "kitty"
        assert sel.is_generic

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValidationError):
            TerminalSelection.model_validate({"Other": "x"})

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            TerminalSelection.supported("  ")

    def test_str(self):
        assert str(TerminalSelection.supported("Terminal.app")) == "Terminal.app"
        assert str(TerminalSelection.generic("kitty")) == "kitty (generic)"


class TestConfig:
    """Tests for the shim config schema."""

    def test_json_schema(self, config: Config):
        data = json.loads(config.model_dump_json())
        assert data == {
            "command": "cat",
            "group_open_by": "all",
            "terminal": {"Supported": "Terminal.app"},
        }

    def test_roundtrip(self):
        original = Config(
            command="vim -p",
            group_open_by=GroupingPolicy.NONE,
            terminal=TerminalSelection.generic("Alacritty"),
        )
        loaded = Config.model_validate_json(original.model_dump_json())
        assert loaded == original

    def test_parse_document(self):
        raw = '{"command": "bat", "group_open_by": "none", "terminal": {"Supported": "iTerm2"}}'
        cfg = Config.model_validate_json(raw)
        assert cfg.group_open_by == GroupingPolicy.NONE
        assert cfg.terminal == TerminalSelection.supported("iTerm2")

    def test_group_open_by_defaults_to_all(self):
        cfg = Config(command="ls", terminal=TerminalSelection.supported("Terminal.app"))
        assert cfg.group_open_by == GroupingPolicy.ALL

    def test_empty_command_rejected(self):
        with pytest.raises(ValidationError, match="may not be empty"):
            Config(command="", terminal=TerminalSelection.supported("Terminal.app"))

    def test_terminal_required(self):
        with pytest.raises(ValidationError):
            Config.model_validate({"command": "ls"})

    def test_invalid_grouping_rejected(self):
        with pytest.raises(ValidationError):
            Config.model_validate(
                {"command": "ls", "group_open_by": "some", "terminal": {"Supported": "x"}}
            )

    def test_frozen(self, config: Config):
        with pytest.raises(ValidationError):
            config.command = "rm"


class TestDocumentTypeSpec:
    """Tests for document type normalization."""

    def test_extensions_from_string(self):
        spec = DocumentTypeSpec.extensions(" .txt, md,,")
        assert spec.entries == ("txt", "md")
        assert spec.uses_extensions

    def test_utis_keep_dots(self):
        spec = DocumentTypeSpec.utis(["public.json", " public.xml "])
        assert spec.entries == ("public.json", "public.xml")
        assert not spec.uses_extensions

    def test_fixed_variants(self):
        assert DocumentTypeSpec.text_files().manifest_entries() == ["public.text", "public.data"]
        assert DocumentTypeSpec.all_documents().manifest_entries() == ["public.content", "public.data"]

    def test_fixed_variants_ignore_entries(self):
        spec = DocumentTypeSpec(kind=DocumentTypeKind.ALL_DOCUMENTS, entries=("x",))
        assert spec.entries == ()

    def test_default_is_text_files(self):
        assert DocumentTypeSpec().kind == DocumentTypeKind.TEXT_FILES

    def test_empty_list_stays_empty(self):
        assert DocumentTypeSpec.extensions("").manifest_entries() == []


class TestOpenEvent:
    """Tests for open events."""

    def test_from_paths_makes_file_urls(self, tmp_path):
        event = OpenEvent.from_paths([str(tmp_path / "a b.txt")])
        assert event.urls == [(tmp_path / "a b.txt").as_uri()]
        assert event.urls[0].startswith("file:///")

    def test_relative_paths_become_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        event = OpenEvent.from_paths(["doc.txt"])
        assert event.urls == [(Path.cwd() / "doc.txt").as_uri()]


class TestGenerationRecipe:
    """Tests for the recipe model's document type shorthands."""

    def test_string_shorthand(self):
        recipe = GenerationRecipe.model_validate({"document_types": "all_documents"})
        assert recipe.document_types == DocumentTypeSpec.all_documents()

    def test_mapping_shorthand(self):
        recipe = GenerationRecipe.model_validate({"document_types": {"extensions": ["rs", ".py"]}})
        assert recipe.document_types.entries == ("rs", "py")

    def test_everything_optional(self):
        recipe = GenerationRecipe()
        assert recipe.command is None
        assert recipe.force is False
