"""
Tests for the CLI entrypoints — termdrop and termdrop-shim.
"""

import json
import logging
import plistlib
from pathlib import Path

import pytest
from click.testing import CliRunner

from termdrop.adapters.mock import MockTerminalDriver
from termdrop.adapters.registry import DriverRegistry
from termdrop.main import cli
from termdrop.shim_main import event_from_args, shim


@pytest.fixture
def runner():
    return CliRunner()


def _plist(app: Path) -> dict:
    return plistlib.loads((app / "Contents" / "Info.plist").read_bytes())


class TestCLI:
    """Top-level group."""

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
        assert "terminals" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerate:
    """termdrop generate."""

    def test_creates_app(self, runner, tmp_path, shim_binary):
        out = tmp_path / "Cat"
        result = runner.invoke(
            cli, ["generate", "cat", str(out), "--exts", "txt,md", "--shim-path", str(shim_binary)]
        )
        assert result.exit_code == 0, result.output
        assert "Created" in result.output
        app = tmp_path / "Cat.app"
        plist = _plist(app)
        assert plist["CFBundleDocumentTypes"][0]["CFBundleTypeExtensions"] == ["txt", "md"]
        assert plist["CFBundleIdentifier"].startswith("local.")
        config = json.loads((app / "Contents" / "Resources" / "config.json").read_text())
        assert config == {
            "command": "cat",
            "group_open_by": "all",
            "terminal": {"Supported": "Terminal.app"},
        }

    def test_options_reach_config(self, runner, tmp_path, shim_binary):
        result = runner.invoke(cli, [
            "generate", "vim -p", str(tmp_path / "Vim.app"),
            "--group-open-by", "none",
            "--generic-terminal", "Alacritty",
            "--identifier", "com.example.vim",
            "--all-documents",
            "--shim-path", str(shim_binary),
        ])
        assert result.exit_code == 0, result.output
        app = tmp_path / "Vim.app"
        config = json.loads((app / "Contents" / "Resources" / "config.json").read_text())
        assert config["group_open_by"] == "none"
        assert config["terminal"] == {"Generic": "Alacritty"}
        assert _plist(app)["CFBundleIdentifier"] == "com.example.vim"

    def test_existing_app_needs_force(self, runner, tmp_path, shim_binary):
        args = ["generate", "cat", str(tmp_path / "Cat"), "--shim-path", str(shim_binary)]
        assert runner.invoke(cli, args).exit_code == 0

        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(cli, [*args, "--force"])
        assert result.exit_code == 0, result.output

    def test_unsupported_terminal(self, runner, tmp_path, shim_binary):
        result = runner.invoke(cli, [
            "generate", "cat", str(tmp_path / "Cat"),
            "--terminal", "Hyper", "--shim-path", str(shim_binary),
        ])
        assert result.exit_code == 1
        assert "Terminal Hyper is not supported" in result.output
        assert not (tmp_path / "Cat.app").exists()

    def test_conflicting_doc_types(self, runner, tmp_path, shim_binary):
        result = runner.invoke(cli, [
            "generate", "cat", str(tmp_path / "Cat"), "--exts", "txt", "--all-documents",
        ])
        assert result.exit_code == 2

    def test_conflicting_terminals(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "generate", "cat", str(tmp_path / "Cat"),
            "--terminal", "iTerm2", "--generic-terminal", "kitty",
        ])
        assert result.exit_code == 2

    def test_missing_out_path(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["generate", "cat"])
        assert result.exit_code == 2

    def test_missing_shim(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "generate", "cat", str(tmp_path / "Cat"), "--shim-path", str(tmp_path / "nope"),
        ])
        assert result.exit_code == 1
        assert "Couldn't find shim executable" in result.output

    def test_recipe(self, runner, tmp_path, shim_binary):
        recipe = tmp_path / "termdrop.yml"
        recipe.write_text(
            "command: wc -l\n"
            "output: Count.app\n"
            "terminal: iTerm2\n"
            "document_types:\n"
            "  utis: public.json\n"
            f"shim_path: {shim_binary}\n"
        )
        result = runner.invoke(cli, ["generate", "--recipe", str(recipe)])
        assert result.exit_code == 0, result.output
        app = tmp_path / "Count.app"
        assert _plist(app)["CFBundleDocumentTypes"][0]["LSItemContentTypes"] == ["public.json"]
        config = json.loads((app / "Contents" / "Resources" / "config.json").read_text())
        assert config["terminal"] == {"Supported": "iTerm2"}

    def test_recipe_found_in_cwd(self, runner, tmp_path, shim_binary, monkeypatch):
        (tmp_path / "termdrop.yml").write_text(
            f"command: cat\noutput: Cat.app\nshim_path: {shim_binary}\n"
        )
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["generate"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "Cat.app" / "Contents" / "Info.plist").is_file()

    def test_reveal(self, runner, tmp_path, shim_binary, monkeypatch):
        revealed = []
        monkeypatch.setattr(
            "termdrop.core.use_cases.generate.reveal_bundle", lambda path: revealed.append(path),
        )
        args = ["generate", "cat", str(tmp_path / "Cat"), "--shim-path", str(shim_binary)]
        assert runner.invoke(cli, args).exit_code == 0
        assert revealed == []

        result = runner.invoke(cli, [*args, "--force", "--reveal"])
        assert result.exit_code == 0, result.output
        assert revealed == [tmp_path / "Cat.app"]

    def test_bad_recipe(self, runner, tmp_path):
        recipe = tmp_path / "termdrop.yml"
        recipe.write_text("- not a mapping\n")
        result = runner.invoke(cli, ["generate", "--recipe", str(recipe)])
        assert result.exit_code == 1
        assert "Expected a YAML mapping" in result.output


class TestTerminals:
    """termdrop terminals."""

    def test_text(self, runner):
        result = runner.invoke(cli, ["terminals"])
        assert result.exit_code == 0
        assert "Terminal.app (default)" in result.output
        assert "iTerm2" in result.output

    def test_json(self, runner):
        result = runner.invoke(cli, ["terminals", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "default": "Terminal.app",
            "supported": ["Terminal.app", "iTerm2"],
        }


# ═══════════════════════════════════════════════════════════════════
#  Shim
# ═══════════════════════════════════════════════════════════════════


class TestEventFromArgs:
    """Tests for argv → open event."""

    def test_paths_and_urls(self, tmp_path):
        event = event_from_args([str(tmp_path / "a.txt"), "file:///b/c.txt"])
        assert event.urls == [(tmp_path / "a.txt").as_uri(), "file:///b/c.txt"]

    def test_process_serial_number_ignored(self):
        assert event_from_args(["-psn_0_12345"]).urls == []

    def test_opaque_file_scheme_is_a_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        event = event_from_args(["file:notes.txt"])
        assert event.urls == [(Path.cwd() / "file:notes.txt").as_uri()]

    def test_existing_file_wins_over_url(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "https:").mkdir()
        (tmp_path / "https:" / "x").write_text("")
        event = event_from_args(["https:/x"])
        assert event.urls == [(Path.cwd() / "https:" / "x").as_uri()]

    def test_web_url_passes_through(self):
        assert event_from_args(["https://example.com/a"]).urls == ["https://example.com/a"]


class TestShim:
    """termdrop-shim end to end, with the terminal mocked."""

    @pytest.fixture
    def shim_env(self, tmp_path, monkeypatch, config):
        config_path = tmp_path / "config.json"
        config_path.write_text(config.model_dump_json())
        monkeypatch.setenv("TERMDROP_SHIM_CONFIG", str(config_path))
        monkeypatch.delenv("TERMDROP_SHIM_LOG_LEVEL", raising=False)

        driver = MockTerminalDriver("Terminal.app")
        registry = DriverRegistry()
        registry.register(driver)
        alerts: list[tuple[str, str]] = []
        monkeypatch.setattr("termdrop.shim_main.build_default_registry", lambda: registry)
        monkeypatch.setattr("termdrop.shim_main.AlertReporter", lambda: lambda t, m: alerts.append((t, m)))
        return driver, alerts

    def test_dispatches_files(self, runner, tmp_path, shim_env):
        driver, alerts = shim_env
        a, b = tmp_path / "a b.txt", tmp_path / "c.txt"
        result = runner.invoke(shim, [str(a), str(b)])
        assert result.exit_code == 0
        assert driver.call_log == [f"cd '{tmp_path}'; cat '{a}' '{b}'"]
        assert alerts == []

    def test_no_files(self, runner, shim_env):
        driver, alerts = shim_env
        result = runner.invoke(shim, [])
        assert result.exit_code == 0
        assert driver.call_count == 0

    def test_bad_config(self, runner, tmp_path, shim_env, monkeypatch):
        driver, alerts = shim_env
        monkeypatch.setenv("TERMDROP_SHIM_CONFIG", str(tmp_path / "missing.json"))
        result = runner.invoke(shim, [str(tmp_path / "a.txt")])
        assert result.exit_code == 1
        assert alerts[0][0] == "Error loading config"
        assert driver.call_count == 0

    def test_logs_to_file(self, runner, tmp_path, shim_env, monkeypatch):
        monkeypatch.setenv("TERMDROP_SHIM_LOG_LEVEL", "info")
        monkeypatch.setenv("TERMDROP_SHIM_LOG_PATH", str(tmp_path))
        runner.invoke(shim, [str(tmp_path / "a.txt")])
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "Got urls" in (tmp_path / "termdrop_shim_log.txt").read_text()
