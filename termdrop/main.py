"""
termdrop — CLI entrypoint.

Usage:
    termdrop generate "wc -l" ~/Applications/LineCount.app --exts txt,md
    termdrop generate --recipe termdrop.yml
    termdrop terminals
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from termdrop import __version__
from termdrop.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="termdrop")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """termdrop — turn a shell command into a drop-target macOS app."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("TERMDROP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("TERMDROP_LOG_FILE"),
        log_file_level=os.environ.get("TERMDROP_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


@cli.command()
@click.argument("command", required=False)
@click.argument("out_path", required=False, type=click.Path(path_type=Path))
@click.option("--exts", default=None, help="Comma-separated file extensions to open.")
@click.option("--utis", default=None, help="Comma-separated Uniform Type Identifiers to open.")
@click.option("--all-documents", is_flag=True, help="Open any document.")
@click.option("--text-files", is_flag=True, help="Open text files (the default).")
@click.option(
    "--group-open-by",
    type=click.Choice(["all", "none"]),
    default=None,
    help="'all': one invocation for every file; 'none': one per file.",
)
@click.option("--terminal", default=None, help="Supported terminal to run in.")
@click.option("--generic-terminal", default=None, help="Any other terminal app, driven by keystrokes.")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing app.")
@click.option("--shim-path", type=click.Path(path_type=Path), default=None, help="Shim executable to embed.")
@click.option("--identifier", default=None, help="Bundle identifier (default: synthesized).")
@click.option("--icon", type=click.Path(path_type=Path), default=None, help="Custom icon image.")
@click.option("--recipe", type=click.Path(path_type=Path), default=None, help="termdrop.yml with defaults.")
@click.option("--reveal", is_flag=True, help="Show the new app in Finder afterwards.")
@click.pass_context
def generate(
    ctx: click.Context,
    command: str | None,
    out_path: Path | None,
    exts: str | None,
    utis: str | None,
    all_documents: bool,
    text_files: bool,
    group_open_by: str | None,
    terminal: str | None,
    generic_terminal: str | None,
    force: bool,
    shim_path: Path | None,
    identifier: str | None,
    icon: Path | None,
    recipe: Path | None,
    reveal: bool,
) -> None:
    """Generate an app that runs COMMAND on the files it opens."""
    from termdrop.adapters.registry import build_default_registry
    from termdrop.core.config.loader import find_recipe_file, load_recipe
    from termdrop.core.errors import ConfigError, GenerationError
    from termdrop.core.models import (
        Config,
        DocumentTypeSpec,
        GenerationRecipe,
        GroupingPolicy,
        TerminalSelection,
    )
    from termdrop.core.use_cases.generate import generate_app, reveal_bundle

    # ── Recipe defaults ─────────────────────────────────────────
    if recipe is None and command is None:
        recipe = find_recipe_file()
    try:
        defaults = load_recipe(recipe) if recipe else GenerationRecipe()
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    command = command or defaults.command
    if not command:
        raise click.UsageError("Missing argument 'COMMAND'.")
    out = out_path or (Path(defaults.output) if defaults.output else None)
    if out is None:
        raise click.UsageError("Missing argument 'OUT_PATH'.")

    # ── Document types ──────────────────────────────────────────
    chosen = [x for x in (exts is not None, utis is not None, all_documents, text_files) if x]
    if len(chosen) > 1:
        raise click.UsageError("Use only one of --exts, --utis, --all-documents, --text-files.")
    if exts is not None:
        doc_types = DocumentTypeSpec.extensions(exts)
    elif utis is not None:
        doc_types = DocumentTypeSpec.utis(utis)
    elif all_documents:
        doc_types = DocumentTypeSpec.all_documents()
    elif text_files:
        doc_types = DocumentTypeSpec.text_files()
    else:
        doc_types = defaults.document_types or DocumentTypeSpec.text_files()

    # ── Terminal ────────────────────────────────────────────────
    if terminal and generic_terminal:
        raise click.UsageError("Use only one of --terminal and --generic-terminal.")
    registry = build_default_registry()
    if generic_terminal or (not terminal and defaults.generic_terminal):
        selection = TerminalSelection.generic(generic_terminal or defaults.generic_terminal)
    else:
        name = terminal or defaults.terminal or registry.default_name()
        if not registry.is_supported(name):
            click.secho(
                f"❌ Terminal {name} is not supported "
                f"(supported: {', '.join(registry.names())}). "
                "Use --generic-terminal for other apps.",
                fg="red",
            )
            sys.exit(1)
        selection = TerminalSelection.supported(name)

    policy = GroupingPolicy(group_open_by) if group_open_by else (
        defaults.group_open_by or GroupingPolicy.ALL
    )
    try:
        config = Config(command=command, group_open_by=policy, terminal=selection)
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    # ── Generate ────────────────────────────────────────────────
    confirm = None
    if sys.stdin.isatty():
        def confirm(path: Path) -> bool:
            return click.confirm(f"Destination '{path}' already exists. Overwrite?", default=False)

    try:
        app = generate_app(
            config,
            doc_types,
            out,
            shim_path=shim_path or (Path(defaults.shim_path) if defaults.shim_path else None),
            identifier=identifier or defaults.identifier,
            icon_path=icon or (Path(defaults.icon) if defaults.icon else None),
            force=force or defaults.force,
            confirm_overwrite=confirm,
        )
    except GenerationError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        click.secho(f"✅ Created {app}", fg="green")
        click.echo(f"   Runs: {config.command}  ({config.group_open_by.value}, {config.terminal})")

    if reveal or defaults.reveal:
        reveal_bundle(app)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def terminals(as_json: bool) -> None:
    """List supported terminals (the first is the default)."""
    from termdrop.adapters.registry import build_default_registry

    registry = build_default_registry()
    names = registry.names()

    if as_json:
        click.echo(json.dumps({"default": registry.default_name(), "supported": names}, indent=2))
        return

    for name in names:
        marker = " (default)" if name == registry.default_name() else ""
        click.echo(f"  • {name}{marker}")
    click.echo("  Any other app: --generic-terminal <App> (needs Accessibility permission)")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
