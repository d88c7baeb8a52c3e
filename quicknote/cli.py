"""Click-based command-line interface for quicknote."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Any, Sequence

import click
import yaml

from .app import AppContext, bootstrap
from .config import ConfigError
from .editor import EditorError, open_editor
from .resolver import ResolverError, list_notes, resolve_note
from .selector import SelectionCancelled, SelectorError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class NoteCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""

    def show(self, file: Any = None) -> None:
        click.echo(f"An error occurred: {self.format_message()}", file=file, err=True)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration TOML file.",
)
@click.option(
    "-l",
    "--list",
    "list_only",
    is_flag=True,
    help="Just list notes, don't open editor",
)
@click.option(
    "--info",
    "show_info",
    is_flag=True,
    help="Show the resolved settings and exit.",
)
@click.argument("title", nargs=-1)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path_opt: Path | None,
    list_only: bool,
    show_info: bool,
    title: tuple[str, ...],
) -> None:
    """Really quick and easy note taking.

    Opens markdown notes with $EDITOR and uses fzf to pick between several
    matches. TITLE words are joined into a query: a single matching note is
    opened, several matches are offered in fzf, and no match creates
    "<DD-Mon-YYYY> TITLE.md".

    Notes live in $NOTES_DIRECTORY, which defaults to ~/.notes.
    """

    if list_only and show_info:
        raise NoteCliError("Use only one of --list or --info.")

    query = " ".join(title)
    app = _bootstrap_app(config_path_opt)
    notes_dir = app.config.notes_dir

    if show_info:
        click.echo(_format_info(app))
        return

    if list_only:
        try:
            matches = list_notes(notes_dir, query)
        except ResolverError as exc:
            raise NoteCliError(str(exc)) from exc
        for path in matches:
            # Raw bytes, so names that are not valid UTF-8 still print.
            click.echo(os.fsencode(path.name))
        return

    try:
        note_path = resolve_note(notes_dir, query, select=app.selector.select)
    except SelectionCancelled:
        ctx.exit(0)
    except (ResolverError, SelectorError) as exc:
        raise NoteCliError(str(exc)) from exc

    if not query and not note_path.exists():
        raise NoteCliError("no notes found; pass a title to create one")

    try:
        open_editor(note_path, app.config.editor)
    except EditorError as exc:
        raise NoteCliError(str(exc)) from exc


def _bootstrap_app(config_path: Path | None) -> AppContext:
    try:
        return bootstrap(config_path, warn=lambda msg: click.echo(msg, err=True))
    except (ConfigError, SelectorError) as exc:
        raise NoteCliError(str(exc)) from exc


def _format_info(app: AppContext) -> str:
    config = app.config
    try:
        note_count = len(list_notes(config.notes_dir))
    except ResolverError as exc:
        raise NoteCliError(str(exc)) from exc

    data: dict[str, Any] = {
        "notes_directory": str(config.notes_dir),
        "editor": config.editor,
        "config_file": str(config.source_path) if config.source_path else None,
        "selector": shutil.which(app.selector.executable),
        "notes": note_count,
    }
    return yaml.safe_dump(data, sort_keys=False).strip()


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name="note", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return 1
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0
