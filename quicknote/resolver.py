"""Resolution of a free-text query to a single note path."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, Sequence

from .utils.datetime_fmt import format_date_prefix, parse_date_prefix, today_prefix

NOTE_SUFFIX = ".md"

SelectFunc = Callable[[Sequence[Path]], Path]


class ResolverError(RuntimeError):
    """Raised when the notes directory cannot be enumerated."""


def _newest_first_key(path: Path) -> tuple[int, int, str]:
    # Dated names first (latest date wins), then undated ones; ties and
    # undated names compare by full base name.
    name = path.name
    parsed = parse_date_prefix(name)
    if parsed is None:
        return (1, 0, name)
    return (0, -parsed.toordinal(), name)


def sort_newest_first(paths: Sequence[Path]) -> list[Path]:
    """Order note paths by their date prefix, newest first."""

    return sorted(paths, key=_newest_first_key)


def list_notes(notes_dir: Path, query: str = "") -> list[Path]:
    """Return the match set for ``query``.

    With an empty query every note is returned. Otherwise only notes whose
    name (without the ``.md`` suffix) contains ``query`` literally. Only
    regular files at the top level of ``notes_dir`` are considered.
    """

    try:
        entries = list(notes_dir.iterdir())
    except OSError as exc:
        raise ResolverError(f"failed to read notes directory: {exc}") from exc

    matches: list[Path] = []
    for entry in entries:
        name = entry.name
        if not name.endswith(NOTE_SUFFIX):
            continue
        if query and query not in name[: -len(NOTE_SUFFIX)]:
            continue
        if not entry.is_file():
            continue
        matches.append(entry)

    return sort_newest_first(matches)


def new_note_path(notes_dir: Path, title: str, today: date | None = None) -> Path:
    """Path for a new note titled ``title`` created ``today``."""

    prefix = format_date_prefix(today) if today is not None else today_prefix()
    return notes_dir / f"{prefix} {title}{NOTE_SUFFIX}"


def resolve_note(notes_dir: Path, query: str, select: SelectFunc) -> Path:
    """Return the note to open for ``query``.

    - no match: a fresh path dated today (it does not exist yet)
    - one match: that note
    - several matches: whichever one ``select`` returns

    ``select`` may raise ``SelectionCancelled``; it is left to the caller.
    """

    matches = list_notes(notes_dir, query)
    if not matches:
        return new_note_path(notes_dir, query)
    if len(matches) == 1:
        return matches[0]
    return select(matches)
