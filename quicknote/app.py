"""Application bootstrap and context container for quicknote."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .config import DEFAULT_EDITOR, NoteConfig, ensure_notes_dir, load_config
from .selector import FzfSelector

WarnFunc = Callable[[str], None]


@dataclass(slots=True)
class AppContext:
    """Aggregates the resolved settings and services for one invocation."""

    config: NoteConfig
    selector: FzfSelector


def bootstrap(
    config_path: Path | None = None, *, warn: WarnFunc | None = None
) -> AppContext:
    """Resolve settings, create the notes directory and check for fzf."""

    # Error mapping is left to the CLI, which knows how to present messages.
    config = load_config(config_path)
    ensure_notes_dir(config.notes_dir)

    if config.editor_is_default and warn is not None:
        warn(f"WARNING: $EDITOR not set, defaulting to '{DEFAULT_EDITOR}'")

    selector = FzfSelector()
    selector.ensure_available()

    return AppContext(config=config, selector=selector)
