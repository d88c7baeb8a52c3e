"""Utilities for launching the user's editor on a note file."""

from __future__ import annotations

import shlex
import shutil
import subprocess
from pathlib import Path


class EditorError(RuntimeError):
    """Raised when the editor cannot be started or exits unsuccessfully."""


def open_editor(path: Path, editor: str) -> None:
    """Run ``editor`` on ``path`` in the foreground with inherited stdio.

    ``editor`` names one program, spaces included (``/opt/My Apps/ed``). Only
    when no such program exists is it split with shell quoting rules, so
    values carrying arguments (``"code --wait"``) work too. The note path is
    appended last.
    """

    command = [editor] if shutil.which(editor) else _split_command(editor)
    if not command:
        raise EditorError("failed to open editor: empty editor command")

    try:
        process = subprocess.run([*command, str(path)], check=False)
    except OSError as exc:
        raise EditorError(f"failed to open editor: {exc}") from exc

    if process.returncode != 0:
        raise EditorError(
            f"failed to open editor: {command[0]} exited with status "
            f"{process.returncode}"
        )


def _split_command(editor: str) -> list[str]:
    try:
        return shlex.split(editor)
    except ValueError as exc:
        raise EditorError(
            f"failed to open editor: invalid command {editor!r}: {exc}"
        ) from exc
