"""Interactive note selection through fzf."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

FZF_EXECUTABLE = "fzf"
SELECT_PROMPT = "Select a note: "
CANCELLED_EXIT_CODE = 130


class SelectorError(RuntimeError):
    """Base error for selector failures."""


class SelectorNotFoundError(SelectorError):
    """Raised when fzf is not installed."""


class SelectionCancelled(Exception):
    """Raised when the user dismisses the selector (ESC or Ctrl-C)."""


class FzfSelector:
    """Wrapper around the fzf executable for picking one note among many."""

    def __init__(self, executable: str = FZF_EXECUTABLE) -> None:
        self.executable = executable

    def ensure_available(self) -> None:
        """Check that fzf can be found on PATH."""

        if shutil.which(self.executable) is None:
            raise SelectorNotFoundError(
                f"{self.executable} not found in PATH. "
                f"Please install {self.executable} to enable note searching"
            )

    def select(self, paths: Sequence[Path]) -> Path:
        """Let the user choose one of ``paths`` and return it.

        Base names are shown in the given order, one per line. fzf keeps the
        terminal and its stderr; only its stdout is captured. Names travel as
        raw filesystem bytes so any name the directory holds can be offered.
        """

        lines = b"".join(os.fsencode(path.name) + b"\n" for path in paths)
        output = self._run_fzf(lines)

        selected = os.fsdecode(output[:-1] if output.endswith(b"\n") else output)
        for path in paths:
            if path.name == selected:
                return path
        raise SelectorError("selected note not found")

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    def _run_fzf(self, lines: bytes) -> bytes:
        try:
            process = subprocess.run(
                [self.executable, "--no-sort", "--prompt", SELECT_PROMPT],
                input=lines,
                stdout=subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            raise SelectorError(f"failed to select note: {exc}") from exc

        if process.returncode == CANCELLED_EXIT_CODE:
            raise SelectionCancelled()
        if process.returncode != 0:
            raise SelectorError(
                f"failed to select note: {self.executable} exited with "
                f"status {process.returncode}"
            )
        return process.stdout
