"""Configuration management for quicknote."""

from __future__ import annotations

import os
import stat
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

DEFAULT_CONFIG_DIR = Path("~/.config/quicknote").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_NOTES_DIRNAME = ".notes"
DEFAULT_EDITOR = "vi"
NOTES_DIR_MODE = 0o755

NOTES_DIRECTORY_ENV = "NOTES_DIRECTORY"
EDITOR_ENV = "EDITOR"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class InvalidConfigError(ConfigError):
    """Raised when the configuration file is unreadable or malformed."""


class NotesDirectoryError(ConfigError):
    """Raised when the notes directory cannot be used or created."""


@dataclass(slots=True)
class NoteConfig:
    """Resolved settings for a single invocation."""

    notes_dir: Path
    editor: str
    editor_is_default: bool = False
    source_path: Path | None = None


def load_config(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> NoteConfig:
    """Resolve settings from the environment, the config file and defaults.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/quicknote/config.toml``) is used if it exists.
    environ:
        Environment mapping, ``os.environ`` when omitted.

    Raises
    ------
    InvalidConfigError
        If an explicitly given file is missing, or any file is malformed.
    ConfigError
        If the home directory is needed but cannot be determined.
    """

    env = os.environ if environ is None else environ
    file_settings, source_path = _read_config_file(path)

    notes_dir = resolve_notes_dir(env, file_settings.get("notes_directory"))
    editor, is_default = resolve_editor(env, file_settings.get("editor"))

    return NoteConfig(
        notes_dir=notes_dir,
        editor=editor,
        editor_is_default=is_default,
        source_path=source_path,
    )


def resolve_notes_dir(
    environ: Mapping[str, str], configured: Path | None = None
) -> Path:
    """Return the notes directory.

    ``$NOTES_DIRECTORY`` wins when non-empty, then ``configured``, then
    ``<home>/.notes``.
    """

    from_env = environ.get(NOTES_DIRECTORY_ENV, "")
    if from_env:
        return Path(from_env).expanduser()
    if configured is not None:
        return configured
    return _home_dir() / DEFAULT_NOTES_DIRNAME


def resolve_editor(
    environ: Mapping[str, str], configured: str | None = None
) -> tuple[str, bool]:
    """Return ``(editor, is_default)``; ``is_default`` marks the vi fallback."""

    from_env = environ.get(EDITOR_ENV, "")
    if from_env:
        return from_env, False
    if configured:
        return configured, False
    return DEFAULT_EDITOR, True


def ensure_notes_dir(notes_dir: Path) -> bool:
    """Create ``notes_dir`` (mode 0755, with parents) when missing.

    Returns True when the directory was created, False if it already existed.
    """

    try:
        st = notes_dir.stat()
    except FileNotFoundError:
        st = None
    except OSError as exc:
        raise NotesDirectoryError(
            f"failed to get notes directory: cannot stat '{notes_dir}': {exc}"
        ) from exc

    if st is not None:
        if stat.S_ISDIR(st.st_mode):
            return False
        raise NotesDirectoryError(
            f"failed to get notes directory: '{notes_dir}' exists and is not "
            "a directory"
        )

    try:
        notes_dir.mkdir(mode=NOTES_DIR_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise NotesDirectoryError(
            f"failed to get notes directory: cannot create '{notes_dir}': {exc}"
        ) from exc
    # mkdir applies the umask; the directory itself always ends up 0755.
    try:
        notes_dir.chmod(NOTES_DIR_MODE)
    except OSError as exc:  # pragma: no cover - freshly created, owned by us
        raise NotesDirectoryError(
            f"failed to get notes directory: cannot chmod '{notes_dir}': {exc}"
        ) from exc
    return True


def _home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError("Could not determine home directory") from exc


def _read_config_file(path: Path | None) -> tuple[dict[str, Any], Path | None]:
    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        if path is not None:
            raise InvalidConfigError(f"Configuration file not found at {config_path}")
        return {}, None

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise InvalidConfigError(
            f"Cannot read configuration file {config_path}: {exc}"
        ) from exc

    section = raw.get("quicknote", {})
    if not isinstance(section, dict):
        raise InvalidConfigError("'quicknote' section must be a table")

    settings: dict[str, Any] = {}

    notes_dir_raw = section.get("notes_directory")
    if notes_dir_raw is not None:
        if not isinstance(notes_dir_raw, str):
            raise InvalidConfigError("'notes_directory' must be a string when provided")
        notes_dir_str = notes_dir_raw.strip()
        if notes_dir_str:
            # Relative paths are resolved against the configuration directory.
            nd = Path(notes_dir_str).expanduser()
            settings["notes_directory"] = (
                nd if nd.is_absolute() else config_path.parent / nd
            ).resolve()

    editor = section.get("editor")
    if editor is not None:
        if not isinstance(editor, str):
            raise InvalidConfigError("'editor' must be a string when provided")
        if editor.strip():
            settings["editor"] = editor.strip()

    return settings, config_path
