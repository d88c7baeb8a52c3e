from __future__ import annotations

import stat
import textwrap
from pathlib import Path

import pytest
from quicknote import config as config_module
from quicknote.config import (
    ConfigError,
    InvalidConfigError,
    NoteConfig,
    NotesDirectoryError,
    ensure_notes_dir,
    load_config,
    resolve_editor,
    resolve_notes_dir,
)


def write_config(tmp_path: Path, content: str) -> Path:
    config_file = tmp_path / "config.toml"
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(textwrap.dedent(content), encoding="utf-8")
    return config_file


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(
        config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent" / "config.toml"
    )


def test_notes_dir_from_environment(tmp_path: Path) -> None:
    env = {"NOTES_DIRECTORY": str(tmp_path / "mine")}
    assert resolve_notes_dir(env) == tmp_path / "mine"


def test_notes_dir_defaults_to_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert resolve_notes_dir({"NOTES_DIRECTORY": ""}) == tmp_path / ".notes"


def test_notes_dir_without_home_is_fatal(monkeypatch) -> None:
    def no_home() -> Path:
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(config_module.Path, "home", staticmethod(no_home))
    with pytest.raises(ConfigError, match="home directory"):
        resolve_notes_dir({})


def test_editor_from_environment() -> None:
    assert resolve_editor({"EDITOR": "nvim"}) == ("nvim", False)


def test_editor_falls_back_to_vi() -> None:
    assert resolve_editor({}) == ("vi", True)
    assert resolve_editor({"EDITOR": ""}) == ("vi", True)


def test_load_config_without_file_uses_environment(tmp_path: Path) -> None:
    config = load_config(
        environ={"NOTES_DIRECTORY": str(tmp_path), "EDITOR": "nano"}
    )
    assert isinstance(config, NoteConfig)
    assert config.notes_dir == tmp_path
    assert config.editor == "nano"
    assert config.editor_is_default is False
    assert config.source_path is None


def test_load_config_file_values_apply_when_env_unset(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path / "cfg",
        """
        [quicknote]
        notes_directory = "notes"
        editor = "emacs -nw"
        """,
    )

    config = load_config(config_path, environ={})
    assert config.notes_dir == (config_path.parent / "notes").resolve()
    assert config.editor == "emacs -nw"
    assert config.source_path == config_path


def test_environment_overrides_config_file(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [quicknote]
        notes_directory = "/somewhere/else"
        editor = "emacs"
        """,
    )

    config = load_config(
        config_path,
        environ={"NOTES_DIRECTORY": str(tmp_path / "env"), "EDITOR": "vim"},
    )
    assert config.notes_dir == tmp_path / "env"
    assert config.editor == "vim"


def test_load_config_missing_explicit_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        load_config(tmp_path / "missing.toml", environ={})


def test_load_config_rejects_non_string_editor(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [quicknote]
        editor = 42
        """,
    )
    with pytest.raises(InvalidConfigError):
        load_config(config_path, environ={})


def test_load_config_rejects_malformed_toml(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, "[quicknote\n")
    with pytest.raises(InvalidConfigError):
        load_config(config_path, environ={})


def test_ensure_notes_dir_creates_with_0755(tmp_path: Path) -> None:
    notes_dir = tmp_path / "a" / "b" / ".notes"

    assert ensure_notes_dir(notes_dir) is True
    assert notes_dir.is_dir()
    assert stat.S_IMODE(notes_dir.stat().st_mode) == 0o755


def test_ensure_notes_dir_leaves_existing_directory(tmp_path: Path) -> None:
    notes_dir = tmp_path / "notes"
    notes_dir.mkdir(mode=0o700)

    assert ensure_notes_dir(notes_dir) is False
    assert stat.S_IMODE(notes_dir.stat().st_mode) == 0o700


def test_ensure_notes_dir_rejects_file(tmp_path: Path) -> None:
    clash = tmp_path / "notes"
    clash.write_text("not a directory", encoding="utf-8")

    with pytest.raises(NotesDirectoryError, match=str(clash)):
        ensure_notes_dir(clash)


def test_ensure_notes_dir_reports_stat_failure(tmp_path: Path) -> None:
    too_long = tmp_path / ("x" * 300) / "notes"

    with pytest.raises(NotesDirectoryError, match="cannot stat"):
        ensure_notes_dir(too_long)
