# tests/70-config-tests/test_find_config.py

from argparse import Namespace
from pathlib import Path

import pytest

import pocket_props.config as mod_config
from pocket_props.meta import PROGRAM_SCRIPT


def test_find_config_raises_for_directory(tmp_path: Path) -> None:
    """Explicit --config path pointing to a directory should raise ValueError."""
    # --- setup ---
    args = Namespace(config=str(tmp_path))

    # --- execute and verify ---
    with pytest.raises(ValueError, match="directory"):
        mod_config.find_config(args, tmp_path)


def test_find_config_raises_for_missing_explicit_path(tmp_path: Path) -> None:
    args = Namespace(config=str(tmp_path / "missing.jsonc"))

    with pytest.raises(FileNotFoundError, match="not found"):
        mod_config.find_config(args, tmp_path)


def test_find_config_explicit_path(tmp_path: Path) -> None:
    path = tmp_path / "props.json"
    path.write_text("[]", encoding="utf-8")

    assert mod_config.find_config(Namespace(config=str(path)), tmp_path) == path


def test_find_config_none_found(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- execute ---
    result = mod_config.find_config(Namespace(config=None), tmp_path)

    # --- verify ---
    assert result is None
    assert "No declaration file found" in capsys.readouterr().err


def test_find_config_prefers_jsonc(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    jsonc = tmp_path / f".{PROGRAM_SCRIPT}.jsonc"
    json_ = tmp_path / f".{PROGRAM_SCRIPT}.json"
    jsonc.write_text("[]", encoding="utf-8")
    json_.write_text("[]", encoding="utf-8")

    # --- execute ---
    result = mod_config.find_config(Namespace(), tmp_path)

    # --- verify ---
    assert result == jsonc
    assert "Multiple declaration files" in capsys.readouterr().err
