# tests/30-utils-tests/test_utils.py
"""Tests for pocket_props.utils."""

import math
import sys
from io import StringIO
from pathlib import Path

import pytest
from pytest import raises

import pocket_props.utils as mod_utils

# ---------------------------------------------------------------------------
# load_jsonc()
# ---------------------------------------------------------------------------


def test_load_jsonc_strips_comments_and_trailing_commas(tmp_path: Path) -> None:
    # --- setup ---
    path = tmp_path / "props.jsonc"
    path.write_text(
        """
        // line comment
        # hash comment
        {
          /* block
             comment */
          "url": "http://example.com/x",
          "items": [1, 2, 3,],
        }
        """,
        encoding="utf-8",
    )

    # --- execute ---
    result = mod_utils.load_jsonc(path)

    # --- verify ---
    assert result == {"url": "http://example.com/x", "items": [1, 2, 3]}


def test_load_jsonc_empty_file_returns_none(tmp_path: Path) -> None:
    path = tmp_path / "empty.jsonc"
    path.write_text("  \n// nothing\n", encoding="utf-8")

    assert mod_utils.load_jsonc(path) is None


def test_load_jsonc_invalid_syntax(tmp_path: Path) -> None:
    path = tmp_path / "bad.jsonc"
    path.write_text('{"a": }', encoding="utf-8")

    with raises(ValueError, match="Invalid JSONC syntax"):
        mod_utils.load_jsonc(path)


def test_load_jsonc_rejects_scalar_root(tmp_path: Path) -> None:
    path = tmp_path / "scalar.json"
    path.write_text('"just a string"', encoding="utf-8")

    with raises(ValueError, match="root type: str"):
        mod_utils.load_jsonc(path)


def test_load_jsonc_missing_and_directory(tmp_path: Path) -> None:
    with raises(FileNotFoundError):
        mod_utils.load_jsonc(tmp_path / "missing.json")
    with raises(ValueError, match="Expected a file"):
        mod_utils.load_jsonc(tmp_path)


# ---------------------------------------------------------------------------
# remove_path_in_error_message()
# ---------------------------------------------------------------------------


def test_remove_path_in_error_message() -> None:
    # --- setup ---
    path = Path("/abs/path/props.jsonc")
    msg = "Invalid JSONC syntax in /abs/path/props.jsonc: Expecting value"

    # --- execute and verify ---
    assert (
        mod_utils.remove_path_in_error_message(msg, path)
        == "Invalid JSONC syntax: Expecting value"
    )


# ---------------------------------------------------------------------------
# plural()
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "s"),
        (1, ""),
        (2, "s"),
        (1.0, ""),
        (math.inf, "s"),
        ([], "s"),
        (["a"], ""),
        ("ab", "s"),
        (None, "s"),
    ],
)
def test_plural(value: object, expected: str) -> None:
    assert mod_utils.plural(value) == expected


# ---------------------------------------------------------------------------
# safe_log()
# ---------------------------------------------------------------------------


def test_safe_log_writes_to_real_stderr(monkeypatch: pytest.MonkeyPatch) -> None:
    # --- setup ---
    buf = StringIO()
    monkeypatch.setattr(sys, "__stderr__", buf)

    # --- execute ---
    mod_utils.safe_log("fatal thing")

    # --- verify ---
    assert buf.getvalue() == "fatal thing\n"


# ---------------------------------------------------------------------------
# read_jsonc()
# ---------------------------------------------------------------------------


def test_read_jsonc_labels_errors_with_file_name(tmp_path: Path) -> None:
    # --- setup ---
    path = tmp_path / "ci.json"
    path.write_text('{"a": 1,,}', encoding="utf-8")

    # --- execute ---
    with raises(ValueError) as e:
        mod_utils.read_jsonc(path, "values file")

    # --- verify ---
    msg = str(e.value)
    assert msg.startswith("Error while loading values file 'ci.json': Invalid JSONC syntax")
    assert str(tmp_path) not in msg


def test_strip_jsonc() -> None:
    assert mod_utils.strip_jsonc('// c\n{"a": [1,],}  # tail\n') == '{"a": [1]}'


def test_strip_jsonc_leaves_strings_alone() -> None:
    text = '{"a": "x // y # z /* w */", "b": "q\\" // still a string", } // end'

    assert mod_utils.strip_jsonc(text) == (
        '{"a": "x // y # z /* w */", "b": "q\\" // still a string" }'
    )
