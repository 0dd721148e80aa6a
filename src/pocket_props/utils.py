# src/pocket_props/utils.py


import json
import os
import re
import sys
from contextlib import suppress
from pathlib import Path
from typing import Any, TextIO, cast

# --- utils --------------------------------------------------------------------

# Strings are matched first so that `//`, `#` or `,]` inside a value survive.
_STRING = r'"(?:\\.|[^"\\])*"'
_COMMENT_OR_STRING = re.compile(_STRING + r"|//[^\n]*|#[^\n]*|/\*.*?\*/", re.DOTALL)
_TRAILING_COMMA_OR_STRING = re.compile(_STRING + r"|,(?=\s*[}\]])")

JsonData = dict[str, Any] | list[Any]


def should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if "NO_COLOR" in os.environ:
        return False
    if os.getenv("FORCE_COLOR", "").lower() in {"1", "true", "yes"}:
        return True
    return sys.stdout.isatty()


def _keep_strings(match: re.Match[str]) -> str:
    token = match.group(0)
    return token if token.startswith('"') else ""


def strip_jsonc(text: str) -> str:
    """Reduce JSONC text to plain JSON (comments and trailing commas removed).

    String literals are left untouched, so values may contain `#` or `//`.
    """
    text = _COMMENT_OR_STRING.sub(_keep_strings, text)
    return _TRAILING_COMMA_OR_STRING.sub(_keep_strings, text).strip()


def load_jsonc(path: Path) -> JsonData | None:
    """Load a JSONC file whose root is an object or a list.

    Returns None when the file holds nothing but whitespace and comments.
    """
    if not path.exists():
        xmsg = f"JSONC file not found: {path}"
        raise FileNotFoundError(xmsg)
    if not path.is_file():
        xmsg = f"Expected a file: {path}"
        raise ValueError(xmsg)

    text = strip_jsonc(path.read_text(encoding="utf-8"))
    if not text:
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = (
            f"Invalid JSONC syntax in {path}:"
            f" {e.msg} (line {e.lineno}, column {e.colno})"
        )
        raise ValueError(xmsg) from e

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSONC root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("JsonData", data)


def read_jsonc(path: Path, label: str) -> JsonData | None:
    """load_jsonc() with parse errors reported against `label` and file name.

    e.g. "Error while loading values file 'ci.json': Invalid JSONC syntax: ..."
    """
    try:
        return load_jsonc(path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), path)
        xmsg = f"Error while loading {label} '{path.name}': {clean_msg}"
        raise ValueError(xmsg) from e


def remove_path_in_error_message(inner_msg: str, path: Path) -> str:
    """Drop mentions of `path` (and a leading "in") from an error message.

    Example:
        "Invalid JSONC syntax in /abs/path/props.jsonc: Expecting value"
        → "Invalid JSONC syntax: Expecting value"

    """
    clean_msg = inner_msg
    for target in (str(path), path.name):
        for quote in ("", "'", '"'):
            clean_msg = clean_msg.replace(f"in {quote}{target}{quote}", "")
        clean_msg = clean_msg.replace(target, "")

    clean_msg = re.sub(r"\s{2,}", " ", clean_msg.strip(": ").strip())
    return re.sub(r"\s*:\s*", ": ", clean_msg)


def plural(obj: Any) -> str:
    """'s' unless obj (a number or anything with a length) counts exactly one."""
    try:
        count = len(obj)
    except TypeError:
        count = obj if isinstance(obj, (int, float)) else 0
    return "" if count == 1 else "s"


def safe_log(msg: str) -> None:
    """Emergency logger that never fails."""
    stream = cast("TextIO", sys.__stderr__)
    try:
        print(msg, file=stream)
    except Exception:  # noqa: BLE001
        # never crash during crash reporting
        with suppress(Exception):
            stream.write(f"[INTERNAL] {msg}\n")
