# src/pocket_props/config.py


import argparse
import os
from pathlib import Path
from typing import Any, cast

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .descriptor import PropertyDescriptor
from .meta import PROGRAM_ENV, PROGRAM_SCRIPT
from .property_validate import (
    ValidationSummary,
    check_unknown_keys,
    collect_msg,
    new_summary,
    validate_declaration,
)
from .registry import PropertyRegistry
from .runtime import current_runtime
from .types import DeclarationFile, DeclarationFileInput, PropertyInput
from .utils import plural, read_jsonc
from .utils_logs import LEVEL_ORDER, log

ROOT_KEYS = tuple(DeclarationFileInput.__annotations__)
PROPERTY_KEYS = tuple(PropertyInput.__annotations__)


def determine_log_level(
    args: argparse.Namespace,
    file_log_level: str | None = None,
) -> str:
    """Resolve log level from CLI → env → declaration file → default."""
    if getattr(args, "log_level", None):
        return cast("str", args.log_level)

    env_log_level = os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}") or os.getenv(
        DEFAULT_ENV_LOG_LEVEL
    )
    if env_log_level:
        return env_log_level

    if file_log_level:
        return file_log_level

    return DEFAULT_LOG_LEVEL


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    missing_level: str = "error",
) -> Path | None:
    """Locate a declaration file.

    Search order:
      1. Explicit path from CLI (--config)
      2. Default candidates in the current working directory:
         .{PROGRAM_SCRIPT}.jsonc, .{PROGRAM_SCRIPT}.json

    Returns the first matching path, or None if none was found.
    """
    # --- 1. Explicit config path ---
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        if not config.exists():
            # Explicit path → hard failure
            xmsg = f"Specified declaration file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified declaration path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidate files ---
    candidates: list[Path] = [
        cwd / f".{PROGRAM_SCRIPT}.jsonc",
        cwd / f".{PROGRAM_SCRIPT}.json",
    ]
    found = [p for p in candidates if p.exists()]

    if not found:
        log(missing_level, f"No declaration file found in {cwd}")
        return None

    if len(found) > 1:
        names = ", ".join(p.name for p in found)
        log(
            "warning",
            f"Multiple declaration files detected ({names}); using {found[0].name}.",
        )
    return found[0]


def load_config(config_path: Path) -> dict[str, Any] | list[Any] | None:
    """Load the raw declaration data (dict, list, or None for an empty file)."""
    return read_jsonc(config_path, "declaration file")


def parse_config(raw_config: dict[str, Any] | list[Any] | None) -> dict[str, Any] | None:
    """Normalize the accepted file shapes into {"properties": [...], ...}.

    Accepted:
      - naked list of property objects
      - {"properties": [ {...}, ... ], ...}
      - {"properties": {name: {...}, ...}, ...}  (name taken from the key)
      - a single property object {"name": ..., "description": ...}

    Returns None for empty input.
    """
    if not raw_config:
        return None

    if isinstance(raw_config, list):
        return {"properties": list(raw_config)}

    root = dict(raw_config)
    props: Any = root.get("properties")

    if props is None and "name" in root:
        log("trace", "[PARSE] single property object")
        return {"properties": [root]}

    if isinstance(props, dict):
        log("trace", "[PARSE] properties keyed by name")
        entries: list[Any] = []
        for name, entry in cast("dict[str, Any]", props).items():
            if not isinstance(entry, dict):
                entries.append(entry)
                continue
            inner = cast("dict[str, Any]", entry).get("name", name)
            if inner != name:
                log(
                    "warning",
                    f"Property key {name!r} disagrees with its `name` {inner!r};"
                    " using the key.",
                )
            entries.append({**entry, "name": name})
        root["properties"] = entries
    return root


def validate_config(
    parsed_cfg: dict[str, Any], *, strict: bool | None = None
) -> ValidationSummary:
    """Check the structure of a parsed declaration file.

    Every declaration is checked up front so all problems are reported
    at once; warnings about individual declarations are left for
    declare() to log when the property is registered.

    `strict` (CLI) takes precedence over the file's own `strict` key.
    """
    strict_from_file: Any = parsed_cfg.get("strict")
    if strict is None:
        strict = strict_from_file if isinstance(strict_from_file, bool) else False
    summary = new_summary(strict=strict)

    # --- root keys ---
    check_unknown_keys(
        strict, parsed_cfg, ROOT_KEYS, "in top-level configuration", summary
    )

    level: Any = parsed_cfg.get("log_level")
    if level is not None and (not isinstance(level, str) or level not in LEVEL_ORDER):
        collect_msg(
            strict,
            f"`log_level` must be one of {', '.join(LEVEL_ORDER)}, got {level!r}",
            summary,
            is_error=True,
        )
    if "strict" in parsed_cfg and not isinstance(strict_from_file, bool):
        collect_msg(strict, "`strict` must be a bool", summary, is_error=True)
    prefix: Any = parsed_cfg.get("env_prefix")
    if prefix is not None and not isinstance(prefix, str):
        collect_msg(strict, "`env_prefix` must be a string", summary, is_error=True)

    # --- properties ---
    props: Any = parsed_cfg.get("properties", [])
    if not isinstance(props, list):
        collect_msg(
            strict,
            "`properties` must be a list of property objects.",
            summary,
            is_error=True,
        )
        return summary

    if not props:
        collect_msg(False, "No `properties` declared.", summary)
        return summary

    for i, entry in enumerate(cast("list[Any]", props)):
        if not isinstance(entry, dict):
            collect_msg(
                strict,
                f"Property #{i + 1} must be an object with named keys"
                f" (not {type(entry).__name__})",
                summary,
                is_error=True,
            )
            continue

        entry = cast("dict[str, Any]", entry)
        label = entry.get("name") if isinstance(entry.get("name"), str) else None
        where = f"property #{i + 1}" + (f" ({label})" if label else "")
        context = f"in {where}"
        check_unknown_keys(strict, entry, PROPERTY_KEYS, context, summary)

        decl = validate_declaration(
            entry.get("name"),
            entry.get("description"),
            entry.get("default"),
            entry.get("sensitive", False),
            strict=strict,
        )
        for problem in decl.problems:
            collect_msg(strict, f"{where}: {problem}", summary, is_error=True)

    return summary


def _validation_summary(summary: ValidationSummary, config_path: Path) -> None:
    """Pretty-print a validation summary using the standard log() interface."""
    mode = "strict mode" if summary.strict else "lenient mode"

    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(
            f"{len(summary.warnings)} normal warning{plural(summary.warnings)}",
        )
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    if not summary.valid:
        log(
            "error",
            f"Failed to validate declaration file {config_path.name} ({mode})."
            + counts_msg,
        )
    elif counts:
        log(
            "warning",
            f"Validated declaration file {config_path.name} ({mode}) with warnings."
            + counts_msg,
        )
    else:
        log("debug", f"Validated {config_path.name} ({mode}) successfully.")

    if summary.errors:
        log("error", "\nErrors:\n  • " + "\n  • ".join(summary.errors))
    if summary.strict_warnings:
        log(
            "error",
            "\nStrict warnings (treated as errors):\n"
            "  • " + "\n  • ".join(summary.strict_warnings),
        )
    if summary.warnings:
        log(
            "warning",
            "\nWarnings (non-fatal):\n  • " + "\n  • ".join(summary.warnings),
        )


def load_and_validate_config(
    args: argparse.Namespace,
    cwd: Path,
) -> tuple[Path, DeclarationFile, ValidationSummary] | None:
    """Find, load, parse, and validate the declaration file.

    Also settles the effective log level (CLI/env/file/default) as early
    as possible.

    Returns (path, declarations, summary), or None if no file was found.
    An empty file yields an empty declaration list.
    """
    current_runtime["log_level"] = determine_log_level(args)

    config_path = find_config(args, cwd)
    if config_path is None:
        return None

    raw_config = load_config(config_path)

    if isinstance(raw_config, dict):
        raw_log_level = raw_config.get("log_level")
        if isinstance(raw_log_level, str) and raw_log_level:
            current_runtime["log_level"] = determine_log_level(args, raw_log_level)

    parsed_cfg = parse_config(raw_config) or {"properties": []}

    strict = True if getattr(args, "strict", False) else None
    summary = validate_config(parsed_cfg, strict=strict)
    _validation_summary(summary, config_path)
    if not summary.valid:
        xmsg = f"Declaration file {config_path.name} contains validation errors."
        exception = ValueError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        exception.data = summary  # type: ignore[attr-defined]
        raise exception

    return config_path, cast("DeclarationFile", parsed_cfg), summary


def load_declarations(
    declarations: DeclarationFile,
    registry: PropertyRegistry,
    *,
    strict: bool | None = None,
) -> list[PropertyDescriptor]:
    """Declare every property of a validated file into `registry`."""
    descriptors: list[PropertyDescriptor] = []
    for entry in declarations["properties"]:
        descriptors.append(
            registry.declare(
                entry.get("name"),
                entry.get("description"),
                entry.get("default"),
                entry.get("sensitive", False),
                strict=strict,
            )
        )
    count = len(descriptors)
    log("debug", f"Declared {count} propert{'y' if count == 1 else 'ies'}")
    return descriptors
