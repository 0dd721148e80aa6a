# src/pocket_props/property_validate.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any

from .constants import (
    DEFAULT_HINT_CUTOFF,
    DEFAULT_STRICT_DECLARATIONS,
    NAME_PATTERN,
    UNSET_MARKER,
)
from .utils import plural

# --- dataclasses ------------------------------------------------------


@dataclass
class ValidationSummary:
    valid: bool
    errors: list[str]
    strict_warnings: list[str]
    warnings: list[str]
    strict: bool

    @property
    def problems(self) -> list[str]:
        """Everything that makes the summary invalid."""
        return [*self.errors, *self.strict_warnings]


def new_summary(*, strict: bool = DEFAULT_STRICT_DECLARATIONS) -> ValidationSummary:
    return ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=strict,
    )


# --- helpers --------------------------------------------------------


def collect_msg(
    strict: bool,
    msg: str,
    summary: ValidationSummary,  # modified in function, not returned
    *,
    is_error: bool = False,
) -> None:
    """
    Route a message to the appropriate bucket.
    Errors are always fatal.
    Warnings may escalate to strict_warnings in strict mode.
    """
    if is_error:
        summary.errors.append(msg)
    elif strict:
        summary.strict_warnings.append(msg)
    else:
        summary.warnings.append(msg)
    summary.valid = not summary.errors and not summary.strict_warnings


def check_unknown_keys(
    strict: bool,
    data: dict[str, Any],
    known: Iterable[str],
    context: str,
    summary: ValidationSummary,  # modified in function, not returned
) -> bool:
    """Warn about keys outside `known`, with a 'did you mean' hint."""
    known = list(known)
    unknown = [k for k in data if k not in known]
    if not unknown:
        return True

    joined = ", ".join(f"`{u}`" for u in unknown)
    msg = f"Unknown key{plural(unknown)} {joined} {context}."

    hints: list[str] = []
    for k in unknown:
        close = get_close_matches(k, known, n=1, cutoff=DEFAULT_HINT_CUTOFF)
        if close:
            hints.append(f"'{k}' → '{close[0]}'")
    if hints:
        msg += "\nHint: did you mean " + ", ".join(hints) + "?"

    collect_msg(strict, msg, summary)
    return not strict


# ---------------------------------------------------------------------------
# declaration validator
# ---------------------------------------------------------------------------


def _check_name(name: Any, summary: ValidationSummary) -> None:
    if not isinstance(name, str):
        collect_msg(
            True,
            f"name must be a string, got {type(name).__name__}",
            summary,
            is_error=True,
        )
        return
    if not name:
        collect_msg(True, "name must not be empty", summary, is_error=True)
        return
    if not NAME_PATTERN.fullmatch(name):
        bad = sorted({c for c in name if not NAME_PATTERN.fullmatch(c)})
        collect_msg(
            True,
            f"name contains disallowed character{plural(bad)} {''.join(bad)!r}"
            " (allowed: letters, digits, '.', '_', '-')",
            summary,
            is_error=True,
        )


def _check_description(description: Any, summary: ValidationSummary) -> None:
    if not isinstance(description, str):
        collect_msg(
            True,
            f"description must be a string, got {type(description).__name__}",
            summary,
            is_error=True,
        )
    elif not description.strip():
        collect_msg(True, "description must not be empty", summary, is_error=True)


def validate_declaration(
    name: Any,
    description: Any,
    default: Any = None,
    sensitive: Any = False,
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Validate one property declaration without registering it.

    Errors (always fatal):
      - name missing, not a string, or outside [A-Za-z0-9._-]
      - description missing or blank
      - default not a string, or equal to the reserved unset marker
      - sensitive not a bool

    Warnings (fatal only when strict):
      - sensitive property with a non-empty default, since the default
        is readable by anyone with the build script
    """
    if strict is None:
        strict = DEFAULT_STRICT_DECLARATIONS
    summary = new_summary(strict=strict)

    _check_name(name, summary)
    _check_description(description, summary)

    if default is not None:
        if not isinstance(default, str):
            collect_msg(
                True,
                f"default must be a string, got {type(default).__name__}",
                summary,
                is_error=True,
            )
        elif default == UNSET_MARKER:
            collect_msg(
                True,
                f"default {UNSET_MARKER!r} is reserved to mean 'no default';"
                " omit the default to declare a mandatory property",
                summary,
                is_error=True,
            )

    if not isinstance(sensitive, bool):
        collect_msg(
            True,
            f"sensitive must be a bool, got {type(sensitive).__name__}",
            summary,
            is_error=True,
        )
    elif sensitive and isinstance(default, str) and default:
        collect_msg(
            strict,
            "sensitive property declares a non-empty default;"
            " the default is visible to anyone reading the build script",
            summary,
        )

    return summary
