# src/pocket_props/meta.py

"""Centralized program identity constants for Pocket Props."""

from dataclasses import dataclass

_BASE = "pocket-props"

# CLI script name (the executable or `poetry run` entrypoint)
PROGRAM_SCRIPT = _BASE

# Human-readable name for banners, help text, etc.
PROGRAM_DISPLAY = _BASE.replace("-", " ").title()

# Python package / import name
PROGRAM_PACKAGE = _BASE.replace("-", "_")

# Environment variable prefix (used for POCKET_PROPS_LOG_LEVEL, etc.)
PROGRAM_ENV = _BASE.replace("-", "_").upper()

# Short tagline or description for help screens and metadata
DESCRIPTION = "Declare, resolve and protect configurable build properties."

VERSION = "0.1.0"


@dataclass(frozen=True)
class Metadata:
    """Version and commit info reported by --version."""

    version: str
    commit: str

    def __str__(self) -> str:
        return f"{self.version} ({self.commit})"
