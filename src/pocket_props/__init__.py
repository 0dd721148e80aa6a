# src/pocket_props/__init__.py

"""Pocket Props: declare, resolve and protect configurable build properties.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use by a host build tool.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - PropertyRegistry    → per-invocation declarations (declare / register)
    - default_sources()   → overrides → environment → values file → defaults
    - resolve()           → one-shot resolution, batch-reports missing values
    - SensitiveValueGuard → masks sensitive values in anything displayed
    - main()              → CLI entrypoint
"""

from .actions import get_metadata
from .cli import main
from .config import (
    determine_log_level,
    find_config,
    load_and_validate_config,
    load_config,
    load_declarations,
    parse_config,
    validate_config,
)
from .constants import (
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_ENV_PREFIX,
    DEFAULT_LOG_LEVEL,
    DEFAULT_STRICT_DECLARATIONS,
    MASK_TOKEN,
    UNSET_MARKER,
)
from .describe import format_help
from .descriptor import PropertyDescriptor, declare
from .errors import (
    DuplicateProperty,
    InvalidDeclaration,
    MissingMandatoryProperties,
    PropertyError,
    RegistryFrozen,
    ResolutionError,
)
from .guard import RedactingFilter, SensitiveValueGuard, render
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .property_validate import ValidationSummary, validate_declaration
from .registry import PropertyRegistry, register
from .resolver import ResolvedProperties, ResolvedProperty, resolve
from .runtime import Runtime, current_runtime
from .sources import (
    DefaultSource,
    EnvironmentSource,
    FileSource,
    OverrideSource,
    PropertySource,
    default_sources,
    env_key,
    parse_overrides,
)
from .types import OriginType, PropertyDescription, PropertyInput
from .utils import load_jsonc, read_jsonc, should_use_color
from .utils_logs import LEVEL_ORDER, get_logger, log, set_log_level


__all__ = [  # noqa: RUF022
    # --- CLI / Actions ---
    "get_metadata",
    "main",
    #
    # --- Declaration ---
    "PropertyDescriptor",
    "PropertyRegistry",
    "declare",
    "register",
    "validate_declaration",
    "ValidationSummary",
    #
    # --- Sources / Resolution ---
    "DefaultSource",
    "EnvironmentSource",
    "FileSource",
    "OverrideSource",
    "PropertySource",
    "default_sources",
    "env_key",
    "parse_overrides",
    "ResolvedProperties",
    "ResolvedProperty",
    "resolve",
    #
    # --- Display ---
    "RedactingFilter",
    "SensitiveValueGuard",
    "format_help",
    "render",
    #
    # --- Errors ---
    "DuplicateProperty",
    "InvalidDeclaration",
    "MissingMandatoryProperties",
    "PropertyError",
    "RegistryFrozen",
    "ResolutionError",
    #
    # --- Config Handling ---
    "determine_log_level",
    "find_config",
    "load_and_validate_config",
    "load_config",
    "load_declarations",
    "parse_config",
    "validate_config",
    #
    # --- Constants / Metadata / Runtime ---
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_ENV_PREFIX",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_STRICT_DECLARATIONS",
    "MASK_TOKEN",
    "UNSET_MARKER",
    "Metadata",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "Runtime",
    "current_runtime",
    #
    # --- utils ---
    "LEVEL_ORDER",
    "get_logger",
    "load_jsonc",
    "read_jsonc",
    "log",
    "set_log_level",
    "should_use_color",
    #
    # --- Types ---
    "OriginType",
    "PropertyDescription",
    "PropertyInput",
]
