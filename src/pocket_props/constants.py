# src/pocket_props/constants.py
"""
Central constants used across the project.
"""

import re

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_COMMIT: str = "GIT_COMMIT"

# --- declaration rules ---
NAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+")  # use with fullmatch()

# Textual "no default" marker used by declaration files and the annotation
# form; a default equal to it would be indistinguishable from "unset".
UNSET_MARKER: str = "#-_UNSET_-#"

# Fixed mask, independent of the real value's length.
MASK_TOKEN: str = "********"

# --- config defaults ---
DEFAULT_STRICT_DECLARATIONS: bool = False
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_ENV_PREFIX: str = ""
DEFAULT_HINT_CUTOFF: float = 0.6
