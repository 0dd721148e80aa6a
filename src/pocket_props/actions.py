# src/pocket_props/actions.py
import os
import re
import subprocess
from contextlib import suppress
from pathlib import Path

from .constants import DEFAULT_ENV_COMMIT
from .meta import PROGRAM_ENV, VERSION, Metadata
from .utils_logs import get_logger


def get_metadata() -> Metadata:
    """Return version and commit info for this tool.

    - version: pyproject.toml when running from a source checkout,
      otherwise the packaged VERSION
    - commit: {PROGRAM_ENV}_GIT_COMMIT / GIT_COMMIT env, then `git rev-parse`
    """
    logger = get_logger()
    root = Path(__file__).resolve().parents[2]

    version = VERSION
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        logger.trace("trying to read metadata from %s", pyproject)
        text = pyproject.read_text(encoding="utf-8")
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)

    commit = (
        os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_COMMIT}")
        or os.getenv(DEFAULT_ENV_COMMIT)
        or "unknown"
    )
    if commit == "unknown":
        with suppress(Exception):
            logger.trace("trying to get commit from git")
            result = subprocess.run(
                ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
                cwd=root,
                capture_output=True,
                text=True,
                check=True,
            )
            commit = result.stdout.strip() or commit

    return Metadata(version, commit)
