# tests/00-pytest-health-tests/test_01_pytest_module_checks.py
"""
Ensures pytest is running against the src tree and that Python's import
cache (`sys.modules`) points to the correct sources.
"""

import importlib
import inspect
import pkgutil
import sys
from pathlib import Path

import pytest

import pocket_props as app_package
import pocket_props.meta as mod_meta
import pocket_props.utils as mod_utils
from tests.utils import make_trace

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

TRACE = make_trace("🪞")

PROJ_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_ROOT = PROJ_ROOT / "src"


def list_important_modules() -> list[str]:
    """Return all importable submodules under the package."""
    return [
        name
        for _, name, _ in pkgutil.walk_packages(
            app_package.__path__, app_package.__name__ + "."
        )
    ]


def dump_snapshot(*, include_full: bool = False) -> None:
    """Prints a summary of key modules and (optionally) a full sys.modules dump."""
    important_modules = list_important_modules()

    TRACE("======= IMPORTANT MODULES =====")
    for name in important_modules:
        mod = sys.modules.get(name)
        if not mod:
            continue
        origin = getattr(mod, "__file__", None)
        TRACE(f"  {name:<25} {origin}")

    if include_full:
        TRACE("======== OTHER MODULES ========")
        for name, mod in sorted(sys.modules.items()):
            if name in important_modules:
                continue
            origin = getattr(mod, "__file__", None)
            TRACE(f"  {name:<38} {origin}")

    TRACE("===============================")


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_pytest_runtime_cache_integrity() -> None:
    """Every package module must resolve to the src tree."""
    # --- setup ---
    utils_file = str(inspect.getsourcefile(mod_utils))

    # --- execute ---
    TRACE(f"{mod_meta.PROGRAM_PACKAGE}.utils  → {utils_file}")
    important_modules = list_important_modules()

    # --- verify ---
    assert utils_file.startswith(str(SRC_ROOT)), f"{utils_file} not in src/"
    assert important_modules
    for submodule in important_modules:
        mod = importlib.import_module(submodule)
        path = Path(inspect.getsourcefile(mod) or "")
        assert path.is_relative_to(SRC_ROOT), f"{submodule} not in src/: {path}"


def test_public_api_is_importable() -> None:
    for name in app_package.__all__:
        assert hasattr(app_package, name), name


@pytest.mark.debug
def test_debug_dump_all_module_origins() -> None:
    """Optional forensic dump of all loaded modules.

    Always fails intentionally to force pytest to show TRACE output.

    TRACE=1 pytest -k debug -s
    """
    # --- verify ---
    dump_snapshot(include_full=True)

    count = sum(1 for name in sys.modules if name.startswith(mod_meta.PROGRAM_PACKAGE))
    TRACE(f"Loaded {count} {mod_meta.PROGRAM_PACKAGE} modules total")

    # force visible failure for debugging runs
    raise AssertionError(
        f"Intentional fail: {count} {mod_meta.PROGRAM_PACKAGE} modules listed above."
    )
