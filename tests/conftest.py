# tests/conftest.py
"""
Shared test setup for project.

Every test starts from the same logging runtime (info level, no color) and
without any of our log-level environment variables, so output assertions
don't depend on the developer's shell.
"""

import pytest

import pocket_props.meta as mod_meta
import pocket_props.runtime as mod_runtime
from tests.utils import make_trace

TRACE = make_trace("⚡️")


@pytest.fixture(autouse=True)
def _clean_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(f"{mod_meta.PROGRAM_ENV}_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setitem(mod_runtime.current_runtime, "log_level", "info")
    monkeypatch.setitem(mod_runtime.current_runtime, "use_color", False)
    TRACE("runtime reset")


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Automatically skip debug tests unless asked for."""
    keywords = config.getoption("-k") or ""
    if "debug" in keywords.lower():
        return  # user explicitly requested them, don't skip

    for item in items:
        if "debug" in item.keywords:
            item.add_marker(
                pytest.mark.skip(reason="Skipped debug test (use -k debug to run)")
            )
