# tests/70-config-tests/test_load_declarations.py
"""Loading a declaration file end to end, up to a filled registry."""

from argparse import Namespace
from pathlib import Path

import pytest

import pocket_props.config as mod_config
import pocket_props.errors as mod_errors
import pocket_props.registry as mod_registry
import pocket_props.runtime as mod_runtime
from tests.utils import write_declarations


def _args(**kwargs: object) -> Namespace:
    defaults: dict[str, object] = {"config": None, "log_level": None, "strict": None}
    defaults.update(kwargs)
    return Namespace(**defaults)


def test_load_config_reports_syntax_errors_without_path(tmp_path: Path) -> None:
    # --- setup ---
    path = write_declarations(tmp_path, '{"properties": [}')

    # --- execute and verify ---
    with pytest.raises(ValueError, match="Error while loading declaration file") as e:
        mod_config.load_config(path)
    assert str(tmp_path) not in str(e.value)


def test_load_and_validate_config_round_trip(tmp_path: Path) -> None:
    # --- setup ---
    write_declarations(
        tmp_path,
        """
        // build properties
        {
          "env_prefix": "BUILD",
          "properties": {
            "retries": { "description": "How often to retry.", "default": "3" },
            "db.password": { "description": "DB password", "sensitive": true },
          },
        }
        """,
    )

    # --- execute ---
    result = mod_config.load_and_validate_config(_args(), tmp_path)
    assert result is not None
    path, declarations, summary = result
    registry = mod_registry.PropertyRegistry()
    descriptors = mod_config.load_declarations(declarations, registry)

    # --- verify ---
    assert path.name == ".pocket-props.jsonc"
    assert summary.valid
    assert declarations["env_prefix"] == "BUILD"
    assert [d.name for d in descriptors] == ["retries", "db.password"]
    assert registry.names() == ["retries", "db.password"]
    assert registry.get("db.password").mandatory  # type: ignore[union-attr]


def test_load_and_validate_config_no_file(tmp_path: Path) -> None:
    assert mod_config.load_and_validate_config(_args(), tmp_path) is None


def test_load_and_validate_config_empty_file(tmp_path: Path) -> None:
    write_declarations(tmp_path, "// nothing declared yet\n")

    result = mod_config.load_and_validate_config(_args(), tmp_path)

    assert result is not None
    assert result[1] == {"properties": []}


def test_load_and_validate_config_invalid_is_silent_value_error(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    write_declarations(tmp_path, '[{"name": "a b", "description": "A."}]')

    # --- execute ---
    with pytest.raises(ValueError, match="validation errors") as e:
        mod_config.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert getattr(e.value, "silent", False) is True
    assert not e.value.data.valid  # type: ignore[attr-defined]
    err = capsys.readouterr().err
    assert "Failed to validate declaration file" in err
    assert "property #1 (a b)" in err


def test_load_and_validate_config_log_level_from_file(tmp_path: Path) -> None:
    write_declarations(
        tmp_path, '{"log_level": "warning", "properties": []}'
    )

    mod_config.load_and_validate_config(_args(), tmp_path)

    assert mod_runtime.current_runtime["log_level"] == "warning"


def test_cli_log_level_beats_file(tmp_path: Path) -> None:
    write_declarations(
        tmp_path, '{"log_level": "warning", "properties": []}'
    )

    mod_config.load_and_validate_config(_args(log_level="debug"), tmp_path)

    assert mod_runtime.current_runtime["log_level"] == "debug"


def test_env_log_level_beats_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # --- setup ---
    monkeypatch.setenv("LOG_LEVEL", "error")
    write_declarations(tmp_path, '{"log_level": "warning", "properties": []}')

    # --- execute ---
    mod_config.load_and_validate_config(_args(), tmp_path)

    # --- verify ---
    assert mod_runtime.current_runtime["log_level"] == "error"


def test_load_declarations_duplicate_names(tmp_path: Path) -> None:
    # --- setup ---
    write_declarations(
        tmp_path,
        """
        [
          { "name": "retries", "description": "First." },
          { "name": "retries", "description": "Second.", "default": "1" }
        ]
        """,
    )
    result = mod_config.load_and_validate_config(_args(), tmp_path)
    assert result is not None
    registry = mod_registry.PropertyRegistry()

    # --- execute ---
    with pytest.raises(mod_errors.DuplicateProperty, match="'retries'"):
        mod_config.load_declarations(result[1], registry)

    # --- verify ---
    assert registry.get("retries").description == "First."  # type: ignore[union-attr]
