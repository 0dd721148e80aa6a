# src/pocket_props/sources.py

import json
import os
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .constants import DEFAULT_ENV_PREFIX
from .descriptor import PropertyDescriptor
from .types import OriginType
from .utils import read_jsonc
from .utils_logs import get_logger

# --------------------------------------------------------------------------- #
# base
# --------------------------------------------------------------------------- #


class PropertySource(ABC):
    """One origin of candidate property values.

    Sources hold an immutable snapshot and expose nothing but lookup(),
    so they may be queried repeatedly and from any thread.
    """

    origin: OriginType

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def lookup(self, name: str) -> str | None:
        """Return the raw value for property `name`, or None if absent."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class _MappingSource(PropertySource):
    def __init__(self, values: Mapping[str, str], name: str) -> None:
        super().__init__(name)
        self._values: Mapping[str, str] = MappingProxyType(dict(values))

    def lookup(self, name: str) -> str | None:
        return self._values.get(name)

    def __len__(self) -> int:
        return len(self._values)


def _coerce_values(raw: Mapping[Any, Any], context: str) -> dict[str, str]:
    """Check keys/values are strings; errors name the key, never the value."""
    values: dict[str, str] = {}
    for key, val in raw.items():
        if not isinstance(key, str) or not key:
            xmsg = f"{context}: property names must be non-empty strings, got {key!r}"
            raise TypeError(xmsg)
        if isinstance(val, str):
            values[key] = val
        elif isinstance(val, (bool, int, float)):
            # JSON scalars keep their JSON spelling (true, 3, 1.5)
            values[key] = json.dumps(val)
        else:
            xmsg = (
                f"{context}: value for {key!r} must be a string,"
                f" got {type(val).__name__}"
            )
            raise ValueError(xmsg)
    return values


# --------------------------------------------------------------------------- #
# concrete sources
# --------------------------------------------------------------------------- #


class OverrideSource(_MappingSource):
    """Values given explicitly by the invoking user (e.g. -D name=value)."""

    origin: OriginType = "cli"

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        name: str = "command line",
    ) -> None:
        super().__init__(_coerce_values(values or {}, name), name)


class FileSource(_MappingSource):
    """Values from a project-level values file (JSON object name → value)."""

    origin: OriginType = "file"

    def __init__(self, values: Mapping[str, str], name: str = "values file") -> None:
        super().__init__(_coerce_values(values, name), name)

    @classmethod
    def from_path(cls, path: Path) -> "FileSource":
        data = read_jsonc(path, "values file")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            xmsg = (
                f"Values file '{path.name}' must contain an object"
                f" mapping property names to values, not {type(data).__name__}"
            )
            raise ValueError(xmsg)  # noqa: TRY004

        get_logger().debug("Loaded %d value(s) from %s", len(data), path)
        return cls(data, name=path.name)


def env_key(name: str, prefix: str = DEFAULT_ENV_PREFIX) -> str:
    """Environment variable for a property: `db.password` → `DB_PASSWORD`."""
    key = re.sub(r"[.-]", "_", name).upper()
    if prefix:
        if not prefix.endswith("_"):
            prefix += "_"
        key = prefix.upper() + key
    return key


class EnvironmentSource(PropertySource):
    """Values from the process environment, keyed through a naming transform.

    The environment is copied at construction; later changes to os.environ
    are not seen. Pass `transform=None` to look names up verbatim.
    """

    origin: OriginType = "env"

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = DEFAULT_ENV_PREFIX,
        transform: Callable[[str, str], str] | None = env_key,
        name: str = "environment",
    ) -> None:
        super().__init__(name)
        self.prefix = prefix
        self._transform = transform
        self._environ: Mapping[str, str] = MappingProxyType(
            dict(os.environ if environ is None else environ)
        )

    def key_for(self, name: str) -> str:
        if self._transform is None:
            return name
        return self._transform(name, self.prefix)

    def lookup(self, name: str) -> str | None:
        return self._environ.get(self.key_for(name))


class DefaultSource(_MappingSource):
    """The declared defaults themselves; lowest precedence."""

    origin: OriginType = "default"

    def __init__(
        self,
        descriptors: Iterable[PropertyDescriptor],
        name: str = "declared defaults",
    ) -> None:
        super().__init__(
            {d.name: d.default for d in descriptors if d.default is not None},
            name,
        )


# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def parse_overrides(pairs: Iterable[str]) -> dict[str, str]:
    """Turn `NAME=VALUE` strings into an override mapping. Later pairs win."""
    overrides: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            # the pair is not echoed back, it may hold a secret
            xmsg = "Invalid property override: expected NAME=VALUE"
            raise ValueError(xmsg)
        overrides[key] = value
    return overrides


def default_sources(
    descriptors: Iterable[PropertyDescriptor],
    *,
    overrides: Mapping[str, str] | None = None,
    environ: Mapping[str, str] | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    use_env: bool = True,
    values_file: Path | None = None,
) -> list[PropertySource]:
    """Build the standard precedence list: cli → env → file → defaults."""
    sources: list[PropertySource] = [OverrideSource(overrides)]
    if use_env:
        sources.append(EnvironmentSource(environ, prefix=env_prefix))
    if values_file is not None:
        sources.append(FileSource.from_path(values_file))
    sources.append(DefaultSource(descriptors))
    return sources
