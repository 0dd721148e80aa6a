# src/pocket_props/types.py
from __future__ import annotations

from typing import Literal, TypedDict

from typing_extensions import NotRequired

OriginType = Literal["cli", "env", "file", "default", "none"]


class PropertyInput(TypedDict, total=False):
    """One property object as written in a declaration file."""

    name: str
    description: str
    default: str
    sensitive: bool


class PropertyDescription(TypedDict):
    """Help/documentation view of a declared property."""

    name: str
    description: str
    mandatory: bool
    sensitive: bool
    default: str | None  # always None for sensitive properties


class DeclarationFileInput(TypedDict, total=False):
    properties: list[PropertyInput] | dict[str, PropertyInput]

    # runtime behavior
    log_level: str
    strict: bool
    env_prefix: str


class DeclarationFile(TypedDict):
    properties: list[PropertyInput]

    log_level: NotRequired[str]
    strict: NotRequired[bool]
    env_prefix: NotRequired[str]
