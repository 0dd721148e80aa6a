# src/pocket_props/descriptor.py

from dataclasses import dataclass
from typing import Any

from .constants import MASK_TOKEN
from .errors import InvalidDeclaration
from .property_validate import validate_declaration
from .utils_logs import get_logger


@dataclass(frozen=True, repr=False)
class PropertyDescriptor:
    """Immutable declaration of one configurable build property.

    `default=None` marks the property mandatory. `name` is its only identity.
    Construction validates the fields and raises InvalidDeclaration, so a
    descriptor built by hand cannot bypass declare().
    """

    name: str
    description: str
    default: str | None = None
    sensitive: bool = False

    def __post_init__(self) -> None:
        # strict-only warnings are left to declare(); errors hold for every path
        summary = validate_declaration(
            self.name, self.description, self.default, self.sensitive, strict=False
        )
        if summary.errors:
            raise InvalidDeclaration(self.name, summary.errors)

    @property
    def mandatory(self) -> bool:
        return self.default is None

    def __repr__(self) -> str:
        if self.default is None:
            default = "<mandatory>"
        elif self.sensitive:
            default = MASK_TOKEN
        else:
            default = repr(self.default)
        return (
            f"PropertyDescriptor(name={self.name!r}, description={self.description!r},"
            f" default={default}, sensitive={self.sensitive})"
        )


def declare(
    name: Any,
    description: Any,
    default: Any = None,
    sensitive: Any = False,
    *,
    strict: bool | None = None,
) -> PropertyDescriptor:
    """Validate a declaration and build its descriptor.

    Raises InvalidDeclaration listing every problem found, not just the first.
    Non-fatal warnings are logged.
    """
    logger = get_logger()
    summary = validate_declaration(name, description, default, sensitive, strict=strict)
    if not summary.valid:
        raise InvalidDeclaration(name, summary.problems)

    for warning in summary.warnings:
        logger.warning("Property %r: %s", name, warning)

    descriptor = PropertyDescriptor(
        name=name,
        description=description,
        default=default,
        sensitive=sensitive,
    )
    logger.trace("[DECLARE] %r", descriptor)
    return descriptor
