# src/pocket_props/registry.py

"""Per-invocation collection of declared properties.

A registry accepts declarations from a single writer (the build script
evaluator) until resolution begins, then becomes read-only. Create a new
registry for every build invocation; nothing here is process-global.
"""

from collections.abc import Iterator
from typing import Any

from .descriptor import PropertyDescriptor, declare
from .errors import DuplicateProperty, RegistryFrozen, ResolutionError
from .types import PropertyDescription
from .utils_logs import get_logger


class PropertyRegistry:
    def __init__(self) -> None:
        self._descriptors: dict[str, PropertyDescriptor] = {}
        self._frozen = False
        self._resolution_started = False

    # --- declaration phase ------------------------------------------------

    def declare(
        self,
        name: Any,
        description: Any,
        default: Any = None,
        sensitive: Any = False,
        *,
        strict: bool | None = None,
    ) -> PropertyDescriptor:
        """Validate, build and register a descriptor in one step."""
        if self._frozen:
            raise RegistryFrozen(str(name))
        descriptor = declare(name, description, default, sensitive, strict=strict)
        self.register(descriptor)
        return descriptor

    def register(self, descriptor: PropertyDescriptor) -> None:
        """Add a descriptor; the first registration of a name always wins."""
        if not isinstance(descriptor, PropertyDescriptor):
            xmsg = f"Expected a PropertyDescriptor, got {type(descriptor).__name__}"
            raise TypeError(xmsg)
        if self._frozen:
            raise RegistryFrozen(descriptor.name)
        if descriptor.name in self._descriptors:
            raise DuplicateProperty(descriptor.name)

        self._descriptors[descriptor.name] = descriptor
        get_logger().trace("[REGISTER] %s (#%d)", descriptor.name, len(self))

    # --- lifecycle ----------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Stop accepting declarations. Idempotent."""
        if not self._frozen:
            get_logger().trace("[REGISTER] frozen with %d properties", len(self))
        self._frozen = True

    def begin_resolution(self) -> None:
        """Freeze and claim the registry's single resolution attempt.

        Called by resolve(); a second call raises ResolutionError whether
        or not the first attempt succeeded.
        """
        if self._resolution_started:
            xmsg = (
                "Properties have already been resolved for this invocation;"
                " create a new registry to resolve again."
            )
            raise ResolutionError(xmsg)
        self.freeze()
        self._resolution_started = True

    # --- queries ------------------------------------------------------------

    def get(self, name: str) -> PropertyDescriptor | None:
        return self._descriptors.get(name)

    def names(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[PropertyDescriptor]:
        return iter(self._descriptors.values())

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<PropertyRegistry {state} properties={self.names()!r}>"

    def describe_all(self) -> list[PropertyDescription]:
        """Return help entries in declaration order.

        Defaults of sensitive properties are never included.
        """
        return [
            {
                "name": d.name,
                "description": d.description,
                "mandatory": d.mandatory,
                "sensitive": d.sensitive,
                "default": None if d.sensitive else d.default,
            }
            for d in self
        ]


def register(descriptor: PropertyDescriptor, registry: PropertyRegistry) -> None:
    """Register `descriptor` in `registry` (see PropertyRegistry.register)."""
    registry.register(descriptor)
