# src/pocket_props/errors.py

"""Exceptions raised while declaring and resolving properties.

Every error names the offending properties, never their values.
The `code` and `silent` attributes are read by the CLI when it turns
an exception into an exit status.
"""

from collections.abc import Iterable, Sequence

from .utils import plural


class PropertyError(Exception):
    """Base class for all property declaration and resolution errors."""

    code: int = 1
    silent: bool = False


class InvalidDeclaration(PropertyError, ValueError):
    """A property declaration is malformed; nothing was registered."""

    def __init__(self, name: object, problems: Sequence[str]) -> None:
        self.name = name
        self.problems = list(problems)
        label = name if isinstance(name, str) and name else "<unnamed>"
        details = "; ".join(self.problems)
        super().__init__(f"Invalid declaration of property {label!r}: {details}")


class DuplicateProperty(PropertyError, ValueError):
    """A property with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Property {name!r} is already declared.")


class RegistryFrozen(PropertyError, RuntimeError):
    """The registry no longer accepts declarations."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Cannot declare property {name!r}: resolution has already begun."
        )


class ResolutionError(PropertyError, RuntimeError):
    """Resolution was attempted more than once on the same registry."""


class MissingMandatoryProperties(PropertyError, RuntimeError):
    """One or more mandatory properties received no value from any source."""

    def __init__(self, names: Iterable[str], sensitive: Iterable[str] = ()) -> None:
        self.names = tuple(names)
        self.sensitive = frozenset(sensitive)
        labels = [
            f"{n} (sensitive)" if n in self.sensitive else n for n in self.names
        ]
        super().__init__(
            f"Missing value{plural(self.names)} for mandatory"
            f" propert{'ies' if len(self.names) != 1 else 'y'}: {', '.join(labels)}"
        )
