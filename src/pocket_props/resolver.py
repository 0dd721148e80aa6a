# src/pocket_props/resolver.py

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import InitVar, dataclass
from types import MappingProxyType

from .descriptor import PropertyDescriptor
from .errors import MissingMandatoryProperties
from .guard import SensitiveValueGuard, render
from .registry import PropertyRegistry
from .sources import PropertySource
from .types import OriginType
from .utils_logs import get_handler, get_logger

# --------------------------------------------------------------------------- #
# results
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, repr=False, eq=False)
class ResolvedProperty:
    """A descriptor paired with its value and where the value came from.

    str(), repr() and format() go through the guard; only reveal()
    returns the real value. The value is an init-only argument, not a
    field, so dataclasses.fields() and asdict() never include it.
    """

    descriptor: PropertyDescriptor
    value: InitVar[str]
    origin: OriginType
    source: str

    def __post_init__(self, value: str) -> None:
        object.__setattr__(self, "_value", value)

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def sensitive(self) -> bool:
        return self.descriptor.sensitive

    def reveal(self) -> str:
        """Return the real value. For build logic only, never for display."""
        return self._value

    def __str__(self) -> str:
        return render(self)

    def __format__(self, format_spec: str) -> str:
        return format(render(self), format_spec)

    def __repr__(self) -> str:
        return (
            f"ResolvedProperty(name={self.name!r}, value={render(self)!r},"
            f" origin={self.origin!r}, source={self.source!r})"
        )


class ResolvedProperties(Mapping[str, ResolvedProperty]):
    """Read-only result of one resolution, in declaration order."""

    def __init__(
        self,
        resolved: Mapping[str, ResolvedProperty],
        guard: SensitiveValueGuard,
    ) -> None:
        self._resolved = MappingProxyType(dict(resolved))
        self.guard = guard

    def __getitem__(self, name: str) -> ResolvedProperty:
        return self._resolved[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._resolved)

    def __len__(self) -> int:
        return len(self._resolved)

    def reveal(self, name: str) -> str:
        """Real value of `name`, for consumption by build logic."""
        return self._resolved[name].reveal()

    def render(self, name: str) -> str:
        """Display text of `name` (masked when sensitive)."""
        return self.guard.render(self._resolved[name])

    def origin(self, name: str) -> OriginType:
        return self._resolved[name].origin

    def as_display_dict(self) -> dict[str, str]:
        return {name: self.render(name) for name in self}

    def __repr__(self) -> str:
        return f"ResolvedProperties({self.as_display_dict()!r})"


# --------------------------------------------------------------------------- #
# resolver
# --------------------------------------------------------------------------- #


def _first_hit(
    descriptor: PropertyDescriptor,
    sources: tuple[PropertySource, ...],
) -> tuple[PropertySource, str] | None:
    for source in sources:
        value = source.lookup(descriptor.name)
        if value is not None:
            return source, value
    return None


def resolve(
    registry: PropertyRegistry,
    sources: Iterable[PropertySource],
    *,
    guard: SensitiveValueGuard | None = None,
) -> ResolvedProperties:
    """Resolve every declared property against `sources`, in list order.

    The first source with a value wins (an empty string is a value).
    Optional properties nobody supplied fall back to their declared default.
    Every missing mandatory property is collected and reported together
    in one MissingMandatoryProperties.

    Freezes `registry`; resolving the same registry twice raises
    ResolutionError.
    """
    logger = get_logger()
    registry.begin_resolution()

    if guard is None:
        guard = SensitiveValueGuard()
    ordered = tuple(sources)
    logger.debug(
        "Resolving %d propert%s from: %s",
        len(registry),
        "y" if len(registry) == 1 else "ies",
        " → ".join(s.name for s in ordered) or "(no sources)",
    )

    resolved: dict[str, ResolvedProperty] = {}
    missing: list[PropertyDescriptor] = []

    with guard.redacting(get_handler()):
        for descriptor in registry:
            hit = _first_hit(descriptor, ordered)
            if hit is not None:
                source, value = hit
                prop = ResolvedProperty(descriptor, value, source.origin, source.name)
            elif descriptor.default is not None:
                prop = ResolvedProperty(
                    descriptor, descriptor.default, "default", "declared defaults"
                )
            else:
                logger.debug("No value for mandatory property %s", descriptor.name)
                missing.append(descriptor)
                continue

            if descriptor.sensitive:
                guard.protect(prop.reveal())
            resolved[descriptor.name] = prop
            logger.trace(
                "[RESOLVE] %s = %s (from %s)",
                descriptor.name,
                guard.render(prop),
                prop.source,
            )

    if missing:
        raise MissingMandatoryProperties(
            [d.name for d in missing],
            sensitive=[d.name for d in missing if d.sensitive],
        )

    return ResolvedProperties(resolved, guard)
