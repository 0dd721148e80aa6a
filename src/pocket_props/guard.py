# src/pocket_props/guard.py

"""Masking of sensitive property values in anything meant for display.

Display code goes through render(); build logic that needs the real value
calls ResolvedProperty.reveal() instead. As a second line of defence, a
guard remembers every sensitive value it has seen and can scrub them from
arbitrary text, including log records via RedactingFilter.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from .constants import MASK_TOKEN

if TYPE_CHECKING:
    from .resolver import ResolvedProperty


def render(resolved: "ResolvedProperty", mask: str = MASK_TOKEN) -> str:
    """Display text for a resolved property: the mask if sensitive."""
    if resolved.descriptor.sensitive:
        return mask
    return resolved.reveal()


class SensitiveValueGuard:
    def __init__(self, mask: str = MASK_TOKEN) -> None:
        self.mask = mask
        self._secrets: set[str] = set()
        self._filter = RedactingFilter(self)

    def render(self, resolved: "ResolvedProperty") -> str:
        return render(resolved, self.mask)

    def protect(self, value: str) -> None:
        """Remember a sensitive value so redact() can scrub it."""
        if value:
            self._secrets.add(value)

    def redact(self, text: str) -> str:
        # longest first so a secret containing another is masked whole
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, self.mask)
        return text

    def __len__(self) -> int:
        return len(self._secrets)

    def __repr__(self) -> str:
        return f"<SensitiveValueGuard protecting {len(self)} value(s)>"

    @property
    def log_filter(self) -> "RedactingFilter":
        return self._filter

    @contextmanager
    def redacting(self, handler: logging.Handler) -> Generator[None, None, None]:
        """Scrub protected values from everything `handler` emits."""
        if self._filter in handler.filters:
            # already installed by an outer block, which will remove it
            yield
            return
        handler.addFilter(self._filter)
        try:
            yield
        finally:
            handler.removeFilter(self._filter)


class RedactingFilter(logging.Filter):
    """Replace protected values in a record's rendered message."""

    def __init__(self, guard: SensitiveValueGuard) -> None:
        super().__init__()
        self.guard = guard

    def filter(self, record: logging.LogRecord) -> bool:
        if not len(self.guard):
            return True
        message = record.getMessage()
        redacted = self.guard.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
