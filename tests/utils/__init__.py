# tests/utils/__init__.py

from .patch_everywhere import patch_everywhere
from .props import make_registry, write_declarations
from .trace import TRACE, make_trace

__all__ = [
    "TRACE",
    "make_registry",
    "make_trace",
    "patch_everywhere",
    "write_declarations",
]
