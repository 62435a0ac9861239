"""
modetokens - compile moded design tokens into flat, validated variables.

Nested token trees (per mode, e.g. light/dark) are flattened into canonically
named variables, checked for mode parity and validated against deprecation
and removal ledgers before being written out as SCSS, JSON or DTCG files.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import TokenError, UndefinedReferenceError
from .core.expressions import alpha, darken, fmt, get, lighten
from .core.modes import ModeCollection
from .core.naming import full_name
from .core.variables import VariableCollection

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "TokenError",
    "UndefinedReferenceError",
    "VariableCollection",
    "ModeCollection",
    "full_name",
    "get",
    "alpha",
    "lighten",
    "darken",
    "fmt",
]
