"""
Canonical variable naming.

A variable is addressed by its type prefix joined to the first path segment
with ``-`` and the remaining segments with ``.``::

    full_name("colors", ["btn", "primary", "bg"]) == "colors-btn.primary.bg"
"""

from __future__ import annotations

from collections.abc import Sequence


def full_name(prefix: str, path: Sequence[object]) -> str:
    """Build the canonical name for ``path`` within ``prefix``."""
    if not path:
        raise ValueError(f"Cannot name an empty path under prefix '{prefix}'")
    head, *rest = (str(segment) for segment in path)
    name = f"{prefix}-{head}"
    for segment in rest:
        name += f".{segment}"
    return name


def split_path(dotted: str) -> list[str]:
    """Split a dot-notation token path (``fg.default``) into segments."""
    return dotted.split(".")


def ledger_name_to_full(prefix: str, dotted: str) -> str:
    """Prefix a ledger entry name, which is written without the type prefix."""
    return full_name(prefix, split_path(dotted))
