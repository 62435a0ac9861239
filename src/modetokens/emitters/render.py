"""
Shared formatting helpers for emitters.
"""

from __future__ import annotations

import re
from typing import Any


_WORD_SPLIT_RE = re.compile(r"[-_\s]+")


def to_camel(key: str) -> str:
    """
    Convert a key to camelCase.

    Examples:
        >>> to_camel("stack-fade-more")
        'stackFadeMore'
        >>> to_camel("hover_bg")
        'hoverBg'
        >>> to_camel("onEmphasis")
        'onEmphasis'
    """
    words = [w for w in _WORD_SPLIT_RE.split(key) if w]
    if not words:
        return key
    head, *rest = words
    return head[:1].lower() + head[1:] + "".join(w[:1].upper() + w[1:] for w in rest)


def camelize_keys(node: Any) -> Any:
    """Recursively camelCase every mapping key."""
    if isinstance(node, dict):
        return {to_camel(str(key)): camelize_keys(value) for key, value in node.items()}
    if isinstance(node, list):
        return [camelize_keys(item) for item in node]
    return node


def format_css_value(value: Any) -> str:
    """Format a rendered value for a CSS custom property."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        return ", ".join(format_css_value(item) for item in value)
    return str(value)
