"""
Token expression helpers.

``get`` builds a reference that the variable collection resolves eagerly.
``alpha``, ``lighten``, ``darken`` and ``fmt`` build deferred values: the
collection carries them through untouched and renderers evaluate them later
against the mode's theme tree with ``evaluate``.

Example:
    tokens = {
        "scale": {"black": "#1b1f23"},
        "fg": {"default": get("scale.black")},
        "shadow": {"small": fmt("0 1px 0 {}", alpha(get("scale.black"), 0.04))},
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from . import color
from .errors import TokenRenderError
from .ir import DeferredValue, LiteralValue, NestedValue, ReferenceValue, classify
from .naming import split_path

# Deferred values nested deeper than this are assumed to be cyclic.
_MAX_DEPTH = 64


def get(path: str) -> ReferenceValue:
    """Reference another token by dotted path."""
    return ReferenceValue(path=path)


ref = get


def alpha(value: Any, amount: float) -> DeferredValue:
    """Deferred colour with its alpha channel set to ``amount``."""
    return DeferredValue(
        fn=lambda theme: color.with_alpha(_color_arg(value, theme), amount),
        description=f"alpha({_describe(value)}, {amount})",
    )


def lighten(value: Any, amount: float) -> DeferredValue:
    """Deferred colour lightened by ``amount`` of HSL lightness."""
    return DeferredValue(
        fn=lambda theme: color.adjust_lightness(_color_arg(value, theme), amount),
        description=f"lighten({_describe(value)}, {amount})",
    )


def darken(value: Any, amount: float) -> DeferredValue:
    """Deferred colour darkened by ``amount`` of HSL lightness."""
    return DeferredValue(
        fn=lambda theme: color.adjust_lightness(_color_arg(value, theme), -amount),
        description=f"darken({_describe(value)}, {amount})",
    )


def fmt(template: str, *parts: Any) -> DeferredValue:
    """Deferred string with each ``{}`` slot filled by an evaluated part."""
    return DeferredValue(
        fn=lambda theme: template.format(*(evaluate(part, theme) for part in parts)),
        description=f"fmt({template!r}, {', '.join(_describe(p) for p in parts)})",
    )


def lookup(theme: Mapping[str, Any], dotted: str) -> Any:
    """Look up a dotted path in a theme tree; digits index into sequences."""
    node: Any = theme
    for segment in split_path(dotted):
        if isinstance(node, Mapping) and segment in node:
            node = node[segment]
        elif isinstance(node, list | tuple) and segment.lstrip("-").isdigit():
            try:
                node = node[int(segment)]
            except IndexError as e:
                raise TokenRenderError(f"Index {segment} out of range in '{dotted}'") from e
        else:
            raise TokenRenderError(f"Theme has no value at '{dotted}'")
    return node


def evaluate(value: Any, theme: Mapping[str, Any], _depth: int = 0) -> Any:
    """
    Evaluate a token value against a theme tree.

    Literals evaluate to themselves, references are looked up in the theme
    and evaluated in turn, deferred values are called with the theme.

    Raises:
        TokenRenderError: If a reference is missing or evaluation recurses
            without terminating.
    """
    if _depth > _MAX_DEPTH:
        raise TokenRenderError("Deferred value nesting too deep (cyclic reference?)")

    tagged = classify(value)
    if isinstance(tagged, LiteralValue):
        return tagged.value
    if isinstance(tagged, ReferenceValue):
        return evaluate(lookup(theme, tagged.path), theme, _depth + 1)
    if isinstance(tagged, DeferredValue):
        try:
            result = tagged(theme)
        except TokenRenderError:
            raise
        except (ValueError, TypeError, RecursionError) as e:
            raise TokenRenderError(f"Failed to evaluate {tagged}: {e}") from e
        return evaluate(result, theme, _depth + 1)
    if isinstance(tagged, NestedValue):
        raise TokenRenderError("Cannot evaluate a token group as a value")
    raise TokenRenderError(f"Unknown token value {value!r}")


def _color_arg(value: Any, theme: Mapping[str, Any]) -> str:
    resolved = evaluate(value, theme)
    if not isinstance(resolved, str):
        raise TokenRenderError(f"Expected a colour string, got {resolved!r}")
    return resolved


def _describe(value: Any) -> str:
    if isinstance(value, ReferenceValue | DeferredValue):
        return str(value)
    return repr(value)
