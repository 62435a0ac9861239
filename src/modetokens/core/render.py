"""
Rendering of resolved modes.

Each mode is evaluated against its own theme tree, so deferred values only
ever see the variables of the mode they belong to.
"""

from __future__ import annotations

from typing import Any

from .expressions import evaluate
from .variables import VariableCollection


def render_variables(collection: VariableCollection) -> list[tuple[str, Any]]:
    """Evaluate every variable of a mode, in declaration order."""
    theme = collection.tree()
    return [(variable.name, evaluate(variable.value, theme)) for variable in collection]


def render_tree(collection: VariableCollection) -> dict[str, Any]:
    """The mode's nested tree with every leaf evaluated."""
    theme = collection.tree()
    return _render_node(theme, theme)


def _render_node(node: Any, theme: dict[str, Any]) -> Any:
    if isinstance(node, dict):
        return {key: _render_node(value, theme) for key, value in node.items()}
    return evaluate(node, theme)
