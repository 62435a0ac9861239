"""
Token value IR.

Raw token trees mix literals, references, deferred functions and nested
mappings. ``classify`` turns each raw value into exactly one tagged variant so
the resolver can dispatch on type instead of inspecting shapes ad hoc.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LiteralValue(BaseModel):
    """A fully resolved value: string, number, bool or an opaque sequence."""

    model_config = ConfigDict(frozen=True)

    value: Any


class ReferenceValue(BaseModel):
    """A pointer to another variable, by dotted path without the type prefix."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)

    def __str__(self) -> str:
        return f"get({self.path})"


class DeferredValue(BaseModel):
    """A function of the runtime theme context, evaluated by renderers only."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fn: Callable[[Mapping[str, Any]], Any]
    description: str = ""

    def __call__(self, theme: Mapping[str, Any]) -> Any:
        return self.fn(theme)

    def __str__(self) -> str:
        return self.description or "<deferred>"


class NestedValue(BaseModel):
    """A nested group of tokens."""

    model_config = ConfigDict(frozen=True)

    children: dict[Any, Any]


TokenValue = LiteralValue | ReferenceValue | DeferredValue | NestedValue


def classify(raw: Any) -> TokenValue:
    """Tag a raw token value."""
    if isinstance(raw, LiteralValue | ReferenceValue | DeferredValue | NestedValue):
        return raw
    if isinstance(raw, Mapping):
        return NestedValue(children=dict(raw))
    if callable(raw):
        return DeferredValue(fn=raw, description=getattr(raw, "__name__", ""))
    return LiteralValue(value=raw)


class Variable(BaseModel):
    """One resolved, fully addressed token."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Any
    path: tuple[str, ...]
    mode: str

    @property
    def is_deferred(self) -> bool:
        return isinstance(self.value, DeferredValue)

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)
