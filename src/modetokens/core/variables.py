"""
Variable collection for a single mode.

Flattens nested token trees into canonically named variables, resolving
references against variables that were already inserted. Resolution is a
single pass in declaration order: a reference can only point backwards.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from .errors import (
    CollectionFinalizedError,
    DuplicateVariableError,
    ResolutionError,
    UndefinedReferenceError,
)
from .ir import (
    DeferredValue,
    LiteralValue,
    NestedValue,
    ReferenceValue,
    TokenValue,
    Variable,
    classify,
)
from .naming import full_name, split_path

logger = logging.getLogger(__name__)


class VariableCollection:
    """
    All variables of one mode, keyed by canonical name.

    Built by one or more ``add_from_object`` calls (overlays). Within a single
    call every name must be unique (unless ``strict`` is off); across calls a
    later overlay overwrites earlier values while keeping their position in
    iteration order. When a later overlay turns a leaf into a group, or a group
    into a leaf, the entries it replaces are dropped.
    """

    def __init__(self, mode: str, prefix: str, *, strict: bool = True) -> None:
        self.mode = mode
        self.prefix = prefix
        self.strict = strict
        self._variables: dict[str, Variable] = {}
        # every proper prefix of a leaf path seen so far
        self._group_paths: set[tuple[str, ...]] = set()
        self._finalized = False

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def add_from_object(self, tree: Mapping[Any, Any]) -> None:
        """Flatten one overlay tree into the collection."""
        if self._finalized:
            raise CollectionFinalizedError(
                f"Cannot add variables to finalized mode '{self.mode}' ({self.prefix})"
            )
        if not isinstance(tree, Mapping):
            raise TypeError(f"Token tree for mode '{self.mode}' must be a mapping")
        self._add_tree(tree, (), set())

    def add_overlays(self, trees: Iterable[Mapping[Any, Any]]) -> None:
        """Fold overlay trees left-to-right; later overlays win per name."""
        for tree in trees:
            self.add_from_object(tree)

    def _add_tree(self, tree: Mapping[Any, Any], path: tuple[str, ...], seen: set[str]) -> None:
        for key, raw in tree.items():
            key_path = (*path, str(key))
            value = classify(raw)
            if isinstance(value, NestedValue):
                self._add_tree(value.children, key_path, seen)
                continue

            name = full_name(self.prefix, key_path)
            if name in seen:
                if self.strict:
                    raise DuplicateVariableError(name, self.mode)
                logger.warning("Variable %s declared twice in mode %s; keeping last", name, self.mode)
            seen.add(name)

            resolved = self._resolve(value, name)
            if name in self._variables:
                logger.debug("Overlay overrides %s in mode %s", name, self.mode)
            self._drop_shadowed(key_path)
            self._variables[name] = Variable(
                name=name, value=resolved, path=key_path, mode=self.mode
            )
            self._group_paths.update(key_path[:cut] for cut in range(1, len(key_path)))

    def _drop_shadowed(self, key_path: tuple[str, ...]) -> None:
        """Remove leaves that are groups of ``key_path`` or live inside it."""
        shadowed = []
        for cut in range(1, len(key_path)):
            parent = self._variables.get(full_name(self.prefix, key_path[:cut]))
            if parent is not None and parent.path == key_path[:cut]:
                shadowed.append(parent.name)
        if key_path in self._group_paths:
            depth = len(key_path)
            shadowed.extend(
                v.name
                for v in self._variables.values()
                if len(v.path) > depth and v.path[:depth] == key_path
            )
        for name in shadowed:
            logger.debug("Overlay replaces %s in mode %s", name, self.mode)
            del self._variables[name]

    def _resolve(self, value: TokenValue, referrer: str) -> Any:
        if isinstance(value, LiteralValue):
            return value.value
        if isinstance(value, DeferredValue):
            return value
        if isinstance(value, ReferenceValue):
            return self._resolve_reference(value.path, referrer)
        raise TypeError(f"Cannot resolve {type(value).__name__} for {referrer}")

    def _resolve_reference(self, dotted: str, referrer: str) -> Any:
        segments = split_path(dotted)
        name = full_name(self.prefix, segments)
        target = self._variables.get(name)
        if target is not None:
            return target.value

        # scale.gray.9 may point into a sequence leaf declared as scale.gray
        for cut in range(len(segments) - 1, 0, -1):
            base = self._variables.get(full_name(self.prefix, segments[:cut]))
            if base is None:
                continue
            try:
                return _index_into(base.value, segments[cut:])
            except (LookupError, TypeError, ValueError):
                break

        raise UndefinedReferenceError(name, self.mode, referrer)

    def finalize(self) -> None:
        if not self._finalized:
            logger.debug(
                "Finalized mode %s (%s) with %d variables", self.mode, self.prefix, len(self)
            )
        self._finalized = True

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    def get_by_name(self, name: str) -> Variable | None:
        return self._variables.get(name)

    def get_by_path(self, dotted: str) -> Variable | None:
        return self._variables.get(full_name(self.prefix, split_path(dotted)))

    def names(self) -> list[str]:
        return list(self._variables)

    def tree(self) -> dict[str, Any]:
        """Rebuild the nested token shape from each variable's path."""
        root: dict[str, Any] = {}
        for variable in self._variables.values():
            node = root
            for segment in variable.path[:-1]:
                child = node.setdefault(segment, {})
                if not isinstance(child, dict):
                    raise ResolutionError(
                        f"Variable {variable.name} nests under leaf "
                        f"'{segment}' in mode '{self.mode}'"
                    )
                node = child
            leaf = variable.path[-1]
            if isinstance(node.get(leaf), dict):
                raise ResolutionError(
                    f"Variable {variable.name} collides with a group in mode '{self.mode}'"
                )
            node[leaf] = _copy_leaf(variable.value)
        return root

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._variables.values()))

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "building"
        return (
            f"VariableCollection(mode={self.mode!r}, prefix={self.prefix!r}, "
            f"variables={len(self)}, {state})"
        )


def _index_into(value: Any, segments: Sequence[str]) -> Any:
    for segment in segments:
        if not isinstance(value, list | tuple):
            raise TypeError(f"Cannot index into {type(value).__name__}")
        value = value[int(segment)]
    return value


def _copy_leaf(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return copy.deepcopy(value)
    return value
