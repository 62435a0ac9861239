"""
TypeScript emitter.

Writes ``ts/<type>/<mode>.ts`` modules exporting each mode's camelCase tree,
a ``ts/<type>/index.ts`` bundling the modes of a type and a top-level
``ts/index.ts`` bundling every type.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from modetokens.core.modes import ModeCollection
from modetokens.core.render import render_tree

from .render import camelize_keys, to_camel


def ts_identifier(name: str) -> str:
    """
    Turn a mode or type name into a TypeScript identifier.

    Examples:
        >>> ts_identifier("dark_dimmed")
        'darkDimmed'
        >>> ts_identifier("2x")
        '_2x'
    """
    ident = to_camel(name)
    return ident if ident.isidentifier() else f"_{ident}"


def generate_ts_module(collection: ModeCollection, mode: str) -> str:
    variables = collection.get(mode)
    if variables is None:
        raise KeyError(f"Type '{collection.type}' has no mode '{mode}'")
    tree = camelize_keys(render_tree(variables))
    return f"export default {json.dumps(tree, indent=2)}\n"


def generate_ts_index(modules: Sequence[str]) -> str:
    """An index module importing each sibling module and exporting them together."""
    lines = [f"import {ts_identifier(m)} from './{m}'" for m in modules]
    lines.append(f"export default {{ {', '.join(ts_identifier(m) for m in modules)} }}")
    return "\n".join(lines) + "\n"


def write_ts(collection: ModeCollection, out_dir: Path) -> list[Path]:
    """Write one module per mode plus the type's ``index.ts``."""
    type_dir = out_dir / "ts" / collection.type
    type_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for mode, _ in collection:
        path = type_dir / f"{mode}.ts"
        path.write_text(generate_ts_module(collection, mode), encoding="utf-8")
        written.append(path)

    index = type_dir / "index.ts"
    index.write_text(generate_ts_index(collection.mode_names()), encoding="utf-8")
    written.append(index)
    return written


def write_ts_index(types: Sequence[str], out_dir: Path) -> Path:
    """Write ``ts/index.ts`` for the given types."""
    ts_dir = out_dir / "ts"
    ts_dir.mkdir(parents=True, exist_ok=True)
    path = ts_dir / "index.ts"
    path.write_text(generate_ts_index(types), encoding="utf-8")
    return path
