"""
JSON emitter: one nested token tree per mode, keys in camelCase.
"""

from __future__ import annotations

import json
from pathlib import Path

from modetokens.core.modes import ModeCollection

from modetokens.core.render import render_tree

from .render import camelize_keys


def write_json(collection: ModeCollection, out_dir: Path) -> list[Path]:
    """Write ``json/<type>/<mode>.json`` for every mode."""
    type_dir = out_dir / "json" / collection.type
    type_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for mode, variables in collection:
        path = type_dir / f"{mode}.json"
        tree = camelize_keys(render_tree(variables))
        path.write_text(json.dumps(tree, indent=2) + "\n", encoding="utf-8")
        written.append(path)
    return written
