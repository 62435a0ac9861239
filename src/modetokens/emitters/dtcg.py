"""
W3C Design Token Community Group (DTCG) tokens.json export.

Generates one DTCG-compliant file per mode from a ModeCollection.
See: https://design-tokens.github.io/community-group/format/
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from modetokens.core.color import is_color
from modetokens.core.modes import ModeCollection
from modetokens.core.render import render_tree


def generate_dtcg_tokens(collection: ModeCollection, mode: str) -> dict[str, Any]:
    """Generate W3C DTCG format design tokens for one mode.

    Leaves become ``{"$value": ...}`` objects; colour values also get
    ``"$type": "color"``, numbers get ``"$type": "number"``.

    Args:
        collection: Finalized mode collection.
        mode: Mode to export.

    Returns:
        DTCG-formatted dict suitable for writing as tokens.json.
    """
    variables = collection.get(mode)
    if variables is None:
        raise KeyError(f"Type '{collection.type}' has no mode '{mode}'")
    return _to_dtcg(render_tree(variables))


def _to_dtcg(node: Any) -> Any:
    if isinstance(node, dict):
        return {key: _to_dtcg(value) for key, value in node.items()}

    token: dict[str, Any] = {"$value": node}
    if is_color(node):
        token["$type"] = "color"
    elif isinstance(node, int | float) and not isinstance(node, bool):
        token["$type"] = "number"
    return token


def export_dtcg_files(collection: ModeCollection, out_dir: Path) -> list[Path]:
    """Generate DTCG tokens for every mode and write ``dtcg/<type>/<mode>.tokens.json``.

    Args:
        collection: Finalized mode collection.
        out_dir: Output root.

    Returns:
        Paths of the written files.
    """
    type_dir = out_dir / "dtcg" / collection.type
    type_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for mode, _ in collection:
        path = type_dir / f"{mode}.tokens.json"
        path.write_text(
            json.dumps(generate_dtcg_tokens(collection, mode), indent=2),
            encoding="utf-8",
        )
        written.append(path)
    return written
