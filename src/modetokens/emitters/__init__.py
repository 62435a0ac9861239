"""
Output emitters.

Each format writes one file per mode of a valid type:

- scss: ``scss/<type>/_<mode>.scss`` mixins of CSS custom properties
- json: ``json/<type>/<mode>.json`` nested trees with camelCase keys
- dtcg: ``dtcg/<type>/<mode>.tokens.json`` W3C design token files
- ts: ``ts/<type>/<mode>.ts`` modules with per-type and top-level ``index.ts``

Clean replacement ledgers and an ``index.json`` of types and modes are
written alongside.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from modetokens.core.build import BuildReport
from modetokens.core.modes import ModeCollection

from .dtcg import export_dtcg_files
from .json_tree import write_json
from .replacements import write_ledger
from .scss import write_scss
from .typescript import write_ts, write_ts_index

logger = logging.getLogger(__name__)

Emitter = Callable[[str, ModeCollection, Path], list[Path]]

EMITTERS: dict[str, Emitter] = {
    "scss": write_scss,
    "json": lambda namespace, collection, out_dir: write_json(collection, out_dir),
    "dtcg": lambda namespace, collection, out_dir: export_dtcg_files(collection, out_dir),
    "ts": lambda namespace, collection, out_dir: write_ts(collection, out_dir),
}


def write_index(report: BuildReport, out_dir: Path) -> Path:
    """Write ``index.json`` mapping each built type to its mode names."""
    index = {
        result.type: result.collection.mode_names()
        for result in report.results
        if result.ok and result.collection is not None
    }
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / "index.json"
    path.write_text(json.dumps(index, indent=2) + "\n", encoding="utf-8")
    return path


def write_outputs(
    report: BuildReport,
    out_dir: Path,
    formats: Sequence[str],
    namespace: str,
) -> list[Path]:
    """
    Emit every valid type in the requested formats.

    Types with errors are skipped; their errors stay in the report.

    Returns:
        Paths of all written files.
    """
    unknown = [f for f in formats if f not in EMITTERS]
    if unknown:
        raise ValueError(f"Unknown output formats: {', '.join(unknown)}")

    written: list[Path] = []
    for result in report.results:
        if not result.ok or result.collection is None:
            logger.info("Skipping output for %s: build failed", result.type)
            continue
        for fmt in formats:
            written.extend(EMITTERS[fmt](namespace, result.collection, out_dir))
        for ledger in result.ledgers:
            path = write_ledger(result.type, ledger, out_dir)
            if path is not None:
                written.append(path)

    if "ts" in formats:
        built = [result.type for result in report.results if result.ok]
        written.append(write_ts_index(built, out_dir))
    written.append(write_index(report, out_dir))
    return written


__all__ = [
    "EMITTERS",
    "export_dtcg_files",
    "write_index",
    "write_json",
    "write_ledger",
    "write_outputs",
    "write_scss",
    "write_ts",
    "write_ts_index",
]
