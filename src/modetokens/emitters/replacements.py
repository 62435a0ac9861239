"""
Replacement ledger output.

Only ledgers that parsed and validated cleanly are written, to
``deprecated/<type>.json`` and ``removed/<type>.json``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from modetokens.core.build import LedgerResult

logger = logging.getLogger(__name__)


def write_ledger(type_name: str, ledger: LedgerResult, out_dir: Path) -> Path | None:
    if not ledger.ok:
        logger.warning("Not writing %s ledger for %s: it has errors", ledger.kind, type_name)
        return None

    target_dir = out_dir / str(ledger.kind)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"{type_name}.json"
    path.write_text(json.dumps(ledger.entries, indent=2) + "\n", encoding="utf-8")
    return path
