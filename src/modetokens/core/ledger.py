"""
Replacement ledger validation.

A ledger maps original variable names (dot notation, no type prefix) to their
replacement: a name, a list of names, or ``null`` for "no replacement". The
``deprecated`` ledger lists variables that still exist but should no longer
be used; the ``removed`` ledger lists variables that are gone.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any

from .errors import LedgerParseError
from .ir import IssueKind, LedgerKind, ReplacementIssue
from .modes import ModeCollection
from .naming import ledger_name_to_full


def parse_ledger(text: str, source: str) -> dict[str, Any]:
    """
    Parse ledger JSON.

    Raises:
        LedgerParseError: If the text is not JSON or not a JSON object. A
            malformed ledger cannot be partially validated.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LedgerParseError(f"Invalid JSON in {source}: {e}") from e
    if not isinstance(data, dict):
        raise LedgerParseError(
            f"Expected a JSON object in {source}, got {type(data).__name__}"
        )
    return data


def iter_replacement_targets(replacement: Any) -> Iterator[Any]:
    """Yield each replacement target; ``None`` yields nothing."""
    if replacement is None:
        return
    if isinstance(replacement, list | tuple):
        yield from replacement
    else:
        yield replacement


def exists_in_collection(collection: ModeCollection, dotted: str) -> bool:
    """True if the ledger name ``dotted`` is defined in any mode."""
    return collection.exists(ledger_name_to_full(collection.prefix, dotted))


def validate_ledger(
    ledger: Mapping[str, Any],
    collection: ModeCollection,
    kind: LedgerKind | str,
    source: str = "<ledger>",
) -> list[ReplacementIssue]:
    """
    Validate every ledger entry against a finalized mode collection.

    Checks:
    - deprecated: the original must still be defined
    - removed: the original must no longer be defined
    - each replacement target must be a string, must be defined, and must
      not itself be a key of the same ledger

    Returns:
        All violations, in ledger order. Empty means the ledger is valid.
    """
    kind = LedgerKind(kind)
    collection.finalize()
    issues: list[ReplacementIssue] = []

    for original, replacement in ledger.items():
        defined = exists_in_collection(collection, original)
        if kind == LedgerKind.DEPRECATED and not defined:
            issues.append(
                ReplacementIssue(
                    kind=IssueKind.STALE_DEPRECATION, original=original, source=source
                )
            )
        elif kind == LedgerKind.REMOVED and defined:
            issues.append(
                ReplacementIssue(kind=IssueKind.INVALID_REMOVAL, original=original, source=source)
            )

        for target in iter_replacement_targets(replacement):
            issues.extend(_check_target(original, target, ledger, collection, source))

    return issues


def _check_target(
    original: str,
    target: Any,
    ledger: Mapping[str, Any],
    collection: ModeCollection,
    source: str,
) -> list[ReplacementIssue]:
    if not isinstance(target, str):
        return [
            ReplacementIssue(
                kind=IssueKind.INVALID_REPLACEMENT_TARGET,
                original=original,
                replacement=target,
                source=source,
            )
        ]

    issues = []
    if not exists_in_collection(collection, target):
        issues.append(
            ReplacementIssue(
                kind=IssueKind.UNDEFINED_REPLACEMENT,
                original=original,
                replacement=target,
                source=source,
            )
        )
    if target in ledger:
        issues.append(
            ReplacementIssue(
                kind=IssueKind.CHAINED_REPLACEMENT,
                original=original,
                replacement=target,
                source=source,
            )
        )
    return issues


def validate_ledger_messages(
    ledger: Mapping[str, Any],
    collection: ModeCollection,
    kind: LedgerKind | str,
    source: str = "<ledger>",
) -> list[str]:
    """Like ``validate_ledger`` but returns plain message strings."""
    return [issue.message for issue in validate_ledger(ledger, collection, kind, source)]
