"""
Validation result types.

Validation never raises: problems are returned as values so callers can
aggregate results across types before deciding whether the build failed.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LedgerKind(StrEnum):
    """Which kind of replacement ledger is being validated."""

    DEPRECATED = "deprecated"
    REMOVED = "removed"


class IssueKind(StrEnum):
    """Replacement ledger integrity violations."""

    STALE_DEPRECATION = "stale_deprecation"
    INVALID_REMOVAL = "invalid_removal"
    INVALID_REPLACEMENT_TARGET = "invalid_replacement_target"
    UNDEFINED_REPLACEMENT = "undefined_replacement"
    CHAINED_REPLACEMENT = "chained_replacement"


class ValidationResult(BaseModel):
    """Outcome of validating a mode collection."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> ValidationResult:
        return cls(is_valid=not errors, errors=list(errors))


class ReplacementIssue(BaseModel):
    """A single replacement ledger violation."""

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    original: str
    replacement: Any = None
    source: str = "<ledger>"

    @property
    def message(self) -> str:
        target = json.dumps(self.replacement)
        if self.kind == IssueKind.STALE_DEPRECATION:
            return f'Cannot deprecate undefined variable "{self.original}" in {self.source}'
        if self.kind == IssueKind.INVALID_REMOVAL:
            return (
                f'Variable "{self.original}" is marked as removed in {self.source} '
                f"but is still defined"
            )
        if self.kind == IssueKind.INVALID_REPLACEMENT_TARGET:
            return (
                f'Cannot replace "{self.original}" with invalid variable {target} '
                f"in {self.source}"
            )
        if self.kind == IssueKind.UNDEFINED_REPLACEMENT:
            return (
                f'Cannot replace "{self.original}" with undefined variable {target} '
                f"in {self.source}"
            )
        return (
            f'Cannot replace "{self.original}" with deprecated variable {target} '
            f"in {self.source}"
        )

    def __str__(self) -> str:
        return self.message
