"""
modetokens Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .results import (
    IssueKind,
    LedgerKind,
    ReplacementIssue,
    ValidationResult,
)
from .values import (
    DeferredValue,
    LiteralValue,
    NestedValue,
    ReferenceValue,
    TokenValue,
    Variable,
    classify,
)

__all__ = [
    # Values
    "DeferredValue",
    "LiteralValue",
    "NestedValue",
    "ReferenceValue",
    "TokenValue",
    "Variable",
    "classify",
    # Results
    "IssueKind",
    "LedgerKind",
    "ReplacementIssue",
    "ValidationResult",
]
