"""Core modetokens functionality: naming, variable and mode collections, ledger validation, builds."""

from . import ir
from .build import BuildReport, TypeBuildResult, build_project, build_type
from .errors import (
    CollectionError,
    CollectionFinalizedError,
    DuplicateModeError,
    DuplicateVariableError,
    ErrorContext,
    LedgerParseError,
    ManifestError,
    ResolutionError,
    TokenError,
    TokenLoadError,
    TokenRenderError,
    UndefinedReferenceError,
)
from .expressions import alpha, darken, evaluate, fmt, get, lighten, ref
from .ledger import parse_ledger, validate_ledger, validate_ledger_messages
from .manifest import ProjectManifest, find_manifest, load_manifest
from .modes import ModeCollection
from .naming import full_name
from .variables import VariableCollection

__all__ = [
    "ir",
    # Errors
    "TokenError",
    "ResolutionError",
    "UndefinedReferenceError",
    "DuplicateVariableError",
    "CollectionError",
    "CollectionFinalizedError",
    "DuplicateModeError",
    "LedgerParseError",
    "TokenLoadError",
    "ManifestError",
    "TokenRenderError",
    "ErrorContext",
    # Collections
    "full_name",
    "VariableCollection",
    "ModeCollection",
    # Expressions
    "get",
    "ref",
    "alpha",
    "lighten",
    "darken",
    "fmt",
    "evaluate",
    # Ledgers
    "parse_ledger",
    "validate_ledger",
    "validate_ledger_messages",
    # Builds
    "ProjectManifest",
    "find_manifest",
    "load_manifest",
    "BuildReport",
    "TypeBuildResult",
    "build_type",
    "build_project",
]
