"""
Build orchestration.

Builds every token type independently and collects its errors, so one broken
type never hides the errors of another. The caller decides what a failed
report means (the CLI exits non-zero).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import ir
from .errors import ErrorContext, TokenError
from .ledger import parse_ledger, validate_ledger
from .loader import build_mode_collection, discover_types, load_type_sources
from .manifest import ProjectManifest
from .modes import ModeCollection
from .render import render_tree

logger = logging.getLogger(__name__)


@dataclass
class LedgerResult:
    """A parsed replacement ledger and its validation issues."""

    kind: ir.LedgerKind
    source: Path
    entries: dict[str, Any] = field(default_factory=dict)
    issues: list[ir.ReplacementIssue] = field(default_factory=list)
    parse_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.parse_error is None and not self.issues


@dataclass
class TypeBuildResult:
    """Outcome of building one token type."""

    type: str
    collection: ModeCollection | None = None
    errors: list[str] = field(default_factory=list)
    ledgers: list[LedgerResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.collection is not None and not self.errors


@dataclass
class BuildReport:
    """Results for every type in a project."""

    results: list[TypeBuildResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def types(self) -> list[str]:
        return [result.type for result in self.results]

    def errors_by_type(self) -> dict[str, list[str]]:
        return {result.type: list(result.errors) for result in self.results if result.errors}

    def all_errors(self) -> list[str]:
        return [error for result in self.results for error in result.errors]


def validate_ledger_file(
    path: Path, collection: ModeCollection, kind: ir.LedgerKind
) -> LedgerResult:
    """Parse and validate one ledger file. Parse failures are recorded, not raised."""
    result = LedgerResult(kind=kind, source=path)
    try:
        result.entries = parse_ledger(path.read_text(encoding="utf-8"), str(path))
    except (TokenError, OSError) as e:
        result.parse_error = str(e)
        return result
    result.issues = validate_ledger(result.entries, collection, kind, source=str(path))
    return result


def render_errors(collection: ModeCollection) -> list[str]:
    """Render every mode once and report the modes whose values cannot be evaluated."""
    errors = []
    for mode, variables in collection:
        try:
            render_tree(variables)
        except TokenError as e:
            errors.append(str(e.with_context(ErrorContext(type=collection.type, mode=mode))))
    return errors


def build_type(type_dir: Path, manifest: ProjectManifest) -> TypeBuildResult:
    """Load, resolve and validate a single token type."""
    type_name = type_dir.name
    type_config = manifest.type_config(type_name)
    result = TypeBuildResult(type=type_name)

    try:
        sources = load_type_sources(type_dir, prefix=type_config.prefix)
        collection = build_mode_collection(
            sources,
            skip=manifest.build.skipped_modes(type_name),
            strict=manifest.build.strict,
            baseline=type_config.baseline,
        )
    except TokenError as e:
        result.errors.append(str(e))
        return result

    result.collection = collection
    validation = collection.validate()
    result.errors.extend(validation.errors)
    result.errors.extend(render_errors(collection))

    for kind, path in (
        (ir.LedgerKind.DEPRECATED, sources.deprecated),
        (ir.LedgerKind.REMOVED, sources.removed),
    ):
        if path is None:
            continue
        ledger = validate_ledger_file(path, collection, kind)
        result.ledgers.append(ledger)
        if ledger.parse_error:
            result.errors.append(ledger.parse_error)
        result.errors.extend(issue.message for issue in ledger.issues)

    if result.errors:
        logger.debug("Type %s failed with %d errors", type_name, len(result.errors))
    else:
        logger.info("Built %s (%s)", type_name, ", ".join(collection.mode_names()))
    return result


def build_project(manifest: ProjectManifest) -> BuildReport:
    """Build every type under the manifest's data directory."""
    report = BuildReport()
    data_dir = manifest.data_path
    for type_name in discover_types(data_dir):
        report.results.append(build_type(data_dir / type_name, manifest))
    return report
