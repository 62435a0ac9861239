"""
Token data loading.

Token data lives in one directory per type:

    data/
      colors/
        prefix            # optional, overrides the prefix (default: type name)
        index.yaml        # optional, lists overlay files per mode
        light.yaml
        dark.yaml
        deprecated.json   # optional replacement ledger
        removed.json      # optional replacement ledger

index.yaml maps each mode to its overlays, folded in order:

    modes:
      light: [utils/deprecated.yaml, light.yaml]
      dark: dark.yaml

Without index.yaml every *.yaml file in the type directory is one mode.

Token files may use expression tags:

    fg:
      default: !ref scale.gray.9
    border:
      divider: !lighten [!ref scale.gray.2, 0.03]
    shadow:
      small: !fmt ["0 1px 0 {}", !alpha [!ref scale.black, 0.04]]
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from . import expressions
from .errors import ErrorContext, ResolutionError, make_load_error
from .modes import ModeCollection
from .variables import VariableCollection

logger = logging.getLogger(__name__)

PREFIX_FILE = "prefix"
INDEX_FILE = "index.yaml"
DEPRECATED_FILE = "deprecated.json"
REMOVED_FILE = "removed.json"

_YAML_SUFFIXES = (".yaml", ".yml")


class TokenYAMLLoader(yaml.SafeLoader):
    """SafeLoader that understands token expression tags."""


def _construct_ref(loader: TokenYAMLLoader, node: yaml.Node) -> Any:
    return expressions.get(str(loader.construct_scalar(node)))


def _color_constructor(fn: Callable[[Any, float], Any]) -> Callable[..., Any]:
    def construct(loader: TokenYAMLLoader, node: yaml.Node) -> Any:
        args = loader.construct_sequence(node, deep=True)
        if len(args) != 2:
            raise yaml.constructor.ConstructorError(
                None, None, f"{node.tag} expects [color, amount]", node.start_mark
            )
        return fn(args[0], float(args[1]))

    return construct


def _construct_fmt(loader: TokenYAMLLoader, node: yaml.Node) -> Any:
    args = loader.construct_sequence(node, deep=True)
    if not args or not isinstance(args[0], str):
        raise yaml.constructor.ConstructorError(
            None, None, "!fmt expects [template, parts...]", node.start_mark
        )
    return expressions.fmt(args[0], *args[1:])


TokenYAMLLoader.add_constructor("!ref", _construct_ref)
TokenYAMLLoader.add_constructor("!alpha", _color_constructor(expressions.alpha))
TokenYAMLLoader.add_constructor("!lighten", _color_constructor(expressions.lighten))
TokenYAMLLoader.add_constructor("!darken", _color_constructor(expressions.darken))
TokenYAMLLoader.add_constructor("!fmt", _construct_fmt)


@dataclass
class TypeSources:
    """Files that make up one token type."""

    type: str
    prefix: str
    directory: Path
    modes: dict[str, list[Path]] = field(default_factory=dict)
    deprecated: Path | None = None
    removed: Path | None = None


def load_overlay(path: Path) -> dict[str, Any]:
    """Load one token tree from YAML."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise make_load_error(f"Cannot read token file: {e}", file=path) from e
    try:
        data = yaml.load(content, Loader=TokenYAMLLoader)  # noqa: S506 - SafeLoader subclass
    except yaml.YAMLError as e:
        raise make_load_error(f"Invalid YAML: {e}", file=path) from e

    if data is None:
        logger.warning("Empty token file %s", path)
        return {}
    if not isinstance(data, dict):
        raise make_load_error(
            f"Expected a mapping of tokens, got {type(data).__name__}", file=path
        )
    return data


def discover_types(data_dir: Path) -> list[str]:
    """List type directories under ``data_dir`` in name order."""
    if not data_dir.is_dir():
        raise make_load_error(f"Data directory not found: {data_dir}")
    return sorted(
        p.name for p in data_dir.iterdir() if p.is_dir() and not p.name.startswith((".", "_"))
    )


def load_type_sources(type_dir: Path, prefix: str | None = None) -> TypeSources:
    """Work out the prefix, mode overlays and ledgers of one type directory."""
    type_name = type_dir.name
    if prefix is None:
        prefix_file = type_dir / PREFIX_FILE
        prefix = prefix_file.read_text(encoding="utf-8").strip() if prefix_file.exists() else ""
        prefix = prefix or type_name

    sources = TypeSources(type=type_name, prefix=prefix, directory=type_dir)

    index_file = type_dir / INDEX_FILE
    if index_file.exists():
        sources.modes = _modes_from_index(index_file, type_name)
    else:
        for path in sorted(type_dir.iterdir()):
            if path.is_file() and path.suffix in _YAML_SUFFIXES:
                sources.modes[path.stem] = [path]

    if not sources.modes:
        logger.warning("No modes found for type %s in %s", type_name, type_dir)

    deprecated = type_dir / DEPRECATED_FILE
    removed = type_dir / REMOVED_FILE
    sources.deprecated = deprecated if deprecated.exists() else None
    sources.removed = removed if removed.exists() else None
    return sources


def _modes_from_index(index_file: Path, type_name: str) -> dict[str, list[Path]]:
    try:
        data = yaml.safe_load(index_file.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise make_load_error(f"Invalid YAML: {e}", file=index_file, type=type_name) from e

    modes_data = data.get("modes") if isinstance(data, dict) else None
    if not isinstance(modes_data, dict):
        raise make_load_error("index.yaml must define a 'modes' mapping", file=index_file)

    modes: dict[str, list[Path]] = {}
    for mode, overlays in modes_data.items():
        if isinstance(overlays, str):
            overlays = [overlays]
        if not isinstance(overlays, list) or not all(isinstance(o, str) for o in overlays):
            raise make_load_error(
                f"Mode '{mode}' must list overlay files", file=index_file, type=type_name
            )
        modes[str(mode)] = [index_file.parent / overlay for overlay in overlays]
    return modes


def build_mode_collection(
    sources: TypeSources,
    *,
    skip: set[str] | None = None,
    strict: bool = True,
    baseline: str | None = None,
) -> ModeCollection:
    """
    Flatten every mode of a type into a finalized ModeCollection.

    Raises:
        TokenLoadError: If an overlay file cannot be read.
        ResolutionError: If an overlay has undefined references or duplicates.
    """
    skip = skip or set()
    collection = ModeCollection(sources.type, sources.prefix, baseline=baseline)

    for mode, overlays in sources.modes.items():
        if mode in skip:
            logger.info("Skipping %s/%s", sources.type, mode)
            continue

        variables = VariableCollection(mode, sources.prefix, strict=strict)
        for path in overlays:
            tree = load_overlay(path)
            try:
                variables.add_from_object(tree)
            except ResolutionError as e:
                raise e.with_context(ErrorContext(type=sources.type, mode=mode, file=path))
        collection.add(mode, variables)

    collection.finalize()
    return collection
