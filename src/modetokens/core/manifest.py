"""
Project manifest (tokens.toml) loading.

Example tokens.toml:

    [project]
    name = "acme-tokens"

    [build]
    data_dir = "data"
    out_dir = "dist"
    formats = ["scss", "json"]
    skip = ["colors/dark_dimmed"]

    [types.colors]
    baseline = "light"

Skip rules can also be supplied through the MODETOKENS_SKIP environment
variable as a comma separated list of "type/mode" pairs.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError

MANIFEST_FILE = "tokens.toml"
SKIP_ENV_VAR = "MODETOKENS_SKIP"
SUPPORTED_FORMATS = ("scss", "json", "dtcg", "ts")


@dataclass(frozen=True)
class SkipRule:
    """A mode to leave out of the build."""

    type: str
    mode: str

    @classmethod
    def parse(cls, raw: str) -> "SkipRule":
        type_name, sep, mode = raw.strip().partition("/")
        if not sep or not type_name or not mode:
            raise ManifestError(f"Invalid skip rule {raw!r}; expected 'type/mode'")
        return cls(type=type_name, mode=mode)


@dataclass
class TypeConfig:
    """Per-type settings."""

    baseline: str | None = None
    prefix: str | None = None  # Overrides data/<type>/prefix


@dataclass
class BuildConfig:
    """Build settings."""

    data_dir: str = "data"
    out_dir: str = "dist"
    formats: list[str] = field(default_factory=lambda: ["scss", "json"])
    skip: list[SkipRule] = field(default_factory=list)
    strict: bool = True

    def skipped_modes(self, type_name: str) -> set[str]:
        return {rule.mode for rule in self.skip if rule.type == type_name}


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from tokens.toml.

    The project name is used as the SCSS mixin namespace.
    """

    name: str
    root: Path
    build: BuildConfig = field(default_factory=BuildConfig)
    types: dict[str, TypeConfig] = field(default_factory=dict)

    @property
    def data_path(self) -> Path:
        return self.root / self.build.data_dir

    @property
    def out_path(self) -> Path:
        return self.root / self.build.out_dir

    def type_config(self, type_name: str) -> TypeConfig:
        return self.types.get(type_name, TypeConfig())


def parse_skip_env(value: str | None) -> list[SkipRule]:
    """Parse the MODETOKENS_SKIP value; blank entries are ignored."""
    if not value:
        return []
    return [SkipRule.parse(item) for item in value.split(",") if item.strip()]


def default_manifest(root: Path, env: dict[str, str] | None = None) -> ProjectManifest:
    """Manifest used when a project has no tokens.toml."""
    env = os.environ if env is None else env
    build = BuildConfig(skip=parse_skip_env(env.get(SKIP_ENV_VAR)))
    return ProjectManifest(name=root.resolve().name, root=root, build=build)


def load_manifest(path: Path, env: dict[str, str] | None = None) -> ProjectManifest:
    """
    Load tokens.toml.

    Args:
        path: Path to tokens.toml
        env: Environment mapping (defaults to os.environ)

    Raises:
        ManifestError: If the file is not valid TOML or has invalid values.
    """
    env = os.environ if env is None else env
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    project = data.get("project", {})
    build_data = data.get("build", {})
    types_data = data.get("types", {})
    root = path.parent

    formats = list(build_data.get("formats", ["scss", "json"]))
    unknown = [f for f in formats if f not in SUPPORTED_FORMATS]
    if unknown:
        raise ManifestError(
            f"Unsupported output formats in {path}: {', '.join(unknown)} "
            f"(supported: {', '.join(SUPPORTED_FORMATS)})"
        )

    skip = [SkipRule.parse(raw) for raw in build_data.get("skip", [])]
    skip.extend(parse_skip_env(env.get(SKIP_ENV_VAR)))

    build = BuildConfig(
        data_dir=build_data.get("data_dir", "data"),
        out_dir=build_data.get("out_dir", "dist"),
        formats=formats,
        skip=skip,
        strict=bool(build_data.get("strict", True)),
    )

    types = {
        name: TypeConfig(baseline=cfg.get("baseline"), prefix=cfg.get("prefix"))
        for name, cfg in types_data.items()
    }

    return ProjectManifest(
        name=project.get("name", root.resolve().name),
        root=root,
        build=build,
        types=types,
    )


def find_manifest(root: Path, env: dict[str, str] | None = None) -> ProjectManifest:
    """Load ``root/tokens.toml`` if present, otherwise fall back to defaults."""
    path = root / MANIFEST_FILE
    if path.exists():
        return load_manifest(path, env)
    return default_manifest(root, env)
