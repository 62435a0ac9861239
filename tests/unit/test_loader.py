"""Tests for token data loading."""

from pathlib import Path

import pytest
import yaml

from modetokens.core.errors import TokenLoadError, UndefinedReferenceError
from modetokens.core.expressions import evaluate
from modetokens.core.ir import DeferredValue, ReferenceValue
from modetokens.core.loader import (
    TokenYAMLLoader,
    build_mode_collection,
    discover_types,
    load_overlay,
    load_type_sources,
)


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def load(text: str):
    return yaml.load(text, Loader=TokenYAMLLoader)  # noqa: S506


class TestTags:
    def test_ref(self):
        assert load("fg: !ref scale.black") == {"fg": ReferenceValue(path="scale.black")}

    def test_color_functions(self):
        data = load("a: !alpha [!ref scale.black, 0.5]\nb: !darken ['#ffffff', 0.5]\n")
        assert isinstance(data["a"], DeferredValue)
        theme = {"scale": {"black": "#1b1f23"}}
        assert evaluate(data["a"], theme) == "rgba(27, 31, 35, 0.5)"
        assert evaluate(data["b"], theme) == "#808080"

    def test_fmt(self):
        data = load("s: !fmt ['{} solid', !ref border.width]\n")
        assert evaluate(data["s"], {"border": {"width": "1px"}}) == "1px solid"

    def test_color_function_arity(self):
        with pytest.raises(yaml.YAMLError):
            load("a: !alpha ['#000']\n")

    def test_safe_loader_rejects_python_tags(self):
        with pytest.raises(yaml.YAMLError):
            load("a: !!python/object/apply:os.getcwd []\n")


class TestLoadOverlay:
    def test_mapping(self, tmp_path):
        path = write(tmp_path / "light.yaml", "fg: '#000'\n")
        assert load_overlay(path) == {"fg": "#000"}

    def test_empty_file(self, tmp_path):
        assert load_overlay(write(tmp_path / "empty.yaml", "")) == {}

    def test_invalid_yaml(self, tmp_path):
        path = write(tmp_path / "bad.yaml", "fg: [unclosed\n")
        with pytest.raises(TokenLoadError, match="Invalid YAML"):
            load_overlay(path)

    def test_not_a_mapping(self, tmp_path):
        path = write(tmp_path / "list.yaml", "- '#000'\n")
        with pytest.raises(TokenLoadError, match="got list"):
            load_overlay(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(TokenLoadError):
            load_overlay(tmp_path / "nope.yaml")


class TestSources:
    def test_discover_types(self, token_project: Path):
        write(token_project / "data" / "_shared" / "base.yaml", "a: 1\n")
        assert discover_types(token_project / "data") == ["colors", "spacing"]

    def test_discover_missing_dir(self, tmp_path):
        with pytest.raises(TokenLoadError):
            discover_types(tmp_path / "data")

    def test_modes_from_yaml_files(self, token_project: Path):
        sources = load_type_sources(token_project / "data" / "colors")
        assert sources.type == "colors"
        assert sources.prefix == "colors"
        assert list(sources.modes) == ["dark", "light"]
        assert sources.deprecated.name == "deprecated.json"
        assert sources.removed.name == "removed.json"

    def test_prefix_file(self, token_project: Path):
        sources = load_type_sources(token_project / "data" / "spacing")
        assert sources.prefix == "space"
        assert sources.deprecated is None

    def test_prefix_override(self, token_project: Path):
        assert load_type_sources(token_project / "data" / "spacing", "gap").prefix == "gap"

    def test_index_file(self, tmp_path):
        type_dir = tmp_path / "colors"
        write(type_dir / "base.yaml", "fg: '#000'\n")
        write(type_dir / "light.yaml", "bg: '#fff'\n")
        write(type_dir / "index.yaml", "modes:\n  light: [base.yaml, light.yaml]\n  mono: base.yaml\n")
        sources = load_type_sources(type_dir)
        assert list(sources.modes) == ["light", "mono"]
        assert sources.modes["light"] == [type_dir / "base.yaml", type_dir / "light.yaml"]

    def test_index_without_modes(self, tmp_path):
        write(tmp_path / "colors" / "index.yaml", "light: light.yaml\n")
        with pytest.raises(TokenLoadError, match="modes"):
            load_type_sources(tmp_path / "colors")


class TestBuildModeCollection:
    def test_builds_every_mode(self, token_project: Path):
        sources = load_type_sources(token_project / "data" / "colors")
        collection = build_mode_collection(sources, baseline="light")
        assert collection.is_finalized
        assert collection.mode_names() == ["dark", "light"]
        assert collection.baseline_mode == "light"
        assert collection.validate().is_valid

        light = collection.get("light")
        assert light.get_by_name("colors-fg.default").value == "#1b1f23"
        assert light.get_by_name("colors-fg.muted").value == "#e1e4e8"
        theme = light.tree()
        shadow = light.get_by_name("colors-shadow.small").value
        assert evaluate(shadow, theme) == "0 1px 0 rgba(27, 31, 35, 0.04)"
        assert evaluate(light.get_by_name("colors-border.divider").value, theme) == "#808080"

    def test_overlays_fold_in_order(self, tmp_path):
        type_dir = tmp_path / "colors"
        write(type_dir / "base.yaml", "scale:\n  black: '#000000'\nfg: !ref scale.black\n")
        write(type_dir / "light.yaml", "fg: '#111111'\nbg: !ref scale.black\n")
        write(type_dir / "index.yaml", "modes:\n  light: [base.yaml, light.yaml]\n")
        collection = build_mode_collection(load_type_sources(type_dir))
        light = collection.get("light")
        assert [v.name for v in light] == ["colors-scale.black", "colors-fg", "colors-bg"]
        assert light.get_by_name("colors-fg").value == "#111111"

    def test_skip(self, token_project: Path):
        sources = load_type_sources(token_project / "data" / "colors")
        collection = build_mode_collection(sources, skip={"dark"})
        assert collection.mode_names() == ["light"]

    def test_undefined_reference_names_the_file(self, tmp_path, colors_yaml):
        type_dir = tmp_path / "colors"
        write(type_dir / "light.yaml", colors_yaml["light"])
        dark = colors_yaml["dark"].replace("!ref scale.white", "!ref scale.nope")
        write(type_dir / "dark.yaml", dark)
        with pytest.raises(UndefinedReferenceError) as exc_info:
            build_mode_collection(load_type_sources(type_dir))
        message = str(exc_info.value)
        assert "dark.yaml" in message
        assert "[colors/dark]" in message
        assert '"colors-scale.nope"' in message
