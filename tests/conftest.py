"""Shared pytest fixtures for modetokens tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from modetokens.core.expressions import get
from modetokens.core.modes import ModeCollection
from modetokens.core.variables import VariableCollection

LIGHT_YAML = """\
scale:
  black: "#1b1f23"
  white: "#ffffff"
  gray: ["#fafbfc", "#f6f8fa", "#e1e4e8"]
fg:
  default: !ref scale.black
  muted: !ref scale.gray.2
border:
  divider: !darken [!ref scale.white, 0.5]
shadow:
  small: !fmt ["0 1px 0 {}", !alpha [!ref scale.black, 0.04]]
"""

DARK_YAML = """\
scale:
  black: "#010409"
  white: "#f0f6fc"
  gray: ["#0d1117", "#161b22", "#21262d"]
fg:
  default: !ref scale.white
  muted: !ref scale.gray.2
border:
  divider: !lighten [!ref scale.black, 0.1]
shadow:
  small: "0 0 transparent"
"""


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def colors_collection() -> ModeCollection:
    """A finalized two-mode colors collection."""
    light = VariableCollection("light", "colors")
    light.add_from_object(
        {
            "scale": {"black": "#1b1f23", "white": "#ffffff"},
            "fg": {"default": get("scale.black"), "muted": "#586069"},
        }
    )
    dark = VariableCollection("dark", "colors")
    dark.add_from_object(
        {
            "scale": {"black": "#010409", "white": "#f0f6fc"},
            "fg": {"default": get("scale.white"), "muted": "#8b949e"},
        }
    )
    collection = ModeCollection("colors", "colors")
    collection.add("light", light)
    collection.add("dark", dark)
    collection.finalize()
    return collection


@pytest.fixture
def token_project(tmp_path: Path) -> Path:
    """A project with a valid ``colors`` type and a valid ``spacing`` type."""
    write(
        tmp_path / "tokens.toml",
        """
[project]
name = "acme"

[build]
data_dir = "data"
out_dir = "dist"
formats = ["scss", "json", "dtcg"]

[types.colors]
baseline = "light"
""",
    )
    data = tmp_path / "data"
    write(data / "colors" / "light.yaml", LIGHT_YAML)
    write(data / "colors" / "dark.yaml", DARK_YAML)
    write(data / "colors" / "deprecated.json", '{"scale.gray": "fg.muted"}')
    write(data / "colors" / "removed.json", '{"text.primary": ["fg.default"]}')

    write(data / "spacing" / "prefix", "space\n")
    write(data / "spacing" / "default.yaml", "sm: 4px\nmd: 8px\nlg: 16px\n")
    return tmp_path


@pytest.fixture
def colors_yaml() -> dict[str, str]:
    """YAML sources of the light and dark colors modes."""
    return {"light": LIGHT_YAML, "dark": DARK_YAML}
