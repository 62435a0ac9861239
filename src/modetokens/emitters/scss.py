"""
SCSS emitter: one mixin of CSS custom properties per mode.
"""

from __future__ import annotations

from pathlib import Path

from modetokens.core.modes import ModeCollection

from modetokens.core.render import render_variables

from .render import format_css_value


def generate_scss(namespace: str, collection: ModeCollection, mode: str) -> str:
    """Render one mode as ``@mixin <namespace>-<type>-<mode>``."""
    variables = collection.get(mode)
    if variables is None:
        raise KeyError(f"Type '{collection.type}' has no mode '{mode}'")

    lines = [f"@mixin {namespace}-{collection.type}-{mode} {{", "  & {"]
    for name, value in render_variables(variables):
        lines.append(f"    --{name}: {format_css_value(value)};")
    lines.extend(["  }", "}", ""])
    return "\n".join(lines)


def write_scss(namespace: str, collection: ModeCollection, out_dir: Path) -> list[Path]:
    """Write ``scss/<type>/_<mode>.scss`` for every mode."""
    type_dir = out_dir / "scss" / collection.type
    type_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for mode, _ in collection:
        path = type_dir / f"_{mode}.scss"
        path.write_text(generate_scss(namespace, collection, mode), encoding="utf-8")
        written.append(path)
    return written
