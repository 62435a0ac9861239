"""
Pure-Python colour helpers for deferred token expressions.

Supports hex (#rgb, #rgba, #rrggbb, #rrggbbaa), rgb()/rgba() and the
``transparent`` keyword. No external color libraries required.
"""

from __future__ import annotations

import colorsys
import re

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)

RGBA = tuple[int, int, int, float]


def is_color(value: object) -> bool:
    """Check whether ``value`` is a colour string this module understands."""
    if not isinstance(value, str):
        return False
    try:
        parse_color(value)
    except ValueError:
        return False
    return True


def parse_color(value: str) -> RGBA:
    """Parse a CSS colour into (r, g, b, alpha).

    Raises:
        ValueError: If the colour format is not supported.
    """
    cleaned = value.strip()
    if cleaned.lower() == "transparent":
        return (0, 0, 0, 0.0)

    if _HEX_COLOR_RE.match(cleaned):
        digits = cleaned[1:]
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
        return (r, g, b, round(a, 3))

    match = _FUNC_COLOR_RE.match(cleaned)
    if match:
        parts = [p for p in re.split(r"[\s,/]+", match.group(1).strip()) if p]
        if len(parts) not in (3, 4):
            raise ValueError(f"Invalid colour: {value!r}")
        r, g, b = (_clamp_channel(float(p)) for p in parts[:3])
        a = float(parts[3]) if len(parts) == 4 else 1.0
        return (r, g, b, min(max(a, 0.0), 1.0))

    raise ValueError(f"Unsupported colour: {value!r}")


def to_css(rgba: RGBA) -> str:
    """Format a colour as ``#rrggbb`` when opaque, ``rgba(...)`` otherwise."""
    r, g, b, a = rgba
    if a >= 1.0:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"rgba({r}, {g}, {b}, {_format_alpha(a)})"


def with_alpha(color: str, amount: float) -> str:
    """Return ``color`` with its alpha channel set to ``amount``."""
    r, g, b, _ = parse_color(color)
    return to_css((r, g, b, min(max(float(amount), 0.0), 1.0)))


def adjust_lightness(color: str, delta: float) -> str:
    """Shift HSL lightness by ``delta`` (positive lightens), clamped to [0, 1]."""
    r, g, b, a = parse_color(color)
    h, lightness, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    lightness = min(max(lightness + float(delta), 0.0), 1.0)
    nr, ng, nb = colorsys.hls_to_rgb(h, lightness, s)
    return to_css((round(nr * 255), round(ng * 255), round(nb * 255), a))


def _clamp_channel(value: float) -> int:
    return int(round(min(max(value, 0.0), 255.0)))


def _format_alpha(alpha: float) -> str:
    return f"{round(alpha, 3):g}"
