"""CSS color parsing into normalized RGBA."""

from __future__ import annotations

import re

from h2d.model.design import BLACK, Color

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,8})$")
_FUNC_RE = re.compile(r"^rgba?\((.*)\)$", re.IGNORECASE | re.DOTALL)
_NUMBER_RE = re.compile(r"^([+-]?\d*\.?\d+)(%?)$")

NAMED_COLORS: dict[str, tuple[int, int, int, float]] = {
    "black": (0, 0, 0, 1.0),
    "white": (255, 255, 255, 1.0),
    "red": (255, 0, 0, 1.0),
    "green": (0, 128, 0, 1.0),
    "lime": (0, 255, 0, 1.0),
    "blue": (0, 0, 255, 1.0),
    "yellow": (255, 255, 0, 1.0),
    "cyan": (0, 255, 255, 1.0),
    "aqua": (0, 255, 255, 1.0),
    "magenta": (255, 0, 255, 1.0),
    "fuchsia": (255, 0, 255, 1.0),
    "gray": (128, 128, 128, 1.0),
    "grey": (128, 128, 128, 1.0),
    "silver": (192, 192, 192, 1.0),
    "maroon": (128, 0, 0, 1.0),
    "navy": (0, 0, 128, 1.0),
    "olive": (128, 128, 0, 1.0),
    "purple": (128, 0, 128, 1.0),
    "teal": (0, 128, 128, 1.0),
    "orange": (255, 165, 0, 1.0),
    "transparent": (0, 0, 0, 0.0),
}


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _channel(token: str) -> float:
    match = _NUMBER_RE.match(token)
    if not match:
        raise ValueError(token)
    number = float(match.group(1))
    if match.group(2):
        return _clamp(number / 100)
    return _clamp(number / 255)


def _alpha(token: str) -> float:
    match = _NUMBER_RE.match(token)
    if not match:
        raise ValueError(token)
    number = float(match.group(1))
    return _clamp(number / 100 if match.group(2) else number)


def _parse_hex(digits: str) -> Color | None:
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) not in (6, 8):
        return None
    r, g, b = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return Color(r, g, b, a)


def _parse_function(body: str) -> Color | None:
    body = body.replace("/", " ").replace(",", " ")
    tokens = body.split()
    if len(tokens) not in (3, 4):
        return None
    try:
        r, g, b = (_channel(t) for t in tokens[:3])
        a = _alpha(tokens[3]) if len(tokens) == 4 else 1.0
    except ValueError:
        return None
    return Color(r, g, b, a)


def try_parse_color(value: str | None) -> Color | None:
    """Parse *value* as a CSS color, returning None when it is not one."""
    if not value:
        return None
    text = value.strip()
    match = _HEX_RE.match(text)
    if match:
        return _parse_hex(match.group(1))
    match = _FUNC_RE.match(text)
    if match:
        return _parse_function(match.group(1))
    named = NAMED_COLORS.get(text.lower())
    if named:
        r, g, b, a = named
        return Color(r / 255, g / 255, b / 255, a)
    return None


def parse_color(value: str | None) -> Color:
    """Parse *value* as a CSS color; anything unrecognized is opaque black."""
    return try_parse_color(value) or BLACK
