"""CSS length parsing."""

from __future__ import annotations

import re

from h2d.model.resources import Viewport

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?", re.IGNORECASE)

# Keywords that leave a size unset rather than zero.
_UNSET_KEYWORDS = frozenset({
    "auto",
    "none",
    "inherit",
    "initial",
    "unset",
    "fit-content",
    "max-content",
    "min-content",
})


def leading_number(text: str) -> float | None:
    """Return the numeric prefix of *text* (``"12.5px"`` -> 12.5), or None."""
    match = _NUMBER_RE.match(text.strip())
    return float(match.group(0)) if match else None


def parse_length(value: str, *, root_font_size: float = 16.0) -> float:
    """Parse an absolute length (px, em/rem, unitless); anything else is 0."""
    text = value.strip().lower()
    number = leading_number(text)
    if number is None or text.endswith("%"):
        return 0.0
    if text.endswith("em"):
        return number * root_font_size
    return number


def parse_size(
    value: str,
    base: float | None,
    *,
    root_font_size: float = 16.0,
    viewport: Viewport | None = None,
) -> float | None:
    """Resolve a width/height value to pixels.

    ``%`` scales against *base* (the matching viewport axis), ``em``/``rem``
    use the fixed *root_font_size*, ``vw``/``vh`` use *viewport*.  Sizing
    keywords and percentages without a usable base return None (unset);
    unparseable values return 0.  Results are never negative.
    """
    text = value.strip().lower()
    if not text or text in _UNSET_KEYWORDS:
        return None
    number = leading_number(text)
    if number is None:
        return 0.0
    if text.endswith("%"):
        if not base:
            return None
        return max(0.0, number / 100 * base)
    if text.endswith("vw") or text.endswith("vh"):
        if viewport is None:
            return None
        axis = viewport.width if text.endswith("vw") else viewport.height
        return max(0.0, number / 100 * axis)
    if text.endswith("em"):
        number *= root_font_size
    return max(0.0, number)
