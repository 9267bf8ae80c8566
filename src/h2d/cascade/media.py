"""Minimal ``@media`` condition evaluation against the conversion viewport."""

from __future__ import annotations

import re

from h2d.model.resources import Viewport

_AND_RE = re.compile(r"\s+and\s+")
_RANGE_RE = re.compile(
    r"^\(\s*(min|max)-(width|height)\s*:\s*(\d*\.?\d+)\s*(px|em|rem)?\s*\)$"
)
_SCHEME_RE = re.compile(r"^\(\s*prefers-color-scheme\s*:\s*(light|dark)\s*\)$")
_MEDIA_TYPES_ON = frozenset({"", "all", "screen"})


def media_matches(
    condition: str,
    viewport: Viewport,
    *,
    theme: str = "light",
    root_font_size: float = 16.0,
) -> bool:
    """Return True if any query in the comma-separated *condition* applies.

    Understands media types, ``min-``/``max-`` width and height, and
    ``prefers-color-scheme``.  Any other feature makes its query not apply.
    """
    if not condition.strip():
        return True
    return any(
        _query_matches(q.strip().lower(), viewport, theme, root_font_size)
        for q in condition.split(",")
    )


def _query_matches(query: str, viewport: Viewport, theme: str, root_font_size: float) -> bool:
    if query.startswith("not "):
        return not _query_matches(query[4:].strip(), viewport, theme, root_font_size)
    if query.startswith("only "):
        query = query[5:].strip()
    for part in _AND_RE.split(query):
        part = part.strip()
        if part in _MEDIA_TYPES_ON:
            continue
        match = _RANGE_RE.match(part)
        if match:
            bound, axis, number, unit = match.groups()
            limit = float(number)
            if unit in ("em", "rem"):
                limit *= root_font_size
            actual = viewport.width if axis == "width" else viewport.height
            if bound == "min" and actual < limit:
                return False
            if bound == "max" and actual > limit:
                return False
            continue
        match = _SCHEME_RE.match(part)
        if match:
            if match.group(1) != theme:
                return False
            continue
        return False
    return True
