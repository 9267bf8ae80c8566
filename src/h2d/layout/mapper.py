"""Derive geometry, box-model and auto-layout fields from an effective style.

Margins are not mapped: sibling spacing is expressed through the parent's
``itemSpacing`` rather than per-child offsets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from h2d.layout.units import leading_number, parse_length, parse_size
from h2d.model.design import LayoutMode
from h2d.model.resources import Viewport

_FLEX_DISPLAYS = frozenset({"flex", "inline-flex"})

_PRIMARY_ALIGN: dict[str, str] = {
    "flex-start": "MIN",
    "start": "MIN",
    "left": "MIN",
    "normal": "MIN",
    "center": "CENTER",
    "flex-end": "MAX",
    "end": "MAX",
    "right": "MAX",
    "space-between": "SPACE_BETWEEN",
}

_COUNTER_ALIGN: dict[str, str] = {
    "flex-start": "MIN",
    "start": "MIN",
    "center": "CENTER",
    "flex-end": "MAX",
    "end": "MAX",
    "baseline": "BASELINE",
}


@dataclass(frozen=True)
class Padding:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


def expand_padding(value: str, *, root_font_size: float = 16.0) -> Padding:
    """Expand a ``padding`` shorthand.

    One value fills every side, two are (vertical, horizontal), four are
    (top, right, bottom, left).  Any other count gives all-zero padding.
    """
    values = [parse_length(v, root_font_size=root_font_size) for v in value.split()]
    if len(values) == 1:
        (v,) = values
        return Padding(v, v, v, v)
    if len(values) == 2:
        vertical, horizontal = values
        return Padding(vertical, horizontal, vertical, horizontal)
    if len(values) == 4:
        return Padding(*values)
    return Padding()


def _padding(style: Mapping[str, str], root_font_size: float) -> Padding | None:
    shorthand = style.get("padding")
    sides = ("top", "right", "bottom", "left")
    if shorthand is None and not any(f"padding-{s}" in style for s in sides):
        return None
    base = expand_padding(shorthand, root_font_size=root_font_size) if shorthand else Padding()
    values = {s: getattr(base, s) for s in sides}
    for side in sides:
        longhand = style.get(f"padding-{side}")
        if longhand is not None:
            values[side] = parse_length(longhand, root_font_size=root_font_size)
    return Padding(**values)


def _gap(style: Mapping[str, str], vertical: bool, root_font_size: float) -> float | None:
    longhand = style.get("row-gap" if vertical else "column-gap")
    if longhand is not None:
        return parse_length(longhand, root_font_size=root_font_size)
    gap = style.get("gap")
    if gap is None:
        return None
    parts = gap.split()
    if not parts:
        return None
    token = parts[0] if vertical or len(parts) == 1 else parts[1]
    return parse_length(token, root_font_size=root_font_size)


def auto_layout_props(style: Mapping[str, str], *, root_font_size: float = 16.0) -> dict[str, Any]:
    """Map ``display: flex`` onto auto-layout fields; empty for other displays."""
    display = style.get("display", "block").strip().lower()
    if display not in _FLEX_DISPLAYS:
        return {}
    direction = style.get("flex-direction", "row").strip().lower()
    vertical = direction.startswith("column")
    props: dict[str, Any] = {
        "layout_mode": LayoutMode.VERTICAL if vertical else LayoutMode.HORIZONTAL,
        "primary_axis_sizing_mode": "AUTO",
        "counter_axis_sizing_mode": "AUTO",
    }
    spacing = _gap(style, vertical, root_font_size)
    if spacing is not None:
        props["item_spacing"] = spacing
    justify = _PRIMARY_ALIGN.get(style.get("justify-content", "").strip().lower())
    if justify:
        props["primary_axis_align_items"] = justify
    align = _COUNTER_ALIGN.get(style.get("align-items", "").strip().lower())
    if align:
        props["counter_axis_align_items"] = align
    return props


def layout_props(
    style: Mapping[str, str],
    viewport: Viewport | None = None,
    *,
    root_font_size: float = 16.0,
) -> dict[str, Any]:
    """Return the DesignNode keyword arguments derived from *style*.

    Keys are DesignNode field names; absent keys mean "leave unset".
    """
    props: dict[str, Any] = {}

    for axis in ("width", "height"):
        raw = style.get(axis)
        if raw is None:
            continue
        base = None
        if viewport is not None:
            base = viewport.width if axis == "width" else viewport.height
        size = parse_size(raw, base, root_font_size=root_font_size, viewport=viewport)
        if size is not None:
            props[axis] = size

    props.update(auto_layout_props(style, root_font_size=root_font_size))

    padding = _padding(style, root_font_size)
    if padding is not None:
        props["padding_top"] = padding.top
        props["padding_right"] = padding.right
        props["padding_bottom"] = padding.bottom
        props["padding_left"] = padding.left

    return props


def parse_opacity(value: str) -> float | None:
    text = value.strip()
    number = leading_number(text)
    if number is None:
        return None
    if text.endswith("%"):
        number /= 100
    return min(1.0, max(0.0, number))
