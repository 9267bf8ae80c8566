"""Fills, strokes, corner radius and opacity from an effective style."""

from __future__ import annotations

import re
from typing import Any, Mapping

from h2d.colors import parse_color, try_parse_color
from h2d.layout.mapper import parse_opacity
from h2d.layout.units import parse_length
from h2d.model.design import ImagePaint, NodeType, Paint, SolidPaint
from h2d.model.resources import ImageResource

_URL_RE = re.compile(r"url\(\s*[\"']?([^\"')]+)[\"']?\s*\)")
_BORDER_STYLES_OFF = frozenset({"none", "hidden"})
_BORDER_STYLES = frozenset({
    "solid", "dashed", "dotted", "double", "groove", "ridge", "inset", "outset",
}) | _BORDER_STYLES_OFF
_BORDER_WIDTHS = {"thin": 1.0, "medium": 3.0, "thick": 5.0}
_TOKEN_RE = re.compile(r"[\w-]+\([^)]*\)|\S+")


def _border_width(token: str, root_font_size: float) -> float:
    lowered = token.lower()
    if lowered in _BORDER_WIDTHS:
        return _BORDER_WIDTHS[lowered]
    return parse_length(token, root_font_size=root_font_size)


def background_image_url(style: Mapping[str, str]) -> str | None:
    """Return the first ``url(...)`` of ``background-image`` or ``background``."""
    for prop in ("background-image", "background"):
        value = style.get(prop)
        if value:
            match = _URL_RE.search(value)
            if match:
                return match.group(1).strip()
    return None


def fills_for(
    style: Mapping[str, str],
    node_type: NodeType,
    images: Mapping[str, ImageResource] | None = None,
) -> list[Paint]:
    """Text nodes are filled with ``color``; other nodes with their background."""
    if node_type is NodeType.TEXT:
        color = style.get("color")
        return [SolidPaint(parse_color(color))] if color else []

    paints: list[Paint] = []
    background = style.get("background-color")
    if background:
        paints.append(SolidPaint(parse_color(background)))
    else:
        shorthand = try_parse_color(style.get("background"))
        if shorthand is not None:
            paints.append(SolidPaint(shorthand))
    url = background_image_url(style)
    if url and images and url in images:
        paints.append(ImagePaint(images[url].to_data_uri()))
    return paints


def _border_shorthand(value: str, root_font_size: float) -> tuple[float | None, str | None, str | None]:
    width: float | None = None
    line_style: str | None = None
    color: str | None = None
    for token in _TOKEN_RE.findall(value):
        lowered = token.lower()
        if lowered in _BORDER_STYLES:
            line_style = lowered
        elif lowered in _BORDER_WIDTHS or token[0].isdigit() or token[0] == ".":
            width = _border_width(token, root_font_size)
        else:
            color = token
    return width, line_style, color


def strokes_for(style: Mapping[str, str], *, root_font_size: float = 16.0) -> dict[str, Any]:
    """Map ``border`` (and its width/color/style longhands) onto strokes."""
    width: float | None = None
    line_style: str | None = None
    color: str | None = None
    if "border" in style:
        width, line_style, color = _border_shorthand(style["border"], root_font_size)
    if "border-width" in style:
        parts = style["border-width"].split()
        if parts:
            width = _border_width(parts[0], root_font_size)
    if "border-style" in style:
        line_style = style["border-style"].strip().lower()
    if "border-color" in style:
        color = style["border-color"]

    if width is None and line_style is None and color is None:
        return {}
    if line_style in _BORDER_STYLES_OFF:
        return {}
    if width is None:
        width = _BORDER_WIDTHS["medium"] if line_style else 0.0
    if width <= 0:
        return {}
    return {
        "strokes": [SolidPaint(parse_color(color or style.get("color")))],
        "stroke_weight": width,
    }


def appearance_props(
    style: Mapping[str, str],
    node_type: NodeType,
    images: Mapping[str, ImageResource] | None = None,
    *,
    root_font_size: float = 16.0,
) -> dict[str, Any]:
    """Return DesignNode keyword arguments for paints, radius and opacity."""
    props: dict[str, Any] = {}
    fills = fills_for(style, node_type, images)
    if fills:
        props["fills"] = fills
    if node_type is not NodeType.TEXT:
        props.update(strokes_for(style, root_font_size=root_font_size))
    radius = style.get("border-radius")
    if radius and radius.split():
        props["corner_radius"] = parse_length(radius.split()[0], root_font_size=root_font_size)
    opacity = style.get("opacity")
    if opacity:
        value = parse_opacity(opacity)
        if value is not None:
            props["opacity"] = value
    return props
