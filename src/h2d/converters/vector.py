"""Convert embedded ``<svg>`` subtrees into VECTOR/GROUP design nodes.

Path data is validated but otherwise carried through unchanged.
Any malformed attribute or path anywhere in the subtree replaces the whole
``<svg>`` with a neutral 100x100 grey placeholder; the rest of the conversion
continues.
"""

from __future__ import annotations

import logging
import re

from bs4 import Tag

from h2d.colors import parse_color
from h2d.errors import VectorParseError
from h2d.model.design import PLACEHOLDER_GREY, DesignNode, NodeType, SolidPaint, VectorPath, WindingRule

logger = logging.getLogger(__name__)

PLACEHOLDER_SIZE = 100.0

_PATH_TOKEN_RE = re.compile(
    r"\s*(?:([MmZzLlHhVvCcSsQqTtAa])|([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)|(,))"
)
_VIEWBOX_SPLIT_RE = re.compile(r"[\s,]+")

# Elements inside an <svg> that carry no geometry of their own.
_NON_GRAPHIC = frozenset({"title", "desc", "defs", "metadata", "style", "script"})


def is_vector_tag(tag_name: str) -> bool:
    return tag_name.lower() == "svg"


def validate_path_data(d: str) -> str:
    """Check that *d* is well-formed SVG path data and return it unchanged.

    Raises :class:`VectorParseError` on unknown characters or when the data
    does not start with a moveto command.
    """
    text = d.strip()
    if not text:
        raise VectorParseError("empty path data")
    pos = 0
    first = True
    while pos < len(text):
        match = _PATH_TOKEN_RE.match(text, pos)
        if match is None or match.end() == pos:
            raise VectorParseError(f"invalid path data at offset {pos}: {text[pos:pos + 10]!r}")
        command = match.group(1)
        if first:
            if command not in ("M", "m"):
                raise VectorParseError("path data must start with a moveto command")
            first = False
        pos = match.end()
        if text[pos:].strip() == "":
            break
    return d


def placeholder_node(name: str = "SVG") -> DesignNode:
    """The stand-in emitted for an ``<svg>`` that could not be converted."""
    return DesignNode(
        name=name,
        type=NodeType.VECTOR,
        width=PLACEHOLDER_SIZE,
        height=PLACEHOLDER_SIZE,
        fills=[SolidPaint(PLACEHOLDER_GREY)],
    )


def _attr(tag: Tag, name: str) -> str | None:
    value = tag.get(name)
    if value is None and name.lower() != name:
        value = tag.get(name.lower())
    if isinstance(value, list):
        value = " ".join(value)
    return value


def _number(tag: Tag, name: str, default: float = 0.0) -> float:
    raw = _attr(tag, name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw.strip().removesuffix("px"))
    except ValueError as exc:
        raise VectorParseError(f"<{tag.name}> {name}={raw!r} is not a number", cause=exc) from exc


def _lenient_length(raw: str | None) -> float | None:
    if raw is None or "%" in raw:
        return None
    try:
        return float(raw.strip().removesuffix("px"))
    except ValueError:
        return None


def _apply_paint(node: DesignNode, tag: Tag, default_fill: str | None = None) -> None:
    fill = _attr(tag, "fill") or default_fill
    if fill and fill.strip().lower() != "none":
        node.fills = [SolidPaint(parse_color(fill))]
    stroke = _attr(tag, "stroke")
    if stroke and stroke.strip().lower() != "none":
        node.strokes = [SolidPaint(parse_color(stroke))]
        node.stroke_weight = _number(tag, "stroke-width", 1.0)
    if _attr(tag, "opacity") is not None:
        node.opacity = min(1.0, max(0.0, _number(tag, "opacity", 1.0)))


class VectorConverter:
    """Converts ``<svg>`` elements using one winding rule for every path."""

    def __init__(self, winding_rule: WindingRule = WindingRule.NONZERO) -> None:
        self.winding_rule = winding_rule

    def convert(self, svg: Tag) -> DesignNode:
        """Convert *svg*, falling back to :func:`placeholder_node` on malformed markup."""
        try:
            return self._convert_root(svg)
        except (VectorParseError, ValueError) as exc:
            logger.warning("SVG conversion failed, using placeholder: %s", exc)
            return placeholder_node()

    def _path(self, d: str) -> VectorPath:
        return VectorPath(validate_path_data(d), self.winding_rule)

    def _convert_root(self, svg: Tag) -> DesignNode:
        if not is_vector_tag(svg.name or ""):
            raise VectorParseError(f"expected <svg>, got <{svg.name}>")
        node = DesignNode(name="SVG", type=NodeType.VECTOR)

        width = _lenient_length(_attr(svg, "width") or "100")
        height = _lenient_length(_attr(svg, "height") or "100")
        # Zero, negative or unparseable sizes leave the geometry unset.
        if (width or 0) > 0 and (height or 0) > 0:
            node.width = width
            node.height = height

        view_box = _attr(svg, "viewBox")
        if view_box:
            parts = [p for p in _VIEWBOX_SPLIT_RE.split(view_box.strip()) if p]
            if len(parts) != 4:
                raise VectorParseError(f"viewBox must have four numbers: {view_box!r}")
            try:
                x, y, w, h = (float(p) for p in parts)
            except ValueError as exc:
                raise VectorParseError(f"invalid viewBox {view_box!r}", cause=exc) from exc
            if w < 0 or h < 0:
                raise VectorParseError(f"negative viewBox size {view_box!r}")
            if w and h:
                node.width = w
                node.height = h
                node.x = x
                node.y = y

        _apply_paint(node, svg, default_fill="#000000")

        node.children = self._convert_children(svg)
        node.vector_paths = [
            self._path(path["d"]) for path in svg.find_all("path") if path.get("d")
        ]
        return node

    def _convert_children(self, parent: Tag) -> list[DesignNode]:
        return [
            self._convert_element(child)
            for child in parent.children
            if isinstance(child, Tag) and child.name not in _NON_GRAPHIC
        ]

    def _convert_element(self, element: Tag) -> DesignNode:
        tag = element.name.lower()
        node = DesignNode(
            name=tag.upper(),
            type=NodeType.GROUP if tag == "g" else NodeType.VECTOR,
        )
        _apply_paint(node, element)

        if tag == "path":
            d = _attr(element, "d")
            if d:
                node.vector_paths = [self._path(d)]
        elif tag == "rect":
            width = _number(element, "width")
            height = _number(element, "height")
            if width < 0 or height < 0:
                raise VectorParseError("negative <rect> size")
            node.x = _number(element, "x")
            node.y = _number(element, "y")
            node.width = width
            node.height = height
        elif tag == "circle":
            r = _number(element, "r")
            if r < 0:
                raise VectorParseError("negative <circle> radius")
            node.x = _number(element, "cx") - r
            node.y = _number(element, "cy") - r
            node.width = r * 2
            node.height = r * 2
        elif tag == "ellipse":
            rx = _number(element, "rx")
            ry = _number(element, "ry")
            if rx < 0 or ry < 0:
                raise VectorParseError("negative <ellipse> radius")
            node.x = _number(element, "cx") - rx
            node.y = _number(element, "cy") - ry
            node.width = rx * 2
            node.height = ry * 2

        node.children = self._convert_children(element)
        return node


def convert_svg(svg: Tag, winding_rule: WindingRule = WindingRule.NONZERO) -> DesignNode:
    return VectorConverter(winding_rule).convert(svg)
