"""Design-tree model: the typed nodes emitted by the converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Union


class NodeType(StrEnum):
    FRAME = "FRAME"
    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    VECTOR = "VECTOR"
    GROUP = "GROUP"


class LayoutMode(StrEnum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class WindingRule(StrEnum):
    NONZERO = "NONZERO"
    EVENODD = "EVENODD"


@dataclass(frozen=True)
class Color:
    """An RGBA color with every channel normalized to ``[0, 1]``."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_dict(self) -> dict[str, float]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}


BLACK = Color(0.0, 0.0, 0.0, 1.0)
PLACEHOLDER_GREY = Color(0.8, 0.8, 0.8, 1.0)


@dataclass(frozen=True)
class SolidPaint:
    color: Color

    def to_dict(self) -> dict[str, Any]:
        return {"type": "SOLID", "color": self.color.to_dict()}


@dataclass(frozen=True)
class ImagePaint:
    image_hash: str
    scale_mode: str = "FILL"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "IMAGE", "imageHash": self.image_hash, "scaleMode": self.scale_mode}


Paint = Union[SolidPaint, ImagePaint]


@dataclass(frozen=True)
class LineHeight:
    unit: str = "AUTO"  # AUTO, PIXELS, PERCENT
    value: float | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.value is None:
            return {"unit": self.unit}
        return {"unit": self.unit, "value": self.value}


@dataclass(frozen=True)
class LetterSpacing:
    unit: str = "PIXELS"
    value: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"unit": self.unit, "value": self.value}


@dataclass(frozen=True)
class TextStyle:
    font_family: str
    font_size: float
    font_weight: int
    font_style: str = "normal"
    line_height: LineHeight = field(default_factory=LineHeight)
    letter_spacing: LetterSpacing = field(default_factory=LetterSpacing)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "fontWeight": self.font_weight,
            "fontStyle": self.font_style,
            "lineHeight": self.line_height.to_dict(),
            "letterSpacing": self.letter_spacing.to_dict(),
        }


@dataclass(frozen=True)
class VectorPath:
    path: str
    winding_rule: WindingRule = WindingRule.NONZERO

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "windingRule": str(self.winding_rule)}


# Output key for every scalar DesignNode field, in emission order.
_SCALAR_KEYS: tuple[tuple[str, str], ...] = (
    ("width", "width"),
    ("height", "height"),
    ("x", "x"),
    ("y", "y"),
    ("opacity", "opacity"),
    ("corner_radius", "cornerRadius"),
    ("stroke_weight", "strokeWeight"),
    ("layout_mode", "layoutMode"),
    ("primary_axis_sizing_mode", "primaryAxisSizingMode"),
    ("counter_axis_sizing_mode", "counterAxisSizingMode"),
    ("primary_axis_align_items", "primaryAxisAlignItems"),
    ("counter_axis_align_items", "counterAxisAlignItems"),
    ("item_spacing", "itemSpacing"),
    ("padding_top", "paddingTop"),
    ("padding_right", "paddingRight"),
    ("padding_bottom", "paddingBottom"),
    ("padding_left", "paddingLeft"),
    ("characters", "characters"),
)


@dataclass
class DesignNode:
    """One node of the output design tree.

    A node owns its children outright; the tree has no parent links.  Unset
    geometry stays ``None`` and is omitted from the serialized form.
    """

    name: str
    type: NodeType
    width: float | None = None
    height: float | None = None
    x: float | None = None
    y: float | None = None
    opacity: float | None = None
    corner_radius: float | None = None
    fills: list[Paint] = field(default_factory=list)
    strokes: list[Paint] = field(default_factory=list)
    stroke_weight: float | None = None
    layout_mode: LayoutMode | None = None
    primary_axis_sizing_mode: str | None = None
    counter_axis_sizing_mode: str | None = None
    primary_axis_align_items: str | None = None
    counter_axis_align_items: str | None = None
    item_spacing: float | None = None
    padding_top: float | None = None
    padding_right: float | None = None
    padding_bottom: float | None = None
    padding_left: float | None = None
    characters: str | None = None
    style: TextStyle | None = None
    vector_paths: list[VectorPath] = field(default_factory=list)
    children: list[DesignNode] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        # Checked on every assignment, not only in __init__.
        if name in ("width", "height") and value is not None and value < 0:
            raise ValueError(f"DesignNode {name} must be non-negative, got {value}")
        super().__setattr__(name, value)

    def walk(self):
        """Yield this node and every descendant, pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "type": str(self.type)}
        for attr, key in _SCALAR_KEYS:
            value = getattr(self, attr)
            if value is None:
                continue
            out[key] = str(value) if isinstance(value, StrEnum) else value
        if self.fills:
            out["fills"] = [p.to_dict() for p in self.fills]
        if self.strokes:
            out["strokes"] = [p.to_dict() for p in self.strokes]
        if self.style is not None:
            out["style"] = self.style.to_dict()
        if self.vector_paths:
            out["vectorPaths"] = [p.to_dict() for p in self.vector_paths]
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out
