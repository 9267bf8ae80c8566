"""Map an element's tag and style onto an output node type."""

from __future__ import annotations

from typing import Mapping

from h2d.model.design import NodeType

VECTOR_TAGS = frozenset({"svg"})
TEXT_TAGS = frozenset(
    {"h1", "h2", "h3", "h4", "h5", "h6", "p", "span", "a", "label"}
    | {"b", "strong", "em", "i", "u", "s", "small", "code", "mark", "sub", "sup", "abbr", "cite", "q"}
)
LINE_BREAK_TAGS = frozenset({"br"})
IMAGE_TAGS = frozenset({"img"})
FORM_TAGS = frozenset({"button", "input", "textarea", "select"})
NON_RENDERING_TAGS = frozenset({"script", "style", "meta", "link", "title", "head"})

# Display values that turn an inline text tag into a container.
_CONTAINER_DISPLAYS = frozenset({"flex", "inline-flex", "grid", "inline-grid"})


def classify(tag_name: str, style: Mapping[str, str] | None = None) -> NodeType:
    tag = tag_name.lower()
    if tag in VECTOR_TAGS:
        return NodeType.VECTOR
    if tag in TEXT_TAGS:
        display = (style or {}).get("display", "").strip().lower()
        if display in _CONTAINER_DISPLAYS:
            return NodeType.FRAME
        return NodeType.TEXT
    if tag in IMAGE_TAGS:
        return NodeType.RECTANGLE
    if tag in FORM_TAGS:
        return NodeType.FRAME
    return NodeType.FRAME


def is_rendering(tag_name: str) -> bool:
    return tag_name.lower() not in NON_RENDERING_TAGS
