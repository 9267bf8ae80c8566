"""Recursive DOM-to-design-tree builder.

Visits elements depth-first: an element's style is resolved first, its
children are converted next, and the element's own node is assembled last
from the finished children list.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from h2d.cascade.resolver import EMPTY_STYLE, EffectiveStyle, StyleResolver
from h2d.config import ConversionConfig
from h2d.converters.vector import VectorConverter, is_vector_tag
from h2d.fonts import FontMapper
from h2d.layout.appearance import appearance_props, fills_for
from h2d.layout.classifier import IMAGE_TAGS, LINE_BREAK_TAGS, classify, is_rendering
from h2d.layout.mapper import layout_props, parse_opacity
from h2d.layout.text import text_style
from h2d.layout.units import parse_size
from h2d.model.design import DesignNode, ImagePaint, NodeType, TextStyle
from h2d.model.resources import FontRecord, ImageResource, Viewport

logger = logging.getLogger(__name__)

_TEXT_NAME_LIMIT = 40
_WHITESPACE = re.compile(r"[ \t\n\r\f]+")


def collapse_whitespace(text: str) -> str:
    """Collapse each run of HTML whitespace to one space, keeping the edges.

    Non-breaking spaces are content, not whitespace.
    """
    return _WHITESPACE.sub(" ", text)


def text_content(tag: Tag) -> str:
    """Concatenate the source text under *tag*, skipping non-rendering tags.

    ``<br>`` counts as whitespace; comments contribute nothing.
    """
    parts: list[str] = []
    for child in tag.children:
        if isinstance(child, Tag):
            name = (child.name or "").lower()
            if name in LINE_BREAK_TAGS:
                parts.append("\n")
            elif is_rendering(name):
                parts.append(text_content(child))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(str(child))
    return "".join(parts)


def _element_name(tag: Tag, fallback: str) -> str:
    ident = tag.get("id")
    if ident:
        return ident if isinstance(ident, str) else " ".join(ident)
    classes = tag.get("class")
    if classes:
        return classes if isinstance(classes, str) else " ".join(classes)
    return fallback


class TreeBuilder:
    """Builds design nodes for one conversion session.

    The resource maps are read-only snapshots prepared before the walk.
    """

    def __init__(
        self,
        resolver: StyleResolver,
        *,
        viewport: Viewport | None = None,
        images: Mapping[str, ImageResource] | None = None,
        fonts: Mapping[str, FontRecord] | None = None,
        config: ConversionConfig | None = None,
    ) -> None:
        self.resolver = resolver
        self.config = config or ConversionConfig()
        self.viewport = viewport
        self.images: Mapping[str, ImageResource] = images or {}
        self.fonts: Mapping[str, FontRecord] = fonts or {}
        self.font_mapper = FontMapper(
            default_family=self.config.default_font_family,
            extra_families=self.config.font_mappings,
        )
        self.vectors = VectorConverter(self.config.winding_rule)

    # ---- entry points ----

    def build_page(self, soup: BeautifulSoup) -> list[DesignNode]:
        """Convert the element children of ``<body>`` (or of the fragment root)."""
        style: EffectiveStyle = EMPTY_STYLE
        container: Tag = soup
        html = soup.find("html")
        if isinstance(html, Tag):
            style = self.resolver.resolve(html, style)
        body = soup.find("body")
        if isinstance(body, Tag):
            style = self.resolver.resolve(body, style)
            container = body
        nodes: list[DesignNode] = []
        for child in container.children:
            if isinstance(child, Tag):
                node = self.convert_element(child, style)
                if node is not None:
                    nodes.append(node)
        return nodes

    def convert_element(
        self, tag: Tag, parent_style: Mapping[str, str] | None = None
    ) -> DesignNode | None:
        """Convert *tag* and its subtree; None for tags that never render."""
        name = (tag.name or "").lower()
        if not is_rendering(name):
            logger.debug("Skipping non-rendering <%s>", name)
            return None

        style = self.resolver.resolve(tag, parent_style)

        if is_vector_tag(name):
            node = self.vectors.convert(tag)
            node.name = _element_name(tag, "SVG")
            return node

        if name in IMAGE_TAGS:
            image_node = self._image_node(tag, style)
            if image_node is not None:
                return image_node
            logger.debug("No resource for <img src=%r>; emitting a frame", tag.get("src"))

        return self._container(tag, name, style)

    # ---- assembly ----

    def _container(self, tag: Tag, name: str, style: EffectiveStyle) -> DesignNode:
        children = self._convert_children(tag, style)

        kind = classify(name, style)
        if name in IMAGE_TAGS:
            kind = NodeType.FRAME
        elif kind is NodeType.TEXT and any(c.type is not NodeType.TEXT for c in children):
            # Text nodes cannot hold images or vectors.
            logger.debug("<%s> holds non-text children; emitting a frame", name)
            kind = NodeType.FRAME

        props = layout_props(style, self.viewport, root_font_size=self.config.root_font_size)
        props.update(
            appearance_props(style, kind, self.images, root_font_size=self.config.root_font_size)
        )
        node = DesignNode(name=name, type=kind, **props)

        if kind is NodeType.TEXT:
            node.style = self._text_style(style)
            node.characters = collapse_whitespace(text_content(tag)).strip()
        else:
            node.children = children
        return node

    def _convert_children(self, tag: Tag, style: EffectiveStyle) -> list[DesignNode]:
        children: list[DesignNode] = []
        pending: list[str] = []

        def flush() -> None:
            text = collapse_whitespace("".join(pending)).strip()
            pending.clear()
            if text:
                children.append(self._text_node(text, style))

        for child in tag.children:
            if isinstance(child, Tag):
                if (child.name or "").lower() in LINE_BREAK_TAGS:
                    pending.append("\n")
                    continue
                node = self.convert_element(child, style)
                if node is None:
                    continue
                flush()
                children.append(node)
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                pending.append(str(child))
        flush()
        return children

    def _text_node(self, text: str, style: EffectiveStyle) -> DesignNode:
        return DesignNode(
            name=text[:_TEXT_NAME_LIMIT],
            type=NodeType.TEXT,
            characters=text,
            style=self._text_style(style),
            fills=fills_for(style, NodeType.TEXT),
        )

    def _text_style(self, style: EffectiveStyle) -> TextStyle:
        return text_style(
            style,
            self.font_mapper,
            self.fonts,
            root_font_size=self.config.root_font_size,
            default_font_size=self.config.default_font_size,
        )

    def _image_node(self, tag: Tag, style: EffectiveStyle) -> DesignNode | None:
        src = tag.get("src")
        image = self.images.get(src) if isinstance(src, str) else None
        if image is None:
            return None
        vw = self.viewport.width if self.viewport else None
        vh = self.viewport.height if self.viewport else None
        width = image.width if (image.width or 0) > 0 else parse_size(
            tag.get("width") or "100", vw, root_font_size=self.config.root_font_size
        )
        height = image.height if (image.height or 0) > 0 else parse_size(
            tag.get("height") or "100", vh, root_font_size=self.config.root_font_size
        )
        opacity = parse_opacity(style["opacity"]) if style.get("opacity") else None
        return DesignNode(
            name=tag.get("alt") or "Image",
            type=NodeType.RECTANGLE,
            width=width,
            height=height,
            fills=[ImagePaint(image.to_data_uri())],
            opacity=1.0 if opacity is None else opacity,
        )
