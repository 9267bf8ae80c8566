"""The shared conversion entry point and output document assembly."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from bs4 import BeautifulSoup

from h2d.cascade.resolver import StyleResolver, applicable_rules
from h2d.colors import parse_color
from h2d.config import ConversionConfig
from h2d.converters.animation import animation_metadata
from h2d.converters.tree import TreeBuilder
from h2d.model.design import DesignNode
from h2d.model.resources import FontRecord, ImageResource, Viewport
from h2d.model.style import Stylesheet
from h2d.selectors.matcher import SelectorMatcher
from h2d.stylesheet.parser import parse_stylesheet

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 0
HTML_PARSER = "html.parser"


@dataclass(frozen=True)
class ConversionContext:
    """Everything one conversion needs, whichever way the page was sourced.

    ``images`` and ``fonts`` are the frozen results of the resource phase;
    ``metadata`` is passed through to the output untouched.
    """

    markup: str
    stylesheet_text: str = ""
    viewport: Viewport | None = None
    images: Mapping[str, ImageResource] = field(default_factory=dict)
    fonts: Mapping[str, FontRecord] = field(default_factory=dict)
    config: ConversionConfig = field(default_factory=ConversionConfig)
    metadata: Mapping[str, Any] = field(default_factory=dict)
    theme: str = "light"


def color_styles(stylesheet: Stylesheet) -> dict[str, dict[str, Any]]:
    """Shared color styles, one per selector that declares ``color``."""
    styles: dict[str, dict[str, Any]] = {}
    for rule in stylesheet.style_rules():
        color = rule.declarations.get("color")
        if color:
            styles[rule.selector] = {
                "name": rule.selector,
                "type": "SOLID",
                "color": parse_color(color).to_dict(),
            }
    return styles


def build_document(
    nodes: list[DesignNode],
    stylesheet: Stylesheet,
    config: ConversionConfig,
    metadata: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Wrap converted page nodes in the DOCUMENT/CANVAS envelope."""
    document: dict[str, Any] = {
        "document": {
            "name": config.document_name,
            "type": "DOCUMENT",
            "children": [
                {
                    "name": config.page_name,
                    "type": "CANVAS",
                    "backgroundColor": parse_color(config.background_color).to_dict(),
                    "children": [n.to_dict() for n in nodes],
                }
            ],
        },
        "components": {},
        "componentSets": {},
        "schemaVersion": SCHEMA_VERSION,
        "styles": {"textStyles": {}, "colorStyles": color_styles(stylesheet)},
    }
    if metadata is not None:
        document["metadata"] = dict(metadata)
    return document


def _merged_metadata(context: ConversionContext, stylesheet: Stylesheet) -> dict[str, Any]:
    extracted = animation_metadata(stylesheet)
    merged = dict(context.metadata)
    merged["keyframes"] = extracted["keyframes"]
    merged["animations"] = list(merged.get("animations") or []) + extracted["animations"]
    merged["interactions"] = list(merged.get("interactions") or []) + extracted["interactions"]
    return merged


def convert_nodes(context: ConversionContext, stylesheet: Stylesheet) -> list[DesignNode]:
    """Run the tree-build phase and return the page's top-level nodes."""
    config = context.config
    viewport = context.viewport or config.default_viewport
    rules = applicable_rules(
        stylesheet, viewport, theme=context.theme, root_font_size=config.root_font_size
    )
    builder = TreeBuilder(
        StyleResolver(rules, SelectorMatcher()),
        viewport=viewport,
        images=context.images,
        fonts=context.fonts,
        config=config,
    )
    return builder.build_page(BeautifulSoup(context.markup, HTML_PARSER))


def convert(context: ConversionContext) -> dict[str, Any]:
    """Convert one page into the design document JSON structure.

    Never raises for malformed page content: stylesheet, selector, vector and
    resource failures are contained and logged.
    """
    stylesheet = parse_stylesheet(context.stylesheet_text)
    logger.info(
        "Converting %d bytes of markup with %d stylesheet rules",
        len(context.markup),
        len(stylesheet),
    )
    nodes = convert_nodes(context, stylesheet)
    count = sum(1 for node in nodes for _ in node.walk())
    logger.info("Converted %d top-level nodes (%d total)", len(nodes), count)

    metadata = _merged_metadata(context, stylesheet) if context.config.include_metadata else None
    return build_document(nodes, stylesheet, context.config, metadata)
