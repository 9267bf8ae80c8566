"""Build a ConversionContext from either page source."""

from __future__ import annotations

from typing import Mapping

from bs4 import BeautifulSoup

from h2d.config import ConversionConfig
from h2d.converters.document import HTML_PARSER, ConversionContext
from h2d.model.capture import CaptureBundle
from h2d.model.resources import FontRecord, ImageResource, Viewport


def embedded_styles(html: str) -> list[str]:
    """Return the text of every ``<style>`` element in *html*, in document order."""
    soup = BeautifulSoup(html, HTML_PARSER)
    return [style.get_text() for style in soup.find_all("style")]


def context_from_code(
    html: str,
    css: str = "",
    viewport: Viewport | None = None,
    *,
    images: Mapping[str, ImageResource] | None = None,
    fonts: Mapping[str, FontRecord] | None = None,
    config: ConversionConfig | None = None,
) -> ConversionContext:
    """Context for hand-written HTML plus an optional separate stylesheet.

    Styles embedded in the markup follow *css* so they take part in the
    cascade at later source positions.
    """
    config = config or ConversionConfig()
    parts = [css, *embedded_styles(html)]
    return ConversionContext(
        markup=html,
        stylesheet_text="\n".join(p for p in parts if p.strip()),
        viewport=viewport or config.default_viewport,
        images=dict(images or {}),
        fonts=dict(fonts or {}),
        config=config,
    )


def context_from_capture(
    bundle: CaptureBundle, *, config: ConversionConfig | None = None
) -> ConversionContext:
    """Context for a validated page capture."""
    images = {
        image.url: ImageResource(
            url=image.url,
            data=image.data,
            mime_type=image.mime_type,
            width=image.width,
            height=image.height,
        )
        for image in bundle.images
    }
    fonts = {}
    for font in bundle.fonts:
        record = FontRecord(font.family, font.weight, font.style, font.src, font.format)
        fonts[record.key] = record
    return ConversionContext(
        markup=bundle.html,
        stylesheet_text=bundle.css,
        viewport=bundle.viewport,
        images=images,
        fonts=fonts,
        config=config or ConversionConfig(),
        metadata=bundle.metadata.to_dict(),
        theme=bundle.metadata.theme or "light",
    )
