from h2d.layout.appearance import appearance_props, background_image_url, fills_for, strokes_for
from h2d.layout.classifier import NON_RENDERING_TAGS, classify, is_rendering
from h2d.layout.mapper import Padding, auto_layout_props, expand_padding, layout_props
from h2d.layout.text import parse_letter_spacing, parse_line_height, text_style
from h2d.layout.units import leading_number, parse_length, parse_size

__all__ = [
    "NON_RENDERING_TAGS",
    "Padding",
    "appearance_props",
    "auto_layout_props",
    "background_image_url",
    "classify",
    "expand_padding",
    "fills_for",
    "is_rendering",
    "layout_props",
    "leading_number",
    "parse_length",
    "parse_letter_spacing",
    "parse_line_height",
    "parse_size",
    "strokes_for",
    "text_style",
]
