"""Text style derivation for TEXT nodes."""

from __future__ import annotations

from typing import Mapping

from h2d.fonts import FontMapper, normalize_style, parse_font_weight, primary_family
from h2d.layout.units import leading_number, parse_length
from h2d.model.design import LetterSpacing, LineHeight, TextStyle
from h2d.model.resources import FontRecord, font_key


def parse_line_height(value: str | None, *, root_font_size: float = 16.0) -> LineHeight:
    """``normal``/absent is AUTO, px (or em/rem) is PIXELS, ``%`` and unitless are PERCENT."""
    if not value:
        return LineHeight()
    text = value.strip().lower()
    number = leading_number(text)
    if text == "normal" or number is None:
        return LineHeight()
    if text.endswith("px") or text.endswith("em"):
        return LineHeight("PIXELS", parse_length(text, root_font_size=root_font_size))
    if text.endswith("%"):
        return LineHeight("PERCENT", number)
    return LineHeight("PERCENT", number * 100)


def parse_letter_spacing(value: str | None, *, root_font_size: float = 16.0) -> LetterSpacing:
    if not value or value.strip().lower() == "normal":
        return LetterSpacing()
    return LetterSpacing("PIXELS", parse_length(value, root_font_size=root_font_size))


def text_style(
    style: Mapping[str, str],
    mapper: FontMapper,
    fonts: Mapping[str, FontRecord] | None = None,
    *,
    root_font_size: float = 16.0,
    default_font_size: float = 16.0,
) -> TextStyle:
    """Build the TEXT node style, preferring a detected font record when one exists."""
    raw_family = style.get("font-family") or mapper.default_family
    weight = parse_font_weight(style.get("font-weight"))
    font_style = normalize_style(style.get("font-style"))

    record = (fonts or {}).get(font_key(primary_family(raw_family), weight, font_style))
    if record is not None:
        mapping = mapper.map_font(record.family, record.weight, record.style)
    else:
        mapping = mapper.map_font(raw_family, weight, font_style)

    size = default_font_size
    raw_size = style.get("font-size")
    if raw_size:
        size = parse_length(raw_size, root_font_size=root_font_size) or default_font_size

    return TextStyle(
        font_family=mapping.family,
        font_size=size,
        font_weight=mapping.weight,
        font_style=mapping.style,
        line_height=parse_line_height(style.get("line-height"), root_font_size=root_font_size),
        letter_spacing=parse_letter_spacing(style.get("letter-spacing"), root_font_size=root_font_size),
    )
