from h2d.stylesheet.parser import (
    normalize_selector,
    parse_declarations,
    parse_stylesheet,
    parse_stylesheet_strict,
    split_selector_list,
)

__all__ = [
    "normalize_selector",
    "parse_declarations",
    "parse_stylesheet",
    "parse_stylesheet_strict",
    "split_selector_list",
]
