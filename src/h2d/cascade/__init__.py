from h2d.cascade.media import media_matches
from h2d.cascade.resolver import (
    EMPTY_STYLE,
    EffectiveStyle,
    StyleResolver,
    applicable_rules,
    cascade_order,
    inline_style,
    resolve,
)

__all__ = [
    "EMPTY_STYLE",
    "EffectiveStyle",
    "StyleResolver",
    "applicable_rules",
    "cascade_order",
    "inline_style",
    "media_matches",
    "resolve",
]
