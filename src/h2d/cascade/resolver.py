"""Style resolution: cascade matched rules and inline declarations onto a node.

Every property of the parent's effective style is carried down to the child
as a flat baseline, not only the properties CSS marks as inherited.  This is
a deliberate approximation: it lets text colour, font settings and similar
values reach text runs without modelling inheritance per property.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from bs4 import Tag

from h2d.cascade.media import media_matches
from h2d.model.resources import Viewport
from h2d.model.style import MediaRule, Rule, StyleRule, Stylesheet
from h2d.selectors.matcher import SelectorMatcher
from h2d.stylesheet.parser import parse_declarations

EffectiveStyle = Mapping[str, str]

EMPTY_STYLE: EffectiveStyle = MappingProxyType({})


def cascade_order(rules: Iterable[StyleRule]) -> list[StyleRule]:
    """Sort rules so that later entries win: specificity, then source position."""
    return sorted(rules, key=lambda r: (r.specificity, r.position))


def applicable_rules(
    stylesheet: Stylesheet,
    viewport: Viewport | None = None,
    *,
    theme: str = "light",
    root_font_size: float = 16.0,
) -> list[StyleRule]:
    """Flatten *stylesheet* to the style rules that apply, in cascade order.

    Rules nested in ``@media`` blocks are included when the condition holds
    for *viewport*; a block nested in another applies only when every
    enclosing condition holds. Without a viewport media blocks are skipped.
    """
    collected: list[StyleRule] = []

    def collect(rules: Iterable[Rule]) -> None:
        for rule in rules:
            if isinstance(rule, StyleRule):
                collected.append(rule)
            elif isinstance(rule, MediaRule):
                if viewport is None:
                    continue
                if media_matches(rule.condition, viewport, theme=theme, root_font_size=root_font_size):
                    collect(rule.rules)

    collect(stylesheet.rules)
    return cascade_order(collected)


def inline_style(tag: Tag) -> dict[str, str]:
    """Parse the ``style`` attribute of *tag* into a property map."""
    raw = tag.get("style")
    if not raw:
        return {}
    if isinstance(raw, list):
        raw = " ".join(raw)
    return parse_declarations(raw)


def resolve(
    tag: Tag,
    rules: Iterable[StyleRule],
    parent_style: Mapping[str, str] | None = None,
    matcher: SelectorMatcher | None = None,
) -> EffectiveStyle:
    """Compute the effective style of *tag*.

    Starts from a copy of *parent_style*, overlays the declarations of every
    matching rule in the order given (use :func:`cascade_order`), then the
    inline ``style`` attribute, which always wins.  Neither *parent_style* nor
    the rules are modified.
    """
    matcher = matcher or SelectorMatcher()
    style: dict[str, str] = dict(parent_style or {})
    for rule in rules:
        if matcher.matches(tag, rule.selector):
            style.update(rule.declarations)
    style.update(inline_style(tag))
    return MappingProxyType(style)


class StyleResolver:
    """Resolves effective styles for one conversion session."""

    def __init__(self, rules: Iterable[StyleRule], matcher: SelectorMatcher | None = None) -> None:
        self.rules = cascade_order(rules)
        self.matcher = matcher or SelectorMatcher()

    def resolve(self, tag: Tag, parent_style: Mapping[str, str] | None = None) -> EffectiveStyle:
        return resolve(tag, self.rules, parent_style, self.matcher)
