"""Stylesheet model: the closed set of rule variants produced by the parser.

``Rule`` is a tagged union over :class:`StyleRule`, :class:`MediaRule`,
:class:`KeyframesRule`, :class:`FontFaceRule` and :class:`AtRule`.  Consumers
dispatch on the concrete type; anything that is not one of the first four is
an :class:`AtRule` carrying its raw prelude and body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair as written in the source."""

    property: str
    value: str
    important: bool = False


@dataclass(frozen=True)
class StyleRule:
    """A selector paired with its declarations.

    ``declarations`` keeps the first-seen order of properties while the value
    of a duplicated property is the last one written.  ``position`` is the
    source index used as the cascade tie-break.
    """

    selector: str
    specificity: int
    declarations: dict[str, str] = field(default_factory=dict)
    position: int = 0


@dataclass(frozen=True)
class MediaRule:
    """``@media <condition> { ... }`` with its nested rules."""

    condition: str
    rules: tuple[Rule, ...] = ()


@dataclass(frozen=True)
class Keyframe:
    """One step of a ``@keyframes`` block; ``offset`` is in ``[0, 1]``."""

    offset: float
    properties: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class KeyframesRule:
    """``@keyframes <name> { ... }``."""

    name: str
    keyframes: tuple[Keyframe, ...] = ()


@dataclass(frozen=True)
class FontFaceRule:
    """``@font-face { ... }``."""

    declarations: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AtRule:
    """Any other at-rule, kept verbatim."""

    name: str
    prelude: str = ""
    body: str | None = None


Rule = Union[StyleRule, MediaRule, KeyframesRule, FontFaceRule, AtRule]


@dataclass(frozen=True)
class Stylesheet:
    """A parsed stylesheet: top-level rules in source order."""

    rules: tuple[Rule, ...] = ()

    def style_rules(self) -> list[StyleRule]:
        """Return the top-level style rules, in source order."""
        return [r for r in self.rules if isinstance(r, StyleRule)]

    def keyframes(self) -> dict[str, KeyframesRule]:
        """Return ``@keyframes`` blocks by name (later definitions win)."""
        found: dict[str, KeyframesRule] = {}
        for rule in self.rules:
            if isinstance(rule, KeyframesRule):
                found[rule.name] = rule
            elif isinstance(rule, MediaRule):
                for inner in rule.rules:
                    if isinstance(inner, KeyframesRule):
                        found[inner.name] = inner
        return found

    def __len__(self) -> int:
        return len(self.rules)
