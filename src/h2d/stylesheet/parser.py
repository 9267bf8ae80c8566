"""Lark-based stylesheet parser producing the :mod:`h2d.model.style` rule variants."""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from h2d.errors import StylesheetParseError
from h2d.model.style import (
    AtRule,
    Declaration,
    FontFaceRule,
    Keyframe,
    KeyframesRule,
    MediaRule,
    Rule,
    StyleRule,
    Stylesheet,
)
from h2d.selectors.specificity import specificity

__all__ = [
    "normalize_selector",
    "parse_declarations",
    "parse_stylesheet",
    "parse_stylesheet_strict",
    "split_selector_list",
]

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_CDO_CDC_RE = re.compile(r"<!--|-->")
_PERCENT_RE = re.compile(r"^([+-]?\d*\.?\d+)%$")


@functools.lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start=["stylesheet", "rule_block", "declaration_block", "declaration_list"],
    )


# ---------------------------------------------------------------------------
# Selector text helpers
# ---------------------------------------------------------------------------


def split_selector_list(text: str) -> list[str]:
    """Split a selector list on top-level commas (not inside ``()``, ``[]`` or quotes)."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote = ""
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = ""
            continue
        if ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]" and depth:
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def normalize_selector(text: str) -> str:
    """Collapse whitespace and put single spaces around top-level combinators."""
    parts: list[str] = []
    depth = 0
    quote = ""
    space = False
    for ch in text.strip():
        if quote:
            parts.append(ch)
            if ch == quote:
                quote = ""
            continue
        if depth == 0 and ch.isspace():
            space = True
            continue
        if depth == 0 and ch in ">+~":
            parts.append(f" {ch} ")
            space = False
            continue
        if space:
            if parts and not parts[-1].endswith(" "):
                parts.append(" ")
            space = False
        if ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]" and depth:
            depth -= 1
        parts.append(ch)
    return "".join(parts).strip()


# ---------------------------------------------------------------------------
# Parse tree -> intermediate objects
# ---------------------------------------------------------------------------


class _Qualified:
    def __init__(self, prelude: str, declarations: list[Declaration]):
        self.prelude = prelude
        self.declarations = declarations


class _At:
    def __init__(self, name: str, prelude: str, block: str | None):
        self.name = name
        self.prelude = prelude
        self.block = block


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into intermediate rule objects."""

    def declaration(self, items: list[Token]) -> Declaration:
        prop = ""
        value = ""
        important = False
        for tok in items:
            if tok.type == "PROPERTY":
                prop = str(tok).strip()
            elif tok.type == "VALUE":
                value = str(tok).strip()
            elif tok.type == "IMPORTANT":
                important = True
        if not prop.startswith("--"):
            prop = prop.lower()
        return Declaration(property=prop, value=value, important=important)

    def qualified_rule(self, items: list[object]) -> _Qualified:
        prelude = str(items[0]).strip()
        declarations = [d for d in items[1:] if isinstance(d, Declaration)]
        return _Qualified(prelude, declarations)

    def at_rule(self, items: list[Token]) -> _At:
        name = ""
        prelude = ""
        block: str | None = None
        for tok in items:
            if tok.type == "AT_KEYWORD":
                name = str(tok)[1:].lower()
            elif tok.type == "AT_PRELUDE":
                prelude = str(tok).strip()
            elif tok.type == "AT_BLOCK":
                block = str(tok)
        return _At(name, prelude, block)

    def stylesheet(self, items: list[object]) -> list[object]:
        return [i for i in items if isinstance(i, (_Qualified, _At))]

    rule_block = stylesheet

    def declaration_block(self, items: list[object]) -> list[Declaration]:
        return [i for i in items if isinstance(i, Declaration)]

    declaration_list = declaration_block


def _parse_tree(source: str, start: str) -> list:
    try:
        tree = _parser().parse(source, start=start)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise StylesheetParseError(str(e), line=line, column=column, cause=e) from e
    return CssTransformer().transform(tree)


# ---------------------------------------------------------------------------
# Intermediate objects -> rule variants
# ---------------------------------------------------------------------------


def _declaration_map(declarations: list[Declaration]) -> dict[str, str]:
    """Fold declarations into a map; a repeated property keeps its last value."""
    result: dict[str, str] = {}
    for decl in declarations:
        if decl.property and decl.value:
            result[decl.property] = decl.value
    return result


def _keyframe_offset(text: str) -> float:
    text = text.strip().lower()
    if text == "from":
        return 0.0
    if text == "to":
        return 1.0
    match = _PERCENT_RE.match(text)
    if match:
        return float(match.group(1)) / 100
    return 0.0


class _Builder:
    """Assigns source positions while turning intermediate objects into rules."""

    def __init__(self) -> None:
        self.position = 0

    def build(self, items: list[object]) -> tuple[Rule, ...]:
        rules: list[Rule] = []
        for item in items:
            if isinstance(item, _Qualified):
                rules.extend(self._style_rules(item))
            elif isinstance(item, _At):
                rules.append(self._at_rule(item))
        return tuple(rules)

    def _style_rules(self, item: _Qualified) -> list[StyleRule]:
        declarations = _declaration_map(item.declarations)
        rules: list[StyleRule] = []
        for raw in split_selector_list(item.prelude):
            selector = normalize_selector(raw)
            rules.append(
                StyleRule(
                    selector=selector,
                    specificity=specificity(selector),
                    declarations=dict(declarations),
                    position=self.position,
                )
            )
            self.position += 1
        return rules

    def _at_rule(self, item: _At) -> Rule:
        if item.block is not None:
            if item.name == "media":
                inner = self.build(_parse_tree(item.block, "rule_block"))
                return MediaRule(condition=item.prelude, rules=inner)
            if item.name.endswith("keyframes"):
                return self._keyframes(item)
            if item.name == "font-face":
                decls = _parse_tree(item.block, "declaration_block")
                return FontFaceRule(declarations=_declaration_map(decls))
        return AtRule(name=item.name, prelude=item.prelude, body=item.block)

    def _keyframes(self, item: _At) -> KeyframesRule:
        frames: list[Keyframe] = []
        for entry in _parse_tree(item.block or "{}", "rule_block"):
            if not isinstance(entry, _Qualified):
                continue
            properties = _declaration_map(entry.declarations)
            for step in split_selector_list(entry.prelude):
                frames.append(Keyframe(offset=_keyframe_offset(step), properties=dict(properties)))
        return KeyframesRule(name=item.prelude.strip("\"'"), keyframes=tuple(frames))


def _clean(source: str) -> str:
    return _CDO_CDC_RE.sub(" ", _COMMENT_RE.sub(" ", source))


def parse_stylesheet_strict(source: str) -> Stylesheet:
    """Parse *source*; raises :class:`StylesheetParseError` on malformed input."""
    items = _parse_tree(_clean(source), "stylesheet")
    return Stylesheet(rules=_Builder().build(items))


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse *source* into a :class:`Stylesheet`, never raising.

    Malformed stylesheets yield an empty stylesheet so conversion can proceed
    without matched styling.
    """
    if not source or not source.strip():
        return Stylesheet()
    try:
        return parse_stylesheet_strict(source)
    except StylesheetParseError as exc:
        logger.warning(
            "Stylesheet parse failed at line %s column %s: %s", exc.line, exc.column, exc
        )
        return Stylesheet()


def parse_declarations(text: str) -> dict[str, str]:
    """Parse a bare declaration list such as an inline ``style`` attribute.

    Falls back to splitting on ``;`` and the first ``:`` when the text is not
    a well-formed declaration list.
    """
    try:
        return _declaration_map(_parse_tree(_clean(text), "declaration_list"))
    except StylesheetParseError:
        pass
    result: dict[str, str] = {}
    for chunk in text.split(";"):
        prop, sep, value = chunk.partition(":")
        prop = prop.strip()
        value = value.strip()
        if sep and prop and value:
            result[prop if prop.startswith("--") else prop.lower()] = value
    return result
