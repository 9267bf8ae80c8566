"""Selector matching over BeautifulSoup trees.

The primary path compiles selectors with :mod:`soupsieve`, which walks the
tree through bs4's own parent/children/sibling/attribute accessors, so
combinators and pseudo-classes work without a hand-written CSS grammar.  When
soupsieve rejects a selector (or fails while matching) a restricted matcher
takes over: ``#id``, ``.class``, a bare type and one ``[attr]`` /
``[attr=value]`` selector.  Anything else does not match.
"""

from __future__ import annotations

import logging
import re

import soupsieve
from bs4 import Tag

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"[\s,>+~\[.:]")
_TYPE_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*$")
_ATTR_RE = re.compile(r"^\[([^\]]+)\]$")

# Marker cached for selectors soupsieve could not compile.
_UNSUPPORTED = object()


def simple_match(tag: Tag, selector: str) -> bool:
    """Restricted fallback matcher for selectors soupsieve cannot handle."""
    selector = selector.strip()
    if not selector or not isinstance(tag, Tag):
        return False

    if selector.startswith("#"):
        ident = _SPLIT_RE.split(selector[1:], maxsplit=1)[0]
        return bool(ident) and tag.get("id") == ident

    if selector.startswith("."):
        class_name = _SPLIT_RE.split(selector[1:], maxsplit=1)[0]
        return bool(class_name) and class_name in (tag.get("class") or [])

    if _TYPE_RE.match(selector):
        return tag.name == selector.lower()

    match = _ATTR_RE.match(selector)
    if match:
        body = match.group(1)
        if "=" in body:
            name, value = body.split("=", 1)
            name = name.strip()
            value = value.strip().strip("\"'")
            actual = tag.get(name)
            if isinstance(actual, list):
                actual = " ".join(actual)
            return actual == value
        return tag.has_attr(body.strip())

    return False


class SelectorMatcher:
    """Per-conversion selector matcher with a compiled-selector cache."""

    def __init__(self) -> None:
        self._compiled: dict[str, object] = {}

    def _compile(self, selector: str) -> object:
        try:
            return self._compiled[selector]
        except KeyError:
            pass
        try:
            compiled: object = soupsieve.compile(selector)
        except Exception as exc:  # SelectorSyntaxError and friends
            logger.debug("Selector %r unsupported (%s); using fallback matcher", selector, exc)
            compiled = _UNSUPPORTED
        self._compiled[selector] = compiled
        return compiled

    def matches(self, tag: Tag, selector: str) -> bool:
        """Return True if *tag* satisfies *selector*."""
        if not isinstance(tag, Tag):
            return False
        compiled = self._compile(selector)
        if compiled is _UNSUPPORTED:
            return simple_match(tag, selector)
        try:
            return bool(compiled.match(tag))  # type: ignore[attr-defined]
        except Exception as exc:
            logger.debug("Matching %r failed (%s); using fallback matcher", selector, exc)
            return simple_match(tag, selector)

    def find_all(self, selector: str, root: Tag) -> list[Tag]:
        """Return every descendant of *root* matching *selector*, in document order."""
        compiled = self._compile(selector)
        if compiled is not _UNSUPPORTED:
            try:
                return list(compiled.select(root))  # type: ignore[attr-defined]
            except Exception as exc:
                logger.debug("Selecting %r failed (%s); using fallback matcher", selector, exc)
        return [t for t in root.find_all(True) if simple_match(t, selector)]
