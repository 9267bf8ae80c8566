"""Selector specificity weights used to order the cascade."""

from __future__ import annotations

import re

_ID_RE = re.compile(r"#")
# Class, attribute and pseudo-class markers.
_CLASS_RE = re.compile(r"[.:\[]")
# A type name at the start of the selector or right after a combinator.
_TYPE_RE = re.compile(r"(?:^|(?<=[\s>+~]))[a-zA-Z][a-zA-Z0-9-]*")
_BRACKETED_RE = re.compile(r"\[[^\]]*\]|\"[^\"]*\"|'[^']*'")


def specificity(selector: str) -> int:
    """Return ``1000 * ids + 100 * (classes, attributes, pseudos) + types``.

    The weight is only meaningful for comparing selectors against each other
    within one cascade.  Attribute bodies and quoted strings are blanked out
    first so their contents are not counted.
    """
    text = _BRACKETED_RE.sub(lambda m: "[]" if m.group(0).startswith("[") else "", selector)
    ids = len(_ID_RE.findall(text))
    classes = len(_CLASS_RE.findall(text))
    types = len(_TYPE_RE.findall(text))
    return ids * 1000 + classes * 100 + types
