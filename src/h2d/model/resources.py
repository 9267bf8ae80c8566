"""Resource model: viewport, pre-fetched images and fonts."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class Viewport:
    """Viewport size in device-independent pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Viewport dimensions must be non-negative")


@dataclass(frozen=True)
class ImageResource:
    """An image resolved before the tree walk.

    ``data`` is either raw bytes or a base64 string (with or without a
    ``data:`` prefix).  ``width``/``height`` are natural dimensions when known.
    """

    url: str
    data: bytes | str
    mime_type: str = "image/png"
    width: float | None = None
    height: float | None = None

    def to_data_uri(self) -> str:
        if isinstance(self.data, bytes):
            encoded = base64.b64encode(self.data).decode("ascii")
            return f"data:{self.mime_type};base64,{encoded}"
        if self.data.startswith("data:"):
            return self.data
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class FontRecord:
    """A font face detected on the source page."""

    family: str
    weight: int = 400
    style: str = "normal"
    src: str | None = None
    format: str | None = None

    @property
    def key(self) -> str:
        return font_key(self.family, self.weight, self.style)


def font_key(family: str, weight: int, style: str) -> str:
    """Build the ``family-weight-style`` lookup key for the font map."""
    return f"{family}-{weight}-{style}"


@dataclass(frozen=True)
class ResourceSnapshot:
    """Frozen result of the pre-fetch phase.

    ``failed`` lists every URL whose fetch or decode failed; those nodes fall
    back to defaults during the tree walk.
    """

    images: Mapping[str, ImageResource] = field(default_factory=dict)
    failed: frozenset[str] = frozenset()

    def __contains__(self, url: object) -> bool:
        return url in self.images
