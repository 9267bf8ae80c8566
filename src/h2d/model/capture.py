"""Capture bundle model: the persisted ``.h2d`` page snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from h2d.model.resources import Viewport

CAPTURE_VERSION = "1.0"


@dataclass(frozen=True)
class CaptureImage:
    url: str
    data: str  # base64
    mime_type: str
    width: float | None = None
    height: float | None = None
    alt: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CaptureImage:
        return cls(
            url=data["url"],
            data=data["data"],
            mime_type=data["mimeType"],
            width=data.get("width"),
            height=data.get("height"),
            alt=data.get("alt"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"url": self.url, "data": self.data, "mimeType": self.mime_type}
        for key, value in (("width", self.width), ("height", self.height), ("alt", self.alt)):
            if value is not None:
                out[key] = value
        return out


@dataclass(frozen=True)
class CaptureFont:
    family: str
    weight: int
    style: str
    src: str | None = None
    format: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CaptureFont:
        return cls(
            family=data["family"],
            weight=int(data["weight"]),
            style=data["style"],
            src=data.get("src"),
            format=data.get("format"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"family": self.family, "weight": self.weight, "style": self.style}
        if self.src is not None:
            out["src"] = self.src
        if self.format is not None:
            out["format"] = self.format
        return out


@dataclass(frozen=True)
class CaptureMetadata:
    url: str
    timestamp: str
    title: str | None = None
    description: str | None = None
    user_agent: str | None = None
    theme: str | None = None
    interactions: list[dict[str, Any]] = field(default_factory=list)
    animations: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CaptureMetadata:
        return cls(
            url=data["url"],
            timestamp=data["timestamp"],
            title=data.get("title"),
            description=data.get("description"),
            user_agent=data.get("userAgent"),
            theme=data.get("theme"),
            interactions=list(data.get("interactions") or []),
            animations=list(data.get("animations") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"url": self.url, "timestamp": self.timestamp}
        optional = (
            ("title", self.title),
            ("description", self.description),
            ("userAgent", self.user_agent),
            ("theme", self.theme),
        )
        for key, value in optional:
            if value is not None:
                out[key] = value
        if self.interactions:
            out["interactions"] = list(self.interactions)
        if self.animations:
            out["animations"] = list(self.animations)
        return out


@dataclass(frozen=True)
class CaptureBundle:
    """A validated page capture, ready to be turned into a conversion context."""

    version: str
    html: str
    css: str
    viewport: Viewport
    metadata: CaptureMetadata
    images: list[CaptureImage] = field(default_factory=list)
    fonts: list[CaptureFont] = field(default_factory=list)
    stylesheets: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)
    device_scale_factor: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CaptureBundle:
        """Build a bundle from already-validated JSON data."""
        resources = data["resources"]
        viewport = data["viewport"]
        return cls(
            version=data["version"],
            html=data["html"],
            css=data["css"],
            viewport=Viewport(int(viewport["width"]), int(viewport["height"])),
            metadata=CaptureMetadata.from_dict(data["metadata"]),
            images=[CaptureImage.from_dict(i) for i in resources["images"]],
            fonts=[CaptureFont.from_dict(f) for f in resources["fonts"]],
            stylesheets=list(resources.get("stylesheets") or []),
            scripts=list(resources.get("scripts") or []),
            device_scale_factor=viewport.get("deviceScaleFactor"),
        )

    def to_dict(self) -> dict[str, Any]:
        viewport: dict[str, Any] = {"width": self.viewport.width, "height": self.viewport.height}
        if self.device_scale_factor is not None:
            viewport["deviceScaleFactor"] = self.device_scale_factor
        return {
            "version": self.version,
            "html": self.html,
            "css": self.css,
            "resources": {
                "images": [i.to_dict() for i in self.images],
                "fonts": [f.to_dict() for f in self.fonts],
                "stylesheets": list(self.stylesheets),
                "scripts": list(self.scripts),
            },
            "viewport": viewport,
            "metadata": self.metadata.to_dict(),
        }


def default_capture(url: str, viewport: Viewport) -> CaptureBundle:
    """Create an empty capture for *url*, stamped with the current UTC time."""
    return CaptureBundle(
        version=CAPTURE_VERSION,
        html="",
        css="",
        viewport=viewport,
        metadata=CaptureMetadata(
            url=url,
            timestamp=datetime.now(timezone.utc).isoformat(),
            theme="light",
        ),
    )
