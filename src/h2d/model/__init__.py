from h2d.model.capture import CaptureBundle, CaptureFont, CaptureImage, CaptureMetadata
from h2d.model.design import (
    Color,
    DesignNode,
    ImagePaint,
    LayoutMode,
    LetterSpacing,
    LineHeight,
    NodeType,
    SolidPaint,
    TextStyle,
    VectorPath,
    WindingRule,
)
from h2d.model.diagnostic import Diagnostic, Severity
from h2d.model.resources import FontRecord, ImageResource, ResourceSnapshot, Viewport
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

__all__ = [
    "AtRule",
    "CaptureBundle",
    "CaptureFont",
    "CaptureImage",
    "CaptureMetadata",
    "Color",
    "Declaration",
    "DesignNode",
    "Diagnostic",
    "FontFaceRule",
    "FontRecord",
    "ImagePaint",
    "ImageResource",
    "Keyframe",
    "KeyframesRule",
    "LayoutMode",
    "LetterSpacing",
    "LineHeight",
    "MediaRule",
    "NodeType",
    "ResourceSnapshot",
    "Rule",
    "Severity",
    "SolidPaint",
    "StyleRule",
    "Stylesheet",
    "TextStyle",
    "VectorPath",
    "Viewport",
]
