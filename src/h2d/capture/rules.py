"""Validation rules for capture bundles.

Each rule is a function taking the decoded JSON value and returning a list of
Diagnostic objects.  A rule stays silent about a section whose container is
missing or mistyped; the structural rule has already reported it.
"""

from __future__ import annotations

from typing import Any

from h2d.model.capture import CAPTURE_VERSION
from h2d.model.diagnostic import Diagnostic, Severity

THEMES = frozenset({"light", "dark"})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _error(rule: str, path: str, message: str) -> Diagnostic:
    return Diagnostic(rule=rule, severity=Severity.ERROR, message=message, path=path)


def _require(
    rule: str, container: dict[str, Any], key: str, path: str, kind: str
) -> list[Diagnostic]:
    """Check that *key* is present in *container* with the named JSON type."""
    checks = {
        "string": lambda v: isinstance(v, str),
        "number": _is_number,
        "object": lambda v: isinstance(v, dict),
        "list": lambda v: isinstance(v, list),
    }
    location = f"{path}.{key}" if path else key
    if key not in container:
        return [_error(rule, location, f"Missing required field '{location}'.")]
    if not checks[kind](container[key]):
        return [_error(rule, location, f"Field '{location}' must be a {kind}.")]
    return []


def _optional(
    rule: str, container: dict[str, Any], key: str, path: str, kind: str
) -> list[Diagnostic]:
    if container.get(key) is None:
        return []
    return _require(rule, container, key, path, kind)


def _section(data: Any, key: str) -> dict[str, Any] | None:
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        return data[key]
    return None


# ---------------------------------------------------------------------------
# Structural rules (ERROR severity)
# ---------------------------------------------------------------------------


def check_top_level(data: Any) -> list[Diagnostic]:
    """The bundle is an object with its string fields and section objects."""
    if not isinstance(data, dict):
        return [_error("check_top_level", "", "Capture bundle must be a JSON object.")]
    diagnostics: list[Diagnostic] = []
    for key in ("version", "html", "css"):
        diagnostics.extend(_require("check_top_level", data, key, "", "string"))
    for key in ("resources", "viewport", "metadata"):
        diagnostics.extend(_require("check_top_level", data, key, "", "object"))
    return diagnostics


def check_viewport(data: Any) -> list[Diagnostic]:
    viewport = _section(data, "viewport")
    if viewport is None:
        return []
    diagnostics: list[Diagnostic] = []
    for key in ("width", "height"):
        found = _require("check_viewport", viewport, key, "viewport", "number")
        if not found and viewport[key] < 0:
            found = [_error("check_viewport", f"viewport.{key}", f"viewport.{key} must be non-negative.")]
        diagnostics.extend(found)
    diagnostics.extend(_optional("check_viewport", viewport, "deviceScaleFactor", "viewport", "number"))
    return diagnostics


def check_metadata(data: Any) -> list[Diagnostic]:
    metadata = _section(data, "metadata")
    if metadata is None:
        return []
    rule = "check_metadata"
    diagnostics: list[Diagnostic] = []
    for key in ("url", "timestamp"):
        diagnostics.extend(_require(rule, metadata, key, "metadata", "string"))
    for key in ("title", "description", "userAgent"):
        diagnostics.extend(_optional(rule, metadata, key, "metadata", "string"))
    for key in ("interactions", "animations"):
        diagnostics.extend(_optional(rule, metadata, key, "metadata", "list"))
    theme = metadata.get("theme")
    if theme is not None and theme not in THEMES:
        diagnostics.append(
            _error(rule, "metadata.theme", f"metadata.theme must be 'light' or 'dark', got {theme!r}.")
        )
    return diagnostics


def check_resources(data: Any) -> list[Diagnostic]:
    resources = _section(data, "resources")
    if resources is None:
        return []
    diagnostics: list[Diagnostic] = []
    for key in ("images", "fonts"):
        diagnostics.extend(_require("check_resources", resources, key, "resources", "list"))
    for key in ("stylesheets", "scripts"):
        diagnostics.extend(_optional("check_resources", resources, key, "resources", "list"))
    return diagnostics


def check_images(data: Any) -> list[Diagnostic]:
    resources = _section(data, "resources")
    if resources is None or not isinstance(resources.get("images"), list):
        return []
    rule = "check_images"
    diagnostics: list[Diagnostic] = []
    for index, image in enumerate(resources["images"]):
        path = f"resources.images[{index}]"
        if not isinstance(image, dict):
            diagnostics.append(_error(rule, path, f"{path} must be an object."))
            continue
        for key in ("url", "data", "mimeType"):
            diagnostics.extend(_require(rule, image, key, path, "string"))
        for key in ("width", "height"):
            diagnostics.extend(_optional(rule, image, key, path, "number"))
        diagnostics.extend(_optional(rule, image, "alt", path, "string"))
    return diagnostics


def check_fonts(data: Any) -> list[Diagnostic]:
    resources = _section(data, "resources")
    if resources is None or not isinstance(resources.get("fonts"), list):
        return []
    rule = "check_fonts"
    diagnostics: list[Diagnostic] = []
    for index, font in enumerate(resources["fonts"]):
        path = f"resources.fonts[{index}]"
        if not isinstance(font, dict):
            diagnostics.append(_error(rule, path, f"{path} must be an object."))
            continue
        diagnostics.extend(_require(rule, font, "family", path, "string"))
        diagnostics.extend(_require(rule, font, "weight", path, "number"))
        diagnostics.extend(_require(rule, font, "style", path, "string"))
    return diagnostics


# ---------------------------------------------------------------------------
# Advisory rules (WARNING severity)
# ---------------------------------------------------------------------------


def check_version(data: Any) -> list[Diagnostic]:
    """Bundles from a newer capture format may carry fields this reader ignores."""
    if not isinstance(data, dict) or not isinstance(data.get("version"), str):
        return []
    if data["version"] != CAPTURE_VERSION:
        return [
            Diagnostic(
                rule="check_version",
                severity=Severity.WARNING,
                message=f"Capture version {data['version']!r} differs from {CAPTURE_VERSION!r}.",
                path="version",
            )
        ]
    return []


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

ALL_RULES = [
    check_top_level,
    check_viewport,
    check_metadata,
    check_resources,
    check_images,
    check_fonts,
    check_version,
]
