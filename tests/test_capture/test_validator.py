"""Tests for capture bundle validation."""

import pytest

from h2d.capture import default_capture, load_capture, validate_capture
from h2d.capture.rules import (
    check_fonts,
    check_images,
    check_metadata,
    check_top_level,
    check_version,
    check_viewport,
)
from h2d.errors import CaptureValidationError
from h2d.model.capture import CaptureBundle
from h2d.model.diagnostic import Diagnostic, Severity
from h2d.model.resources import Viewport


def _errors(diagnostics):
    return [d for d in diagnostics if d.is_error]


def _paths(diagnostics):
    return [d.path for d in diagnostics]


# ---------------------------------------------------------------------------
# Whole-bundle validation
# ---------------------------------------------------------------------------


class TestValidateCapture:
    def test_valid_bundle(self, capture):
        assert validate_capture(capture) == []

    def test_not_an_object(self):
        diagnostics = validate_capture([1, 2])
        assert len(diagnostics) == 1
        assert diagnostics[0].rule == "check_top_level"

    def test_extra_rules_run(self, capture):
        def always_warn(data):
            return [Diagnostic(rule="custom", severity=Severity.WARNING, message="hm")]

        diagnostics = validate_capture(capture, extra_rules=[always_warn])
        assert [d.rule for d in diagnostics] == ["custom"]


# ---------------------------------------------------------------------------
# Structural rules
# ---------------------------------------------------------------------------


class TestTopLevel:
    def test_missing_html(self, capture):
        del capture["html"]
        (diag,) = check_top_level(capture)
        assert diag.path == "html"
        assert diag.message == "Missing required field 'html'."

    def test_wrong_type(self, capture):
        capture["css"] = 5
        (diag,) = check_top_level(capture)
        assert diag.message == "Field 'css' must be a string."

    def test_missing_sections_reported_once(self):
        diagnostics = validate_capture({"version": "1.0", "html": "", "css": ""})
        assert _paths(diagnostics) == ["resources", "viewport", "metadata"]


class TestViewport:
    def test_negative_width(self, capture):
        capture["viewport"]["width"] = -1
        (diag,) = check_viewport(capture)
        assert diag.path == "viewport.width"

    def test_bool_is_not_a_number(self, capture):
        capture["viewport"]["height"] = True
        assert _paths(check_viewport(capture)) == ["viewport.height"]

    def test_bad_scale_factor(self, capture):
        capture["viewport"]["deviceScaleFactor"] = "2x"
        assert _paths(check_viewport(capture)) == ["viewport.deviceScaleFactor"]


class TestMetadata:
    def test_missing_url(self, capture):
        del capture["metadata"]["url"]
        assert _paths(check_metadata(capture)) == ["metadata.url"]

    def test_bad_theme(self, capture):
        capture["metadata"]["theme"] = "sepia"
        (diag,) = check_metadata(capture)
        assert diag.path == "metadata.theme"
        assert "'sepia'" in diag.message

    def test_animations_must_be_list(self, capture):
        capture["metadata"]["animations"] = {}
        assert _paths(check_metadata(capture)) == ["metadata.animations"]


class TestResources:
    def test_image_item_fields(self, capture):
        capture["resources"]["images"][0].pop("mimeType")
        capture["resources"]["images"][0]["width"] = "10px"
        assert _paths(check_images(capture)) == [
            "resources.images[0].mimeType",
            "resources.images[0].width",
        ]

    def test_image_item_not_object(self, capture):
        capture["resources"]["images"].append("nope")
        (diag,) = check_images(capture)
        assert diag.path == "resources.images[1]"

    def test_font_fields(self, capture):
        capture["resources"]["fonts"] = [{"family": "Inter", "weight": "bold"}]
        assert _paths(check_fonts(capture)) == [
            "resources.fonts[0].weight",
            "resources.fonts[0].style",
        ]

    def test_missing_images_list(self, capture):
        del capture["resources"]["images"]
        diagnostics = validate_capture(capture)
        assert _paths(diagnostics) == ["resources.images"]


class TestDiagnostic:
    def test_str_and_dict(self, capture):
        del capture["css"]
        (diag,) = validate_capture(capture)
        assert str(diag) == "ERROR [css]: Missing required field 'css'."
        assert diag.to_dict() == {
            "rule": "check_top_level",
            "severity": "ERROR",
            "message": "Missing required field 'css'.",
            "path": "css",
        }

    def test_no_path_omitted(self):
        diag = Diagnostic(rule="r", severity=Severity.WARNING, message="m")
        assert str(diag) == "WARNING: m"
        assert "path" not in diag.to_dict()


# ---------------------------------------------------------------------------
# Advisory rules
# ---------------------------------------------------------------------------


class TestVersion:
    def test_other_version_warns(self, capture):
        capture["version"] = "2.0"
        (diag,) = check_version(capture)
        assert diag.severity is Severity.WARNING
        assert _errors(validate_capture(capture)) == []

    def test_current_version_silent(self, capture):
        assert check_version(capture) == []


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoadCapture:
    def test_returns_bundle(self, capture):
        bundle = load_capture(capture)
        assert isinstance(bundle, CaptureBundle)
        assert bundle.viewport == Viewport(1280, 720)
        assert bundle.device_scale_factor == 2
        assert bundle.metadata.theme == "dark"
        assert bundle.images[0].mime_type == "image/png"
        assert bundle.fonts[0].family == "Inter"

    def test_raises_with_errors(self, capture):
        del capture["metadata"]["timestamp"]
        capture["viewport"]["width"] = "wide"
        with pytest.raises(CaptureValidationError) as exc_info:
            load_capture(capture)
        assert len(exc_info.value.diagnostics) == 2
        assert "2 error(s)" in str(exc_info.value)

    def test_warnings_do_not_raise(self, capture):
        capture["version"] = "0.9"
        assert load_capture(capture).version == "0.9"

    def test_to_dict_matches_input(self, capture):
        assert load_capture(capture).to_dict() == capture


class TestDefaultCapture:
    def test_defaults(self):
        bundle = default_capture("https://example.com", Viewport(800, 600))
        assert bundle.version == "1.0"
        assert bundle.html == ""
        assert bundle.images == []
        assert bundle.metadata.theme == "light"
        assert bundle.metadata.timestamp

    def test_default_capture_is_valid(self):
        data = default_capture("https://example.com", Viewport(800, 600)).to_dict()
        assert validate_capture(data) == []
