"""Tests for building conversion contexts from code and captures."""

from h2d.capture import context_from_capture, context_from_code, embedded_styles, load_capture
from h2d.config import ConversionConfig
from h2d.converters import convert
from h2d.model.resources import ImageResource, Viewport


class TestFromCode:
    def test_embedded_styles(self):
        html = "<style>p { color: red }</style><div><style>.a {}</style></div>"
        assert embedded_styles(html) == ["p { color: red }", ".a {}"]

    def test_embedded_styles_follow_css(self):
        context = context_from_code("<style>p { color: blue }</style><p>x</p>", "p { color: red }")
        assert context.stylesheet_text == "p { color: red }\np { color: blue }"

    def test_blank_parts_skipped(self):
        context = context_from_code("<p>x</p>")
        assert context.stylesheet_text == ""

    def test_default_viewport(self):
        config = ConversionConfig(default_viewport=Viewport(320, 480))
        assert context_from_code("<p></p>", config=config).viewport == Viewport(320, 480)

    def test_explicit_viewport_and_images(self):
        images = {"a.png": ImageResource("a.png", "YWJj")}
        context = context_from_code("<p></p>", viewport=Viewport(10, 10), images=images)
        assert context.viewport == Viewport(10, 10)
        assert context.images["a.png"].url == "a.png"

    def test_embedded_style_wins(self):
        context = context_from_code("<style>p { color: #00f }</style><p>x</p>", "p { color: red }")
        text = convert(context)["document"]["children"][0]["children"][0]
        assert text["fills"][0]["color"] == {"r": 0.0, "g": 0.0, "b": 1.0, "a": 1.0}


class TestFromCapture:
    def test_mapping(self, capture):
        context = context_from_capture(load_capture(capture))
        assert context.markup == capture["html"]
        assert context.stylesheet_text == "p { color: red }"
        assert context.viewport == Viewport(1280, 720)
        assert context.theme == "dark"
        assert context.metadata["title"] == "Example"

    def test_images_keyed_by_url(self, capture):
        context = context_from_capture(load_capture(capture))
        image = context.images["https://example.com/a.png"]
        assert (image.mime_type, image.width, image.height) == ("image/png", 10, 20)

    def test_fonts_keyed(self, capture):
        context = context_from_capture(load_capture(capture))
        assert list(context.fonts) == ["Inter-400-normal"]

    def test_theme_defaults_to_light(self, capture):
        del capture["metadata"]["theme"]
        assert context_from_capture(load_capture(capture)).theme == "light"

    def test_end_to_end(self, capture):
        result = convert(context_from_capture(load_capture(capture)))
        (div,) = result["document"]["children"][0]["children"]
        text, image = div["children"]
        assert text["characters"] == "Hello"
        assert image["type"] == "RECTANGLE"
        assert image["fills"][0]["type"] == "IMAGE"
        assert result["metadata"]["url"] == "https://example.com"
