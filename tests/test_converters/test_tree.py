"""Tests for the DOM-to-design-tree builder."""

from h2d.config import ConversionConfig
from h2d.converters.document import ConversionContext, convert_nodes
from h2d.model.design import (
    PLACEHOLDER_GREY,
    Color,
    ImagePaint,
    LayoutMode,
    NodeType,
    SolidPaint,
)
from h2d.model.resources import ImageResource, Viewport
from h2d.stylesheet import parse_stylesheet

RED = Color(1.0, 0.0, 0.0, 1.0)
NON_RENDERING = {"script", "style", "meta", "link", "title", "head"}


def _page(html: str, css: str = "", **kwargs):
    context = ConversionContext(markup=html, stylesheet_text=css, **kwargs)
    return convert_nodes(context, parse_stylesheet(css))


def _all_nodes(nodes):
    for node in nodes:
        yield from node.walk()


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class TestStructure:
    def test_div_with_paragraph(self):
        nodes = _page("<div><p>Hello</p></div>")
        assert len(nodes) == 1
        div = nodes[0]
        assert div.name == "div"
        assert div.type is NodeType.FRAME
        assert len(div.children) == 1
        p = div.children[0]
        assert p.type is NodeType.TEXT
        assert p.characters == "Hello"
        assert p.children == []

    def test_full_document_uses_body_children(self):
        html = "<html><head><title>T</title></head><body><section></section><footer></footer></body></html>"
        nodes = _page(html)
        assert [n.name for n in nodes] == ["section", "footer"]

    def test_non_rendering_tags_never_emitted(self):
        html = """
        <html><head><meta charset="utf-8"><link rel="stylesheet" href="a.css">
        <style>p { color: red }</style><title>Doc</title></head>
        <body>
          <script>alert(1)</script>
          <div><style>.x {}</style><p>Visible<script>var hidden = 1;</script></p>
            <div><meta name="x"><link rel="icon" href="x.ico"><title>nested</title></div>
          </div>
        </body></html>
        """
        nodes = _page(html)
        names = {n.name for n in _all_nodes(nodes)}
        assert not names & NON_RENDERING
        texts = " ".join(n.characters or "" for n in _all_nodes(nodes))
        assert "hidden" not in texts
        assert "alert" not in texts
        assert "nested" not in texts

    def test_fragment_with_several_roots(self):
        nodes = _page("<header></header><main></main>")
        assert [n.name for n in nodes] == ["header", "main"]


# ---------------------------------------------------------------------------
# Text runs
# ---------------------------------------------------------------------------


class TestTextRuns:
    def test_mixed_content_in_frame(self):
        div = _page("<div>Hello <b>big</b> world</div>")[0]
        assert [c.type for c in div.children] == [NodeType.TEXT] * 3
        assert [c.characters for c in div.children] == ["Hello", "big", "world"]
        assert div.children[1].name == "b"

    def test_no_space_invented_between_inline_tags(self):
        p = _page("<p>Hello<b>world</b>!</p>")[0]
        assert p.type is NodeType.TEXT
        assert p.characters == "Helloworld!"

    def test_space_kept_at_inline_boundary(self):
        p = _page("<p>Hello <em>big </em>world</p>")[0]
        assert p.characters == "Hello big world"

    def test_merged_text_trimmed_once(self):
        p = _page("<p>\n  <span> a </span>\n</p>")[0]
        assert p.characters == "a"

    def test_line_break_is_whitespace(self):
        p = _page("<p>one<br>two</p>")[0]
        assert p.type is NodeType.TEXT
        assert p.characters == "one two"
        div = _page("<div>one<br/>two</div>")[0]
        assert [c.characters for c in div.children] == ["one two"]

    def test_nbsp_preserved(self):
        p = _page("<p>a&nbsp;&nbsp;b</p>")[0]
        assert p.characters == "a\xa0\xa0b"

    def test_runs_merge_across_filtered_tags(self):
        div = _page("<div>one <script>x()</script> two</div>")[0]
        assert len(div.children) == 1
        assert div.children[0].characters == "one two"

    def test_text_node_merges_children(self):
        p = _page("<p>Hello <span>big</span> world</p>")[0]
        assert p.type is NodeType.TEXT
        assert p.characters == "Hello big world"
        assert p.children == []

    def test_whitespace_only_runs_dropped(self):
        div = _page("<div>\n   <span>a</span>\n  </div>")[0]
        assert len(div.children) == 1
        assert div.children[0].name == "span"

    def test_comments_ignored(self):
        div = _page("<div><!-- note -->text</div>")[0]
        assert [c.characters for c in div.children] == ["text"]

    def test_whitespace_collapsed(self):
        div = _page("<div>  lots\n\n of   space </div>")[0]
        assert div.children[0].characters == "lots of space"

    def test_inherited_color_reaches_run(self):
        div = _page('<div style="color: red">hi</div>')[0]
        assert div.children[0].fills == [SolidPaint(RED)]

    def test_text_style(self):
        p = _page("<p>x</p>", "p { font-size: 20px; font-weight: bold; font-family: Georgia }")[0]
        assert p.style.font_size == 20
        assert p.style.font_weight == 700
        assert p.style.font_family == "Georgia"


# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------


class TestStyling:
    def test_rules_map_onto_frame(self):
        css = ".box { width: 200px; background-color: #ff0000; display: flex; gap: 10px; padding: 4px 8px }"
        div = _page('<div class="box"></div>', css)[0]
        assert div.width == 200
        assert div.fills == [SolidPaint(RED)]
        assert div.layout_mode is LayoutMode.HORIZONTAL
        assert div.item_spacing == 10
        assert (div.padding_top, div.padding_right) == (4, 8)

    def test_percent_width_uses_viewport(self):
        div = _page('<div style="width: 50%"></div>', viewport=Viewport(800, 600))[0]
        assert div.width == 400

    def test_body_style_is_inherited(self):
        nodes = _page('<html><body style="color: red"><p>x</p></body></html>')
        assert nodes[0].fills == [SolidPaint(RED)]

    def test_flex_span_is_frame(self):
        span = _page('<span style="display: flex"><i>a</i></span>')[0]
        assert span.type is NodeType.FRAME
        assert span.children

    def test_em_uses_configured_root_size(self):
        config = ConversionConfig(root_font_size=10)
        div = _page('<div style="width: 3em"></div>', config=config)[0]
        assert div.width == 30


# ---------------------------------------------------------------------------
# Images and vectors
# ---------------------------------------------------------------------------


class TestImages:
    def test_image_with_resource(self):
        images = {"a.png": ImageResource("a.png", b"abc", "image/png", 64, 32)}
        img = _page('<img src="a.png" alt="Logo">', images=images)[0]
        assert img.type is NodeType.RECTANGLE
        assert img.name == "Logo"
        assert (img.width, img.height) == (64, 32)
        assert img.opacity == 1.0
        assert isinstance(img.fills[0], ImagePaint)
        assert img.fills[0].image_hash == "data:image/png;base64,YWJj"

    def test_image_size_from_attributes(self):
        images = {"a.png": ImageResource("a.png", "YWJj")}
        img = _page('<img src="a.png" width="40" height="20">', images=images)[0]
        assert (img.width, img.height) == (40, 20)
        assert img.name == "Image"

    def test_image_opacity(self):
        images = {"a.png": ImageResource("a.png", "YWJj")}
        img = _page('<img src="a.png" style="opacity: 0.3">', images=images)[0]
        assert img.opacity == 0.3

    def test_image_without_resource_is_frame(self):
        img = _page('<img src="missing.png">')[0]
        assert img.type is NodeType.FRAME
        assert img.name == "img"

    def test_negative_natural_size_falls_back_to_attributes(self):
        images = {"a.png": ImageResource("a.png", "YWJj", width=-64, height=-1)}
        img = _page('<img src="a.png" width="40" height="20">', images=images)[0]
        assert (img.width, img.height) == (40, 20)

    def test_link_wrapping_image_keeps_it(self):
        images = {"a.png": ImageResource("a.png", "YWJj", width=16, height=16)}
        link = _page('<a href="/">Home <img src="a.png" alt="icon"></a>', images=images)[0]
        assert link.type is NodeType.FRAME
        assert link.characters is None
        text, icon = link.children
        assert text.characters == "Home"
        assert icon.type is NodeType.RECTANGLE
        assert icon.name == "icon"


class TestVectors:
    def test_svg_named_by_id(self):
        node = _page('<svg id="logo"><path d="M0 0 L1 1"/></svg>')[0]
        assert node.type is NodeType.VECTOR
        assert node.name == "logo"

    def test_svg_named_by_class(self):
        node = _page('<svg class="icon small"></svg>')[0]
        assert node.name == "icon small"

    def test_svg_default_name(self):
        assert _page("<svg></svg>")[0].name == "SVG"

    def test_negative_svg_size_never_serialized(self):
        node = _page('<svg width="-20" height="10"></svg>')[0]
        assert node.width is None
        assert "width" not in node.to_dict()

    def test_span_with_icon_is_frame(self):
        span = _page('<span><svg id="star"></svg> Rated</span>')[0]
        assert span.type is NodeType.FRAME
        assert [c.type for c in span.children] == [NodeType.VECTOR, NodeType.TEXT]
        assert span.children[1].characters == "Rated"

    def test_broken_svg_does_not_stop_conversion(self):
        nodes = _page('<div><svg><path d="???"/></svg><p>after</p></div>')
        svg, p = nodes[0].children
        assert svg.type is NodeType.VECTOR
        assert (svg.width, svg.height) == (100, 100)
        assert svg.fills == [SolidPaint(PLACEHOLDER_GREY)]
        assert p.characters == "after"
