"""Tests for animation and interaction metadata extraction."""

import pytest

from h2d.converters.animation import (
    animation_metadata,
    extract_animations,
    extract_interactions,
    parse_duration,
)
from h2d.stylesheet import parse_stylesheet


@pytest.mark.parametrize(
    "value, expected",
    [("1s", 1.0), ("250ms", 0.25), (".5s", 0.5), ("2", 0.0), ("fast", 0.0)],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


class TestAnimations:
    def test_shorthand(self):
        ss = parse_stylesheet(".spin { animation: rotate 2s linear 500ms infinite alternate both }")
        (info,) = extract_animations(ss)
        assert info.selector == ".spin"
        assert info.name == "rotate"
        assert info.duration == 2.0
        assert info.delay == 0.5
        assert info.timing_function == "linear"
        assert info.iteration_count == "infinite"
        assert info.direction == "alternate"
        assert info.fill_mode == "both"
        assert info.keyframes is None

    def test_shorthand_name_after_time(self):
        ss = parse_stylesheet(".a { animation: 300ms ease-in-out fade }")
        (info,) = extract_animations(ss)
        assert info.name == "fade"
        assert info.duration == 0.3

    def test_longhands(self):
        css = """
        .a {
          animation-name: pulse;
          animation-duration: 1.5s;
          animation-delay: 100ms;
          animation-iteration-count: 3;
          animation-timing-function: cubic-bezier(0.1, 0.7, 1, 0.1);
        }
        """
        (info,) = extract_animations(parse_stylesheet(css))
        assert info.name == "pulse"
        assert info.duration == 1.5
        assert info.delay == 0.1
        assert info.iteration_count == "3"
        assert info.timing_function == "cubic-bezier(0.1, 0.7, 1, 0.1)"

    def test_defaults(self):
        (info,) = extract_animations(parse_stylesheet(".a { animation-name: x }"))
        assert (info.duration, info.timing_function, info.delay) == (0.0, "ease", 0.0)
        assert (info.iteration_count, info.direction, info.fill_mode) == ("1", "normal", "none")

    def test_keyframes_attached(self):
        css = "@keyframes fade { from { opacity: 0 } to { opacity: 1 } } .a { animation: fade 1s }"
        (info,) = extract_animations(parse_stylesheet(css))
        assert [k.offset for k in info.keyframes] == [0.0, 1.0]
        assert info.to_dict()["keyframes"][1] == {"offset": 1.0, "properties": {"opacity": "1"}}

    def test_animation_none_ignored(self):
        assert extract_animations(parse_stylesheet(".a { animation: none }")) == []

    def test_rules_without_animation_ignored(self):
        assert extract_animations(parse_stylesheet(".a { color: red }")) == []


class TestInteractions:
    def test_pseudo_class_states(self):
        css = "a:hover { color: red } input:focus { outline: none } .b:active {} a:visited { color: purple } p { color: red }"
        states = extract_interactions(parse_stylesheet(css))
        assert [(s.selector, s.state) for s in states] == [
            ("a:hover", "hover"),
            ("input:focus", "focus"),
            (".b:active", "active"),
            ("a:visited", "visited"),
        ]
        assert states[0].styles == {"color": "red"}


class TestMetadata:
    def test_serialized_form(self):
        css = "@keyframes k { 50% { top: 1px } } .x { animation: k 1s } .x:hover { top: 0 }"
        metadata = animation_metadata(parse_stylesheet(css))
        assert metadata["keyframes"] == {"k": [{"offset": 0.5, "properties": {"top": "1px"}}]}
        assert metadata["animations"][0]["timingFunction"] == "ease"
        assert metadata["interactions"] == [
            {"selector": ".x:hover", "state": "hover", "styles": {"top": "0"}}
        ]
