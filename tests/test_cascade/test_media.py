"""Tests for @media condition evaluation."""

import pytest

from h2d.cascade import media_matches
from h2d.model.resources import Viewport

DESKTOP = Viewport(1440, 900)
PHONE = Viewport(375, 812)


@pytest.mark.parametrize(
    "condition, viewport, expected",
    [
        ("", DESKTOP, True),
        ("screen", DESKTOP, True),
        ("all", PHONE, True),
        ("print", DESKTOP, False),
        ("not print", DESKTOP, True),
        ("only screen and (min-width: 768px)", DESKTOP, True),
        ("only screen and (min-width: 768px)", PHONE, False),
        ("(max-width: 600px)", PHONE, True),
        ("(max-height: 500px)", PHONE, False),
        ("(min-width: 40em)", DESKTOP, True),
        ("print, (max-width: 400px)", PHONE, True),
        ("(orientation: landscape)", DESKTOP, False),
    ],
)
def test_media_matches(condition, viewport, expected):
    assert media_matches(condition, viewport) is expected


def test_color_scheme_follows_theme():
    assert media_matches("(prefers-color-scheme: dark)", DESKTOP, theme="dark")
    assert not media_matches("(prefers-color-scheme: dark)", DESKTOP, theme="light")


def test_em_uses_root_font_size():
    assert media_matches("(min-width: 40em)", Viewport(700, 500), root_font_size=16.0) is True
    assert media_matches("(min-width: 40em)", Viewport(700, 500), root_font_size=20.0) is False
