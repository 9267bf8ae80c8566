"""Tests for font family and weight mapping."""

import pytest

from h2d.fonts import (
    FontMapper,
    family_fallbacks,
    normalize_style,
    normalize_weight,
    parse_font_weight,
    primary_family,
)


class TestWeights:
    @pytest.mark.parametrize(
        "weight, expected",
        [(650, 700), (50, 100), (1000, 900), (400, 400), (449, 400), (450, 500), (100, 100)],
    )
    def test_normalize(self, weight, expected):
        assert normalize_weight(weight) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("bold", 700), ("normal", 400), ("lighter", 300), ("600", 600), ("nonsense", 400), (None, 400)],
    )
    def test_parse(self, value, expected):
        assert parse_font_weight(value) == expected


class TestFamilies:
    def test_primary_family(self):
        assert primary_family('"Open Sans", Arial, sans-serif') == "Open Sans"

    def test_fallbacks_drop_generics(self):
        assert family_fallbacks("Lato, 'PT Sans', serif") == ["Lato", "PT Sans"]

    @pytest.mark.parametrize("value", ["serif", "sans-serif", "monospace, system-ui"])
    def test_generic_only_maps_to_default(self, value):
        assert FontMapper().map_family(value) == "Inter"

    def test_first_known_fallback_wins(self):
        assert FontMapper().map_family("Brand, Lato, sans-serif") == "Lato"
        assert FontMapper().map_family("'Brand Display', \"Open Sans\", Arial") == "Open Sans"

    def test_fuzzy_primary_beats_later_fallback(self):
        assert FontMapper().map_family("Roboto Slab, Georgia, serif") == "Roboto"

    def test_exact(self):
        assert FontMapper().map_family("Georgia, serif") == "Georgia"

    def test_fuzzy(self):
        assert FontMapper().map_family("Roboto Mono") == "Roboto"

    def test_native_list(self):
        assert FontMapper().map_family("Inter var") == "Inter"

    def test_default(self):
        assert FontMapper().map_family("Totally Custom") == "Inter"
        assert FontMapper(default_family="Arial").map_family("") == "Arial"

    def test_extra_families_are_per_mapper(self):
        mapper = FontMapper(extra_families={"Brand Sans": "Lato"})
        assert mapper.map_family("Brand Sans") == "Lato"
        assert FontMapper().map_family("Brand Sans") == "Inter"


class TestMapFont:
    def test_map_font(self):
        mapping = FontMapper().map_font("Arial", "bold", "italic")
        assert (mapping.family, mapping.weight, mapping.style) == ("Arial", 700, "italic")

    def test_style_limited(self):
        assert normalize_style("oblique") == "normal"
        assert normalize_style("ITALIC") == "italic"
