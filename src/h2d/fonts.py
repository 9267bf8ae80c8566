"""Map web font declarations onto families and weights the design tool ships."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

# Lower-cased web family name -> design-tool family.
FONT_FAMILIES: dict[str, str] = {
    "arial": "Arial",
    "helvetica": "Helvetica",
    "times": "Times New Roman",
    "times new roman": "Times New Roman",
    "courier": "Courier New",
    "courier new": "Courier New",
    "verdana": "Verdana",
    "georgia": "Georgia",
    "palatino": "Palatino",
    "garamond": "Garamond",
    "bookman": "Bookman",
    "comic sans ms": "Comic Sans MS",
    "trebuchet ms": "Trebuchet MS",
    "arial black": "Arial Black",
    "impact": "Impact",
    "roboto": "Roboto",
    "open sans": "Open Sans",
    "lato": "Lato",
    "montserrat": "Montserrat",
    "raleway": "Raleway",
    "poppins": "Poppins",
    "source sans pro": "Source Sans Pro",
    "oswald": "Oswald",
    "ubuntu": "Ubuntu",
    "playfair display": "Playfair Display",
    "merriweather": "Merriweather",
    "pt sans": "PT Sans",
    "pt serif": "PT Serif",
    "droid sans": "Droid Sans",
    "droid serif": "Droid Serif",
    "microsoft yahei": "Microsoft YaHei",
    "simsun": "SimSun",
    "simhei": "SimHei",
    "kaiti": "KaiTi",
    "fangsong": "FangSong",
    "pingfang sc": "PingFang SC",
    "hiragino sans gb": "Hiragino Sans GB",
    "wenquanyi micro hei": "WenQuanYi Micro Hei",
}

# Families available in the design tool without any upload.
NATIVE_FAMILIES: tuple[str, ...] = (
    "Arial",
    "Helvetica",
    "Times New Roman",
    "Courier New",
    "Verdana",
    "Georgia",
    "Roboto",
    "Open Sans",
    "Lato",
    "Montserrat",
    "Inter",
    "Poppins",
    "Source Sans Pro",
)

FONT_WEIGHTS: dict[str, int] = {
    "thin": 100,
    "hairline": 100,
    "extralight": 200,
    "ultralight": 200,
    "light": 300,
    "lighter": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "demibold": 600,
    "bold": 700,
    "bolder": 700,
    "extrabold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
}

GENERIC_FAMILIES = frozenset({"serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui"})

DEFAULT_WEIGHT = 400


@dataclass(frozen=True)
class FontMapping:
    family: str
    weight: int
    style: str


def family_fallbacks(value: str) -> list[str]:
    """Split a ``font-family`` list, dropping quotes and generic families."""
    families = [f.strip().strip("\"'").strip() for f in value.split(",")]
    return [f for f in families if f and f.lower() not in GENERIC_FAMILIES]


def primary_family(value: str) -> str:
    """Return the first family of a ``font-family`` list with quotes removed."""
    return value.split(",")[0].strip().strip("\"'").strip()


def parse_font_weight(value: str | int | float | None) -> int:
    """Parse a numeric or keyword ``font-weight``; unknown values are 400."""
    if value is None:
        return DEFAULT_WEIGHT
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip().lower()
    try:
        return int(float(text))
    except ValueError:
        return FONT_WEIGHTS.get(text, DEFAULT_WEIGHT)


def normalize_weight(weight: int | float) -> int:
    """Clamp to ``[100, 900]`` and round half up to the nearest hundred."""
    clamped = min(900.0, max(100.0, float(weight)))
    return int(math.floor(clamped / 100 + 0.5)) * 100


def normalize_style(value: str | None) -> str:
    return "italic" if (value or "").strip().lower() == "italic" else "normal"


class FontMapper:
    """Family/weight/style mapper for one conversion session.

    *extra_families* extends the static family table for this mapper only.
    """

    def __init__(
        self,
        default_family: str = "Inter",
        extra_families: Mapping[str, str] | None = None,
    ) -> None:
        self.default_family = default_family
        self.families = dict(FONT_FAMILIES)
        for web, native in (extra_families or {}).items():
            self.families[web.lower()] = native

    def map_family(self, value: str | None) -> str:
        """Map a ``font-family`` list onto one design-tool family.

        Families are tried in list order, each by exact then fuzzy match; the
        next one is consulted only when both miss. Generic families never
        match, so a list of only generics maps to the default family.
        """
        for name in family_fallbacks(value or ""):
            native = self._match(name.lower())
            if native:
                return native
        return self.default_family

    def _match(self, name: str) -> str | None:
        if name in self.families:
            return self.families[name]
        for web, native in self.families.items():
            if web in name or name in web:
                return native
        for native in NATIVE_FAMILIES:
            if native.lower() in name:
                return native
        return None

    def map_font(
        self,
        family: str | None,
        weight: str | int | float | None = None,
        style: str | None = None,
    ) -> FontMapping:
        return FontMapping(
            family=self.map_family(family),
            weight=normalize_weight(parse_font_weight(weight)),
            style=normalize_style(style),
        )
