"""Tagged color tokens for outfit palettes.

The model returns palette entries either as hex codes or as English color
names. Each entry is classified once when the result is ingested so render
code never has to guess again.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

FALLBACK_SWATCH = "#334155"

_HEX_WITH_HASH = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_BARE_HEX = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Names a browser renders reliably; anything else gets the fallback swatch.
BASIC_COLOR_WORDS = ("black", "white", "red", "blue", "green")

COLOR_MAP = {
    "navy blue": "navy",
    "light blue": "lightblue",
    "sky blue": "skyblue",
    "off white": "white",
    "grey": "gray",
    "charcoal grey": "gray",
    "olive green": "olive",
    "forest green": "forestgreen",
}


class ColorKind(str, Enum):
    HEX = "hex"
    NAMED = "named"


@dataclass(frozen=True)
class ColorToken:
    """One palette entry, tagged as a hex code or a color name."""

    kind: ColorKind
    value: str
    raw: str

    @property
    def is_hex(self) -> bool:
        return self.kind is ColorKind.HEX

    @property
    def swatch(self) -> str:
        """CSS color used to paint the swatch."""

        if self.is_hex:
            return self.value
        lowered = self.value.lower()
        if any(word in lowered for word in BASIC_COLOR_WORDS):
            return COLOR_MAP.get(lowered, lowered)
        return FALLBACK_SWATCH

    def __str__(self) -> str:
        return self.raw


def parse_color_token(raw: object) -> ColorToken:
    """Classify a raw palette entry."""

    text = str(raw).strip() if raw is not None else ""
    if _HEX_WITH_HASH.match(text):
        return ColorToken(kind=ColorKind.HEX, value=text.lower(), raw=text)
    if _BARE_HEX.match(text) and any(ch.isdigit() for ch in text):
        # "bad" or "beaded" are words; a bare code needs at least one digit.
        return ColorToken(kind=ColorKind.HEX, value=f"#{text.lower()}", raw=text)
    return ColorToken(kind=ColorKind.NAMED, value=text, raw=text)


def parse_palette(values: Iterable[object]) -> List[ColorToken]:
    """Classify every palette entry, keeping order.

    Blank entries are kept as named tokens and paint the fallback swatch.
    """

    return [parse_color_token(value) for value in values]


__all__ = [
    "BASIC_COLOR_WORDS",
    "FALLBACK_SWATCH",
    "ColorKind",
    "ColorToken",
    "parse_color_token",
    "parse_palette",
]
