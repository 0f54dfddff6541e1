"""User query and prediction result data model."""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from models.palette import ColorToken


class StyleOption(str, Enum):
    CASUAL = "Casual & Comfy"
    SMART_CASUAL = "Smart Casual"
    BUSINESS_CASUAL = "Business Casual"
    BUSINESS_PRO = "Business Professional"
    FORMAL = "Formal Event"
    ATHLEISURE = "Athleisure / Sporty"
    TRENDY = "Trendy / Night Out"
    MINIMALIST = "Minimalist / Clean"


class GenderOption(str, Enum):
    FEMALE = "Female"
    MALE = "Male"
    NON_BINARY = "Non-Binary"
    GENDERQUEER = "Genderqueer"
    AGENDER = "Agender"
    PREFER_NOT_TO_SAY = "Prefer not to say"


class Occasion(str, Enum):
    """Fixed outfit slots, in display order."""

    DAY = "day"
    EVENING = "evening"
    DINNER = "dinner"


def style_label(style: Union[StyleOption, str]) -> str:
    """Return the display label for a style enum member or free-text style."""

    return style.value if isinstance(style, Enum) else str(style)


@dataclass
class DateRange:
    """Opaque travel dates; neither end is parsed."""

    start: str
    end: str = ""

    def __str__(self) -> str:
        if not self.end or self.end == self.start:
            return self.start
        return f"{self.start} to {self.end}"


@dataclass
class ImageAttachment:
    """Inline image sent alongside the advice prompt."""

    data: str
    mime_type: str = "image/jpeg"

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str = "image/jpeg") -> "ImageAttachment":
        return cls(data=base64.b64encode(raw).decode("ascii"), mime_type=mime_type)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageAttachment":
        file_path = Path(path)
        mime_type, _ = mimetypes.guess_type(file_path.name)
        return cls.from_bytes(file_path.read_bytes(), mime_type or "image/jpeg")

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass
class UserQuery:
    """Profile collected from the user before asking for advice."""

    who: str
    where: str
    date: Union[str, DateRange]
    style: Union[StyleOption, str] = StyleOption.CASUAL
    gender: Union[GenderOption, str, None] = None
    context: Optional[str] = None
    image: Optional[ImageAttachment] = None

    @property
    def style_label(self) -> str:
        return style_label(self.style)

    @property
    def date_label(self) -> str:
        return str(self.date)

    def missing_fields(self) -> List[str]:
        """Names of required fields that are blank.

        Presence is the only check; values are passed through verbatim.
        """

        missing = []
        for name, value in (("who", self.who), ("where", self.where), ("date", self.date_label)):
            if not str(value or "").strip():
                missing.append(name)
        return missing


@dataclass
class WeatherSummary:
    location: str
    temperature: str
    condition: str
    description: str
    seasonal_context: str = ""


@dataclass
class Outfit:
    headline: str
    description: str
    items: List[str] = field(default_factory=list)
    palette: List[ColorToken] = field(default_factory=list)


@dataclass
class OutfitSet:
    day: Outfit
    evening: Outfit
    dinner: Outfit

    def for_occasion(self, occasion: Union[Occasion, str]) -> Outfit:
        return getattr(self, Occasion(occasion).value)

    def items(self) -> List[tuple[Occasion, Outfit]]:
        return [(occasion, self.for_occasion(occasion)) for occasion in Occasion]


@dataclass
class PredictionResult:
    """A complete answer; never built piecemeal."""

    weather: WeatherSummary
    outfits: OutfitSet
    grounding_urls: List[str] = field(default_factory=list)


__all__ = [
    "DateRange",
    "GenderOption",
    "ImageAttachment",
    "Occasion",
    "Outfit",
    "OutfitSet",
    "PredictionResult",
    "StyleOption",
    "UserQuery",
    "WeatherSummary",
    "style_label",
]
