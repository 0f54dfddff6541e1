"""Model package exports."""

from models.palette import ColorKind, ColorToken, parse_color_token, parse_palette
from models.prediction import (
    DateRange,
    GenderOption,
    ImageAttachment,
    Occasion,
    Outfit,
    OutfitSet,
    PredictionResult,
    StyleOption,
    UserQuery,
    WeatherSummary,
)

__all__ = [
    "ColorKind",
    "ColorToken",
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
    "parse_color_token",
    "parse_palette",
]
