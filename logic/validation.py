"""Pydantic schemas for the model's JSON answer and for API payloads."""

from __future__ import annotations

import base64
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from logic.normalizer import NormalizedAdvice
from models.palette import parse_palette
from models.prediction import Outfit, OutfitSet, PredictionResult, WeatherSummary


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "\n".join(_as_text(item) for item in value)
    return str(value)


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [_as_text(item) for item in value if item is not None]
    return [_as_text(value)]


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WeatherPayload(_Payload):
    """``weather`` block of the model answer."""

    location: str = ""
    temperature: str = ""
    condition: str = ""
    description: str = ""
    seasonal_context: str = Field("", alias="seasonalContext")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class OutfitPayload(_Payload):
    headline: str = ""
    description: str = ""
    items: List[str] = Field(default_factory=list)
    color_palette: List[str] = Field(default_factory=list, alias="colorPalette")

    @field_validator("headline", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("items", "color_palette", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        return _as_text_list(value)


class OutfitSetPayload(_Payload):
    """All three occasion slots are mandatory."""

    day: OutfitPayload
    evening: OutfitPayload
    dinner: OutfitPayload


class AdvicePayload(_Payload):
    weather: WeatherPayload
    outfits: OutfitSetPayload
    grounding_urls: List[str] = Field(default_factory=list, alias="groundingUrls")


class ValidationResult(BaseModel):
    """Wrapper returned to API callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False, include_input=False)).model_dump()


def _to_outfit(payload: OutfitPayload) -> Outfit:
    return Outfit(
        headline=payload.headline,
        description=payload.description,
        items=list(payload.items),
        palette=parse_palette(payload.color_palette),
    )


def build_prediction_result(normalized: NormalizedAdvice) -> PredictionResult:
    """Validate normalized advice and build the typed result in one step.

    Raises ``pydantic.ValidationError`` when ``weather`` or ``outfits`` is
    missing or not an object, or when an occasion slot is absent.
    """

    payload = AdvicePayload.model_validate(
        {
            "weather": normalized.weather,
            "outfits": normalized.outfits,
            "grounding_urls": normalized.grounding_urls,
        }
    )
    weather = payload.weather
    return PredictionResult(
        weather=WeatherSummary(
            location=weather.location,
            temperature=weather.temperature,
            condition=weather.condition,
            description=weather.description,
            seasonal_context=weather.seasonal_context,
        ),
        outfits=OutfitSet(
            day=_to_outfit(payload.outfits.day),
            evening=_to_outfit(payload.outfits.evening),
            dinner=_to_outfit(payload.outfits.dinner),
        ),
        grounding_urls=list(payload.grounding_urls),
    )


def dump_prediction_result(result: PredictionResult) -> Dict[str, Any]:
    """Serialize a result back to the camelCase shape the model was asked for."""

    def outfit(o: Outfit) -> Dict[str, Any]:
        return {
            "headline": o.headline,
            "description": o.description,
            "items": list(o.items),
            "colorPalette": [token.raw for token in o.palette],
            "palette": [{"kind": token.kind.value, "value": token.value, "swatch": token.swatch} for token in o.palette],
        }

    return {
        "weather": {
            "location": result.weather.location,
            "temperature": result.weather.temperature,
            "condition": result.weather.condition,
            "description": result.weather.description,
            "seasonalContext": result.weather.seasonal_context,
        },
        "outfits": {occasion.value: outfit(o) for occasion, o in result.outfits.items()},
        "groundingUrls": list(result.grounding_urls),
    }


class ImageAttachmentInput(BaseModel):
    data: str = Field(min_length=1, description="Base64 encoded image bytes")
    mime_type: str = Field("image/jpeg", pattern=r"^image/")

    @field_validator("data")
    @classmethod
    def _must_be_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except ValueError as exc:
            raise ValueError("image data must be base64 encoded") from exc
        return value


class AdviceRequest(BaseModel):
    """API request body mirroring the user query."""

    who: str = Field(min_length=1)
    where: str = Field(min_length=1)
    date: str = Field(min_length=1)
    end_date: Optional[str] = None
    style: str = "Casual & Comfy"
    gender: Optional[str] = None
    context: Optional[str] = None
    image: Optional[ImageAttachmentInput] = None


class OutfitImageRequest(BaseModel):
    description: str = Field(min_length=1)
    style: str = "Casual & Comfy"
    color_focus: Optional[str] = None
    theme: Optional[Literal["flat_lay", "editorial"]] = None


__all__ = [
    "AdvicePayload",
    "AdviceRequest",
    "ImageAttachmentInput",
    "OutfitImageRequest",
    "OutfitPayload",
    "OutfitSetPayload",
    "ValidationResult",
    "WeatherPayload",
    "build_prediction_result",
    "dump_prediction_result",
    "validation_failure",
]
