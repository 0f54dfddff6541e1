"""Schema checks at the JSON trust boundary and palette tagging."""

import pytest
from pydantic import ValidationError

from logic.normalizer import NormalizedAdvice
from logic.validation import build_prediction_result, dump_prediction_result, validation_failure
from models.palette import FALLBACK_SWATCH, ColorKind, parse_color_token, parse_palette
from models.prediction import DateRange, Occasion, UserQuery


def _outfit(headline: str) -> dict:
    return {
        "headline": headline,
        "description": f"{headline} description",
        "items": [f"{headline} Jacket", f"{headline} Trousers", f"{headline} Shoes"],
        "colorPalette": ["#1F2A44", "camel"],
    }


def _normalized(**overrides) -> NormalizedAdvice:
    values = {
        "weather": {
            "location": "Lisbon, Portugal",
            "temperature": "26°C / 79°F",
            "condition": "Sunny",
            "description": "Clear skies.",
            "seasonalContext": "• Warmer than the 5-year average",
        },
        "outfits": {"day": _outfit("Day"), "evening": _outfit("Evening"), "dinner": _outfit("Dinner")},
        "grounding_urls": ["https://a.example"],
    }
    values.update(overrides)
    return NormalizedAdvice(**values)


def test_each_occasion_round_trips_unchanged() -> None:
    normalized = _normalized()

    result = build_prediction_result(normalized)

    for occasion in Occasion:
        source = normalized.outfits[occasion.value]
        outfit = result.outfits.for_occasion(occasion)
        assert outfit.headline == source["headline"]
        assert outfit.description == source["description"]
        assert outfit.items == source["items"]
        assert [token.raw for token in outfit.palette] == source["colorPalette"]
    assert result.weather.seasonal_context.startswith("•")
    assert result.grounding_urls == ["https://a.example"]


def test_missing_outfits_key_is_rejected() -> None:
    with pytest.raises(ValidationError):
        build_prediction_result(_normalized(outfits=None))


def test_missing_weather_key_is_rejected() -> None:
    with pytest.raises(ValidationError):
        build_prediction_result(_normalized(weather=None))


def test_missing_occasion_slot_is_rejected() -> None:
    outfits = {"day": _outfit("Day"), "evening": _outfit("Evening")}

    with pytest.raises(ValidationError) as excinfo:
        build_prediction_result(_normalized(outfits=outfits))

    payload = validation_failure("Model answer failed schema checks", excinfo.value)
    assert payload["status"] == "needs_review"
    assert any("dinner" in detail["loc"] for detail in payload["details"])


def test_absent_optional_fields_default_to_empty() -> None:
    outfits = {"day": {"headline": "Day"}, "evening": {}, "dinner": {"items": "Wool Coat"}}

    result = build_prediction_result(_normalized(weather={"location": "Oslo", "temperature": 4}, outfits=outfits))

    assert result.weather.temperature == "4"
    assert result.weather.seasonal_context == ""
    assert result.outfits.day.items == []
    assert result.outfits.evening.headline == ""
    assert result.outfits.dinner.items == ["Wool Coat"]


def test_dump_uses_camel_case_keys() -> None:
    dumped = dump_prediction_result(build_prediction_result(_normalized()))

    assert set(dumped) == {"weather", "outfits", "groundingUrls"}
    assert "seasonalContext" in dumped["weather"]
    assert dumped["outfits"]["day"]["colorPalette"] == ["#1F2A44", "camel"]
    assert dumped["outfits"]["day"]["palette"][0] == {"kind": "hex", "value": "#1f2a44", "swatch": "#1f2a44"}


def test_color_tokens_are_tagged_once() -> None:
    assert parse_color_token("#1F2A44").kind is ColorKind.HEX
    assert parse_color_token("#1F2A44").value == "#1f2a44"
    assert parse_color_token("1f2a44").value == "#1f2a44"
    assert parse_color_token("Navy Blue").kind is ColorKind.NAMED
    assert parse_color_token("beaded").kind is ColorKind.NAMED


def test_color_swatch_resolution() -> None:
    assert parse_color_token("#abc").swatch == "#abc"
    assert parse_color_token("Navy Blue").swatch == "navy"
    assert parse_color_token("Black").swatch == "black"
    assert parse_color_token("camel").swatch == FALLBACK_SWATCH
    assert parse_color_token("Burnt Red").swatch == "burnt red"
    assert parse_color_token("dark green").swatch == "dark green"

    tokens = parse_palette(["", None, "white"])
    assert [token.raw for token in tokens] == ["", "", "white"]
    assert [token.swatch for token in tokens] == [FALLBACK_SWATCH, FALLBACK_SWATCH, "white"]


def test_user_query_presence_checks_only() -> None:
    query = UserQuery(who="", where="Lisbon", date="not-a-date")

    assert query.missing_fields() == ["who"]
    assert query.date_label == "not-a-date"
    assert str(DateRange("2024-06-10", "2024-06-14")) == "2024-06-10 to 2024-06-14"
    assert str(DateRange("2024-06-10", "2024-06-10")) == "2024-06-10"
