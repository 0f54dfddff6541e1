"""Text rendering helpers shared by the CLI and the session view."""

from __future__ import annotations

from typing import List
from urllib.parse import quote

from models.prediction import Occasion, Outfit, PredictionResult

_OCCASION_TITLES = {
    Occasion.DAY: "Daytime",
    Occasion.EVENING: "Evening",
    Occasion.DINNER: "Dinner",
}


def outfit_summary(outfit: Outfit) -> str:
    """Description sent to the image model: headline followed by the items."""

    return f"{outfit.headline}. {', '.join(outfit.items)}"


def image_search_url(item: str, style: str) -> str:
    search_term = quote(f"{item} {style} fashion", safe="")
    return f"https://www.google.com/search?q={search_term}&tbm=isch"


def render_result_text(result: PredictionResult, occasion: Occasion | str = Occasion.DAY, style: str = "") -> str:
    """Plain-text rendering of the weather card and one occasion tab."""

    selected = Occasion(occasion)
    weather = result.weather
    outfit = result.outfits.for_occasion(selected)

    lines: List[str] = [
        f"Forecast: {weather.location}",
        f"{weather.temperature}  [{weather.condition}]",
        weather.description,
    ]
    if weather.seasonal_context:
        lines.extend(["", "Seasonal analysis:", weather.seasonal_context])

    lines.extend(["", f"{_OCCASION_TITLES[selected]}: {outfit.headline}", outfit.description])
    for item in outfit.items:
        suffix = f"  <{image_search_url(item, style)}>" if style else ""
        lines.append(f"  - {item}{suffix}")
    if outfit.palette:
        lines.append("Palette: " + ", ".join(f"{token.raw} ({token.swatch})" for token in outfit.palette))

    if result.grounding_urls:
        lines.extend(["", "Sources:"])
        lines.extend(f"  {url}" for url in result.grounding_urls)
    return "\n".join(lines)


__all__ = ["image_search_url", "outfit_summary", "render_result_text"]
