"""Instruction builders for the advice and image models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from models.prediction import UserQuery

ADVICE_OUTPUT_SCHEMA = """{
  "weather": {
    "location": "City/Place Name",
    "temperature": "e.g. 24°C / 75°F",
    "condition": "e.g. Sunny, Rainy",
    "description": "Short forecast summary.",
    "seasonalContext": "A clear, easy-to-read summary of the historical analysis vs current forecast. Use bullet points (•) for key trends."
  },
  "outfits": {
    "day": {
      "headline": "Daytime Look Name",
      "description": "Why this works for the day.",
      "items": ["Item 1", "Item 2", "Item 3"],
      "colorPalette": ["Hex1", "Hex2"]
    },
    "evening": {
      "headline": "Evening Look Name",
      "description": "Why this works for the evening.",
      "items": ["Item 1", "Item 2", "Item 3"],
      "colorPalette": ["Hex1", "Hex2"]
    },
    "dinner": {
      "headline": "Dinner Look Name",
      "description": "Why this works for a nice dinner.",
      "items": ["Item 1", "Item 2", "Item 3"],
      "colorPalette": ["Hex1", "Hex2"]
    }
  }
}"""


class ImageTheme(str, Enum):
    FLAT_LAY = "flat_lay"
    EDITORIAL = "editorial"


_THEME_BRIEFS = {
    ImageTheme.FLAT_LAY: (
        "Fashion photography, flat lay of a complete outfit.",
        "High quality, photorealistic, neutral background.",
    ),
    ImageTheme.EDITORIAL: (
        "Editorial fashion still life of a complete outfit, styled on a clean studio set.",
        "Magazine quality, soft directional light, muted backdrop.",
    ),
}


def _profile_lines(query: UserQuery) -> str:
    lines = [
        f"- Identity: {query.who}",
        f"- Destination: {query.where}",
        f"- Date of Trip: {query.date_label}",
        f"- Preferred Style: {query.style_label}",
    ]
    if query.gender:
        gender = query.gender.value if isinstance(query.gender, Enum) else query.gender
        lines.append(f"- Gender: {gender}")
    if query.context:
        lines.append(f"- Wardrobe Notes: {query.context}")
    return "\n".join(lines)


def build_advice_prompt(query: UserQuery) -> str:
    """Instruction asking for the weather analysis and three outfits as JSON."""

    where = query.where
    when = query.date_label
    image_note = ""
    if query.image is not None:
        image_note = (
            "\n- The user attached a photo of a clothing item they own. Try to incorporate "
            "that item into at least one of the outfits and name it explicitly.\n"
        )

    return f"""
I need you to act as an expert meteorologist and personal stylist.

User Profile:
{_profile_lines(query)}

Part 1: Weather Research & Analysis
1. Retrieve historical weather data for the location "{where}" on/around the date "{when}" for the past 5 years. Look for patterns.
2. Find the specific forecast for "{where}" on "{when}".
3. COMPARE the historical patterns with the predicted conditions.

Part 2: Style Advice (Three Scenarios)
Based on the weather and style, suggest THREE distinct outfit options for the user's day:
1. Daytime (Functional/Activity based)
2. Evening (Relaxed/Transition)
3. Nice Dinner (Elevated/Going Out)

Guidelines:
- Focus on mainstream, accessible fashion.
- Be clear and specific with item names (e.g., "Camel Trench Coat" instead of "Coat").
- The "seasonalContext" should be simple, easy to read, and use bullet points or breaks for readability.{image_note}

Output Format:
You MUST return the result as a raw JSON object (no markdown).
The JSON structure must be:
{ADVICE_OUTPUT_SCHEMA}
""".strip()


def build_image_prompt(
    outfit_description: str,
    style: str,
    color_focus: Optional[str] = None,
    theme: ImageTheme | str = ImageTheme.FLAT_LAY,
) -> str:
    """Short photographic brief for a single outfit image."""

    opening, finish = _THEME_BRIEFS[ImageTheme(theme)]
    lines = [
        opening,
        f"Items: {outfit_description}.",
        f"Style: {style}.",
    ]
    if color_focus:
        lines.append(f"Color focus: make {color_focus} the dominant tone of the outfit.")
    lines.extend([finish, "No people."])
    return "\n".join(lines)


__all__ = ["ADVICE_OUTPUT_SCHEMA", "ImageTheme", "build_advice_prompt", "build_image_prompt"]
