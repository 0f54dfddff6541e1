"""Evaluation scenarios replaying realistic (and messy) model answers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.prediction import StyleOption, UserQuery


@dataclass
class EvaluationScenario:
    name: str
    description: str
    query: UserQuery
    model_text: str
    grounding_uris: List[Optional[str]] = field(default_factory=list)
    image_data: bytes | None = b"\x89PNG\r\n\x1a\nfake"
    expectations: Dict[str, object] = field(default_factory=dict)


def _outfit(headline: str, items: List[str], palette: List[str]) -> Dict[str, object]:
    return {
        "headline": headline,
        "description": f"{headline} balances comfort with the forecast.",
        "items": items,
        "colorPalette": palette,
    }


def _answer(location: str, temperature: str, condition: str) -> Dict[str, object]:
    return {
        "weather": {
            "location": location,
            "temperature": temperature,
            "condition": condition,
            "description": f"{condition} with a light breeze.",
            "seasonalContext": "• Past 5 years: mostly dry\n• Forecast: in line with history",
        },
        "outfits": {
            "day": _outfit("Linen Explorer", ["White Linen Shirt", "Beige Chinos", "Leather Loafers"], ["#F5F5DC", "white"]),
            "evening": _outfit("Breezy Transition", ["Light Knit Polo", "Navy Trousers"], ["navy", "#FFFFFF"]),
            "dinner": _outfit("Riverside Dinner", ["Unstructured Blazer", "Silk Pocket Square", "Suede Loafers"], ["#1F2A44", "burgundy"]),
        },
    }


_LISBON = json.dumps(_answer("Lisbon, Portugal", "26°C / 79°F", "Sunny"), ensure_ascii=False)
_OSLO = json.dumps(_answer("Oslo, Norway", "4°C / 39°F", "Sleet"), ensure_ascii=False)
_KYOTO = json.dumps(_answer("Kyoto, Japan", "31°C / 88°F", "Humid"), ensure_ascii=False)

SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="lisbon_business_casual",
        description="Clean JSON answer with duplicated and empty grounding sources.",
        query=UserQuery(who="30s professional", where="Lisbon", date="2024-06-10", style=StyleOption.BUSINESS_CASUAL),
        model_text=_LISBON,
        grounding_uris=[
            "https://weather.example/lisbon",
            None,
            "https://weather.example/lisbon",
            "https://climate.example/portugal",
            "",
        ],
        expectations={"location": "Lisbon, Portugal", "grounding_url_count": 2, "image": True},
    ),
    EvaluationScenario(
        name="oslo_fenced_with_prose",
        description="Answer wrapped in a json code fence with chatter before and after.",
        query=UserQuery(who="student", where="Oslo", date="2024-11-02", style=StyleOption.ATHLEISURE),
        model_text=f"Here is your forecast!\n```json\n{_OSLO}\n```\nStay warm out there.",
        expectations={"location": "Oslo, Norway", "grounding_url_count": 0, "image": True},
    ),
    EvaluationScenario(
        name="kyoto_no_image_part",
        description="Image model answers with text only; advice still succeeds.",
        query=UserQuery(who="retired couple", where="Kyoto", date="2024-08-15", style=StyleOption.MINIMALIST),
        model_text=_KYOTO,
        grounding_uris=["https://jma.example/kyoto"],
        image_data=None,
        expectations={"location": "Kyoto, Japan", "grounding_url_count": 1, "image": False},
    ),
]

__all__ = ["EvaluationScenario", "SCENARIOS"]
