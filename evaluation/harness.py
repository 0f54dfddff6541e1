"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

import asyncio
from typing import Dict, List

from voguecast.config import VogueCastConfig
from evaluation.scenarios import EvaluationScenario, SCENARIOS
from memory.style_session import StyleSession
from agents.advice_agent import AdviceAgent
from agents.image_agent import OutfitImageAgent
from models.prediction import Occasion, PredictionResult
from tools.genai_client import MockContentGenerator


def _evaluate_expectations(
    expectations: Dict[str, object], result: PredictionResult, image_url: str
) -> Dict[str, bool]:
    checks: Dict[str, bool] = {}
    checks["three_outfits"] = all(
        outfit.headline and outfit.items for _, outfit in result.outfits.items()
    )
    if "location" in expectations:
        checks["location"] = result.weather.location == expectations["location"]
    if "grounding_url_count" in expectations:
        checks["grounding_url_count"] = len(result.grounding_urls) == expectations["grounding_url_count"]
    checks["image_well_formed"] = image_url == "" or (
        image_url.startswith("data:image/") and ";base64," in image_url
    )
    if "image" in expectations:
        checks["image"] = bool(image_url) == bool(expectations["image"])
    return checks


async def _run(scenario: EvaluationScenario) -> Dict[str, object]:
    config = VogueCastConfig(api_key="offline")
    generator = MockContentGenerator(
        text=scenario.model_text,
        grounding_uris=scenario.grounding_uris,
        image_data=scenario.image_data,
    )
    session = StyleSession(
        advice_agent=AdviceAgent(config=config, generator=generator),
        image_agent=OutfitImageAgent(config=config, generator=generator),
    )
    result = await session.submit(scenario.query)
    task = session.image_task
    if task is not None:
        await task
    checks = _evaluate_expectations(scenario.expectations, result, session.image_url or "")
    return {
        "scenario": scenario.name,
        "passed": all(checks.values()),
        "checks": checks,
        "occasion": Occasion.DAY.value,
        "image_url": session.image_url,
        "result": result,
    }


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    return asyncio.run(_run(scenario))


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
