"""Advice agent: weather analysis plus three outfit suggestions."""

from __future__ import annotations

import logging
from typing import Any, List

from google.genai import types

from voguecast.config import VogueCastConfig
from voguecast.logging_config import get_logger, log_event, operation_context
from logic.normalizer import normalize_model_output
from logic.prompts import build_advice_prompt
from logic.validation import build_prediction_result
from models.prediction import PredictionResult, UserQuery
from tools.genai_client import ContentGenerator
from tools.observability import instrument_call


LOGGER = get_logger(__name__)

ADVICE_FAILURE_MESSAGE = "Failed to generate advice. Please try again."


class AdviceGenerationError(RuntimeError):
    """The only failure callers see from an advice request."""

    def __init__(self, message: str = ADVICE_FAILURE_MESSAGE) -> None:
        super().__init__(message)


def _grounding_chunks(response: types.GenerateContentResponse) -> List[Any]:
    candidates = response.candidates or []
    if not candidates or candidates[0].grounding_metadata is None:
        return []
    return list(candidates[0].grounding_metadata.grounding_chunks or [])


class AdviceAgent:
    """Asks the text model for a full prediction and normalizes its answer."""

    def __init__(self, config: VogueCastConfig, generator: ContentGenerator) -> None:
        self.config = config
        self.generator = generator

    def build_contents(self, query: UserQuery) -> List[Any]:
        contents: List[Any] = [build_advice_prompt(query)]
        if query.image is not None:
            contents.append(types.Part.from_bytes(data=query.image.to_bytes(), mime_type=query.image.mime_type))
        return contents

    def build_request_config(self) -> types.GenerateContentConfig:
        tools = [types.Tool(google_search=types.GoogleSearch())] if self.config.enable_search else None
        return types.GenerateContentConfig(tools=tools)

    @instrument_call("advice.generate_content")
    async def _generate(self, *, model: str, contents: List[Any], config: types.GenerateContentConfig) -> types.GenerateContentResponse:
        return await self.generator.generate_content(model=model, contents=contents, config=config)

    async def get_style_advice(self, query: UserQuery) -> PredictionResult:
        """Return a complete :class:`PredictionResult` or raise :class:`AdviceGenerationError`."""

        with operation_context("agent:advice.get_style_advice") as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_started",
                agent="advice",
                method="get_style_advice",
                correlation_id=correlation_id,
                style=query.style_label,
                has_image=query.image is not None,
                where=query.where,
            )
            try:
                response = await self._generate(
                    model=self.config.text_model,
                    contents=self.build_contents(query),
                    config=self.build_request_config(),
                )
                normalized = normalize_model_output(response.text or "{}", _grounding_chunks(response))
                result = build_prediction_result(normalized)
            except Exception as exc:
                log_event(
                    LOGGER,
                    level=logging.ERROR,
                    event="agent_call_failed",
                    agent="advice",
                    method="get_style_advice",
                    correlation_id=correlation_id,
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                raise AdviceGenerationError() from exc

            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="advice",
                method="get_style_advice",
                correlation_id=correlation_id,
                grounding_url_count=len(result.grounding_urls),
            )
            return result


__all__ = ["ADVICE_FAILURE_MESSAGE", "AdviceAgent", "AdviceGenerationError"]
