"""Outfit image agent: one generated preview per request."""

from __future__ import annotations

import base64
import logging
from typing import Optional

from google.genai import types

from voguecast.config import VogueCastConfig
from voguecast.logging_config import get_logger, log_event, operation_context
from logic.prompts import ImageTheme, build_image_prompt
from tools.genai_client import ContentGenerator
from tools.observability import instrument_call


LOGGER = get_logger(__name__)

DEFAULT_IMAGE_MIME_TYPE = "image/png"


def first_inline_image(response: types.GenerateContentResponse) -> str:
    """Return the first inline-data part as a data URI, or ``""``."""

    candidates = response.candidates or []
    if not candidates or candidates[0].content is None:
        return ""
    for part in candidates[0].content.parts or []:
        blob = part.inline_data
        if blob is not None and blob.data:
            payload = base64.b64encode(blob.data).decode("ascii")
            return f"data:{blob.mime_type or DEFAULT_IMAGE_MIME_TYPE};base64,{payload}"
    return ""


class OutfitImageAgent:
    """Requests flat-lay style outfit images from the image model.

    Failures never propagate: an empty string means "no image" and callers
    keep showing the outfit text.
    """

    def __init__(self, config: VogueCastConfig, generator: ContentGenerator) -> None:
        self.config = config
        self.generator = generator

    @instrument_call("image.generate_content")
    async def _generate(self, *, model: str, contents: str) -> types.GenerateContentResponse:
        return await self.generator.generate_content(model=model, contents=contents)

    async def generate_outfit_image(
        self,
        outfit_description: str,
        style: str,
        color_focus: Optional[str] = None,
        theme: ImageTheme | str | None = None,
    ) -> str:
        with operation_context("agent:image.generate_outfit_image") as correlation_id:
            try:
                prompt = build_image_prompt(
                    outfit_description,
                    style,
                    color_focus=color_focus,
                    theme=theme or self.config.image_theme,
                )
                response = await self._generate(model=self.config.image_model, contents=prompt)
            except Exception:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="image_generation_failed",
                    agent="image",
                    correlation_id=correlation_id,
                    exc_info=True,
                )
                return ""

            image_url = first_inline_image(response)
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="image",
                method="generate_outfit_image",
                correlation_id=correlation_id,
                has_image=bool(image_url),
                color_focus=color_focus,
            )
            return image_url


__all__ = ["OutfitImageAgent", "first_inline_image"]
