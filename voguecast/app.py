"""VogueCast app bootstrap."""

from __future__ import annotations

import logging
from typing import Optional

from agents.advice_agent import AdviceAgent
from agents.image_agent import OutfitImageAgent
from voguecast.config import VogueCastConfig
from voguecast.logging_config import configure_logging, get_logger, log_event
from memory.style_session import StyleSession
from models.prediction import (
    DateRange,
    GenderOption,
    ImageAttachment,
    PredictionResult,
    StyleOption,
    UserQuery,
)
from tools.genai_client import ContentGenerator, GeminiContentGenerator


LOGGER = get_logger(__name__)


def coerce_style(value: str) -> StyleOption | str:
    """Map a label onto :class:`StyleOption`, keeping unknown labels as text."""

    for option in StyleOption:
        if value in (option.value, option.name):
            return option
    return value


def coerce_gender(value: Optional[str]) -> GenderOption | str | None:
    if not value:
        return None
    for option in GenderOption:
        if value in (option.value, option.name):
            return option
    return value


def build_query(
    *,
    who: str,
    where: str,
    date: str,
    end_date: Optional[str] = None,
    style: str = StyleOption.CASUAL.value,
    gender: Optional[str] = None,
    context: Optional[str] = None,
    image: Optional[ImageAttachment] = None,
) -> UserQuery:
    """Assemble a :class:`UserQuery` from loose form or CLI values."""

    return UserQuery(
        who=who,
        where=where,
        date=DateRange(start=date, end=end_date) if end_date else date,
        style=coerce_style(style),
        gender=coerce_gender(gender),
        context=context or None,
        image=image,
    )


class VogueCastApp:
    """Wires together the content generator and the two model agents."""

    def __init__(
        self,
        config: VogueCastConfig | None = None,
        generator: ContentGenerator | None = None,
    ) -> None:
        self.config = config or VogueCastConfig.from_env()
        configure_logging()
        self.generator = generator or GeminiContentGenerator.from_config(self.config)
        self.advice_agent = AdviceAgent(config=self.config, generator=self.generator)
        self.image_agent = OutfitImageAgent(config=self.config, generator=self.generator)
        log_event(
            LOGGER,
            level=logging.INFO,
            event="app_initialized",
            text_model=self.config.text_model,
            image_model=self.config.image_model,
            generator=type(self.generator).__name__,
        )

    def new_session(self) -> StyleSession:
        """Start an independent session; nothing is shared between sessions."""

        return StyleSession(advice_agent=self.advice_agent, image_agent=self.image_agent)

    async def get_style_advice(self, query: UserQuery) -> PredictionResult:
        return await self.advice_agent.get_style_advice(query)

    async def generate_outfit_image(
        self,
        outfit_description: str,
        style: str,
        color_focus: Optional[str] = None,
        theme: Optional[str] = None,
    ) -> str:
        return await self.image_agent.generate_outfit_image(
            outfit_description, style, color_focus=color_focus, theme=theme
        )


__all__ = ["VogueCastApp", "build_query", "coerce_gender", "coerce_style"]
