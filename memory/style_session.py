"""Owns the current prediction and the selected occasion/color for one user."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from agents.advice_agent import AdviceAgent, AdviceGenerationError
from agents.image_agent import OutfitImageAgent
from voguecast.logging_config import get_logger, log_event
from logic.presentation import outfit_summary
from models.prediction import Occasion, Outfit, PredictionResult, UserQuery

LOGGER = get_logger(__name__)

_UNCHANGED = object()


class StyleSession:
    """Explicit holder for the single "current result" of a session.

    Every image load is stamped with a generation number. Selecting another
    occasion or color focus bumps the generation and cancels the pending
    load, and a load only writes ``image_url`` while its generation is
    still current.
    """

    def __init__(self, advice_agent: AdviceAgent, image_agent: OutfitImageAgent) -> None:
        self.advice_agent = advice_agent
        self.image_agent = image_agent
        self.query: Optional[UserQuery] = None
        self.result: Optional[PredictionResult] = None
        self.error: Optional[str] = None
        self.occasion: Occasion = Occasion.DAY
        self.color_focus: Optional[str] = None
        self.image_url: Optional[str] = None
        self.loading_image = False
        self._generation = 0
        self._image_task: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def image_task(self) -> Optional[asyncio.Task]:
        return self._image_task

    @property
    def active_outfit(self) -> Outfit:
        if self.result is None:
            raise LookupError("No prediction loaded")
        return self.result.outfits.for_occasion(self.occasion)

    async def submit(self, query: UserQuery) -> PredictionResult:
        """Request advice; on success the result replaces any previous one.

        The previous prediction is discarded before the request is sent. A
        ``reset()`` while the request is in flight wins: the late answer is
        returned to the caller but not stored.
        """

        self._clear_prediction()
        generation = self._generation
        try:
            result = await self.advice_agent.get_style_advice(query)
        except AdviceGenerationError as exc:
            if generation == self._generation:
                self.error = str(exc)
            raise

        if generation != self._generation:
            log_event(
                LOGGER,
                level=logging.DEBUG,
                event="stale_advice_discarded",
                generation=generation,
                current_generation=self._generation,
            )
            return result
        self.query = query
        self.result = result
        self.select(Occasion.DAY)
        return result

    def reset(self) -> None:
        self._clear_prediction()

    def select(self, occasion: Occasion | str | None = None, color_focus: object = _UNCHANGED) -> asyncio.Task:
        """Switch tab and/or color focus and start a fresh image load.

        Must be called from a running event loop.
        """

        if self.result is None:
            raise LookupError("No prediction loaded")
        if occasion is not None:
            self.occasion = Occasion(occasion)
        if color_focus is not _UNCHANGED:
            self.color_focus = color_focus  # type: ignore[assignment]

        self._cancel_pending()
        self._generation += 1
        self.loading_image = True
        self._image_task = asyncio.get_running_loop().create_task(
            self._load_image(self._generation, self.active_outfit, self.color_focus)
        )
        return self._image_task

    async def _load_image(self, generation: int, outfit: Outfit, color_focus: Optional[str]) -> str:
        style = self.query.style_label if self.query else ""
        image_url = await self.image_agent.generate_outfit_image(
            outfit_summary(outfit), style, color_focus=color_focus
        )
        if generation != self._generation:
            log_event(
                LOGGER,
                level=logging.DEBUG,
                event="stale_image_discarded",
                generation=generation,
                current_generation=self._generation,
            )
            return image_url
        self.image_url = image_url
        self.loading_image = False
        return image_url

    def _clear_prediction(self) -> None:
        self._cancel_pending()
        self._generation += 1
        self.query = None
        self.result = None
        self.error = None
        self.occasion = Occasion.DAY
        self.color_focus = None
        self.image_url = None
        self.loading_image = False

    def _cancel_pending(self) -> None:
        if self._image_task is not None and not self._image_task.done():
            self._image_task.cancel()
        self._image_task = None


__all__ = ["StyleSession"]
