"""Content generator abstractions over the hosted Gemini models."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types

from voguecast.config import VogueCastConfig


LOGGER = logging.getLogger(__name__)

# 1x1 transparent PNG used by the offline generator.
_PLACEHOLDER_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000001e221bc330000000049454e44ae426082"
)


class ContentGenerator(ABC):
    """Single-call interface to a hosted generative model."""

    @abstractmethod
    async def generate_content(
        self,
        *,
        model: str,
        contents: Any,
        config: Optional[types.GenerateContentConfig] = None,
    ) -> types.GenerateContentResponse:
        """Submit one request and return the raw model response."""


class GeminiContentGenerator(ContentGenerator):
    """Calls the Gemini API through an explicitly owned ``genai.Client``.

    The client is built on the first request so that a missing or invalid
    API key fails that request rather than application startup.
    """

    def __init__(self, client: genai.Client | None = None, api_key: str | None = None) -> None:
        self._client = client
        self.api_key = api_key

    @classmethod
    def from_config(cls, config: VogueCastConfig) -> "GeminiContentGenerator":
        if not config.api_key:
            LOGGER.warning("Gemini API key not set; model calls will fail")
        return cls(api_key=config.api_key)

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate_content(
        self,
        *,
        model: str,
        contents: Any,
        config: Optional[types.GenerateContentConfig] = None,
    ) -> types.GenerateContentResponse:
        return await self.client.aio.models.generate_content(model=model, contents=contents, config=config)


def text_response(text: str, grounding_uris: Sequence[Optional[str]] = ()) -> types.GenerateContentResponse:
    """Build a text answer with optional web grounding chunks."""

    grounding = None
    if grounding_uris:
        grounding = types.GroundingMetadata(
            grounding_chunks=[types.GroundingChunk(web=types.GroundingChunkWeb(uri=uri)) for uri in grounding_uris]
        )
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)]),
                grounding_metadata=grounding,
            )
        ]
    )


def image_response(data: bytes | None, mime_type: str | None = "image/png", caption: str | None = None) -> types.GenerateContentResponse:
    """Build an image answer; ``data=None`` yields a text-only response."""

    parts: List[types.Part] = []
    if caption:
        parts.append(types.Part(text=caption))
    if data is not None:
        parts.append(types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)))
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=parts))]
    )


class MockContentGenerator(ContentGenerator):
    """Offline deterministic generator for tests, evaluation and ``--offline`` runs."""

    def __init__(
        self,
        text: str = "{}",
        grounding_uris: Sequence[Optional[str]] = (),
        image_data: bytes | None = _PLACEHOLDER_PNG,
        image_mime_type: str | None = "image/png",
        image_model: str | None = None,
    ) -> None:
        self.text = text
        self.grounding_uris = list(grounding_uris)
        self.image_data = image_data
        self.image_mime_type = image_mime_type
        self.image_model = image_model
        self.calls: List[dict] = []

    def _is_image_request(self, model: str) -> bool:
        if self.image_model:
            return model == self.image_model
        return "image" in model

    async def generate_content(
        self,
        *,
        model: str,
        contents: Any,
        config: Optional[types.GenerateContentConfig] = None,
    ) -> types.GenerateContentResponse:
        self.calls.append({"model": model, "contents": contents, "config": config})
        LOGGER.info("Returning mock model response", extra={"model": model})
        if self._is_image_request(model):
            return image_response(self.image_data, self.image_mime_type)
        return text_response(self.text, self.grounding_uris)


__all__ = [
    "ContentGenerator",
    "GeminiContentGenerator",
    "MockContentGenerator",
    "image_response",
    "text_response",
]
