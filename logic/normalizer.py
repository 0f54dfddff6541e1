"""Turn free-form model answers into the advice payload.

The model is told to answer with a bare JSON object but often wraps it in a
fenced code block or adds prose around it. Cleanup is deliberately literal:
drop fence markers, trim, keep the span from the first ``{`` to the last
``}`` and parse that. Anything that still is not JSON is a hard error.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

_JSON_FENCE = "```json"
_FENCE = "```"


class ModelOutputError(ValueError):
    """Raised when the model answer parses but is not a JSON object."""


@dataclass
class NormalizedAdvice:
    """Parsed advice before schema checks.

    ``weather`` and ``outfits`` are whatever the model sent, ``None`` when a
    key was omitted.
    """

    weather: Any
    outfits: Any
    grounding_urls: List[str] = field(default_factory=list)


def strip_code_fences(text: str) -> str:
    return text.replace(_JSON_FENCE, "").replace(_FENCE, "").strip()


def extract_json_span(text: str) -> str:
    """Slice ``text`` to the outermost brace pair, or return it unchanged."""

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace != -1 and last_brace != -1:
        return text[first_brace : last_brace + 1]
    return text


def parse_model_json(raw_text: Optional[str]) -> dict:
    """Clean and parse a model answer.

    Raises ``json.JSONDecodeError`` for unparseable text and
    :class:`ModelOutputError` when the JSON is not an object.
    """

    cleaned = extract_json_span(strip_code_fences(raw_text or ""))
    parsed = json.loads(cleaned)
    if not isinstance(parsed, dict):
        raise ModelOutputError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _chunk_uri(chunk: Any) -> Optional[str]:
    if isinstance(chunk, dict):
        web = chunk.get("web") or {}
        return web.get("uri") if isinstance(web, dict) else None
    web = getattr(chunk, "web", None)
    return getattr(web, "uri", None) if web is not None else None


def collect_grounding_urls(chunks: Optional[Iterable[Any]]) -> List[str]:
    """Distinct web source URIs, first occurrence wins."""

    uris = (_chunk_uri(chunk) for chunk in chunks or [])
    return list(dict.fromkeys(uri for uri in uris if uri))


def normalize_model_output(raw_text: Optional[str], grounding_chunks: Optional[Iterable[Any]] = None) -> NormalizedAdvice:
    parsed = parse_model_json(raw_text)
    return NormalizedAdvice(
        weather=parsed.get("weather"),
        outfits=parsed.get("outfits"),
        grounding_urls=collect_grounding_urls(grounding_chunks),
    )


__all__ = [
    "ModelOutputError",
    "NormalizedAdvice",
    "collect_grounding_urls",
    "extract_json_span",
    "normalize_model_output",
    "parse_model_json",
    "strip_code_fences",
]
