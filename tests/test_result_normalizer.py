"""Result normalizer: fence stripping, brace slicing and grounding URLs."""

import json

import pytest
from google.genai import types

from logic.normalizer import (
    ModelOutputError,
    collect_grounding_urls,
    extract_json_span,
    normalize_model_output,
    parse_model_json,
    strip_code_fences,
)


_PAYLOAD = {
    "weather": {"location": "Lisbon", "temperature": "26°C"},
    "outfits": {"day": {"headline": "Linen"}},
}


def test_fenced_answer_with_prose_parses_only_brace_span() -> None:
    raw = (
        "Sure! Based on my research {roughly} here you go:\n"
        f"```json\n{json.dumps(_PAYLOAD)}\n```\n"
        "Let me know if you need anything else."
    )

    cleaned = extract_json_span(strip_code_fences(raw))

    assert cleaned.startswith("{roughly}")
    assert cleaned.endswith(json.dumps(_PAYLOAD))
    with pytest.raises(json.JSONDecodeError):
        json.loads(cleaned)


def test_prose_without_stray_braces_is_discarded() -> None:
    raw = f"Here is the plan:\n```json\n{json.dumps(_PAYLOAD)}\n```\nEnjoy your trip."

    parsed = parse_model_json(raw)

    assert parsed == _PAYLOAD


def test_bare_fence_without_language_tag_is_removed() -> None:
    raw = f"```\n{json.dumps(_PAYLOAD)}\n```"

    assert strip_code_fences(raw) == json.dumps(_PAYLOAD)


def test_text_without_braces_raises_parse_failure() -> None:
    with pytest.raises(json.JSONDecodeError):
        parse_model_json("I'm sorry, I can't help with that request.")


def test_empty_text_raises_parse_failure() -> None:
    with pytest.raises(json.JSONDecodeError):
        parse_model_json("")


def test_truncated_json_is_fatal() -> None:
    with pytest.raises(json.JSONDecodeError):
        parse_model_json('{"weather": {"location": "Lisbon"}, "outfits": {')


def test_non_object_json_is_rejected() -> None:
    with pytest.raises(ModelOutputError):
        parse_model_json("[1, 2, 3]")


def test_missing_keys_propagate_as_none() -> None:
    normalized = normalize_model_output('{"weather": {"location": "Oslo"}}')

    assert normalized.weather == {"location": "Oslo"}
    assert normalized.outfits is None
    assert normalized.grounding_urls == []


def test_grounding_urls_deduplicate_and_drop_empty_values() -> None:
    chunks = [
        types.GroundingChunk(web=types.GroundingChunkWeb(uri="https://a.example")),
        types.GroundingChunk(web=types.GroundingChunkWeb(uri=None)),
        types.GroundingChunk(web=types.GroundingChunkWeb(uri="https://b.example")),
        types.GroundingChunk(),
        types.GroundingChunk(web=types.GroundingChunkWeb(uri="https://a.example")),
        types.GroundingChunk(web=types.GroundingChunkWeb(uri="")),
    ]

    assert collect_grounding_urls(chunks) == ["https://a.example", "https://b.example"]


def test_grounding_urls_accept_plain_dicts() -> None:
    chunks = [{"web": {"uri": "https://c.example"}}, {"web": None}, {}, {"web": {"uri": "https://c.example"}}]

    assert collect_grounding_urls(chunks) == ["https://c.example"]
    assert collect_grounding_urls(None) == []
