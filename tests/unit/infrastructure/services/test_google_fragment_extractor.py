"""
Name: Google Fragment Extractor Unit Tests

Responsibilities:
  - Validate prompt rendering (chunk, hints, context)
  - Validate JSON response parsing and mapping to Fragment
  - Validate SDK errors map to LLMError

Notes:
  - genai client is a MagicMock; no network.
"""

import json
from unittest.mock import MagicMock

import pytest

from fragment_extraction.crosscutting.exceptions import LLMError
from fragment_extraction.domain.entities import FragmentHint, FragmentType
from fragment_extraction.infrastructure.services.llm import (
    ExtractionResponse,
    GoogleFragmentExtractor,
)
from fragment_extraction.infrastructure.services.llm.google_fragment_extractor import (
    render_hints,
)

pytestmark = pytest.mark.unit


def _no_retry(fn):
    return fn


def _client_returning(text):
    client = MagicMock()
    response = MagicMock()
    response.parsed = None
    response.text = text
    client.models.generate_content.return_value = response
    return client


def _extractor(client, **kwargs):
    return GoogleFragmentExtractor(client=client, retry_decorator=_no_retry, **kwargs)


PAYLOAD = json.dumps(
    {
        "fragments": [
            {
                "type": "ACHIEVEMENT",
                "content": "売上を120%に伸ばした",
                "skills": ["営業"],
                "keywords": ["売上"],
            },
            {"type": "UNKNOWN", "content": "東京都在住"},
            {"type": "ACTION", "content": "   "},
        ]
    },
    ensure_ascii=False,
)


def test_requires_api_key_or_client():
    with pytest.raises(LLMError):
        GoogleFragmentExtractor(api_key="")


def test_maps_payload_to_fragments():
    extractor = _extractor(_client_returning(PAYLOAD))

    fragments = extractor.extract_fragments("本文")

    assert [(f.type, f.content) for f in fragments] == [
        (FragmentType.ACHIEVEMENT, "売上を120%に伸ばした"),
        (FragmentType.FACT, "東京都在住"),
    ]
    assert fragments[0].skills == ("営業",)
    assert fragments[1].keywords == ()


def test_uses_parsed_response_when_available():
    client = MagicMock()
    response = MagicMock()
    response.parsed = ExtractionResponse.model_validate(
        {"fragments": [{"type": "VALUE", "content": "誠実さ"}]}
    )
    client.models.generate_content.return_value = response

    fragments = _extractor(client).extract_fragments("本文")

    assert [f.content for f in fragments] == ["誠実さ"]


def test_prompt_contains_chunk_hints_and_context():
    client = _client_returning('{"fragments": []}')
    extractor = _extractor(client, model_id="gemini-test")
    hints = (FragmentHint(FragmentType.SKILL_USAGE, "Goで API を実装"),)

    extractor.extract_fragments("チャンク本文", existing_fragments=hints, context="職務経歴書")

    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    prompt = kwargs["contents"]
    assert "チャンク本文" in prompt
    assert "- [SKILL_USAGE] Goで API を実装" in prompt
    assert "職務経歴書" in prompt
    assert "{chunk}" not in prompt
    assert kwargs["config"].response_mime_type == "application/json"


def test_blank_chunk_skips_model_call():
    client = _client_returning(PAYLOAD)

    assert _extractor(client).extract_fragments("   ") == []
    client.models.generate_content.assert_not_called()


def test_sdk_error_becomes_llm_error():
    client = MagicMock()
    boom = RuntimeError("500 INTERNAL")
    client.models.generate_content.side_effect = boom

    with pytest.raises(LLMError) as exc_info:
        _extractor(client).extract_fragments("本文")

    assert exc_info.value.__cause__ is boom


@pytest.mark.parametrize("text", ["", "not json", '{"fragments": "nope"}'])
def test_unreadable_response_becomes_llm_error(text):
    with pytest.raises(LLMError):
        _extractor(_client_returning(text)).extract_fragments("本文")


def test_retry_decorator_wraps_generate_content():
    client = _client_returning('{"fragments": []}')
    decorator = MagicMock(side_effect=lambda fn: fn)

    _extractor_with_decorator = GoogleFragmentExtractor(client=client, retry_decorator=decorator)

    decorator.assert_called_once_with(client.models.generate_content)
    assert _extractor_with_decorator.extract_fragments("x") == []


def test_render_hints():
    assert render_hints(None) == "（なし）"
    assert render_hints(
        [FragmentHint(FragmentType.FACT, "a"), FragmentHint(FragmentType.VALUE, "b")]
    ) == "- [FACT] a\n- [VALUE] b"
