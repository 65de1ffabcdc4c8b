"""
Name: Chunk Outcome Reduction Unit Tests

Responsibilities:
  - Validate the partial-failure rule (raise only if last chunk failed
    and nothing was accumulated)
  - Validate summary messages
"""

import pytest

from fragment_extraction.application.chunk_outcomes import (
    ChunkFailure,
    ChunkSuccess,
    build_summary,
    count_failures,
    reduce_chunk_outcomes,
)
from fragment_extraction.crosscutting.exceptions import ExtractionFailedError
from fragment_extraction.domain.entities import Fragment, FragmentType

pytestmark = pytest.mark.unit


def _frag(content):
    return Fragment(type=FragmentType.FACT, content=content)


def test_successes_are_concatenated_in_order():
    outcomes = [
        ChunkSuccess(0, (_frag("a"), _frag("b"))),
        ChunkSuccess(1, ()),
        ChunkSuccess(2, (_frag("c"),)),
    ]

    assert [f.content for f in reduce_chunk_outcomes(outcomes)] == ["a", "b", "c"]


def test_failure_after_success_is_swallowed():
    outcomes = [ChunkSuccess(0, (_frag("a"),)), ChunkFailure(1, RuntimeError("boom"))]

    assert [f.content for f in reduce_chunk_outcomes(outcomes)] == ["a"]


def test_all_failures_raise_last_error():
    first = RuntimeError("first")
    last = RuntimeError("API error")
    outcomes = [ChunkFailure(0, first), ChunkFailure(1, last)]

    with pytest.raises(ExtractionFailedError, match="API error") as exc_info:
        reduce_chunk_outcomes(outcomes)

    assert exc_info.value.__cause__ is last
    assert exc_info.value.original_error is last
    assert exc_info.value.failures == (first, last)
    assert exc_info.value.chunk_count == 2


def test_early_failure_with_empty_successful_tail_returns_empty():
    outcomes = [ChunkFailure(0, RuntimeError("boom")), ChunkSuccess(1, ())]

    assert reduce_chunk_outcomes(outcomes) == ()


def test_empty_outcomes_return_empty():
    assert reduce_chunk_outcomes([]) == ()


def test_count_failures():
    outcomes = [ChunkFailure(0, ValueError()), ChunkSuccess(1, ()), ChunkFailure(2, ValueError())]

    assert count_failures(outcomes) == 2


def test_error_without_message_uses_type_name():
    with pytest.raises(ExtractionFailedError, match="TimeoutError"):
        reduce_chunk_outcomes([ChunkFailure(0, TimeoutError())])


@pytest.mark.parametrize(
    "count, expected",
    [
        (0, "記憶のかけらが見つかりませんでした"),
        (1, "1件の記憶のかけらを抽出しました"),
        (12, "12件の記憶のかけらを抽出しました"),
    ],
)
def test_build_summary(count, expected):
    assert build_summary(count) == expected
