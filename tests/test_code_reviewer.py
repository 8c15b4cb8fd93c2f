"""
Code Reviewer Unit Tests
========================
All tests mock the LLM — no real API calls.
"""
import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from bugsquash.agents.code_reviewer import CodeReviewer, build_review_code, parse_review
from bugsquash.core.errors import EmptyResponseError, MalformedReviewError
from bugsquash.llm.client import LLMClient
from bugsquash.llm.prompts import REVIEW_SYSTEM_PROMPT
from bugsquash.models.analysis import CodeChange


def _mock_client(content: str = "", side_effect=None) -> MagicMock:
    client = MagicMock(spec=LLMClient)
    client.complete = AsyncMock(return_value=content, side_effect=side_effect)
    return client


REVIEW_JSON = json.dumps({
    "score": 82,
    "issues": ["No test coverage"],
    "suggestions": ["Add a unit test"],
    "passed": True,
})


# ---------------------------------------------------------------------------
# 1. Review code construction
# ---------------------------------------------------------------------------
def test_build_review_code_uses_after_side_only():
    changes = [
        CodeChange(file="src/a.ts", before="old a", after="new a"),
        CodeChange(file="src/b.ts", before="old b", after="new b\nline 2"),
    ]
    assert build_review_code(changes) == "// src/a.ts\nnew a\n\n// src/b.ts\nnew b\nline 2"


def test_build_review_code_empty():
    assert build_review_code([]) == ""


# ---------------------------------------------------------------------------
# 2. Protocol
# ---------------------------------------------------------------------------
def test_review_parameters():
    client = _mock_client(REVIEW_JSON)
    asyncio.run(CodeReviewer(client=client).review("// a.ts\nx"))

    client.complete.assert_awaited_once_with(
        REVIEW_SYSTEM_PROMPT,
        "Review this code:\n\n// a.ts\nx",
        temperature=0.2,
        max_tokens=1000,
    )


def test_review_prompt_declares_threshold():
    assert "score >= 70" in REVIEW_SYSTEM_PROMPT


def test_review_result_parsed():
    result = asyncio.run(CodeReviewer(client=_mock_client(REVIEW_JSON)).review("x"))
    assert result.score == 82
    assert result.issues == ["No test coverage"]
    assert result.suggestions == ["Add a unit test"]
    assert result.passed is True


def test_declared_verdict_is_kept():
    raw = json.dumps({"score": 40, "issues": [], "suggestions": [], "passed": True})
    result = asyncio.run(CodeReviewer(client=_mock_client(raw)).review("x"))
    assert result.passed is True
    assert result.threshold_passed is False


def test_empty_response_propagates():
    client = _mock_client(side_effect=EmptyResponseError())
    with pytest.raises(EmptyResponseError):
        asyncio.run(CodeReviewer(client=client).review("x"))


# ---------------------------------------------------------------------------
# 3. Parsing
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("raw", [
    "looks good to me",
    '{"score": 150, "passed": true}',
    '{"score": -1, "passed": false}',
    '{"issues": [], "passed": true}',
    '{"score": 90}',
])
def test_parse_review_rejects_bad_output(raw):
    with pytest.raises(MalformedReviewError, match="Failed to parse AI review"):
        parse_review(raw)


def test_parse_review_defaults_lists():
    result = parse_review('{"score": 70, "passed": true}')
    assert result.issues == []
    assert result.suggestions == []
    assert result.threshold_passed is True
