"""
Code Reviewer
=============
Asks the LLM to review the proposed post-fix code.

The reviewer only ever sees the "after" side of each code change, each
preceded by a ``// <file>`` header. It never sees the original code or a diff.

Failure modes mirror the analyzer: EmptyResponseError, MalformedReviewError
(caught and wrapped here, same as MalformedAnalysisError), LLMRequestError.
"""
import json
import logging
from typing import Iterable, Optional

from pydantic import ValidationError

from bugsquash.core.errors import MalformedReviewError
from bugsquash.llm.client import LLMClient, strip_code_fences
from bugsquash.llm.prompts import (
    REVIEW_MAX_TOKENS,
    REVIEW_SYSTEM_PROMPT,
    REVIEW_TEMPERATURE,
    build_review_prompt,
)
from bugsquash.models.analysis import CodeChange
from bugsquash.models.review import ReviewResult

logger = logging.getLogger(__name__)


def build_review_code(code_changes: Iterable[CodeChange]) -> str:
    """Concatenate every change's post-fix code under a file comment header."""
    return "\n\n".join(f"// {change.file}\n{change.after}" for change in code_changes)


def parse_review(raw: str) -> ReviewResult:
    try:
        data = json.loads(strip_code_fences(raw))
        return ReviewResult.model_validate(data)
    except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as e:
        logger.warning("Rejected review response: %s", e)
        raise MalformedReviewError() from e


class CodeReviewer:
    """Scores generated fixes with a second LLM call."""

    def __init__(self, client: Optional[LLMClient] = None) -> None:
        self.client = client or LLMClient()

    async def review(self, code_text: str) -> ReviewResult:
        raw = await self.client.complete(
            REVIEW_SYSTEM_PROMPT,
            build_review_prompt(code_text),
            temperature=REVIEW_TEMPERATURE,
            max_tokens=REVIEW_MAX_TOKENS,
        )
        result = parse_review(raw)
        if result.passed != result.threshold_passed:
            # Kept as declared by the model
            logger.warning(
                "Reviewer verdict passed=%s disagrees with score %d",
                result.passed, result.score,
            )
        logger.info("Review complete: score=%d passed=%s", result.score, result.passed)
        return result
