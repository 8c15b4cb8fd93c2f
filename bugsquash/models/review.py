"""
Review Result Model
===================
Pydantic model for the reviewer's structured LLM output.

``passed`` is whatever the reviewing model declared. It is not recomputed
from ``score``; ``threshold_passed`` exposes the local reading of the rule
so callers can detect disagreement.
"""
from typing import List

from pydantic import BaseModel, Field

from bugsquash.core.constants import REVIEW_PASS_THRESHOLD


class ReviewResult(BaseModel):
    score: int = Field(ge=0, le=100)
    issues: List[str] = []
    suggestions: List[str] = []
    passed: bool

    @property
    def threshold_passed(self) -> bool:
        return self.score >= REVIEW_PASS_THRESHOLD
