"""
Bug Analyzer
============
Turns a normalized bug report into a structured BugAnalysis using the LLM.

Protocol:
    - System prompt: fixed JSON template (see llm/prompts.py)
    - User prompt: "Analyze this bug and suggest a fix:" + the report verbatim
    - temperature 0.3, max_tokens 2000, JSON mode
    - Exactly one attempt

Failure modes:
    - EmptyResponseError      — provider returned no content
    - MalformedAnalysisError  — content is not JSON, or not the expected shape
    - LLMRequestError         — transport / HTTP failure

There is no partial acceptance: an analysis that does not validate as a whole
is rejected as a whole.
"""
import json
import logging
from typing import Optional

from pydantic import ValidationError

from bugsquash.core.errors import MalformedAnalysisError
from bugsquash.llm.client import LLMClient, strip_code_fences
from bugsquash.llm.prompts import (
    ANALYSIS_MAX_TOKENS,
    ANALYSIS_SYSTEM_PROMPT,
    ANALYSIS_TEMPERATURE,
    build_analysis_prompt,
)
from bugsquash.models.analysis import BugAnalysis

logger = logging.getLogger(__name__)


def parse_analysis(raw: str) -> BugAnalysis:
    """
    Parse the analyzer's raw LLM output.

    Raises
    ------
    MalformedAnalysisError
        If ``raw`` is not JSON or does not match the BugAnalysis shape.
    """
    try:
        data = json.loads(strip_code_fences(raw))
        return BugAnalysis.model_validate(data)
    except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as e:
        logger.warning("Rejected analysis response: %s", e)
        raise MalformedAnalysisError() from e


class BugAnalyzer:
    """
    Sends bug reports to the LLM for root-cause analysis and fix synthesis.

    Parameters
    ----------
    client : LLMClient or None
        Completion client (auto-created if not provided).
    """

    def __init__(self, client: Optional[LLMClient] = None) -> None:
        self.client = client or LLMClient()

    async def analyze(self, input_text: str) -> BugAnalysis:
        logger.info("Analyzing bug report (%d chars)", len(input_text))
        raw = await self.client.complete(
            ANALYSIS_SYSTEM_PROMPT,
            build_analysis_prompt(input_text),
            temperature=ANALYSIS_TEMPERATURE,
            max_tokens=ANALYSIS_MAX_TOKENS,
        )
        analysis = parse_analysis(raw)
        logger.info(
            "Analysis complete: severity=%s files=%d changes=%d",
            analysis.severity,
            len(analysis.affected_files),
            len(analysis.suggested_fix.code_changes),
        )
        return analysis
