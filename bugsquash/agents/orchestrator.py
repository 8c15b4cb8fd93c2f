"""
Pipeline Orchestrator
=====================
Drives one bug report through Classify → Fetch → Analyze → Review → Assemble.

Steps (strictly sequential, the reviewer depends on the analysis):
    1. Reject missing / non-string / blank input          → InvalidInputError
    2. Reject a missing LLM credential                     → MisconfiguredServiceError
    3. If the input is a GitHub issue URL, fetch the issue and analyse the
       folded issue text; on a failed fetch, analyse the raw text instead
    4. Analyze                                             → BugAnalysis
    5. Review the post-fix code of every change            → ReviewResult
    6. Assemble the ResultEnvelope

Any failure in steps 4–5 aborts the run; a partially populated envelope is
never returned. Issue number and PR URL in the envelope come from the
placeholder tracker and are cosmetic.
"""
import logging
import re
import time
from typing import Any, Optional

from bugsquash.agents.bug_analyzer import BugAnalyzer
from bugsquash.agents.code_reviewer import CodeReviewer, build_review_code
from bugsquash.core.constants import (
    DEFAULT_TITLE,
    ERROR_MESSAGE_MAX_CHARS,
    ISSUE_MARKER,
    SUGGESTION_MARKER,
    TITLE_MAX_CHARS,
)
from bugsquash.core.errors import InvalidInputError, MisconfiguredServiceError
from bugsquash.llm.client import LLMClient
from bugsquash.llm.provider import ProviderConfig, get_provider
from bugsquash.models.analysis import BugAnalysis
from bugsquash.models.bug_report import BugReport
from bugsquash.models.envelope import FileFix, GeneratedFix, ResultEnvelope, ReviewSummary
from bugsquash.models.review import ReviewResult
from bugsquash.parser.issue_url import canonical_issue_url, parse_issue_url
from bugsquash.services.issue_fetcher import IssueFetcher, fold_issue_text
from bugsquash.services.issue_tracker import PlaceholderIssueTracker

logger = logging.getLogger(__name__)

_ERROR_TITLE_RE = re.compile(r"(TypeError|ReferenceError|SyntaxError|Error):\s*(.+)")


# ---------------------------------------------------------------------------
# Envelope helpers
# ---------------------------------------------------------------------------
def extract_title(text: str) -> str:
    """
    Derive a display title from a bug report.

    A recognised error line wins ("TypeError: <message[:50]>"); otherwise the
    first non-blank line, truncated to 60 characters.
    """
    error_match = _ERROR_TITLE_RE.search(text)
    if error_match:
        return f"{error_match.group(1)}: {error_match.group(2)[:ERROR_MESSAGE_MAX_CHARS]}"

    lines = [line for line in text.split("\n") if line.strip()]
    first_line = lines[0] if lines else DEFAULT_TITLE
    return first_line[:TITLE_MAX_CHARS]


def format_diff(before: str, after: str) -> str:
    """
    Render a before/after pair as diff-like text.

    Every before line is marked "- " and every after line "+ ", in that
    order. Lines common to both sides are not collapsed.
    """
    before_lines = [f"- {line}" for line in before.split("\n")]
    after_lines = [f"+ {line}" for line in after.split("\n")]
    return "\n".join(before_lines + after_lines)


def review_comments(review: ReviewResult) -> list[str]:
    return (
        [f"{ISSUE_MARKER} {issue}" for issue in review.issues]
        + [f"{SUGGESTION_MARKER} {suggestion}" for suggestion in review.suggestions]
    )


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------
class PipelineOrchestrator:
    """
    Runs the full bug-report-to-fix pipeline for one request.

    Parameters
    ----------
    analyzer, reviewer : optional
        LLM-backed stages. When both are omitted they share one LLMClient,
        which is closed at the end of each run.
    fetcher : IssueFetcher or None
    tracker : PlaceholderIssueTracker or None
    provider : ProviderConfig or None
        Used for the credential check (defaults to the configured provider).
    """

    def __init__(
        self,
        analyzer: Optional[BugAnalyzer] = None,
        reviewer: Optional[CodeReviewer] = None,
        fetcher: Optional[IssueFetcher] = None,
        tracker: Optional[PlaceholderIssueTracker] = None,
        provider: Optional[ProviderConfig] = None,
    ) -> None:
        self.provider = provider or get_provider()
        self._client: Optional[LLMClient] = None
        if analyzer is None or reviewer is None:
            self._client = LLMClient(self.provider)
        self.analyzer = analyzer or BugAnalyzer(self._client)
        self.reviewer = reviewer or CodeReviewer(self._client)
        self.fetcher = fetcher or IssueFetcher()
        self.tracker = tracker or PlaceholderIssueTracker()

    async def run(self, raw_input: Any) -> ResultEnvelope:
        # --- Step 1: input ---
        if not isinstance(raw_input, str) or not raw_input.strip():
            raise InvalidInputError()

        # --- Step 2: credential ---
        if not self.provider.is_configured:
            logger.error("%s is missing from environment/config", self.provider.key_variable)
            raise MisconfiguredServiceError(f"{self.provider.key_variable} not configured")

        start = time.time()
        try:
            report = await self.normalize(raw_input)

            # --- Step 4: analyze ---
            analysis = await self.analyzer.analyze(report.text)

            # --- Step 5: review ---
            code_to_review = build_review_code(analysis.suggested_fix.code_changes)
            review = await self.reviewer.review(code_to_review)
        finally:
            if self._client is not None:
                await self._client.close()

        envelope = self.assemble(report, analysis, review)
        logger.info(
            "Pipeline finished in %.1fs — severity=%s score=%d passed=%s",
            time.time() - start, analysis.severity, review.score, review.passed,
        )
        return envelope

    async def normalize(self, raw_input: str) -> BugReport:
        """Step 3: replace an issue URL with the fetched issue's text when possible."""
        report = BugReport(raw_input=raw_input, analysis_input=raw_input)
        ref = parse_issue_url(raw_input)
        if ref is None:
            return report

        report.source_url = canonical_issue_url(ref)
        result = await self.fetcher.fetch(raw_input)
        if result.ok:
            report.analysis_input = fold_issue_text(result.issue)
            logger.info("Using fetched issue #%d as analysis input", result.issue.number)
        else:
            logger.warning(
                "Issue fetch %s (%s); analysing raw input instead",
                result.status, result.reason,
            )
        return report

    def assemble(
        self,
        report: BugReport,
        analysis: BugAnalysis,
        review: ReviewResult,
    ) -> ResultEnvelope:
        fix = analysis.suggested_fix
        return ResultEnvelope(
            issue=self.tracker.create_placeholder(extract_title(report.text)),
            root_cause=analysis.root_cause,
            affected_files=analysis.affected_files,
            fix_strategy=analysis.fix_strategy,
            severity=analysis.severity,
            generated_fix=GeneratedFix(
                files=[
                    FileFix(path=change.file, changes=format_diff(change.before, change.after))
                    for change in fix.code_changes
                ],
                commit_message=fix.commit_message,
                description=fix.description,
            ),
            review=ReviewSummary(
                score=review.score,
                comments=review_comments(review),
                passed=review.passed,
            ),
            pr_url=self.tracker.placeholder_pr_url(),
        )
