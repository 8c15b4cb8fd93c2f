"""
Issue Fetcher
=============
Retrieves a public GitHub issue and folds it into plain text for the analyzer.

Behaviour:
    - One unauthenticated GET per call, no retry, no backoff
    - Redirects are followed (transferred issues, renamed repos answer 301)
    - Unparseable URL → "not_an_issue_url" without touching the network
    - Non-2xx status, transport error or bad JSON → "fetch_failed" (logged)
    - Missing body defaults to "", missing labels to []

Rate limiting on the unauthenticated endpoint is not handled; a throttled
call simply comes back as "fetch_failed".
"""
import logging
from typing import Any, Dict, Optional

import httpx

from bugsquash.core.config import GITHUB_API_URL, GITHUB_TIMEOUT_SECONDS
from bugsquash.models.issue import FetchedIssue, IssueFetchResult, ParsedIssueRef
from bugsquash.parser.issue_url import parse_issue_url

logger = logging.getLogger(__name__)


class IssueFetcher:
    """
    Fetches GitHub issues over the public REST API.

    Usage:
        fetcher = IssueFetcher()
        result = await fetcher.fetch("https://github.com/o/r/issues/1")
        if result.ok:
            text = fold_issue_text(result.issue)
    """

    def __init__(
        self,
        api_url: str = GITHUB_API_URL,
        timeout_seconds: float = GITHUB_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "BugSquash",
        }

    def issue_api_url(self, ref: ParsedIssueRef) -> str:
        return f"{self.api_url}/repos/{ref.owner}/{ref.repo}/issues/{ref.number}"

    async def fetch(self, url: str) -> IssueFetchResult:
        """Fetch an issue and report the outcome as a tagged result."""
        ref = parse_issue_url(url)
        if ref is None:
            return IssueFetchResult.not_an_issue_url()

        api_url = self.issue_api_url(ref)
        logger.info("Fetching GitHub issue %s/%s#%d", ref.owner, ref.repo, ref.number)

        try:
            async with httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout_seconds,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(api_url)
                if not response.is_success:
                    logger.error("GitHub API error: %d for %s", response.status_code, api_url)
                    return IssueFetchResult.failed(f"HTTP {response.status_code}")
                data = response.json()
            return IssueFetchResult.success(_map_issue(data, ref))
        except Exception as e:
            logger.error("Failed to fetch GitHub issue %s: %s", api_url, e)
            return IssueFetchResult.failed(str(e) or e.__class__.__name__)

    async def fetch_issue(self, url: str) -> Optional[FetchedIssue]:
        """Fetch an issue, collapsing every failure into None."""
        result = await self.fetch(url)
        return result.issue if result.ok else None


def _map_issue(data: Dict[str, Any], ref: ParsedIssueRef) -> FetchedIssue:
    labels = [
        label.get("name", "")
        for label in (data.get("labels") or [])
        if isinstance(label, dict)
    ]
    return FetchedIssue(
        title=data.get("title") or "",
        body=data.get("body") or "",
        number=data.get("number") or ref.number,
        repo=ref.repo,
        owner=ref.owner,
        state=data.get("state") or "",
        labels=labels,
        url=data.get("html_url") or "",
    )


def fold_issue_text(issue: FetchedIssue) -> str:
    """Render a fetched issue as the plain-text bug report sent to the analyzer."""
    labels = ", ".join(issue.labels) or "none"
    return (
        f"GitHub Issue #{issue.number}: {issue.title}\n\n"
        f"Repository: {issue.owner}/{issue.repo}\n"
        f"Labels: {labels}\n\n"
        f"{issue.body}"
    )
