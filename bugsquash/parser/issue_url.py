"""
Issue URL Classifier
====================
Decides whether user input is a GitHub issue URL and recovers the
owner / repo / issue number from it.

Accepted shapes (anywhere in the text):
    https://github.com/owner/repo/issues/123
    http://www.github.com/owner/repo/issues/123
    github.com/owner/repo/issues/123

Owner and repo are taken literally: anything that is not a slash. Trailing
slashes, query strings and fragments after the number are ignored because the
pattern simply stops matching there. No network access, no exceptions; the
only failure mode is None / False.
"""
import re
from typing import Optional

from bugsquash.core.config import GITHUB_WEB_HOST
from bugsquash.models.issue import ParsedIssueRef


def _compile(host: str) -> re.Pattern:
    return re.compile(re.escape(host) + r"/([^/]+)/([^/]+)/issues/(\d+)")


_ISSUE_URL_RE = _compile(GITHUB_WEB_HOST)


def is_issue_url(text: str) -> bool:
    """Return True if ``text`` contains a GitHub issue URL."""
    if not isinstance(text, str):
        return False
    return _ISSUE_URL_RE.search(text) is not None


def parse_issue_url(text: str) -> Optional[ParsedIssueRef]:
    """
    Extract owner, repo and issue number from a GitHub issue URL.

    Parameters
    ----------
    text : str
        Raw user input, possibly containing an issue URL.

    Returns
    -------
    ParsedIssueRef or None
        None when no issue URL is present.
    """
    if not isinstance(text, str):
        return None
    match = _ISSUE_URL_RE.search(text)
    if not match:
        return None
    return ParsedIssueRef(
        owner=match.group(1),
        repo=match.group(2),
        number=int(match.group(3), 10),
    )


def canonical_issue_url(ref: ParsedIssueRef) -> str:
    return f"https://{GITHUB_WEB_HOST}/{ref.owner}/{ref.repo}/issues/{ref.number}"
