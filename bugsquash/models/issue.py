"""
Issue Models
============
Shapes for GitHub issue references and fetched issues.

ParsedIssueRef   — owner / repo / number recovered from a pasted URL
FetchedIssue     — the subset of the GitHub issue payload we keep
IssueFetchResult — tagged outcome of a fetch, so callers can tell
                   "not an issue URL" apart from "the fetch failed"
"""
from typing import List, Literal, Optional
from pydantic import BaseModel


class ParsedIssueRef(BaseModel):
    owner: str
    repo: str
    number: int


class FetchedIssue(BaseModel):
    title: str
    body: str = ""
    number: int
    repo: str
    owner: str
    state: str = ""
    labels: List[str] = []
    url: str = ""


FetchStatus = Literal["ok", "not_an_issue_url", "fetch_failed"]


class IssueFetchResult(BaseModel):
    status: FetchStatus
    issue: Optional[FetchedIssue] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok" and self.issue is not None

    @classmethod
    def success(cls, issue: FetchedIssue) -> "IssueFetchResult":
        return cls(status="ok", issue=issue)

    @classmethod
    def not_an_issue_url(cls) -> "IssueFetchResult":
        return cls(status="not_an_issue_url", reason="Input is not a GitHub issue URL")

    @classmethod
    def failed(cls, reason: str) -> "IssueFetchResult":
        return cls(status="fetch_failed", reason=reason)
