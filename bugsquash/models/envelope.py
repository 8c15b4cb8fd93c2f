"""
Result Envelope Model
=====================
The single response object returned by POST /analyze.

Serialised with camelCase keys (rootCause, generatedFix, prUrl, ...) because
that is the shape the dashboard renders. Built once per request by the
orchestrator and never mutated afterwards.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IssueStub(CamelModel):
    title: str
    number: int
    repo: str


class FileFix(CamelModel):
    path: str
    changes: str


class GeneratedFix(CamelModel):
    files: List[FileFix]
    commit_message: str
    description: str


class ReviewSummary(CamelModel):
    score: int
    comments: List[str]
    passed: bool


class ResultEnvelope(CamelModel):
    issue: IssueStub
    root_cause: str
    affected_files: List[str]
    fix_strategy: str
    severity: str
    generated_fix: GeneratedFix
    review: ReviewSummary
    pr_url: str


class HistoryItem(CamelModel):
    id: str
    timestamp: int
    input: str
    issue: IssueStub
    root_cause: str
    severity: Optional[str] = None
    score: int
