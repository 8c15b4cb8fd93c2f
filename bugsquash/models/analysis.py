"""
Bug Analysis Model
==================
Pydantic model for the analyzer's structured LLM output.

The LLM is asked for camelCase keys (rootCause, affectedFiles, ...). The
models accept those aliases and also the snake_case field names, so tests and
internal callers can build them either way.

Fields:
    root_cause      — what is causing the bug
    affected_files  — likely affected files, in the order the LLM listed them
    fix_strategy    — step-by-step strategy
    severity        — low / medium / high / critical (case-insensitive on input)
    suggested_fix   — description, before/after code changes, commit message
"""
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bugsquash.core.constants import SEVERITY_LEVELS

Severity = Literal["low", "medium", "high", "critical"]


class CodeChange(BaseModel):
    file: str
    before: str
    after: str


class SuggestedFix(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str
    code_changes: List[CodeChange] = Field(alias="codeChanges")
    commit_message: str = Field(alias="commitMessage")


class BugAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    root_cause: str = Field(alias="rootCause")
    affected_files: List[str] = Field(alias="affectedFiles")
    fix_strategy: str = Field(alias="fixStrategy")
    severity: Severity
    suggested_fix: SuggestedFix = Field(alias="suggestedFix")

    @field_validator("severity", mode="before")
    @classmethod
    def normalise_severity(cls, v):
        if isinstance(v, str) and v.strip().lower() in SEVERITY_LEVELS:
            return v.strip().lower()
        return v
