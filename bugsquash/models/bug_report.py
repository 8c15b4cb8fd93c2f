"""
Bug Report Model
================
Pydantic model for one incoming bug report. Lives only for the duration of a
single request.

Fields:
    raw_input       — text exactly as the user submitted it
    source_url      — the GitHub issue URL when raw_input was recognised as one
    analysis_input  — the text actually sent to the analyzer (raw_input, or the
                      folded issue text when the issue was fetched)
"""
from typing import Optional
from pydantic import BaseModel


class BugReport(BaseModel):
    raw_input: str
    source_url: Optional[str] = None
    analysis_input: str = ""

    @property
    def text(self) -> str:
        return self.analysis_input or self.raw_input
