"""
Pipeline Command Model
======================
One display-only CLI line shown next to a result. Nothing executes these.
"""
from typing import Literal
from pydantic import BaseModel

CommandKind = Literal["analyze", "fix", "review", "commit"]


class PipelineCommand(BaseModel):
    command: str
    description: str
    kind: CommandKind
