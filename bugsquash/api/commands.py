"""
POST /commands
Derives the display-only CLI steps for a completed analysis.
"""
from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from bugsquash.services.command_synthesizer import derive_commands, format_commands

router = APIRouter(tags=["Pipeline"])


class CommandsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    input: str
    affected_files: List[str] = Field(default_factory=list, alias="affectedFiles")
    commit_message: str = Field(default="", alias="commitMessage")


@router.post("/commands")
async def commands(request: CommandsRequest):
    steps = derive_commands(request.input, request.affected_files, request.commit_message)
    return {
        "commands": [step.model_dump() for step in steps],
        "script": format_commands(steps),
    }
