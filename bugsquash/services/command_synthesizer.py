"""
Command Synthesizer
===================
Derives the CLI commands that would implement a generated fix.

Display only: nothing in the service executes these strings.

Order is fixed:
    1. analyze  — one, with a 50-char preview of the original input
    2. fix      — one per affected file, in the analysis' order
    3. review   — one, constant
    4. commit   — one, with the commit message verbatim
"""
from typing import List, Sequence

from bugsquash.core.constants import COMMAND_INPUT_PREVIEW_CHARS, COMMAND_TOOL
from bugsquash.models.command import PipelineCommand


def derive_commands(
    original_input: str,
    affected_files: Sequence[str],
    commit_message: str,
) -> List[PipelineCommand]:
    commands: List[PipelineCommand] = [
        PipelineCommand(
            command=f'{COMMAND_TOOL} analyze "{original_input[:COMMAND_INPUT_PREVIEW_CHARS]}..."',
            description="Analyze the bug report and identify affected code",
            kind="analyze",
        )
    ]

    for file in affected_files:
        commands.append(PipelineCommand(
            command=f"{COMMAND_TOOL} fix {file} --auto",
            description=f"Generate fix for {file}",
            kind="fix",
        ))

    commands.append(PipelineCommand(
        command=f"{COMMAND_TOOL} review --all",
        description="Review all generated changes for quality",
        kind="review",
    ))
    commands.append(PipelineCommand(
        command=f'{COMMAND_TOOL} commit -m "{commit_message}"',
        description="Commit all fixes with descriptive message",
        kind="commit",
    ))
    return commands


def format_commands(commands: Sequence[PipelineCommand]) -> str:
    """Render commands as a commented shell transcript."""
    return "\n\n".join(
        f"# Step {i}: {cmd.description}\n$ {cmd.command}"
        for i, cmd in enumerate(commands, start=1)
    )
