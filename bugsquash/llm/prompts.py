"""
LLM Prompts
===========
Centralised store for analyzer and reviewer prompts.

Both system prompts pin an exact JSON shape; the provider is also asked for
JSON mode, so the reply must be a single JSON object.

The review prompt states the pass rule (score >= 70) to the model. The rule
is not re-applied to the model's verdict here.
"""
from bugsquash.core.constants import REVIEW_PASS_THRESHOLD


# ---------------------------------------------------------------------------
# Completion parameters
# ---------------------------------------------------------------------------
ANALYSIS_TEMPERATURE = 0.3
ANALYSIS_MAX_TOKENS = 2000

REVIEW_TEMPERATURE = 0.2
REVIEW_MAX_TOKENS = 1000


# ---------------------------------------------------------------------------
# System Prompts
# ---------------------------------------------------------------------------
ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert software engineer specialized in debugging and fixing code issues.\n"
    "Analyze the given bug report, error log, or GitHub issue and provide a detailed analysis.\n"
    "\n"
    "Respond in this exact JSON format:\n"
    "{\n"
    '  "rootCause": "Clear explanation of what\'s causing the bug",\n'
    '  "affectedFiles": ["list", "of", "likely", "affected", "files"],\n'
    '  "fixStrategy": "Step-by-step strategy to fix this issue",\n'
    '  "severity": "low|medium|high|critical",\n'
    '  "suggestedFix": {\n'
    '    "description": "What the fix does",\n'
    '    "codeChanges": [\n'
    "      {\n"
    '        "file": "path/to/file.ts",\n'
    '        "before": "code before fix",\n'
    '        "after": "code after fix"\n'
    "      }\n"
    "    ],\n"
    '    "commitMessage": "fix: concise commit message"\n'
    "  }\n"
    "}\n"
    "\n"
    "Be specific and practical. If you can infer the programming language and framework, "
    "tailor your response accordingly.\n"
    "Always provide working code that would actually fix the issue."
)

REVIEW_SYSTEM_PROMPT = (
    "You are a code reviewer. Review the provided code changes and respond in JSON format:\n"
    "{\n"
    '  "score": 0-100,\n'
    '  "issues": ["list of issues found"],\n'
    '  "suggestions": ["list of improvements"],\n'
    f'  "passed": true/false (true if score >= {REVIEW_PASS_THRESHOLD})\n'
    "}"
)


# ---------------------------------------------------------------------------
# User Prompts
# ---------------------------------------------------------------------------
def build_analysis_prompt(input_text: str) -> str:
    return f"Analyze this bug and suggest a fix:\n\n{input_text}"


def build_review_prompt(code_text: str) -> str:
    return f"Review this code:\n\n{code_text}"
