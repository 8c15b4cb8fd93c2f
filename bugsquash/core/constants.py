"""
Constants
Centralised storage for severity levels, review threshold, and display limits.
"""
SEVERITY_LEVELS = ("low", "medium", "high", "critical")
REVIEW_PASS_THRESHOLD = 70

# Title extraction
DEFAULT_TITLE = "Bug Report"
TITLE_MAX_CHARS = 60
ERROR_MESSAGE_MAX_CHARS = 50

# Placeholder issue / PR stubs (cosmetic, no backing tracker)
PLACEHOLDER_REPO = "your-repo"
PLACEHOLDER_ISSUE_MAX = 100
PLACEHOLDER_PR_BASE_URL = "https://github.com/user/repo/pull"
PLACEHOLDER_PR_MAX = 200

# History
HISTORY_KEY = "bugsquash_history"
HISTORY_INPUT_MAX_CHARS = 200

# Command synthesis
COMMAND_TOOL = "cline"
COMMAND_INPUT_PREVIEW_CHARS = 50

# Review comment markers
ISSUE_MARKER = "⚠️"
SUGGESTION_MARKER = "\U0001f4a1"
