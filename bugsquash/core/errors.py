"""
Errors
======
Every failure the pipeline can surface to a caller.

Each error carries the HTTP status the API layer responds with. The message
is the only detail exposed to the caller, as ``{"error": message}``.

Issue-fetch failures are deliberately absent: the fetcher reports them as a
``fetch_failed`` result and the orchestrator falls back to the raw text.
"""


class BugSquashError(Exception):
    """Base class for pipeline failures."""

    status_code = 500
    default_message = "Analysis failed"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(BugSquashError):
    status_code = 400
    default_message = "Input is required"


class MisconfiguredServiceError(BugSquashError):
    default_message = "LLM API key not configured"


class LLMRequestError(BugSquashError):
    default_message = "LLM request failed"


class EmptyResponseError(BugSquashError):
    default_message = "No response from AI"


class MalformedAnalysisError(BugSquashError):
    default_message = "Failed to parse AI response"


class MalformedReviewError(BugSquashError):
    default_message = "Failed to parse AI review"
