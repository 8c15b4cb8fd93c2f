"""
Placeholder Issue Tracker
=========================
Stands in for issue creation and PR creation, neither of which is integrated.

The numbers produced here are uniform random values with no backing entity.
They are display-only and must not be used as identifiers anywhere else
(history entries get their own ids).
"""
import random
from typing import Optional

from bugsquash.core.constants import (
    PLACEHOLDER_ISSUE_MAX,
    PLACEHOLDER_PR_BASE_URL,
    PLACEHOLDER_PR_MAX,
    PLACEHOLDER_REPO,
)
from bugsquash.models.envelope import IssueStub


class PlaceholderIssueTracker:
    """
    Produces cosmetic issue stubs and PR URLs.

    Parameters
    ----------
    rng : random.Random or None
        Source of randomness; pass a seeded instance for deterministic output.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def create_placeholder(self, title: str) -> IssueStub:
        return IssueStub(
            title=title,
            number=self.rng.randint(1, PLACEHOLDER_ISSUE_MAX),
            repo=PLACEHOLDER_REPO,
        )

    def placeholder_pr_url(self) -> str:
        return f"{PLACEHOLDER_PR_BASE_URL}/{self.rng.randint(1, PLACEHOLDER_PR_MAX)}"
