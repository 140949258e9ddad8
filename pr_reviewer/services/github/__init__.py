"""GitHub service."""

from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.github.service import (
    get_diff,
    get_pull_request_context,
    submit_review,
)

__all__ = [
    "GitHubClient",
    "get_diff",
    "get_pull_request_context",
    "submit_review",
]
