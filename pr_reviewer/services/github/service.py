"""GitHub service - business logic layer."""

import httpx
from github import GithubException

from pr_reviewer.core.exceptions import EventPayloadError, ExternalServiceError, ReviewSubmissionError
from pr_reviewer.core.logging import get_logger
from pr_reviewer.core.pr_event import PullRequestEvent
from pr_reviewer.schemas.review import ReviewComment
from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.reviewer.schemas import PullRequestContext

logger = get_logger("github.service")


def get_pull_request_context(
    client: GitHubClient,
    owner: str,
    repo: str,
    pr_number: int,
) -> PullRequestContext:
    """Get title and description of a pull request."""
    logger.info(f"Fetching PR: {owner}/{repo}#{pr_number}")
    try:
        pr = client.fetch_pull_request(owner, repo, pr_number)
    except GithubException as e:
        raise ExternalServiceError("GitHub", f"cannot fetch {owner}/{repo}#{pr_number}: {e}") from e

    return PullRequestContext(
        owner=owner,
        repo=repo,
        pull_number=pr_number,
        title=pr.title or "",
        description=pr.body or "",
    )


def get_diff(client: GitHubClient, event: PullRequestEvent) -> str | None:
    """Get the diff to review for an opened or synchronize event.

    ``opened`` reviews the whole PR, ``synchronize`` only the pushed commits.
    Returns None for any other action.
    """
    try:
        if event.action == "opened":
            logger.info(f"Fetching PR diff: {event.owner}/{event.repo}#{event.number}")
            return client.fetch_pull_request_diff(event.owner, event.repo, event.number)
        if event.action == "synchronize":
            if not event.before or not event.after:
                raise EventPayloadError("synchronize event without before/after commits")
            logger.info(f"Fetching compare diff: {event.before}...{event.after}")
            return client.fetch_compare_diff(event.owner, event.repo, event.before, event.after)
    except httpx.HTTPError as e:
        raise ExternalServiceError("GitHub", f"cannot fetch diff: {e}") from e

    return None


def submit_review(
    client: GitHubClient,
    pr: PullRequestContext,
    comments: list[ReviewComment],
    event: str = "COMMENT",
) -> None:
    """Submit all comments as a single review."""
    try:
        pull = client.fetch_pull_request(pr.owner, pr.repo, pr.pull_number)
        client.create_review(pull, [c.model_dump() for c in comments], event)
        logger.info(f"Submitted review with {len(comments)} comments")
    except GithubException as e:
        logger.error(f"Failed to submit review: {e}")
        raise ReviewSubmissionError(pr.owner, pr.repo, pr.pull_number, str(e)) from e
