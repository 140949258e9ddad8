"""GitHub API client - data layer."""

from typing import Optional

import httpx
from github import Auth, Github
from github.PullRequest import PullRequest
from loguru import logger

from pr_reviewer.config import Settings

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class GitHubClient:
    """PyGithub for PR metadata and reviews, plain HTTP for raw diffs."""

    def __init__(
        self,
        settings: Settings,
        github: Optional[Github] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._github = github or Github(
            auth=Auth.Token(settings.github_token),
            base_url=settings.github_api_url,
        )
        self._http = http_client or httpx.Client(
            base_url=settings.github_api_url,
            headers={
                "Authorization": f"Bearer {settings.github_token}",
                "X-GitHub-Api-Version": "2022-11-28",
            },
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()
        self._github.close()

    def fetch_pull_request(self, owner: str, repo: str, pr_number: int) -> PullRequest:
        """Fetch a pull request from GitHub API."""
        repository = self._github.get_repo(f"{owner}/{repo}")
        return repository.get_pull(pr_number)

    def _fetch_diff(self, url: str) -> str:
        response = self._http.get(url, headers={"Accept": DIFF_MEDIA_TYPE})
        response.raise_for_status()
        return response.text

    def fetch_pull_request_diff(self, owner: str, repo: str, pr_number: int) -> str:
        """Fetch the full unified diff of a PR."""
        return self._fetch_diff(f"/repos/{owner}/{repo}/pulls/{pr_number}")

    def fetch_compare_diff(self, owner: str, repo: str, base: str, head: str) -> str:
        """Fetch the unified diff between two commits."""
        return self._fetch_diff(f"/repos/{owner}/{repo}/compare/{base}...{head}")

    def create_review(
        self,
        pr: PullRequest,
        comments: list[dict],
        event: str = "COMMENT",
    ) -> None:
        """Create a review on a PR."""
        pr.create_review(event=event, comments=comments)
        logger.info(f"Created review with {len(comments)} comments")
