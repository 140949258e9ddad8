"""Tests for the GitHub client and service layer."""

from unittest.mock import Mock

import httpx
import pytest
from github import GithubException

from pr_reviewer.core.exceptions import EventPayloadError, ExternalServiceError, ReviewSubmissionError
from pr_reviewer.core.pr_event import PullRequestEvent
from pr_reviewer.schemas.review import ReviewComment
from pr_reviewer.services.github.client import DIFF_MEDIA_TYPE, GitHubClient
from pr_reviewer.services.github.service import get_diff, get_pull_request_context, submit_review
from tests.conftest import ADDED_FILE_DIFF, make_settings


def make_event(action="opened", before="aaa111", after="bbb222") -> PullRequestEvent:
    return PullRequestEvent.model_validate(
        {
            "action": action,
            "number": 7,
            "before": before,
            "after": after,
            "repository": {"name": "widgets", "owner": {"login": "acme"}},
        }
    )


class TestGitHubClient:
    """Tests for GitHubClient diff fetching."""

    def make_client(self, handler):
        settings = make_settings()
        http_client = httpx.Client(
            base_url="https://api.github.test",
            transport=httpx.MockTransport(handler),
        )
        return GitHubClient(settings, github=Mock(), http_client=http_client)

    def test_pull_request_diff(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=ADDED_FILE_DIFF)

        client = self.make_client(handler)

        assert client.fetch_pull_request_diff("acme", "widgets", 7) == ADDED_FILE_DIFF
        assert seen[0].url.path == "/repos/acme/widgets/pulls/7"
        assert seen[0].headers["Accept"] == DIFF_MEDIA_TYPE

    def test_compare_diff(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="")

        self.make_client(handler).fetch_compare_diff("acme", "widgets", "aaa", "bbb")

        assert seen[0].url.path == "/repos/acme/widgets/compare/aaa...bbb"

    def test_diff_http_error(self):
        client = self.make_client(lambda request: httpx.Response(404))

        with pytest.raises(httpx.HTTPStatusError):
            client.fetch_pull_request_diff("acme", "widgets", 7)

    def test_create_review_posts_comments(self):
        client = self.make_client(lambda request: httpx.Response(200))
        pull = Mock()
        comments = [{"path": "a.py", "position": 3, "body": "x"}]

        client.create_review(pull, comments)

        pull.create_review.assert_called_once_with(event="COMMENT", comments=comments)


class TestGetPullRequestContext:
    """Tests for get_pull_request_context function."""

    def test_null_body_becomes_empty(self, github):
        pr = get_pull_request_context(github, "acme", "widgets", 7)

        assert pr.title == "Add cache"
        assert pr.description == ""
        assert pr.ref == "acme/widgets#7"
        github.fetch_pull_request.assert_called_once_with("acme", "widgets", 7)

    def test_fetch_failure(self, github):
        github.fetch_pull_request.side_effect = GithubException(404, {"message": "Not Found"}, None)

        with pytest.raises(ExternalServiceError):
            get_pull_request_context(github, "acme", "widgets", 7)


class TestGetDiff:
    """Tests for get_diff function."""

    def test_opened_uses_pull_request_diff(self, github):
        assert get_diff(github, make_event("opened")) == ADDED_FILE_DIFF

        github.fetch_pull_request_diff.assert_called_once_with("acme", "widgets", 7)
        github.fetch_compare_diff.assert_not_called()

    def test_synchronize_uses_compare(self, github):
        get_diff(github, make_event("synchronize"))

        github.fetch_compare_diff.assert_called_once_with("acme", "widgets", "aaa111", "bbb222")
        github.fetch_pull_request_diff.assert_not_called()

    def test_synchronize_without_commits(self, github):
        with pytest.raises(EventPayloadError):
            get_diff(github, make_event("synchronize", before=None))

    def test_other_action(self, github):
        assert get_diff(github, make_event("closed")) is None

        github.fetch_pull_request_diff.assert_not_called()
        github.fetch_compare_diff.assert_not_called()

    def test_http_failure(self, github):
        request = httpx.Request("GET", "https://api.github.test")
        github.fetch_pull_request_diff.side_effect = httpx.HTTPStatusError(
            "boom", request=request, response=httpx.Response(500, request=request)
        )

        with pytest.raises(ExternalServiceError):
            get_diff(github, make_event("opened"))


class TestSubmitReview:
    """Tests for submit_review function."""

    def test_submits_all_comments(self, github, pr_context):
        comments = [ReviewComment(path="a.py", position=2, body="x")]

        submit_review(github, pr_context, comments)

        github.create_review.assert_called_once_with(
            github.fetch_pull_request.return_value,
            [{"path": "a.py", "position": 2, "body": "x"}],
            "COMMENT",
        )

    def test_rejected_submission_raises(self, github, pr_context):
        github.create_review.side_effect = GithubException(
            422, {"message": "Unprocessable Entity"}, None
        )

        with pytest.raises(ReviewSubmissionError):
            submit_review(github, pr_context, [ReviewComment(path="a.py", position=2, body="x")])
