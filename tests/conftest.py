"""Shared fixtures: sample diffs, settings, event payloads and fake collaborators."""

import json
from unittest.mock import Mock

import httpx
import pytest

from pr_reviewer.config import Settings
from pr_reviewer.core.llm import CompletionClient
from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.reviewer.schemas import PullRequestContext

# One added file, one hunk, positions 1-10
ADDED_FILE_DIFF = "\n".join(
    [
        "diff --git a/app/state.py b/app/state.py",
        "new file mode 100644",
        "index 0000000..e69de29",
        "--- /dev/null",
        "+++ b/app/state.py",
        "@@ -0,0 +1,10 @@",
        "+CACHE = {}",
        "+",
        "+",
        "+def remember(key, value):",
        "+    CACHE[key] = value",
        "+",
        "+",
        "+def recall(key):",
        "+    return CACHE.get(key)",
        "+",
    ]
) + "\n"

# Two hunks: positions 1-4, header at 5, then 6-9
MODIFIED_FILE_DIFF = "\n".join(
    [
        "diff --git a/app/util.py b/app/util.py",
        "index 1111111..2222222 100644",
        "--- a/app/util.py",
        "+++ b/app/util.py",
        "@@ -1,3 +1,4 @@",
        " import os",
        "+import sys",
        " ",
        " def a():",
        "@@ -10,3 +11,3 @@ def b():",
        "     x = 1",
        "-    y = 2",
        "+    y = 3",
        "     return x",
    ]
) + "\n"

DELETED_FILE_DIFF = "\n".join(
    [
        "diff --git a/old.txt b/old.txt",
        "deleted file mode 100644",
        "index 3333333..0000000",
        "--- a/old.txt",
        "+++ /dev/null",
        "@@ -1,2 +0,0 @@",
        "-one",
        "-two",
    ]
) + "\n"


def make_settings(**overrides) -> Settings:
    values = {
        "github_token": "gh-token",
        "lab45_api_key": "lab45-key",
        "lab45_api_model": "gpt-4o",
        "lab45_api_url": "https://lab45.test/query",
        "exclude": "",
        "github_event_path": None,
        "github_event_name": "pull_request",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def lab45_reply(content: str) -> httpx.Response:
    return httpx.Response(200, json={"data": {"content": content}})


def fenced(payload: dict, before: str = "Here is my review:", after: str = "") -> str:
    return f"{before}\n```json\n{json.dumps(payload)}\n```\n{after}"


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def pr_context():
    return PullRequestContext(
        owner="acme",
        repo="widgets",
        pull_number=7,
        title="Add cache",
        description="Adds an in-memory cache.",
    )


@pytest.fixture
def write_event(tmp_path):
    """Write a pull_request event payload and return its path."""

    def _write(action: str = "opened", **extra) -> str:
        payload = {
            "action": action,
            "number": 7,
            "before": "aaa111",
            "after": "bbb222",
            "repository": {"name": "widgets", "owner": {"login": "acme"}},
        }
        payload.update(extra)
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def github():
    """GitHubClient double returning an opened PR with the added-file diff."""
    client = Mock(spec=GitHubClient)
    pull = Mock()
    pull.title = "Add cache"
    pull.body = None
    client.fetch_pull_request.return_value = pull
    client.fetch_pull_request_diff.return_value = ADDED_FILE_DIFF
    client.fetch_compare_diff.return_value = ADDED_FILE_DIFF
    return client


def completion_client(handler, settings: Settings | None = None) -> CompletionClient:
    """CompletionClient wired to an httpx.MockTransport handler."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CompletionClient(settings or make_settings(), http_client=http_client)
