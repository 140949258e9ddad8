"""Read the pull_request webhook event that triggered the run."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from pr_reviewer.core.exceptions import EventPayloadError

SUPPORTED_ACTIONS = ("opened", "synchronize")


class RepositoryOwner(BaseModel):
    login: str


class Repository(BaseModel):
    name: str
    owner: RepositoryOwner


class PullRequestEvent(BaseModel):
    """The subset of a pull_request event payload the reviewer needs."""

    action: Optional[str] = None
    number: int
    before: Optional[str] = None
    after: Optional[str] = None
    repository: Repository

    @property
    def owner(self) -> str:
        return self.repository.owner.login

    @property
    def repo(self) -> str:
        return self.repository.name

    @property
    def is_supported(self) -> bool:
        return self.action in SUPPORTED_ACTIONS


def load_event(path: Optional[str]) -> PullRequestEvent:
    """
    Load and validate the event payload written by the runner.

    Raises:
        EventPayloadError: if the path is unset, unreadable, not JSON,
            or missing the repository/number fields.
    """
    if not path:
        raise EventPayloadError("GITHUB_EVENT_PATH is not set")

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise EventPayloadError(f"Cannot read event payload: {e}", path) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"Event payload is not valid JSON: {e}", path) from e

    # Some payloads only carry the number under pull_request
    if isinstance(data, dict) and "number" not in data:
        number = (data.get("pull_request") or {}).get("number")
        if number is not None:
            data["number"] = number

    try:
        return PullRequestEvent.model_validate(data)
    except ValidationError as e:
        raise EventPayloadError(f"Event payload is missing pull request fields: {e}", path) from e
