"""Pydantic schemas for reviewer service."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from pr_reviewer.schemas.review import ReviewComment

DELETED_FILE_PATH = "/dev/null"


class PullRequestContext(BaseModel):
    """Pull request metadata shared by every prompt of a run."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""

    @property
    def ref(self) -> str:
        return f"{self.owner}/{self.repo}#{self.pull_number}"


class DiffLine(BaseModel):
    """
    A single line of a hunk.

    ``content`` keeps the leading ``+``/``-``/space marker. ``position`` is the
    offset GitHub uses for review comments: 1 is the line right below the
    file's first hunk header, and every later line of the file's patch,
    including later hunk headers, adds one.
    """

    kind: Literal["added", "removed", "context"]
    content: str
    new_line_number: Optional[int] = None
    old_line_number: Optional[int] = None
    position: int

    @property
    def display_line_number(self) -> Optional[int]:
        if self.new_line_number is not None:
            return self.new_line_number
        return self.old_line_number


class DiffChunk(BaseModel):
    """One hunk: its ``@@`` header line and the lines below it."""

    content: str
    lines: list[DiffLine] = []

    @property
    def positions(self) -> set[int]:
        return {line.position for line in self.lines}


class DiffFile(BaseModel):
    path: Optional[str] = None
    source_path: Optional[str] = None
    chunks: list[DiffChunk] = []

    @property
    def is_deleted(self) -> bool:
        return self.path == DELETED_FILE_PATH

    @property
    def positions(self) -> set[int]:
        return {position for chunk in self.chunks for position in chunk.positions}


class ReviewTask(BaseModel):
    """One unit of work: a hunk of a file to send to the model."""

    file: DiffFile
    chunk: DiffChunk


class ChunkResult(BaseModel):
    """Outcome of one task. Failures are carried in ``error``, never raised."""

    task: ReviewTask
    comments: list[ReviewComment] = []
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ReviewOutcome(BaseModel):
    """Result of a whole run."""

    status: Literal["skipped", "no_comments", "submitted"]
    reason: str = ""
    pr: Optional[str] = None
    chunks_reviewed: int = 0
    chunks_failed: int = 0
    comments: list[ReviewComment] = []
    rejected: list[ReviewComment] = []
