"""Map model findings onto position-addressed review comments."""

from typing import Optional

from pr_reviewer.core.logging import get_logger
from pr_reviewer.schemas.review import ReviewComment, ReviewFinding
from pr_reviewer.services.reviewer.schemas import DiffChunk, DiffFile

logger = get_logger("reviewer.comment_mapper")


def coerce_position(line_number: str) -> Optional[int]:
    """Read the model's ``lineNumber`` as an integer, or None if it is not one."""
    text = str(line_number).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if number.is_integer():
        return int(number)
    return None


def format_body(finding: ReviewFinding) -> str:
    if finding.priority and finding.category:
        return f"**[{finding.priority}] {finding.category}**: {finding.review_comment}"
    return finding.review_comment


def create_comments(
    file: DiffFile,
    chunk: DiffChunk,
    findings: list[ReviewFinding],
) -> list[ReviewComment]:
    """Turn one hunk's findings into review comments.

    The reported line number is used as the diff position as-is; whether it
    actually lands inside the diff is checked later by ``validate_comments``.
    """
    if not file.path:
        return []

    comments = []
    for finding in findings:
        position = coerce_position(finding.line_number)
        if position is None:
            logger.warning(
                f"Dropping finding for {file.path} ({chunk.content}): "
                f"non-numeric lineNumber {finding.line_number!r}"
            )
            continue
        comments.append(
            ReviewComment(path=file.path, position=position, body=format_body(finding))
        )
    return comments


def validate_comments(
    comments: list[ReviewComment],
    files: list[DiffFile],
) -> tuple[list[ReviewComment], list[ReviewComment]]:
    """Split comments into those GitHub will accept and those it would reject.

    A comment is valid when its path is one of the reviewed files and its
    position is the position of a line in that file's diff.

    Returns:
        Tuple of (valid_comments, rejected_comments)
    """
    positions_by_path = {f.path: f.positions for f in files if f.path and not f.is_deleted}

    valid = []
    rejected = []
    for comment in comments:
        file_positions = positions_by_path.get(comment.path, set())
        if comment.position in file_positions:
            valid.append(comment)
        else:
            logger.warning(
                f"Rejecting comment on {comment.path} at position {comment.position}: "
                "not a line of the diff"
            )
            rejected.append(comment)

    return valid, rejected
