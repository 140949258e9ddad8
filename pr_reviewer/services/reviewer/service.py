"""Reviewer service - orchestration layer."""

import asyncio
from collections import deque

from pr_reviewer.config import Settings
from pr_reviewer.core.exceptions import EventPayloadError
from pr_reviewer.core.llm import CompletionClient
from pr_reviewer.core.logging import get_logger
from pr_reviewer.core.pr_event import load_event
from pr_reviewer.core.prompts import render_review_prompt
from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.github.service import get_diff, get_pull_request_context, submit_review
from pr_reviewer.services.reviewer.comment_mapper import create_comments, validate_comments
from pr_reviewer.services.reviewer.diff_parser import parse_diff
from pr_reviewer.services.reviewer.extractor import extract_reviews
from pr_reviewer.services.reviewer.path_filter import filter_files, parse_exclude_patterns
from pr_reviewer.services.reviewer.schemas import (
    ChunkResult,
    DiffFile,
    PullRequestContext,
    ReviewOutcome,
    ReviewTask,
)

logger = get_logger("reviewer.service")


def build_review_queue(files: list[DiffFile]) -> deque[ReviewTask]:
    """One task per hunk, in diff order. Deleted files get none."""
    queue = deque()
    for file in files:
        if file.is_deleted:
            continue
        for chunk in file.chunks:
            queue.append(ReviewTask(file=file, chunk=chunk))
    return queue


async def review_chunk(
    task: ReviewTask,
    pr: PullRequestContext,
    completion: CompletionClient,
    variant: str = "standard",
) -> ChunkResult:
    """Run one hunk through prompt, model, extraction and mapping.

    Any error is recorded on the result so the remaining hunks still run.
    """
    logger.info(f"Analyzing {task.file.path} {task.chunk.content}")
    try:
        prompt = render_review_prompt(task.file, task.chunk, pr, variant)

        reply = await completion.complete(prompt)
        if reply is None:
            return ChunkResult(task=task, error="completion request failed")

        logger.debug(f"Model reply for {task.file.path}: {reply}")

        findings = extract_reviews(reply)
        if findings is None:
            return ChunkResult(task=task, error="no review JSON in model reply")

        comments = create_comments(task.file, task.chunk, findings)
    except Exception as e:
        logger.error(f"Error reviewing {task.file.path} {task.chunk.content}: {e!r}")
        return ChunkResult(task=task, error=f"unexpected error: {e!r}")

    logger.info(f"{task.file.path}: {len(comments)} comment(s)")
    return ChunkResult(task=task, comments=comments)


async def review_files(
    files: list[DiffFile],
    pr: PullRequestContext,
    completion: CompletionClient,
    variant: str = "standard",
    max_concurrency: int = 1,
) -> list[ChunkResult]:
    """Review every hunk of every file.

    With ``max_concurrency`` 1 the queue is drained strictly one task at a
    time. Higher values overlap model calls but results keep queue order.
    """
    queue = build_review_queue(files)
    logger.info(f"Queued {len(queue)} hunk(s) from {len(files)} file(s)")

    if max_concurrency <= 1:
        results = []
        while queue:
            results.append(await review_chunk(queue.popleft(), pr, completion, variant))
        return results

    semaphore = asyncio.Semaphore(max_concurrency)

    async def bounded(task: ReviewTask) -> ChunkResult:
        async with semaphore:
            return await review_chunk(task, pr, completion, variant)

    return list(await asyncio.gather(*(bounded(task) for task in queue)))


async def review_pull_request(
    settings: Settings,
    github: GitHubClient,
    completion: CompletionClient,
) -> ReviewOutcome:
    """Review the pull request described by the run's event payload."""
    try:
        event = load_event(settings.github_event_path)
    except EventPayloadError as e:
        logger.warning(f"No PR details found: {e.message}")
        return ReviewOutcome(status="skipped", reason=e.message)

    if not event.is_supported:
        logger.info(f"Unsupported event: {settings.github_event_name} (action={event.action})")
        return ReviewOutcome(status="skipped", reason=f"unsupported action {event.action}")

    pr = get_pull_request_context(github, event.owner, event.repo, event.number)

    try:
        diff = get_diff(github, event)
    except EventPayloadError as e:
        logger.warning(e.message)
        return ReviewOutcome(status="skipped", reason=e.message, pr=pr.ref)

    if not diff:
        logger.info("No diff found")
        return ReviewOutcome(status="skipped", reason="empty diff", pr=pr.ref)

    files = [f for f in parse_diff(diff) if not f.is_deleted]
    files = filter_files(files, parse_exclude_patterns(settings.exclude))

    results = await review_files(
        files,
        pr,
        completion,
        variant=settings.review_prompt,
        max_concurrency=settings.max_concurrency,
    )

    comments = [comment for result in results for comment in result.comments]
    failed = [result for result in results if not result.ok]
    for result in failed:
        logger.warning(f"No findings for {result.task.file.path} {result.task.chunk.content}: {result.error}")

    valid, rejected = validate_comments(comments, files)
    if rejected:
        logger.warning(f"Filtered {len(rejected)} comment(s) with positions outside the diff")

    outcome = ReviewOutcome(
        status="no_comments",
        pr=pr.ref,
        chunks_reviewed=len(results),
        chunks_failed=len(failed),
        comments=valid,
        rejected=rejected,
    )

    if not valid:
        logger.info("No comments to submit")
        return outcome

    submit_review(github, pr, valid)
    outcome.status = "submitted"
    return outcome
