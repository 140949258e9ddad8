"""AI PR Reviewer - action entry point."""

import asyncio
import sys

from pydantic import ValidationError

from pr_reviewer.config import Settings
from pr_reviewer.core.llm import CompletionClient
from pr_reviewer.core.logging import configure_logging, get_logger
from pr_reviewer.services.github.client import GitHubClient
from pr_reviewer.services.reviewer.service import review_pull_request

logger = get_logger("main")


async def main(settings: Settings) -> int:
    """Run one review and return the process exit status."""
    try:
        settings.require_credentials()
        with GitHubClient(settings) as github:
            async with CompletionClient(settings) as completion:
                outcome = await review_pull_request(settings, github, completion)
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1

    logger.info(
        f"Review {outcome.status} for {outcome.pr or 'unknown PR'}: "
        f"{len(outcome.comments)} comment(s), {len(outcome.rejected)} rejected, "
        f"{outcome.chunks_failed}/{outcome.chunks_reviewed} hunk(s) failed"
    )
    return 0


def run() -> None:
    try:
        settings = Settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings)
    sys.exit(asyncio.run(main(settings)))


if __name__ == "__main__":
    run()
