#!/usr/bin/env python3
"""Run a PR review locally against a saved pull_request event payload."""
import asyncio
import sys
from dotenv import load_dotenv

load_dotenv()

from pr_reviewer.config import Settings
from pr_reviewer.core.logging import configure_logging
from pr_reviewer.main import main

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: run_review.py <event.json>")
        sys.exit(2)

    settings = Settings(github_event_path=sys.argv[1], environment="development", debug=True)
    configure_logging(settings)
    sys.exit(asyncio.run(main(settings)))
