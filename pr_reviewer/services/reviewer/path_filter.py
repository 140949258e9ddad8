"""Drop files whose path matches an exclude glob."""

import re

from wcmatch.glob import EXTGLOB, GLOBSTAR, globmatch

from pr_reviewer.core.logging import get_logger
from pr_reviewer.services.reviewer.schemas import DiffFile

logger = get_logger("reviewer.path_filter")

# minimatch defaults: "*" stays within one directory, "**/" also matches the root
GLOB_FLAGS = GLOBSTAR | EXTGLOB


def parse_exclude_patterns(raw: str | None) -> list[str]:
    """Split the comma-separated ``exclude`` input into trimmed patterns."""
    if not raw:
        return []
    return [pattern.strip() for pattern in raw.split(",") if pattern.strip()]


def matches_pattern(path: str, pattern: str) -> bool:
    """Glob match that treats a broken pattern as a non-match."""
    try:
        return globmatch(path, pattern, flags=GLOB_FLAGS)
    except (ValueError, re.error) as e:
        logger.warning(f"Ignoring invalid exclude pattern {pattern!r}: {e}")
        return False


def filter_files(files: list[DiffFile], patterns: list[str]) -> list[DiffFile]:
    """Return the files, in order, whose path matches none of the patterns.

    Files without a path match nothing and are kept.
    """
    if not patterns:
        return list(files)

    kept = []
    for file in files:
        path = file.path or ""
        if path and any(matches_pattern(path, pattern) for pattern in patterns):
            logger.info(f"Excluding {path}")
            continue
        kept.append(file)
    return kept
