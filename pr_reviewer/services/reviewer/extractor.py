"""Pull the ``reviews`` list out of a free-form model reply."""

import json
import re
from typing import Iterator, Optional

from pydantic import ValidationError

from pr_reviewer.core.logging import get_logger
from pr_reviewer.schemas.review import ReviewFinding, ReviewResponse

logger = get_logger("reviewer.extractor")

_FENCED_BLOCK = re.compile(r"```(?:json)?[ \t]*\r?\n(.*?)```", re.DOTALL | re.IGNORECASE)


def iter_json_candidates(text: str) -> Iterator[str]:
    """Yield fenced block bodies first, then the outermost ``{...}`` span.

    The span fallback also covers fenced blocks cut short by a ``` inside
    a review comment.
    """
    for match in _FENCED_BLOCK.finditer(text):
        candidate = match.group(1).strip()
        if candidate.startswith("{"):
            yield candidate

    json_start = text.find("{")
    json_end = text.rfind("}") + 1
    if json_start != -1 and json_end > json_start:
        yield text[json_start:json_end]


def find_json_object(text: str) -> Optional[dict]:
    """Return the first candidate that decodes to a JSON object."""
    last_error = None
    for candidate in iter_json_candidates(text):
        try:
            result = json.loads(candidate)
        except (json.JSONDecodeError, RecursionError) as e:
            last_error = e
            continue
        if isinstance(result, dict):
            return result

    if last_error is not None:
        logger.warning(f"Failed to parse review JSON: {last_error}")
    else:
        logger.warning("JSON block not found in model reply")
    return None


def extract_reviews(text: Optional[str]) -> Optional[list[ReviewFinding]]:
    """
    Parse the model reply into findings.

    Returns:
        The validated ``reviews`` list (possibly empty), or None when no JSON
        object is found, it does not parse, or it does not match the
        ``{"reviews": [{"lineNumber", "reviewComment"}]}`` shape.
    """
    if not text:
        logger.warning("Empty model reply")
        return None

    result = find_json_object(text)
    if result is None:
        return None

    try:
        return ReviewResponse.model_validate(result).reviews
    except ValidationError as e:
        logger.warning(f"Review JSON has unexpected shape: {e.error_count()} error(s)")
        logger.debug(f"Schema errors: {e}")
        return None
