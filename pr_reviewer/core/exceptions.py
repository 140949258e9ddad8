"""Custom exceptions for the review run."""


class ReviewerError(Exception):
    """Base exception for all reviewer errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(ReviewerError):
    """Required setting missing or invalid."""


class EventPayloadError(ReviewerError):
    """Webhook event payload missing, unreadable or incomplete."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, {"path": path} if path else None)


class DiffParseError(ReviewerError):
    """Diff text could not be parsed."""


class ExternalServiceError(ReviewerError):
    """External service (GitHub, Lab45) error."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(f"{service} error: {message}", {"service": service})


class ReviewSubmissionError(ExternalServiceError):
    """Creating the pull request review failed."""

    def __init__(self, owner: str, repo: str, pull_number: int, message: str) -> None:
        super().__init__("GitHub", f"review submission to {owner}/{repo}#{pull_number} failed: {message}")
