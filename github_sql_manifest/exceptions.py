"""Errors raised while building a manifest."""

from datetime import datetime


class ManifestError(Exception):
    """Base class for all manifest errors."""


class ConfigurationError(ManifestError):
    """Required configuration is missing or invalid."""


class GitHubApiError(ManifestError):
    """GitHub answered with an unexpected HTTP status."""

    def __init__(self, status: int, body: str = "", message: str | None = None):
        self.status = status
        self.body = body
        super().__init__(message or f"HTTP {status}: {body}")


class RateLimitError(GitHubApiError):
    """GitHub refused the request because the rate limit is exhausted."""

    def __init__(self, status: int, body: str = "", reset_at: datetime | None = None):
        self.reset_at = reset_at
        self.reset_time = format_reset_time(reset_at)
        super().__init__(status, body, f"GitHub rate limit exceeded (HTTP {status}), resets at {self.reset_time}")


class MalformedResponseError(ManifestError):
    """A response body did not have the expected shape."""


class EmptyResultError(ManifestError):
    """The run found nothing to put in the manifest."""


def format_reset_time(reset_at: datetime | None) -> str:
    if reset_at is None:
        return "unknown"
    return reset_at.strftime("%Y-%m-%d %H:%M:%S UTC")
