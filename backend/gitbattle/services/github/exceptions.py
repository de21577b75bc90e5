"""Custom exceptions for the GitHub REST client."""

from __future__ import annotations


class GithubError(Exception):
    """Base exception for GitHub API failures."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GithubNotFoundError(GithubError):
    """Raised when the requested user does not exist upstream."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, status_code=404)


class GithubRateLimitError(GithubError):
    """Raised when the upstream service enforces a rate limit."""

    def __init__(self, message: str, retry_after: int | float | None = None):
        super().__init__(message, status_code=403)
        self.retry_after = retry_after
