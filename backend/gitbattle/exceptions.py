"""Application exceptions surfaced by the comparison and leaderboard services."""

from __future__ import annotations

from gitbattle.middleware.error_codes import ErrorCode


class BattleError(Exception):
    """Base exception for battle failures."""

    status_code: int = 500
    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(BattleError):
    """Raised for missing or identical usernames."""

    status_code = 400
    code = ErrorCode.VALIDATION_ERROR


class NotFoundError(BattleError):
    """Raised when a GitHub user, comparison or leaderboard entry does not exist."""

    status_code = 404
    code = ErrorCode.NOT_FOUND


class RateLimitError(BattleError):
    """Raised when the GitHub request quota is exhausted."""

    status_code = 429
    code = ErrorCode.RATE_LIMITED

    def __init__(
        self,
        message: str = "GitHub API rate limit exceeded. Please try again later.",
        retry_after: int | float | None = None,
        details: str | None = None,
    ):
        super().__init__(message, details=details)
        self.retry_after = retry_after


class PersistenceError(BattleError):
    """Raised when a store write fails. Never propagated to the comparison caller."""


class UnknownError(BattleError):
    """Raised for any other failure; message is generic, details optional."""
