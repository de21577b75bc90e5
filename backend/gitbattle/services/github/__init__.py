"""GitHub REST API access."""

from .exceptions import GithubError, GithubNotFoundError, GithubRateLimitError
from .github_client import GitHubClient

__all__ = [
    "GitHubClient",
    "GithubError",
    "GithubNotFoundError",
    "GithubRateLimitError",
]
