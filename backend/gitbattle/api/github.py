"""GitHub API status endpoints."""

from fastapi import APIRouter, Depends

from gitbattle.api.deps import get_github_client
from gitbattle.dtos.github import RateLimitStatus
from gitbattle.exceptions import RateLimitError, UnknownError
from gitbattle.services.github.exceptions import GithubError, GithubRateLimitError
from gitbattle.services.github.github_client import GitHubClient

router = APIRouter(prefix="/github", tags=["GitHub"])


@router.get("/rate-limit", response_model=RateLimitStatus)
async def get_rate_limit(github: GitHubClient = Depends(get_github_client)):
    """Remaining core API quota for the configured token."""
    try:
        return await github.get_rate_limit()
    except GithubRateLimitError as exc:
        raise RateLimitError(retry_after=exc.retry_after, details=str(exc)) from exc
    except GithubError as exc:
        raise UnknownError("Failed to retrieve GitHub rate limit", details=str(exc)) from exc
