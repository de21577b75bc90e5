"""GitHub REST client for user battle data.

Fetches a user's profile, repository aggregates and recent contribution counts.
Profile failures are fatal; repository and event failures degrade to empty
aggregates so one flaky endpoint does not sink a comparison.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx

from gitbattle.dtos.github import (
    ContributionStats,
    RateLimitStatus,
    RepositoryStats,
    TopRepository,
    UserData,
    UserProfile,
)
from gitbattle.services.github.exceptions import (
    GithubError,
    GithubNotFoundError,
    GithubRateLimitError,
)
from gitbattle.utils.aio import gather_or_cancel
from gitbattle.utils.datetime import parse_datetime, utc_now

logger = logging.getLogger(__name__)

REPOS_PER_PAGE = 100
EVENTS_PER_PAGE = 100
TOP_LANGUAGES = 10
TOP_REPOSITORIES = 10
CONTRIBUTION_WINDOW = timedelta(days=365)
RATE_LIMIT_WARNING_THRESHOLD = 10


class GitHubClient:
    """Async GitHub REST client. One instance per app, safe to share."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        max_repo_pages: int = 5,
        user_agent: str = "GitHub-Battle",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_repo_pages = max_repo_pages
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, headers=self._headers) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise GithubError(f"GitHub API error: {exc}") from exc

        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining is not None and remaining.isdigit():
            if int(remaining) < RATE_LIMIT_WARNING_THRESHOLD:
                logger.warning(f"GitHub API rate limit low: {remaining} requests remaining")

        if response.status_code == 404:
            raise GithubNotFoundError()
        if self._is_rate_limited(response):
            raise GithubRateLimitError(
                "GitHub API rate limit exceeded",
                retry_after=self._retry_after(response),
            )
        if response.status_code >= 400:
            raise GithubError(
                f"GitHub API error {response.status_code} for {path}: {response.text[:200]}",
                status_code=response.status_code,
            )
        return response.json()

    @staticmethod
    def _is_rate_limited(response: httpx.Response) -> bool:
        if response.status_code == 429:
            return True
        if response.status_code != 403:
            return False
        if response.headers.get("X-RateLimit-Remaining") == "0":
            return True
        return "rate limit" in response.text.lower()

    @staticmethod
    def _retry_after(response: httpx.Response) -> Optional[int]:
        retry_after = response.headers.get("Retry-After")
        if retry_after and retry_after.isdigit():
            return int(retry_after)
        reset = response.headers.get("X-RateLimit-Reset")
        if reset and reset.isdigit():
            now = int(datetime.now(timezone.utc).timestamp())
            return max(0, int(reset) - now)
        return None

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_user_profile(self, username: str) -> UserProfile:
        user = await self._get(f"/users/{username}")
        return UserProfile(
            username=user["login"],
            name=user.get("name"),
            avatar=user.get("avatar_url"),
            bio=user.get("bio"),
            company=user.get("company"),
            location=user.get("location"),
            blog=user.get("blog"),
            followers=user.get("followers") or 0,
            following=user.get("following") or 0,
            public_repos=user.get("public_repos") or 0,
            public_gists=user.get("public_gists") or 0,
            created_at=parse_datetime(user.get("created_at")),
            updated_at=parse_datetime(user.get("updated_at"), default_now=False),
            html_url=user.get("html_url"),
        )

    async def list_user_repositories(self, username: str) -> List[Dict[str, Any]]:
        """All repositories, most recently updated first, capped at max_repo_pages."""
        repos: List[Dict[str, Any]] = []
        for page in range(1, self._max_repo_pages + 1):
            batch = await self._get(
                f"/users/{username}/repos",
                params={"per_page": REPOS_PER_PAGE, "page": page, "sort": "updated"},
            )
            if not batch:
                break
            repos.extend(batch)
            if len(batch) < REPOS_PER_PAGE:
                break
        return repos

    async def get_user_repositories(self, username: str) -> RepositoryStats:
        try:
            repos = await self.list_user_repositories(username)
        except GithubError as exc:
            logger.warning(f"Error fetching repositories for {username}: {exc}")
            return RepositoryStats()
        return summarize_repositories(repos)

    async def get_user_contributions(
        self, username: str, now: Optional[datetime] = None
    ) -> ContributionStats:
        try:
            events = await self._get(
                f"/users/{username}/events", params={"per_page": EVENTS_PER_PAGE}
            )
        except GithubError as exc:
            logger.warning(f"Error fetching contributions for {username}: {exc}")
            return ContributionStats()
        return count_contributions(events or [], now=now)

    async def get_user_data(self, username: str) -> UserData:
        """Profile, repositories and contributions fetched concurrently."""
        logger.info(f"Fetching data for user: {username}")
        profile, repositories, contributions = await gather_or_cancel(
            self.get_user_profile(username),
            self.get_user_repositories(username),
            self.get_user_contributions(username),
        )
        return UserData(
            profile=profile,
            repositories=repositories,
            contributions=contributions,
            fetched_at=utc_now(),
        )

    async def get_rate_limit(self) -> RateLimitStatus:
        data = await self._get("/rate_limit")
        core = data.get("resources", {}).get("core", {})
        reset = core.get("reset")
        return RateLimitStatus(
            limit=core.get("limit", 0),
            remaining=core.get("remaining", 0),
            used=core.get("used", 0),
            reset_at=(
                datetime.fromtimestamp(reset, tz=timezone.utc).replace(tzinfo=None)
                if reset
                else None
            ),
        )


def summarize_repositories(repos: List[Dict[str, Any]]) -> RepositoryStats:
    """Aggregate a raw repository listing into RepositoryStats."""
    own_repos = [repo for repo in repos if not repo.get("fork")]

    language_counts = Counter(repo["language"] for repo in repos if repo.get("language"))
    # Counter.most_common keeps first-seen order among equal counts
    languages = language_counts.most_common(TOP_LANGUAGES)

    top = sorted(repos, key=lambda repo: repo.get("stargazers_count") or 0, reverse=True)
    top_repositories = [
        TopRepository(
            name=repo.get("name", ""),
            description=repo.get("description"),
            language=repo.get("language"),
            stars=repo.get("stargazers_count") or 0,
            forks=repo.get("forks_count") or 0,
            url=repo.get("html_url"),
            updated_at=parse_datetime(repo.get("updated_at"), default_now=False),
        )
        for repo in top[:TOP_REPOSITORIES]
    ]

    return RepositoryStats(
        total=len(repos),
        own_repos=len(own_repos),
        forked_repos=len(repos) - len(own_repos),
        total_stars=sum(repo.get("stargazers_count") or 0 for repo in repos),
        total_forks=sum(repo.get("forks_count") or 0 for repo in repos),
        total_watchers=sum(repo.get("watchers_count") or 0 for repo in repos),
        languages=languages,
        top_repositories=top_repositories,
    )


def count_contributions(
    events: List[Dict[str, Any]], now: Optional[datetime] = None
) -> ContributionStats:
    """Count commits, PRs, issues and reviews from events in the trailing year."""
    since = (now or utc_now()) - CONTRIBUTION_WINDOW
    stats = ContributionStats()

    for event in events:
        created_at = parse_datetime(event.get("created_at"), default_now=False)
        if created_at is None or created_at < since:
            continue

        event_type = event.get("type")
        if event_type == "PushEvent":
            commits = (event.get("payload") or {}).get("commits") or []
            stats.commits += len(commits)
        elif event_type == "PullRequestEvent":
            stats.pull_requests += 1
        elif event_type == "IssuesEvent":
            stats.issues += 1
        elif event_type == "PullRequestReviewEvent":
            stats.reviews += 1

    return stats
