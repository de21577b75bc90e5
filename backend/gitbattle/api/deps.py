"""FastAPI dependency providers.

Every service is built from explicitly injected collaborators so tests can
swap the GitHub client, the database or the persistence dispatcher through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import BackgroundTasks, Depends
from pymongo.database import Database

from gitbattle.config import settings
from gitbattle.database.mongo import get_db
from gitbattle.repositories.comparison import ComparisonRepository
from gitbattle.services.comparison_service import (
    ComparisonService,
    PersistenceDispatcher,
    dispatch_safely,
)
from gitbattle.services.github.github_client import GitHubClient
from gitbattle.services.leaderboard_service import LeaderboardService
from gitbattle.tasks.persistence import enqueue_comparison_persistence


@lru_cache
def get_github_client() -> GitHubClient:
    return GitHubClient(
        token=settings.GITHUB_TOKEN,
        base_url=settings.GITHUB_API_URL,
        timeout=settings.GITHUB_TIMEOUT,
        max_repo_pages=settings.GITHUB_MAX_REPO_PAGES,
    )


def get_persistence_dispatcher() -> PersistenceDispatcher:
    return enqueue_comparison_persistence


def get_comparison_service(
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_db),
    github: GitHubClient = Depends(get_github_client),
    dispatcher: PersistenceDispatcher = Depends(get_persistence_dispatcher),
) -> ComparisonService:
    """
    The service hands finished comparisons to a background task that runs
    after the response is sent, in the threadpool, so a slow or unreachable
    broker never holds up the request or the event loop.
    """

    def dispatch_after_response(result):
        background_tasks.add_task(dispatch_safely, dispatcher, result)

    return ComparisonService(github, ComparisonRepository(db), dispatch_after_response)


def get_leaderboard_service(db: Database = Depends(get_db)) -> LeaderboardService:
    return LeaderboardService.from_db(db, max_attempts=settings.LEADERBOARD_MAX_CAS_ATTEMPTS)
