"""Run comparisons between two GitHub users and serve persisted ones."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from gitbattle.dtos.comparison import ComparisonResult, UserBattleData
from gitbattle.dtos.github import UserData
from gitbattle.dtos.score import ScoreWeights
from gitbattle.exceptions import NotFoundError, RateLimitError, UnknownError, ValidationError
from gitbattle.repositories.comparison import ComparisonRepository
from gitbattle.services.comparator import compare_users
from gitbattle.services.github.exceptions import (
    GithubError,
    GithubNotFoundError,
    GithubRateLimitError,
)
from gitbattle.services.github.github_client import GitHubClient
from gitbattle.services.score_engine import calculate_score, generate_badges
from gitbattle.utils.aio import gather_or_cancel
from gitbattle.utils.datetime import utc_now

logger = logging.getLogger(__name__)

PersistenceDispatcher = Callable[[ComparisonResult], None]


def validate_usernames(username1: Optional[str], username2: Optional[str]) -> tuple[str, str]:
    username1 = (username1 or "").strip()
    username2 = (username2 or "").strip()
    if not username1 or not username2:
        raise ValidationError("Both username1 and username2 are required")
    if username1.lower() == username2.lower():
        raise ValidationError("Cannot compare a user with themselves")
    return username1, username2


def new_comparison_id(username1: str, username2: str) -> str:
    return f"{username1}_vs_{username2}_{uuid.uuid4().hex[:12]}"


def dispatch_safely(dispatch: PersistenceDispatcher, result: ComparisonResult) -> None:
    """Run a persistence dispatcher, logging instead of raising on failure."""
    try:
        dispatch(result)
    except Exception as e:
        logger.error(
            f"Persistence dispatch failed for comparison {result.comparison_id}: {e}",
            exc_info=True,
        )


class ComparisonService:
    def __init__(
        self,
        github: GitHubClient,
        comparison_repo: ComparisonRepository,
        dispatch_persistence: PersistenceDispatcher,
        weights: Optional[ScoreWeights] = None,
    ):
        self.github = github
        self.comparison_repo = comparison_repo
        self.dispatch_persistence = dispatch_persistence
        self.weights = weights

    async def _fetch_both(self, username1: str, username2: str) -> tuple[UserData, UserData]:
        try:
            return await gather_or_cancel(
                self.github.get_user_data(username1),
                self.github.get_user_data(username2),
            )
        except GithubNotFoundError as exc:
            raise NotFoundError("User not found", details=str(exc)) from exc
        except GithubRateLimitError as exc:
            raise RateLimitError(retry_after=exc.retry_after, details=str(exc)) from exc
        except GithubError as exc:
            raise UnknownError("Failed to compare users", details=str(exc)) from exc

    def _battle_data(self, user: UserData, now: datetime) -> UserBattleData:
        return UserBattleData(
            **dict(user),
            score=calculate_score(user, weights=self.weights, now=now),
            badges=generate_badges(user, now=now),
        )

    async def compare(
        self, username1: Optional[str], username2: Optional[str]
    ) -> ComparisonResult:
        """
        Fetch, score and judge two users.

        Persistence is dispatched after the result is built; dispatch failures
        are logged and never reach the caller.

        Raises:
            ValidationError: missing or identical usernames.
            NotFoundError: either user does not exist on GitHub.
            RateLimitError: GitHub quota exhausted.
            UnknownError: any other upstream failure.
        """
        username1, username2 = validate_usernames(username1, username2)
        logger.info(f"Comparing users: {username1} vs {username2}")

        user1_data, user2_data = await self._fetch_both(username1, username2)

        now = utc_now()
        user1 = self._battle_data(user1_data, now)
        user2 = self._battle_data(user2_data, now)
        outcome = compare_users(user1_data, user1.score, user2_data, user2.score)

        result = ComparisonResult(
            user1=user1,
            user2=user2,
            winner=outcome.winner,
            score_difference=outcome.score_difference,
            insights=outcome.insights,
            timestamp=now,
            comparison_id=new_comparison_id(username1, username2),
        )
        logger.info(
            f"Comparison {result.comparison_id}: winner={result.winner} "
            f"difference={result.score_difference}"
        )

        dispatch_safely(self.dispatch_persistence, result)
        return result

    def get_comparison(self, comparison_id: str) -> ComparisonResult:
        comparison = self.comparison_repo.find_by_id(comparison_id)
        if comparison is None:
            raise NotFoundError("Comparison not found")
        return comparison.to_result()

    def get_user_history(
        self, username: str, limit: int = 10, offset: int = 0
    ) -> List[ComparisonResult]:
        comparisons = self.comparison_repo.find_user_history(username, limit=limit, offset=offset)
        return [comparison.to_result() for comparison in comparisons]
