"""Leaderboard aggregation: per-user running stats and read-side queries."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pymongo.database import Database

from gitbattle.dtos.leaderboard import GlobalStats, LeaderboardRow, TrendingUser
from gitbattle.entities.leaderboard_entry import LeaderboardEntry
from gitbattle.repositories.comparison import ComparisonRepository
from gitbattle.repositories.leaderboard import LeaderboardRepository
from gitbattle.utils.datetime import utc_now
from gitbattle.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

# API sort key -> stored field
SORT_FIELDS: Dict[str, str] = {
    "highestScore": "highest_score",
    "lastScore": "last_score",
    "totalComparisons": "total_comparisons",
    "wins": "wins",
    "averageScore": "average_score",
}
DEFAULT_SORT = "highestScore"

LEADERBOARD_PERIODS: Dict[str, Optional[timedelta]] = {
    "all": None,
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}

TRENDING_PERIODS: Dict[str, timedelta] = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}
DEFAULT_TRENDING_PERIOD = "week"

MAX_LIMIT = 100


def clamp_limit(limit: int) -> int:
    return max(1, min(limit, MAX_LIMIT))


def resolve_sort(sort_by: Optional[str]) -> str:
    """Unknown sort keys fall back to highestScore."""
    return sort_by if sort_by in SORT_FIELDS else DEFAULT_SORT


def resolve_leaderboard_period(period: Optional[str]) -> str:
    return period if period in LEADERBOARD_PERIODS else "all"


def resolve_trending_period(period: Optional[str]) -> str:
    return period if period in TRENDING_PERIODS else DEFAULT_TRENDING_PERIOD


def to_row(entry: LeaderboardEntry, rank: int) -> LeaderboardRow:
    return LeaderboardRow(
        rank=rank,
        username=entry.username,
        last_score=entry.last_score,
        highest_score=entry.highest_score,
        total_comparisons=entry.total_comparisons,
        wins=entry.wins,
        losses=entry.losses,
        average_score=entry.average_score,
        win_rate=entry.win_rate,
        first_seen=entry.first_seen,
        last_updated=entry.last_updated,
    )


class LeaderboardService:
    def __init__(
        self,
        leaderboard_repo: LeaderboardRepository,
        comparison_repo: ComparisonRepository,
    ):
        self.leaderboard_repo = leaderboard_repo
        self.comparison_repo = comparison_repo

    @classmethod
    def from_db(cls, db: Database, max_attempts: int = 10) -> "LeaderboardService":
        return cls(LeaderboardRepository(db, max_attempts=max_attempts), ComparisonRepository(db))

    def record_result(
        self, username: str, score: int, won: bool, now: Optional[datetime] = None
    ) -> LeaderboardEntry:
        """Atomically fold one outcome into the user's entry."""
        entry = self.leaderboard_repo.record_result(username, score, won, now=now)
        logger.info(
            f"Leaderboard updated for {username}: score={score} won={won} "
            f"comparisons={entry.total_comparisons}"
        )
        return entry

    def get_leaderboard(
        self,
        limit: int = 50,
        period: str = "all",
        sort_by: str = DEFAULT_SORT,
        now: Optional[datetime] = None,
    ) -> List[LeaderboardRow]:
        window = LEADERBOARD_PERIODS[resolve_leaderboard_period(period)]
        since = (now or utc_now()) - window if window else None
        entries = self.leaderboard_repo.find_ranked(
            SORT_FIELDS[resolve_sort(sort_by)],
            limit=clamp_limit(limit),
            since=since,
        )
        return [to_row(entry, rank) for rank, entry in enumerate(entries, start=1)]

    def get_user_stats(self, username: str) -> Optional[LeaderboardRow]:
        """Row for one user; rank is 1 + number of users with a higher best score."""
        entry = self.leaderboard_repo.find_by_username(username)
        if entry is None:
            return None
        rank = self.leaderboard_repo.count_with_higher_score(entry.highest_score) + 1
        return to_row(entry, rank)

    def get_trending(
        self,
        limit: int = 20,
        period: str = DEFAULT_TRENDING_PERIOD,
        now: Optional[datetime] = None,
    ) -> List[TrendingUser]:
        since = (now or utc_now()) - TRENDING_PERIODS[resolve_trending_period(period)]
        counts = self.comparison_repo.count_participants_since(since, limit=clamp_limit(limit))
        return [
            TrendingUser(rank=rank, username=row["username"], comparisons=row["comparisons"])
            for rank, row in enumerate(counts, start=1)
        ]

    def get_global_stats(self) -> GlobalStats:
        summary = self.leaderboard_repo.summary()
        return GlobalStats(
            total_users=summary["total_users"],
            total_comparisons=self.comparison_repo.count_all(),
            average_score=round_half_up(summary["mean_average_score"]),
            top_score=summary["top_score"],
        )
