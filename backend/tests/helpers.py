"""Builders for test data."""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from gitbattle.dtos.comparison import ComparisonResult, UserBattleData
from gitbattle.dtos.github import ContributionStats, RepositoryStats, UserData, UserProfile
from gitbattle.dtos.score import Score, ScoreBreakdown, ScoreMetrics

NOW = datetime(2025, 6, 1, 12, 0, 0)


def make_user_data(
    username: str = "octocat",
    followers: int = 0,
    total_repos: int = 0,
    own_repos: int = 0,
    total_stars: int = 0,
    total_forks: int = 0,
    commits: int = 0,
    pull_requests: int = 0,
    issues: int = 0,
    reviews: int = 0,
    languages: Optional[List[Tuple[str, int]]] = None,
    account_age_days: int = 0,
    created_at: Optional[datetime] = None,
) -> UserData:
    return UserData(
        profile=UserProfile(
            username=username,
            followers=followers,
            public_repos=total_repos,
            created_at=created_at or NOW - timedelta(days=account_age_days),
        ),
        repositories=RepositoryStats(
            total=total_repos,
            own_repos=own_repos,
            forked_repos=total_repos - own_repos,
            total_stars=total_stars,
            total_forks=total_forks,
            languages=languages or [],
        ),
        contributions=ContributionStats(
            commits=commits,
            pull_requests=pull_requests,
            issues=issues,
            reviews=reviews,
        ),
        fetched_at=NOW,
    )


def reference_user(username: str = "alice") -> UserData:
    """The worked example: scores exactly 420 at NOW."""
    return make_user_data(
        username=username,
        followers=100,
        total_repos=10,
        own_repos=8,
        total_stars=50,
        total_forks=10,
        commits=20,
        pull_requests=5,
        issues=2,
        reviews=1,
        languages=[("Python", 4), ("Go", 3), ("Rust", 1)],
        account_age_days=1000,
    )


def make_result(
    username1: str = "alice",
    username2: str = "bob",
    score1: int = 200,
    score2: int = 100,
    timestamp: datetime = NOW,
    comparison_id: Optional[str] = None,
) -> ComparisonResult:
    """A finished comparison; the higher score wins, ties go to username1."""
    user1 = UserBattleData(
        **dict(make_user_data(username1, account_age_days=100)),
        score=Score(total=score1, breakdown=ScoreBreakdown(), metrics=ScoreMetrics()),
    )
    user2 = UserBattleData(
        **dict(make_user_data(username2, account_age_days=100)),
        score=Score(total=score2, breakdown=ScoreBreakdown(), metrics=ScoreMetrics()),
    )
    return ComparisonResult(
        user1=user1,
        user2=user2,
        winner=username1 if score1 >= score2 else username2,
        score_difference=abs(score1 - score2),
        insights=[],
        timestamp=timestamp,
        comparison_id=comparison_id or f"{username1}_vs_{username2}_{timestamp:%Y%m%d%H%M%S}",
    )
