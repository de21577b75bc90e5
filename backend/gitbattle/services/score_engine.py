"""
Battle score calculation.

Pure functions of a user's fetched data: no I/O, no hidden state. ``now`` is a
parameter so account-age scoring is reproducible in tests.
"""

import math
from datetime import datetime
from typing import List, Optional

from gitbattle.dtos.github import UserData
from gitbattle.dtos.score import Badge, Score, ScoreBreakdown, ScoreMetrics, ScoreWeights
from gitbattle.utils.datetime import ensure_naive_utc, utc_now
from gitbattle.utils.numbers import round_half_up

DEFAULT_WEIGHTS = ScoreWeights()

SECONDS_PER_DAY = 24 * 60 * 60


def _days_since(created_at: datetime, now: datetime) -> int:
    delta = ensure_naive_utc(now) - ensure_naive_utc(created_at)
    return max(0, math.floor(delta.total_seconds() / SECONDS_PER_DAY))


def calculate_score(
    user_data: UserData,
    weights: Optional[ScoreWeights] = None,
    now: Optional[datetime] = None,
) -> Score:
    """
    Compute the weighted battle score for one user.

    The breakdown keeps unrounded per-category points; only the total is
    rounded.
    """
    weights = weights or DEFAULT_WEIGHTS
    now = now or utc_now()
    profile = user_data.profile
    repos = user_data.repositories
    contributions = user_data.contributions

    language_count = min(len(repos.languages), weights.max_languages)

    breakdown = ScoreBreakdown(
        followers=profile.followers * weights.follower,
        stars=repos.total_stars * weights.star,
        forks=repos.total_forks * weights.fork,
        commits=contributions.commits * weights.commit,
        pull_requests=contributions.pull_requests * weights.pull_request,
        issues=contributions.issues * weights.issue,
        reviews=contributions.reviews * weights.review,
        repositories=repos.own_repos * weights.repository,
        language_diversity=language_count * weights.language_diversity,
        account_age=_days_since(profile.created_at, now) * weights.account_age,
    )

    return Score(
        total=round_half_up(breakdown.raw_total()),
        breakdown=breakdown,
        metrics=calculate_additional_metrics(user_data),
    )


def calculate_additional_metrics(user_data: UserData) -> ScoreMetrics:
    """Display-only metrics derived from the same input as the score."""
    profile = user_data.profile
    repos = user_data.repositories
    contributions = user_data.contributions

    total_contributions = (
        contributions.commits
        + contributions.pull_requests
        + contributions.issues
        + contributions.reviews
    )

    return ScoreMetrics(
        stars_per_repo=(
            round_half_up(repos.total_stars / repos.total, 2) if repos.total > 0 else 0
        ),
        forks_per_repo=(
            round_half_up(repos.total_forks / repos.total, 2) if repos.total > 0 else 0
        ),
        contributions_per_month=round_half_up(total_contributions / 12),
        developer_rating=calculate_developer_rating(user_data),
        primary_language=repos.languages[0][0] if repos.languages else "Unknown",
        collaboration_score=contributions.pull_requests + contributions.reviews,
        community_impact=profile.followers + repos.total_stars,
    )


def calculate_developer_rating(user_data: UserData) -> float:
    """0.0-5.0 rating: five factors, each capped at 1, averaged and scaled by 5."""
    profile = user_data.profile
    repos = user_data.repositories
    contributions = user_data.contributions

    factors = [
        min(contributions.commits / 100, 1),  # activity
        min(repos.total_stars / 1000, 1),  # popularity
        min(contributions.pull_requests / 50, 1),  # collaboration
        min(repos.own_repos / 20, 1) if repos.total > 0 else 0,  # consistency
        min(profile.followers / 100, 1),  # community
    ]
    return round_half_up(5 * sum(factors) / len(factors), 1)


def generate_badges(user_data: UserData, now: Optional[datetime] = None) -> List[Badge]:
    """Achievement badges for display. Never feeds into the score."""
    now = now or utc_now()
    profile = user_data.profile
    repos = user_data.repositories
    contributions = user_data.contributions
    badges: List[Badge] = []

    if repos.total_stars >= 1000:
        badges.append(Badge(name="Star Master", icon="⭐", description="1000+ total stars"))
    elif repos.total_stars >= 100:
        badges.append(Badge(name="Rising Star", icon="🌟", description="100+ total stars"))

    if contributions.commits >= 500:
        badges.append(Badge(name="Commit King", icon="👑", description="500+ commits this year"))
    elif contributions.commits >= 100:
        badges.append(Badge(name="Code Warrior", icon="⚔️", description="100+ commits this year"))

    if profile.followers >= 1000:
        badges.append(Badge(name="Influencer", icon="📢", description="1000+ followers"))
    elif profile.followers >= 100:
        badges.append(Badge(name="Popular", icon="👥", description="100+ followers"))

    if len(repos.languages) >= 10:
        badges.append(Badge(name="Polyglot", icon="🌍", description="10+ languages"))
    elif len(repos.languages) >= 5:
        badges.append(Badge(name="Multi-lingual", icon="🗣️", description="5+ languages"))

    if contributions.pull_requests >= 50:
        badges.append(Badge(name="Team Player", icon="🤝", description="50+ pull requests"))
    if contributions.reviews >= 25:
        badges.append(Badge(name="Code Reviewer", icon="🔍", description="25+ code reviews"))

    if repos.own_repos >= 50:
        badges.append(Badge(name="Prolific", icon="📚", description="50+ repositories"))

    if _days_since(profile.created_at, now) / 365 >= 5:
        badges.append(Badge(name="Veteran", icon="🏆", description="5+ years on GitHub"))

    return badges
