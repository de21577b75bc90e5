"""Winner selection and comparison insights for two scored users."""

from typing import List

from gitbattle.dtos.comparison import ComparisonOutcome
from gitbattle.dtos.github import UserData
from gitbattle.dtos.score import Score
from gitbattle.utils.datetime import ensure_naive_utc


def _pick_winner(user_a: UserData, score_a: Score, user_b: UserData, score_b: Score) -> UserData:
    """
    First non-tie decides: score, followers, total repos, older account,
    then case-insensitive username order. The last step is a total order,
    so two distinct usernames always produce a winner.
    """
    if score_a.total != score_b.total:
        return user_a if score_a.total > score_b.total else user_b

    profile_a, profile_b = user_a.profile, user_b.profile
    if profile_a.followers != profile_b.followers:
        return user_a if profile_a.followers > profile_b.followers else user_b

    if user_a.repositories.total != user_b.repositories.total:
        return user_a if user_a.repositories.total > user_b.repositories.total else user_b

    created_a = ensure_naive_utc(profile_a.created_at)
    created_b = ensure_naive_utc(profile_b.created_at)
    if created_a != created_b:
        return user_a if created_a < created_b else user_b

    return user_a if profile_a.username.lower() < profile_b.username.lower() else user_b


def _insights(user_a: UserData, user_b: UserData) -> List[str]:
    insights: List[str] = []
    name_a, name_b = user_a.profile.username, user_b.profile.username

    stars_a, stars_b = user_a.repositories.total_stars, user_b.repositories.total_stars
    if stars_a > stars_b * 2:
        insights.append(f"{name_a} has significantly more starred repositories")
    elif stars_b > stars_a * 2:
        insights.append(f"{name_b} has significantly more starred repositories")

    commits_a, commits_b = user_a.contributions.commits, user_b.contributions.commits
    if commits_a > commits_b * 2:
        insights.append(f"{name_a} is much more active in commits")
    elif commits_b > commits_a * 2:
        insights.append(f"{name_b} is much more active in commits")

    return insights


def compare_users(
    user_a: UserData, score_a: Score, user_b: UserData, score_b: Score
) -> ComparisonOutcome:
    """Decide the winner of two already-scored users."""
    winner = _pick_winner(user_a, score_a, user_b, score_b)
    return ComparisonOutcome(
        winner=winner.profile.username,
        score_difference=abs(score_a.total - score_b.total),
        insights=_insights(user_a, user_b),
    )
