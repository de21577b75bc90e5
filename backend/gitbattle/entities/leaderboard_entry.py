"""
LeaderboardEntry Entity - Running battle statistics for one GitHub username.

Keyed by the lower-cased username. ``version`` is bumped on every write and
used as the compare-and-swap guard for concurrent updates.
"""

from datetime import datetime

from gitbattle.entities.base import BaseEntity
from gitbattle.utils.numbers import round_half_up


class LeaderboardEntry(BaseEntity):
    """Per-user aggregate. Stored in the ``leaderboard`` collection."""

    username: str
    last_score: int = 0
    highest_score: int = 0
    total_comparisons: int = 0
    wins: int = 0
    losses: int = 0
    average_score: float = 0.0
    first_seen: datetime
    last_updated: datetime
    version: int = 0

    @property
    def win_rate(self) -> int:
        if self.total_comparisons <= 0:
            return 0
        return round_half_up(100 * self.wins / self.total_comparisons)
