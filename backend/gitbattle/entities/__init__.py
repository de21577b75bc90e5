"""Database entity models - represents the actual structure stored in MongoDB"""

from .base import BaseEntity
from .comparison import Comparison
from .leaderboard_entry import LeaderboardEntry

__all__ = [
    "BaseEntity",
    "Comparison",
    "LeaderboardEntry",
]
