"""Repository layer for database operations"""

from .base import BaseRepository
from .comparison import ComparisonRepository
from .leaderboard import LeaderboardRepository

__all__ = [
    "BaseRepository",
    "ComparisonRepository",
    "LeaderboardRepository",
]
