"""Request/response DTOs"""

from .comparison import (
    CompareRequest,
    ComparisonOutcome,
    ComparisonResult,
    HistoryPagination,
    UserBattleData,
    UserHistoryResponse,
)
from .github import (
    ContributionStats,
    RateLimitStatus,
    RepositoryStats,
    TopRepository,
    UserData,
    UserProfile,
)
from .leaderboard import (
    GlobalStats,
    LeaderboardMeta,
    LeaderboardResponse,
    LeaderboardRow,
    TrendingMeta,
    TrendingResponse,
    TrendingUser,
)
from .score import Badge, Score, ScoreBreakdown, ScoreMetrics, ScoreWeights

__all__ = [
    # GitHub data
    "UserProfile",
    "TopRepository",
    "RepositoryStats",
    "ContributionStats",
    "UserData",
    "RateLimitStatus",
    # Scoring
    "ScoreWeights",
    "ScoreBreakdown",
    "ScoreMetrics",
    "Score",
    "Badge",
    # Comparison
    "CompareRequest",
    "UserBattleData",
    "ComparisonOutcome",
    "ComparisonResult",
    "HistoryPagination",
    "UserHistoryResponse",
    # Leaderboard
    "LeaderboardRow",
    "LeaderboardMeta",
    "LeaderboardResponse",
    "TrendingUser",
    "TrendingMeta",
    "TrendingResponse",
    "GlobalStats",
]
