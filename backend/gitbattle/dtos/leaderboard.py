"""Leaderboard DTOs"""

from datetime import datetime
from typing import List, Optional

from gitbattle.dtos.base import CamelModel


class LeaderboardRow(CamelModel):
    rank: int
    username: str
    last_score: int
    highest_score: int
    total_comparisons: int
    wins: int
    losses: int
    average_score: float
    win_rate: int
    first_seen: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class LeaderboardMeta(CamelModel):
    period: str
    sort_by: str
    limit: int
    generated_at: datetime


class LeaderboardResponse(CamelModel):
    leaderboard: List[LeaderboardRow]
    meta: LeaderboardMeta


class TrendingUser(CamelModel):
    rank: int
    username: str
    comparisons: int


class TrendingMeta(CamelModel):
    period: str
    limit: int
    generated_at: datetime


class TrendingResponse(CamelModel):
    trending: List[TrendingUser]
    meta: TrendingMeta


class GlobalStats(CamelModel):
    total_users: int
    total_comparisons: int
    average_score: int
    top_score: int
