"""Comparison DTOs"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from gitbattle.dtos.base import CamelModel
from gitbattle.dtos.github import UserData
from gitbattle.dtos.score import Badge, Score


class CompareRequest(CamelModel):
    # Optional so that a missing username is reported as a 400, not a 422.
    username1: Optional[str] = None
    username2: Optional[str] = None


class UserBattleData(UserData):
    score: Score
    badges: List[Badge] = Field(default_factory=list)


class ComparisonOutcome(CamelModel):
    winner: str
    score_difference: int
    insights: List[str] = Field(default_factory=list)


class ComparisonResult(CamelModel):
    user1: UserBattleData
    user2: UserBattleData
    winner: str
    score_difference: int
    insights: List[str] = Field(default_factory=list)
    timestamp: datetime
    comparison_id: str


class HistoryPagination(CamelModel):
    limit: int
    offset: int
    has_more: bool


class UserHistoryResponse(CamelModel):
    username: str
    history: List[ComparisonResult]
    pagination: HistoryPagination
