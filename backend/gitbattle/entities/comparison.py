"""
Comparison Entity - One persisted battle between two GitHub users.

Immutable once written. ``participants`` holds both lower-cased usernames for history lookups;
``participant_names`` keeps the GitHub spelling for trending output.
"""

from datetime import datetime
from typing import List

from pydantic import Field

from gitbattle.dtos.comparison import ComparisonResult, UserBattleData
from gitbattle.entities.base import BaseEntity


class Comparison(BaseEntity):
    """A completed comparison. Stored in the ``comparisons`` collection."""

    user1: UserBattleData
    user2: UserBattleData
    winner: str
    score_difference: int
    insights: List[str] = Field(default_factory=list)
    participants: List[str] = Field(default_factory=list)
    participant_names: List[str] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_result(cls, result: ComparisonResult) -> "Comparison":
        return cls(
            id=result.comparison_id,
            user1=result.user1,
            user2=result.user2,
            winner=result.winner,
            score_difference=result.score_difference,
            insights=list(result.insights),
            participants=[
                result.user1.profile.username.lower(),
                result.user2.profile.username.lower(),
            ],
            participant_names=[
                result.user1.profile.username,
                result.user2.profile.username,
            ],
            created_at=result.timestamp,
        )

    def to_result(self) -> ComparisonResult:
        return ComparisonResult(
            user1=self.user1,
            user2=self.user2,
            winner=self.winner,
            score_difference=self.score_difference,
            insights=self.insights,
            timestamp=self.created_at,
            comparison_id=self.id or "",
        )
