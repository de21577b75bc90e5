"""Repository for Comparison entities."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from pymongo.database import Database

from gitbattle.entities.comparison import Comparison
from gitbattle.repositories.base import BaseRepository


class ComparisonRepository(BaseRepository[Comparison]):
    """Repository for the comparisons collection."""

    def __init__(self, db: Database):
        super().__init__(db, "comparisons", Comparison)

    def find_user_history(
        self, username: str, limit: int = 10, offset: int = 0
    ) -> List[Comparison]:
        """Comparisons in which the user took part, newest first."""
        return self.find_many(
            {"participants": username.lower()},
            sort=[("created_at", -1)],
            skip=offset,
            limit=limit,
        )

    def count_participants_since(
        self, since: datetime, limit: int
    ) -> List[Dict[str, object]]:
        """
        Count comparisons per participant created at or after ``since``.

        Participants are keyed case-insensitively, like the leaderboard; the
        reported username is the spelling from the newest comparison.

        Returns:
            List of ``{"username": str, "comparisons": int}`` sorted by count
            descending, ties broken by username, at most ``limit`` rows.
        """
        pipeline = [
            {"$match": {"created_at": {"$gte": since}}},
            # newest first so $first picks the latest spelling of each name
            {"$sort": {"created_at": -1}},
            {"$unwind": "$participant_names"},
            {
                "$group": {
                    "_id": {"$toLower": "$participant_names"},
                    "username": {"$first": "$participant_names"},
                    "comparisons": {"$sum": 1},
                }
            },
            {"$sort": {"comparisons": -1, "_id": 1}},
            {"$limit": limit},
        ]
        return [
            {"username": row["username"], "comparisons": row["comparisons"]}
            for row in self.aggregate(pipeline)
        ]

    def count_all(self) -> int:
        return self.count()
