"""Repository for LeaderboardEntry entities."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from gitbattle.entities.leaderboard_entry import LeaderboardEntry
from gitbattle.exceptions import PersistenceError
from gitbattle.repositories.base import BaseRepository
from gitbattle.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class LeaderboardRepository(BaseRepository[LeaderboardEntry]):
    """Repository for the leaderboard collection (one document per username)."""

    def __init__(self, db: Database, max_attempts: int = 10):
        super().__init__(db, "leaderboard", LeaderboardEntry)
        self.max_attempts = max_attempts

    def find_by_username(self, username: str) -> Optional[LeaderboardEntry]:
        return self.find_by_id(username.lower())

    def record_result(
        self,
        username: str,
        score: int,
        won: bool,
        now: Optional[datetime] = None,
    ) -> LeaderboardEntry:
        """
        Fold one comparison outcome into the user's running statistics.

        Compare-and-swap on ``version``: the update only applies if nobody
        else wrote the entry since we read it, otherwise we re-read and retry.
        A concurrent first insert surfaces as DuplicateKeyError and is retried
        the same way.

        Raises:
            PersistenceError: if the entry kept changing under us for
                ``max_attempts`` rounds.
        """
        key = username.lower()
        now = now or utc_now()

        for attempt in range(1, self.max_attempts + 1):
            current = self.collection.find_one({"_id": key})

            if current is None:
                entry = LeaderboardEntry(
                    id=key,
                    username=username,
                    last_score=score,
                    highest_score=score,
                    total_comparisons=1,
                    wins=1 if won else 0,
                    losses=0 if won else 1,
                    average_score=float(score),
                    first_seen=now,
                    last_updated=now,
                    version=1,
                )
                try:
                    return self.insert_one(entry)
                except DuplicateKeyError:
                    logger.debug(f"Leaderboard insert race for {key}, retrying (attempt {attempt})")
                    continue

            version = current.get("version", 0)
            count = current.get("total_comparisons", 0)
            average = current.get("average_score", 0.0)

            updated = self.find_one_and_update(
                {"_id": key, "version": version},
                {
                    "$set": {
                        "username": username,
                        "last_score": score,
                        "highest_score": max(current.get("highest_score", 0), score),
                        "average_score": (average * count + score) / (count + 1),
                        "last_updated": now,
                    },
                    "$inc": {
                        "total_comparisons": 1,
                        "wins": 1 if won else 0,
                        "losses": 0 if won else 1,
                        "version": 1,
                    },
                },
            )
            if updated is not None:
                return updated

            logger.debug(f"Leaderboard version conflict for {key}, retrying (attempt {attempt})")

        raise PersistenceError(
            f"Could not update leaderboard entry for {username} after {self.max_attempts} attempts"
        )

    def find_ranked(
        self,
        sort_field: str,
        limit: int,
        since: Optional[datetime] = None,
    ) -> List[LeaderboardEntry]:
        """Entries sorted by ``sort_field`` descending, optionally updated since ``since``."""
        query: Dict[str, Any] = {}
        if since is not None:
            query["last_updated"] = {"$gte": since}
        return self.find_many(query, sort=[(sort_field, -1), ("_id", 1)], limit=limit)

    def count_with_higher_score(self, highest_score: int) -> int:
        return self.count({"highest_score": {"$gt": highest_score}})

    def summary(self) -> Dict[str, Any]:
        """Number of tracked users, mean of their average scores, and top score."""
        pipeline = [
            {
                "$group": {
                    "_id": None,
                    "total_users": {"$sum": 1},
                    "mean_average_score": {"$avg": "$average_score"},
                    "top_score": {"$max": "$highest_score"},
                }
            }
        ]
        rows = self.aggregate(pipeline)
        if not rows:
            return {"total_users": 0, "mean_average_score": 0.0, "top_score": 0}
        row = rows[0]
        return {
            "total_users": row.get("total_users", 0),
            "mean_average_score": row.get("mean_average_score") or 0.0,
            "top_score": row.get("top_score") or 0,
        }
