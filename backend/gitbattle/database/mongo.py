"""
MongoDB connection helpers.
"""

from __future__ import annotations

import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

_client: MongoClient | None = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        # Import settings lazily to ensure env vars are loaded
        from gitbattle.config import settings

        logger.info("Initializing MongoClient for database %s", settings.MONGODB_DB_NAME)
        _client = MongoClient(settings.MONGODB_URI)
    return _client


def get_database() -> Database:
    # Import settings lazily
    from gitbattle.config import settings

    client = get_client()
    return client[settings.MONGODB_DB_NAME]


def get_db():
    db = get_database()
    try:
        yield db
    finally:
        # PyMongo manages connection pooling automatically; nothing to close here.
        pass


def ensure_indexes(db: Database) -> None:
    """
    Create the indexes used by leaderboard and trending queries.

    Safe to call repeatedly; MongoDB ignores indexes that already exist.
    """
    db.leaderboard.create_index([("highest_score", DESCENDING)])
    db.leaderboard.create_index([("last_updated", DESCENDING)])
    db.comparisons.create_index([("created_at", DESCENDING)])
    db.comparisons.create_index([("participants", ASCENDING), ("created_at", DESCENDING)])
