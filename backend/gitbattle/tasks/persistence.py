"""
Persistence Tasks - Save a finished comparison and update the leaderboard.

The HTTP request returns as soon as the comparison is computed; storing it is
handed to Celery. Failures here are logged and reported in the task result,
never to the user who asked for the comparison.
"""

import logging
from typing import Any, Dict

from pymongo.database import Database

from gitbattle.celery_app import celery_app
from gitbattle.config import settings
from gitbattle.core.tracing import TracingContext
from gitbattle.database.mongo import get_database
from gitbattle.dtos.comparison import ComparisonResult
from gitbattle.entities.comparison import Comparison
from gitbattle.exceptions import PersistenceError
from gitbattle.repositories.comparison import ComparisonRepository
from gitbattle.services.leaderboard_service import LeaderboardService
from gitbattle.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def save_comparison(db: Database, result: ComparisonResult) -> Comparison:
    """
    Store the comparison, then fold each participant's score into the leaderboard.

    Raises:
        PersistenceError: if any write fails.
    """
    leaderboard = LeaderboardService.from_db(
        db, max_attempts=settings.LEADERBOARD_MAX_CAS_ATTEMPTS
    )
    try:
        comparison = ComparisonRepository(db).insert_one(Comparison.from_result(result))
        for side in (result.user1, result.user2):
            username = side.profile.username
            leaderboard.record_result(
                username,
                side.score.total,
                won=username == result.winner,
                now=result.timestamp,
            )
    except PersistenceError:
        raise
    except Exception as exc:
        raise PersistenceError(f"Failed to save comparison {result.comparison_id}: {exc}") from exc

    logger.info(f"Comparison saved: {result.comparison_id}")
    return comparison


@celery_app.task(
    bind=True,
    name="gitbattle.tasks.persist_comparison",
    queue="persistence",
)
def persist_comparison(self, payload: Dict[str, Any], correlation_id: str = "") -> Dict[str, Any]:
    """
    Persist one comparison.

    Args:
        payload: ComparisonResult dumped in JSON mode.
        correlation_id: id of the HTTP request that produced the comparison.
    """
    result = ComparisonResult.model_validate(payload)
    TracingContext.set(
        correlation_id=correlation_id,
        comparison_id=result.comparison_id,
        task_name="persist_comparison",
    )
    try:
        save_comparison(get_database(), result)
        return {
            "status": "success",
            "comparison_id": result.comparison_id,
            "executed_at": utc_now().isoformat(),
        }
    except PersistenceError as e:
        logger.error(f"Comparison persistence failed: {e}", exc_info=True)
        return {
            "status": "failed",
            "comparison_id": result.comparison_id,
            "error": str(e),
            "executed_at": utc_now().isoformat(),
        }
    finally:
        TracingContext.clear()


def enqueue_comparison_persistence(result: ComparisonResult) -> None:
    """
    Hand a comparison to the persistence queue without waiting for it.

    Broker failures are logged and dropped: the comparison has already been
    computed and returned to the caller. Publishing is not retried and the
    broker connection is bounded by CELERY_BROKER_CONNECTION_TIMEOUT.
    """
    try:
        persist_comparison.apply_async(
            args=[result.model_dump(mode="json")],
            kwargs={"correlation_id": TracingContext.get_correlation_id()},
            retry=False,
        )
    except Exception as e:
        logger.error(
            f"Failed to enqueue persistence for comparison {result.comparison_id}: {e}",
            exc_info=True,
        )
