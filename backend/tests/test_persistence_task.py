import unittest
from unittest.mock import MagicMock, patch

import mongomock

from gitbattle.celery_app import celery_app
from gitbattle.config import settings
from gitbattle.core.tracing import TracingContext
from gitbattle.exceptions import PersistenceError
from gitbattle.tasks.persistence import (
    enqueue_comparison_persistence,
    persist_comparison,
    save_comparison,
)
from tests.helpers import make_result


class TestSaveComparison(unittest.TestCase):
    def setUp(self):
        self.db = mongomock.MongoClient().db

    def test_stores_comparison_and_updates_both_users(self):
        result = make_result("alice", "Bob", score1=200, score2=150)

        comparison = save_comparison(self.db, result)

        self.assertEqual(comparison.id, result.comparison_id)
        stored = self.db.comparisons.find_one({"_id": result.comparison_id})
        self.assertEqual(stored["participants"], ["alice", "bob"])
        self.assertEqual(stored["participant_names"], ["alice", "Bob"])
        self.assertEqual(stored["winner"], "alice")

        alice = self.db.leaderboard.find_one({"_id": "alice"})
        bob = self.db.leaderboard.find_one({"_id": "bob"})
        self.assertEqual((alice["wins"], alice["losses"], alice["last_score"]), (1, 0, 200))
        self.assertEqual((bob["wins"], bob["losses"], bob["last_score"]), (0, 1, 150))
        self.assertEqual(bob["username"], "Bob")
        self.assertEqual(alice["last_updated"], result.timestamp)

    def test_store_failure_raises_persistence_error(self):
        db = MagicMock()
        db.__getitem__.return_value.insert_one.side_effect = RuntimeError("disk full")

        with self.assertRaises(PersistenceError):
            save_comparison(db, make_result())


class TestPersistComparisonTask(unittest.TestCase):
    def setUp(self):
        self.db = mongomock.MongoClient().db

    @patch("gitbattle.tasks.persistence.get_database")
    def test_success(self, mock_get_db):
        mock_get_db.return_value = self.db
        result = make_result()

        outcome = persist_comparison(result.model_dump(mode="json"), correlation_id="req-1")

        self.assertEqual(outcome["status"], "success")
        self.assertEqual(outcome["comparison_id"], result.comparison_id)
        self.assertEqual(self.db.comparisons.count_documents({}), 1)
        self.assertEqual(self.db.leaderboard.count_documents({}), 2)
        self.assertEqual(TracingContext.get_correlation_id(), "")

    @patch("gitbattle.tasks.persistence.save_comparison")
    @patch("gitbattle.tasks.persistence.get_database")
    def test_failure_is_logged_and_reported(self, mock_get_db, mock_save):
        mock_save.side_effect = PersistenceError("write failed")
        result = make_result()

        with self.assertLogs("gitbattle.tasks.persistence", level="ERROR"):
            outcome = persist_comparison(result.model_dump(mode="json"))

        self.assertEqual(outcome["status"], "failed")
        self.assertEqual(outcome["error"], "write failed")


class TestEnqueue(unittest.TestCase):
    @patch("gitbattle.tasks.persistence.persist_comparison")
    def test_enqueues_json_payload(self, mock_task):
        result = make_result()
        TracingContext.set(correlation_id="req-42")
        try:
            enqueue_comparison_persistence(result)
        finally:
            TracingContext.clear()

        kwargs = mock_task.apply_async.call_args.kwargs
        self.assertEqual(kwargs["args"][0]["comparison_id"], result.comparison_id)
        self.assertEqual(kwargs["kwargs"], {"correlation_id": "req-42"})

    @patch("gitbattle.tasks.persistence.persist_comparison")
    def test_publish_is_not_retried(self, mock_task):
        enqueue_comparison_persistence(make_result())

        self.assertIs(mock_task.apply_async.call_args.kwargs["retry"], False)

    @patch("gitbattle.tasks.persistence.persist_comparison")
    def test_broker_failure_is_swallowed(self, mock_task):
        mock_task.apply_async.side_effect = ConnectionError("broker unreachable")

        with self.assertLogs("gitbattle.tasks.persistence", level="ERROR"):
            enqueue_comparison_persistence(make_result())


class TestCeleryConfig(unittest.TestCase):
    def test_broker_connection_is_bounded(self):
        self.assertEqual(
            celery_app.conf.broker_connection_timeout,
            settings.CELERY_BROKER_CONNECTION_TIMEOUT,
        )
        self.assertEqual(
            celery_app.conf.broker_transport_options["socket_connect_timeout"],
            settings.CELERY_BROKER_CONNECTION_TIMEOUT,
        )


if __name__ == "__main__":
    unittest.main()
