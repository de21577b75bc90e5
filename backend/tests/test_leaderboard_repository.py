import unittest
from datetime import datetime, timedelta
from unittest.mock import patch

import mongomock

from gitbattle.exceptions import PersistenceError
from gitbattle.repositories.leaderboard import LeaderboardRepository

T0 = datetime(2025, 6, 1, 12, 0, 0)


class TestRecordResult(unittest.TestCase):
    def setUp(self):
        self.db = mongomock.MongoClient().db
        self.repo = LeaderboardRepository(self.db)

    def test_first_result_creates_entry(self):
        entry = self.repo.record_result("Octocat", 420, won=True, now=T0)

        self.assertEqual(entry.id, "octocat")
        self.assertEqual(entry.username, "Octocat")
        self.assertEqual(entry.last_score, 420)
        self.assertEqual(entry.highest_score, 420)
        self.assertEqual(entry.total_comparisons, 1)
        self.assertEqual((entry.wins, entry.losses), (1, 0))
        self.assertEqual(entry.average_score, 420.0)
        self.assertEqual(entry.first_seen, T0)
        self.assertEqual(entry.version, 1)

        stored = self.db.leaderboard.find_one({"_id": "octocat"})
        self.assertEqual(stored["highest_score"], 420)

    def test_subsequent_results_fold_into_running_stats(self):
        self.repo.record_result("octocat", 100, won=False, now=T0)
        self.repo.record_result("octocat", 300, won=True, now=T0 + timedelta(hours=1))
        entry = self.repo.record_result("OctoCat", 200, won=True, now=T0 + timedelta(hours=2))

        self.assertEqual(entry.username, "OctoCat")
        self.assertEqual(entry.last_score, 200)
        self.assertEqual(entry.highest_score, 300)
        self.assertEqual(entry.total_comparisons, 3)
        self.assertEqual((entry.wins, entry.losses), (2, 1))
        self.assertAlmostEqual(entry.average_score, 200.0)
        self.assertEqual(entry.first_seen, T0)
        self.assertEqual(entry.last_updated, T0 + timedelta(hours=2))
        self.assertEqual(entry.version, 3)
        self.assertEqual(entry.win_rate, 67)
        self.assertEqual(self.db.leaderboard.count_documents({}), 1)

    def test_concurrent_update_is_retried(self):
        self.repo.record_result("octocat", 100, won=True, now=T0)
        other = LeaderboardRepository(self.db)
        original_find_one = self.repo.collection.find_one
        raced = []

        def stale_read(*args, **kwargs):
            snapshot = original_find_one(*args, **kwargs)
            if not raced:
                raced.append(True)
                other.record_result("octocat", 300, won=False, now=T0)
            return snapshot

        with patch.object(self.repo.collection, "find_one", side_effect=stale_read):
            entry = self.repo.record_result("octocat", 200, won=True, now=T0)

        self.assertEqual(entry.total_comparisons, 3)
        self.assertEqual((entry.wins, entry.losses), (2, 1))
        self.assertEqual(entry.highest_score, 300)
        self.assertAlmostEqual(entry.average_score, 200.0)
        self.assertEqual(entry.version, 3)

    def test_concurrent_first_insert_is_retried(self):
        self.repo.record_result("octocat", 100, won=True, now=T0)
        original_find_one = self.repo.collection.find_one
        calls = []

        def missing_then_real(*args, **kwargs):
            calls.append(True)
            if len(calls) == 1:
                return None
            return original_find_one(*args, **kwargs)

        with patch.object(self.repo.collection, "find_one", side_effect=missing_then_real):
            entry = self.repo.record_result("octocat", 50, won=False, now=T0)

        self.assertEqual(entry.total_comparisons, 2)
        self.assertEqual(entry.highest_score, 100)
        self.assertAlmostEqual(entry.average_score, 75.0)

    def test_gives_up_after_max_attempts(self):
        repo = LeaderboardRepository(self.db, max_attempts=3)
        repo.record_result("octocat", 100, won=True, now=T0)

        with patch.object(repo, "find_one_and_update", return_value=None) as update:
            with self.assertRaises(PersistenceError):
                repo.record_result("octocat", 200, won=True, now=T0)

        self.assertEqual(update.call_count, 3)
        self.assertEqual(repo.find_by_username("octocat").total_comparisons, 1)


class TestQueries(unittest.TestCase):
    def setUp(self):
        self.db = mongomock.MongoClient().db
        self.repo = LeaderboardRepository(self.db)
        self.repo.record_result("alice", 500, won=True, now=T0 - timedelta(days=20))
        self.repo.record_result("bob", 300, won=False, now=T0 - timedelta(days=2))
        self.repo.record_result("carol", 300, won=True, now=T0)

    def test_find_ranked_sorts_descending_with_username_ties(self):
        entries = self.repo.find_ranked("highest_score", limit=10)
        self.assertEqual([e.username for e in entries], ["alice", "bob", "carol"])

    def test_find_ranked_since(self):
        entries = self.repo.find_ranked("highest_score", limit=10, since=T0 - timedelta(days=7))
        self.assertEqual([e.username for e in entries], ["bob", "carol"])

    def test_find_ranked_limit(self):
        self.assertEqual(len(self.repo.find_ranked("wins", limit=1)), 1)

    def test_count_with_higher_score(self):
        self.assertEqual(self.repo.count_with_higher_score(300), 1)
        self.assertEqual(self.repo.count_with_higher_score(500), 0)

    def test_summary(self):
        summary = self.repo.summary()
        self.assertEqual(summary["total_users"], 3)
        self.assertEqual(summary["top_score"], 500)
        self.assertAlmostEqual(summary["mean_average_score"], 1100 / 3)

    def test_summary_of_empty_collection(self):
        empty = LeaderboardRepository(mongomock.MongoClient().db)
        self.assertEqual(
            empty.summary(),
            {"total_users": 0, "mean_average_score": 0.0, "top_score": 0},
        )


if __name__ == "__main__":
    unittest.main()
