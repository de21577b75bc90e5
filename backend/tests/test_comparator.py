import unittest
from datetime import datetime

from gitbattle.dtos.score import Score, ScoreBreakdown, ScoreMetrics
from gitbattle.services.comparator import compare_users
from tests.helpers import make_user_data


def _score(total: int) -> Score:
    return Score(total=total, breakdown=ScoreBreakdown(), metrics=ScoreMetrics())


class TestCompareUsers(unittest.TestCase):
    def test_higher_score_wins(self):
        a = make_user_data("alice", followers=1)
        b = make_user_data("bob", followers=500)

        outcome = compare_users(a, _score(300), b, _score(250))

        self.assertEqual(outcome.winner, "alice")
        self.assertEqual(outcome.score_difference, 50)

    def test_followers_break_score_tie(self):
        a = make_user_data("alice", followers=50, total_repos=1)
        b = make_user_data("bob", followers=40, total_repos=99)

        outcome = compare_users(a, _score(100), b, _score(100))

        self.assertEqual(outcome.winner, "alice")
        self.assertEqual(outcome.score_difference, 0)

    def test_total_repos_break_follower_tie(self):
        a = make_user_data("alice", followers=10, total_repos=3)
        b = make_user_data("bob", followers=10, total_repos=4)

        self.assertEqual(compare_users(a, _score(1), b, _score(1)).winner, "bob")

    def test_older_account_breaks_repo_tie(self):
        a = make_user_data("alice", created_at=datetime(2015, 1, 1))
        b = make_user_data("bob", created_at=datetime(2012, 1, 1))

        self.assertEqual(compare_users(a, _score(1), b, _score(1)).winner, "bob")

    def test_username_order_is_final_tie_break(self):
        created = datetime(2020, 1, 1)
        a = make_user_data("Zed", created_at=created)
        b = make_user_data("adam", created_at=created)

        for _ in range(3):
            self.assertEqual(compare_users(a, _score(5), b, _score(5)).winner, "adam")
            self.assertEqual(compare_users(b, _score(5), a, _score(5)).winner, "adam")

    def test_symmetry(self):
        cases = [
            (make_user_data("alice", followers=3), 10, make_user_data("bob", followers=9), 12),
            (make_user_data("alice", followers=3), 10, make_user_data("bob", followers=9), 10),
            (make_user_data("carol", total_repos=2), 7, make_user_data("dave", total_repos=2), 7),
        ]
        for a, score_a, b, score_b in cases:
            forward = compare_users(a, _score(score_a), b, _score(score_b))
            backward = compare_users(b, _score(score_b), a, _score(score_a))
            self.assertEqual(forward.winner, backward.winner)
            self.assertEqual(forward.score_difference, backward.score_difference)


class TestInsights(unittest.TestCase):
    def test_star_and_commit_insights(self):
        a = make_user_data("alice", total_stars=300, commits=10)
        b = make_user_data("bob", total_stars=100, commits=50)

        outcome = compare_users(a, _score(1), b, _score(2))

        self.assertEqual(
            outcome.insights,
            [
                "alice has significantly more starred repositories",
                "bob is much more active in commits",
            ],
        )
        self.assertEqual(outcome.winner, "bob")

    def test_exactly_double_is_not_an_insight(self):
        a = make_user_data("alice", total_stars=200, commits=0)
        b = make_user_data("bob", total_stars=100, commits=0)

        self.assertEqual(compare_users(a, _score(1), b, _score(1)).insights, [])


if __name__ == "__main__":
    unittest.main()
