"""Score DTOs"""

from gitbattle.dtos.base import CamelModel


class ScoreWeights(CamelModel):
    """Points awarded per unit of each category."""

    follower: float = 1
    star: float = 2
    fork: float = 3
    commit: float = 1
    pull_request: float = 5
    issue: float = 2
    review: float = 3
    repository: float = 1
    language_diversity: float = 10
    account_age: float = 0.1
    max_languages: int = 5


class ScoreBreakdown(CamelModel):
    followers: float = 0
    stars: float = 0
    forks: float = 0
    commits: float = 0
    pull_requests: float = 0
    issues: float = 0
    reviews: float = 0
    repositories: float = 0
    language_diversity: float = 0
    account_age: float = 0

    def raw_total(self) -> float:
        return sum(self.model_dump().values())


class ScoreMetrics(CamelModel):
    stars_per_repo: float = 0
    forks_per_repo: float = 0
    contributions_per_month: int = 0
    developer_rating: float = 0
    primary_language: str = "Unknown"
    collaboration_score: int = 0
    community_impact: int = 0


class Score(CamelModel):
    total: int
    breakdown: ScoreBreakdown
    metrics: ScoreMetrics


class Badge(CamelModel):
    name: str
    icon: str
    description: str
