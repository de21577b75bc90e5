"""GitHub user data DTOs"""

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import Field, field_serializer

from gitbattle.dtos.base import CamelModel


class UserProfile(CamelModel):
    username: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    public_gists: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None
    html_url: Optional[str] = None


class TopRepository(CamelModel):
    name: str
    description: Optional[str] = None
    language: Optional[str] = None
    stars: int = 0
    forks: int = 0
    url: Optional[str] = None
    updated_at: Optional[datetime] = None


class RepositoryStats(CamelModel):
    total: int = 0
    own_repos: int = 0
    forked_repos: int = 0
    total_stars: int = 0
    total_forks: int = 0
    total_watchers: int = 0
    # (language, repo count) ordered by descending count
    languages: List[Tuple[str, int]] = Field(default_factory=list)
    top_repositories: List[TopRepository] = Field(default_factory=list)

    @field_serializer("languages")
    def _serialize_languages(self, languages: List[Tuple[str, int]]) -> List[list]:
        return [[language, count] for language, count in languages]


class ContributionStats(CamelModel):
    commits: int = 0
    pull_requests: int = 0
    issues: int = 0
    reviews: int = 0


class UserData(CamelModel):
    profile: UserProfile
    repositories: RepositoryStats = Field(default_factory=RepositoryStats)
    contributions: ContributionStats = Field(default_factory=ContributionStats)
    fetched_at: Optional[datetime] = None


class RateLimitStatus(CamelModel):
    limit: int
    remaining: int
    used: int = 0
    reset_at: Optional[datetime] = None
