"""Leaderboard endpoints backed by MongoDB."""

from fastapi import APIRouter, Depends, Query

from gitbattle.api.deps import get_leaderboard_service
from gitbattle.dtos.leaderboard import (
    GlobalStats,
    LeaderboardMeta,
    LeaderboardResponse,
    LeaderboardRow,
    TrendingMeta,
    TrendingResponse,
)
from gitbattle.exceptions import NotFoundError
from gitbattle.services.leaderboard_service import (
    DEFAULT_SORT,
    DEFAULT_TRENDING_PERIOD,
    LeaderboardService,
    clamp_limit,
    resolve_leaderboard_period,
    resolve_sort,
    resolve_trending_period,
)
from gitbattle.utils.datetime import utc_now

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("", response_model=LeaderboardResponse)
def get_leaderboard(
    limit: int = Query(50, description="clamped to 1..100"),
    period: str = Query("all", description="all, week or month"),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    rows = service.get_leaderboard(limit=limit, period=period, sort_by=sort_by)
    return LeaderboardResponse(
        leaderboard=rows,
        meta=LeaderboardMeta(
            period=resolve_leaderboard_period(period),
            sort_by=resolve_sort(sort_by),
            limit=clamp_limit(limit),
            generated_at=utc_now(),
        ),
    )


@router.get("/trending", response_model=TrendingResponse)
def get_trending(
    limit: int = Query(20, description="clamped to 1..100"),
    period: str = Query(DEFAULT_TRENDING_PERIOD, description="day, week or month"),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Users appearing in the most comparisons recently."""
    return TrendingResponse(
        trending=service.get_trending(limit=limit, period=period),
        meta=TrendingMeta(
            period=resolve_trending_period(period),
            limit=clamp_limit(limit),
            generated_at=utc_now(),
        ),
    )


@router.get("/stats", response_model=GlobalStats)
def get_leaderboard_stats(service: LeaderboardService = Depends(get_leaderboard_service)):
    return service.get_global_stats()


@router.get("/user/{username}", response_model=LeaderboardRow)
def get_user_stats(
    username: str,
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    stats = service.get_user_stats(username)
    if stats is None:
        raise NotFoundError("User not found in leaderboard")
    return stats
