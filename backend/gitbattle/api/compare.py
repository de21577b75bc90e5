"""Comparison endpoints."""

from fastapi import APIRouter, Depends, Query

from gitbattle.api.deps import get_comparison_service
from gitbattle.dtos.comparison import (
    CompareRequest,
    ComparisonResult,
    HistoryPagination,
    UserHistoryResponse,
)
from gitbattle.services.comparison_service import ComparisonService

router = APIRouter(prefix="/compare", tags=["Compare"])


@router.post("", response_model=ComparisonResult)
async def compare_users(
    payload: CompareRequest,
    service: ComparisonService = Depends(get_comparison_service),
):
    """Compare two GitHub users and declare a winner."""
    return await service.compare(payload.username1, payload.username2)


@router.get("/user/{username}/history", response_model=UserHistoryResponse)
def get_user_history(
    username: str,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: ComparisonService = Depends(get_comparison_service),
):
    history = service.get_user_history(username, limit=limit, offset=offset)
    return UserHistoryResponse(
        username=username,
        history=history,
        pagination=HistoryPagination(
            limit=limit, offset=offset, has_more=len(history) == limit
        ),
    )


@router.get("/{comparison_id}", response_model=ComparisonResult)
def get_comparison(
    comparison_id: str,
    service: ComparisonService = Depends(get_comparison_service),
):
    """Fetch a persisted comparison for shareable links."""
    return service.get_comparison(comparison_id)
