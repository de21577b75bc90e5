"""Scoring configuration endpoints."""

from fastapi import APIRouter

from gitbattle.dtos.score import ScoreWeights
from gitbattle.services.score_engine import DEFAULT_WEIGHTS

router = APIRouter(prefix="/scoring", tags=["Scoring"])


@router.get("/weights", response_model=ScoreWeights)
def get_weights():
    """Points awarded per follower, star, commit, etc."""
    return DEFAULT_WEIGHTS
