"""Pydantic models for API I/O."""

from .compare import (
    ComparisonResponse,
    ComparisonSlotResponse,
    MatchCandidateResponse,
    MatchDiagnosticsResponse,
)
from .favorites import FavoriteRequest, FavoriteResponse
from .players import (
    PlayerListResponse,
    PlayerResponse,
    PlayerStatsResponse,
    PlayerSuggestionResponse,
)

__all__ = [
    "ComparisonResponse",
    "ComparisonSlotResponse",
    "FavoriteRequest",
    "FavoriteResponse",
    "MatchCandidateResponse",
    "MatchDiagnosticsResponse",
    "PlayerListResponse",
    "PlayerResponse",
    "PlayerStatsResponse",
    "PlayerSuggestionResponse",
]
