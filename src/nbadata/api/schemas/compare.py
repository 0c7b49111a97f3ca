from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .players import PlayerResponse


class ComparisonSlotResponse(BaseModel):
    query: str
    source: str
    player: Optional[PlayerResponse] = None
    message: Optional[str] = None
    photo_url: Optional[str] = None


class ComparisonResponse(BaseModel):
    season: int
    player1: ComparisonSlotResponse
    player2: ComparisonSlotResponse
    selected: List[PlayerResponse]


class MatchCandidateResponse(BaseModel):
    id: int
    full_name: str
    team: str


class MatchDiagnosticsResponse(BaseModel):
    query: str
    search_term: str
    provider_status: str
    provider_error: Optional[str] = None
    candidates: List[MatchCandidateResponse]
    matched_tier: Optional[int] = None
    matched: Optional[MatchCandidateResponse] = None
