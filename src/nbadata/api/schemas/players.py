from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlayerSuggestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    full_name: str = Field(alias="fullName")
    team: str
    position: str


class PlayerResponse(BaseModel):
    id: int
    full_name: str
    team: str
    position: str
    height_cm: int
    weight_kg: int
    birth_date: Optional[date]
    pts: float
    reb: float
    ast: float
    stl: float
    blk: float
    tov: float
    fg_pct: float
    tp_pct: float
    ft_pct: float
    season: Optional[int] = None
    games_played: int = 0


class PlayerListResponse(BaseModel):
    players: List[PlayerResponse]
    source: str
    message: Optional[str] = None


class PlayerStatsResponse(BaseModel):
    player_id: int
    season: int
    games_played: int
    pts: float
    reb: float
    ast: float
    stl: float
    blk: float
    turnover: float
    fg_pct: float
    fg3_pct: float
    ft_pct: float
