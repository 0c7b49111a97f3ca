from __future__ import annotations

from pydantic import BaseModel, Field


class FavoriteRequest(BaseModel):
    player_id: int = Field(..., ge=1)
    player_name: str = Field(..., min_length=1)
    team: str = ""
    position: str = ""


class FavoriteResponse(BaseModel):
    favorite_id: int
    user_id: str
    player_id: int
    player_name: str
    team: str
    position: str
