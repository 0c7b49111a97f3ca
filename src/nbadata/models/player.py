"""Canonical player models shared by the provider client and comparison layers."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class TeamInfo(BaseModel):
    id: int = 0
    abbreviation: str = ""
    city: str = ""
    name: str = ""
    full_name: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def _zero_for_null(cls, value):
        return 0 if value is None else value

    @field_validator("abbreviation", "city", "name", "full_name", mode="before")
    @classmethod
    def _blank_for_null(cls, value):
        return "" if value is None else value


class PlayerSearchResult(BaseModel):
    """Player as returned by the provider's ``players`` resource."""

    id: int
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    height: Optional[str] = None
    weight: Optional[str] = None
    team: TeamInfo = Field(default_factory=TeamInfo)

    model_config = ConfigDict(frozen=True)

    @field_validator("first_name", "last_name", "position", mode="before")
    @classmethod
    def _blank_for_null(cls, value):
        return "" if value is None else value

    @field_validator("height", "weight", mode="before")
    @classmethod
    def _text_measurement(cls, value):
        return None if value is None else str(value)

    @field_validator("team", mode="before")
    @classmethod
    def _empty_team_for_null(cls, value):
        return {} if value is None else value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class GameStatLine(BaseModel):
    """One player's box score line for a single game."""

    id: int = 0
    min: Optional[str] = None
    fgm: int = 0
    fga: int = 0
    fg3m: int = 0
    fg3a: int = 0
    ftm: int = 0
    fta: int = 0
    oreb: int = 0
    dreb: int = 0
    reb: int = 0
    ast: int = 0
    stl: int = 0
    blk: int = 0
    turnover: int = 0
    pf: int = 0
    pts: int = 0

    model_config = ConfigDict(frozen=True)

    @field_validator(
        "fgm", "fga", "fg3m", "fg3a", "ftm", "fta", "oreb", "dreb", "reb",
        "ast", "stl", "blk", "turnover", "pf", "pts",
        mode="before",
    )
    @classmethod
    def _zero_for_null(cls, value):
        return 0 if value is None else value

    @field_validator("min", mode="before")
    @classmethod
    def _minutes_as_text(cls, value):
        return None if value is None else str(value)


class PlayerAverageStats(BaseModel):
    """Per-game averages for one player over one season."""

    player_id: int
    season: int
    games_played: int = Field(..., ge=0)
    pts: float = 0.0
    reb: float = 0.0
    ast: float = 0.0
    stl: float = 0.0
    blk: float = 0.0
    turnover: float = 0.0
    fg_pct: float = 0.0
    fg3_pct: float = 0.0
    ft_pct: float = 0.0

    model_config = ConfigDict(frozen=True)


class Player(BaseModel):
    """Comparison-facing player record."""

    id: int
    full_name: str
    team: str = ""
    position: str = ""
    height_cm: int = 0
    weight_kg: int = 0
    # None means unknown; the provider does not expose birth dates.
    birth_date: Optional[date] = None
    pts: float = 0.0
    reb: float = 0.0
    ast: float = 0.0
    stl: float = 0.0
    blk: float = 0.0
    tov: float = 0.0
    fg_pct: float = 0.0
    tp_pct: float = 0.0
    ft_pct: float = 0.0
    season: Optional[int] = None
    games_played: int = 0

    model_config = ConfigDict(frozen=True)


STAT_FIELDS: List[str] = ["pts", "reb", "ast", "stl", "blk", "tov", "fg_pct", "tp_pct", "ft_pct"]
