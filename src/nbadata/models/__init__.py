"""Domain models for provider payloads and comparison records."""

from .player import (
    STAT_FIELDS,
    GameStatLine,
    Player,
    PlayerAverageStats,
    PlayerSearchResult,
    TeamInfo,
)

__all__ = [
    "STAT_FIELDS",
    "GameStatLine",
    "Player",
    "PlayerAverageStats",
    "PlayerSearchResult",
    "TeamInfo",
]
