"""Assemble two player records for a side-by-side comparison."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from nbadata.matching import find_match, search_term_for
from nbadata.models import Player, PlayerAverageStats, PlayerSearchResult
from nbadata.persistence import PlayerStore
from nbadata.provider import StatsProviderClient
from nbadata.units import height_to_cm, weight_to_kg


logger = logging.getLogger(__name__)

SEASON_FALLBACK_DEPTH = 3


def build_player(result: PlayerSearchResult, stats: Optional[PlayerAverageStats] = None) -> Player:
    """Merge a provider player with optional season averages.

    Missing stats leave every stat field at zero. Birth date stays unknown.
    """

    base = dict(
        id=result.id,
        full_name=result.full_name,
        team=result.team.abbreviation,
        position=result.position,
        height_cm=height_to_cm(result.height) or 0,
        weight_kg=weight_to_kg(result.weight) or 0,
        birth_date=None,
    )
    if stats is None:
        return Player(**base)
    return Player(
        **base,
        pts=stats.pts,
        reb=stats.reb,
        ast=stats.ast,
        stl=stats.stl,
        blk=stats.blk,
        tov=stats.turnover,
        fg_pct=stats.fg_pct,
        tp_pct=stats.fg3_pct,
        ft_pct=stats.ft_pct,
        season=stats.season,
        games_played=stats.games_played,
    )


def parse_ids(raw: Optional[str]) -> List[int]:
    """Parse a comma/semicolon separated id list, silently dropping bad entries."""

    if not raw or not raw.strip():
        return []
    ids: List[int] = []
    for token in re.split(r"[,;]", raw):
        token = token.strip()
        try:
            value = int(token)
        except ValueError:
            continue
        if value not in ids:
            ids.append(value)
    return ids


@dataclass(frozen=True)
class SlotResolution:
    """How one comparison slot was filled; ``source`` is provider, local or none."""

    query: str
    player: Optional[Player]
    source: str


class ComparisonService:
    def __init__(
        self,
        client: StatsProviderClient,
        store: Optional[PlayerStore] = None,
        *,
        season_fallback_depth: int = SEASON_FALLBACK_DEPTH,
    ):
        self._client = client
        self._store = store
        self._season_fallback_depth = max(1, season_fallback_depth)

    def assemble(self, query1: Optional[str], query2: Optional[str], season: int) -> Tuple[Optional[Player], Optional[Player]]:
        first = self.resolve(query1, season).player
        second = self.resolve(query2, season).player
        return first, second

    def resolve(self, query: Optional[str], season: int) -> SlotResolution:
        query = (query or "").strip()
        if not query:
            return SlotResolution(query, None, "none")

        search = self._client.fetch_player_search(search_term_for(query))
        # Rows gathered before a mid-pagination failure still count.
        match = find_match(query, search.value)
        if match is None and search.is_error:
            logger.warning("Provider search failed for %r (%s); using local players", query, search.error)
            local = self._store.find_player(query) if self._store is not None else None
            return SlotResolution(query, local, "local" if local else "none")

        if match is None:
            logger.info("No provider player matches %r among %d candidates", query, len(search.value))
            return SlotResolution(query, None, "none")

        stats = self.season_stats(match.player.id, season)
        return SlotResolution(query, build_player(match.player, stats), "provider")

    def season_stats(self, player_id: int, season: int) -> Optional[PlayerAverageStats]:
        """Stats for ``season``, else the most recent earlier season with games."""

        for candidate in range(season, season - self._season_fallback_depth, -1):
            stats = self._client.get_player_stats(player_id, candidate)
            if stats is not None and stats.games_played > 0:
                if candidate != season:
                    logger.info("Using season %d stats for player %d (none for %d)", candidate, player_id, season)
                return stats
        return None

    def selected_players(self, ids_raw: Optional[str]) -> List[Player]:
        if self._store is None:
            return []
        return self._store.get_players(parse_ids(ids_raw))
