"""Season averages from per-game stat lines."""

from __future__ import annotations

from statistics import fmean
from typing import Callable, Optional, Sequence

from nbadata.models import GameStatLine, PlayerAverageStats


def _shooting_pct(
    games: Sequence[GameStatLine],
    made: Callable[[GameStatLine], int],
    attempted: Callable[[GameStatLine], int],
) -> float:
    # Games without an attempt are left out rather than counted as 0%.
    ratios = [made(game) / attempted(game) for game in games if attempted(game) > 0]
    return fmean(ratios) if ratios else 0.0


def season_averages(player_id: int, season: int, games: Sequence[GameStatLine]) -> Optional[PlayerAverageStats]:
    """Average ``games`` into one season line, or ``None`` if there are no games."""

    if not games:
        return None
    return PlayerAverageStats(
        player_id=player_id,
        season=season,
        games_played=len(games),
        pts=fmean(game.pts for game in games),
        reb=fmean(game.reb for game in games),
        ast=fmean(game.ast for game in games),
        stl=fmean(game.stl for game in games),
        blk=fmean(game.blk for game in games),
        turnover=fmean(game.turnover for game in games),
        fg_pct=_shooting_pct(games, lambda g: g.fgm, lambda g: g.fga),
        fg3_pct=_shooting_pct(games, lambda g: g.fg3m, lambda g: g.fg3a),
        ft_pct=_shooting_pct(games, lambda g: g.ftm, lambda g: g.fta),
    )
