"""Pick the provider player that best fits a free-text name query."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Sequence

from nbadata.models import PlayerSearchResult


class MatchTier(IntEnum):
    EXACT = 1
    ALL_WORDS = 2
    SUBSTRING = 3


@dataclass(frozen=True)
class MatchResult:
    player: PlayerSearchResult
    tier: MatchTier


def search_term_for(query: str) -> str:
    """Provider search term for ``query``: its last word when it has several."""

    words = query.split()
    if len(words) > 1:
        return words[-1]
    return query.strip()


def _first(candidates: Iterable[PlayerSearchResult], predicate) -> Optional[PlayerSearchResult]:
    return next((candidate for candidate in candidates if predicate(candidate.full_name.lower())), None)


def find_match(query: str, candidates: Sequence[PlayerSearchResult]) -> Optional[MatchResult]:
    """Apply the matching tiers in order; the first candidate of the first tier wins.

    Candidates are taken in the order given (the provider's order); there is
    no scoring between candidates of the same tier.
    """

    needle = query.strip().lower()
    if not needle or not candidates:
        return None

    player = _first(candidates, lambda name: name == needle)
    if player is not None:
        return MatchResult(player, MatchTier.EXACT)

    words = needle.split()
    if len(words) > 1:
        player = _first(candidates, lambda name: all(word in name for word in words))
        if player is not None:
            return MatchResult(player, MatchTier.ALL_WORDS)

    player = _first(candidates, lambda name: needle in name)
    if player is not None:
        return MatchResult(player, MatchTier.SUBSTRING)
    return None


def match_player(query: str, candidates: Sequence[PlayerSearchResult]) -> Optional[PlayerSearchResult]:
    match = find_match(query, candidates)
    return match.player if match else None
