"""HTTP client for the balldontlie stats provider."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Callable, List, Optional, Sequence, Tuple, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from nbadata.cache import CacheRegion, TTLCache, listing_key, search_key, seasons_key, stats_key
from nbadata.config import Settings
from nbadata.models import GameStatLine, PlayerAverageStats, PlayerSearchResult
from nbadata.provider.aggregation import season_averages
from nbadata.provider.results import ProviderResult


logger = logging.getLogger(__name__)

STATS_PAGE_SIZE = 100
LISTING_PER_PAGE = 100
LISTING_MAX_PAGES = 5

PageModel = TypeVar("PageModel", bound=BaseModel)
QueryParams = Union[dict[str, Any], Sequence[Tuple[str, Any]]]


class PageMeta(BaseModel):
    next_cursor: Optional[int] = None
    per_page: Optional[int] = None


class PlayersPage(BaseModel):
    data: List[PlayerSearchResult] = []
    meta: Optional[PageMeta] = None


class StatsPage(BaseModel):
    data: List[GameStatLine] = []
    meta: Optional[PageMeta] = None


class StatsProviderClient:
    """Cached access to the provider's ``players`` and ``stats`` resources.

    Each ``fetch_*`` method reports a :class:`ProviderResult` so callers can
    tell an empty answer from a failed call. The plain methods
    (``search_players``, ``get_all_players``, ``get_player_stats``) collapse
    both to an empty list or ``None`` and never raise for provider faults.
    """

    def __init__(
        self,
        settings: Settings,
        cache: TTLCache,
        *,
        transport: httpx.BaseTransport | None = None,
        today: Callable[[], date] = date.today,
    ):
        self._settings = settings
        self._cache = cache
        self._policy = settings.cache_policy
        self._today = today
        headers = {"Accept": "application/json"}
        if settings.api_key:
            headers["Authorization"] = settings.api_key
        self._http = httpx.Client(
            base_url=settings.base_url,
            headers=headers,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "StatsProviderClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_page(self, path: str, params: QueryParams, model: Type[PageModel]) -> ProviderResult[Optional[PageModel]]:
        try:
            response = self._http.get(path, params=params)
            response.raise_for_status()
            page = model.model_validate(response.json())
        except httpx.HTTPError as exc:
            logger.warning("Provider request %s failed: %s", path, exc)
            return ProviderResult.failed(None, f"{type(exc).__name__}: {exc}")
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Provider response for %s could not be decoded: %s", path, exc)
            return ProviderResult.failed(None, f"{type(exc).__name__}: {exc}")
        return ProviderResult.ok(page)

    def _cached_list(self, key: str) -> Optional[ProviderResult[List[PlayerSearchResult]]]:
        cached = self._cache.get(key)
        if cached is None:
            return None
        players = list(cached)
        return ProviderResult.ok(players) if players else ProviderResult.empty(players)

    def fetch_player_search(self, term: str) -> ProviderResult[List[PlayerSearchResult]]:
        term = (term or "").strip()
        if not term:
            return ProviderResult.empty([])

        key = search_key(term)
        cached = self._cached_list(key)
        if cached is not None:
            return cached

        players: List[PlayerSearchResult] = []
        cursor: Optional[int] = None
        for _ in range(self._settings.max_pages):
            params: dict[str, Any] = {"search": term, "per_page": self._settings.per_page}
            if cursor is not None:
                params["cursor"] = cursor
            result = self._get_page("players", params, PlayersPage)
            if result.is_error or result.value is None:
                logger.error("Error searching players for %r; returning %d partial results", term, len(players))
                return ProviderResult.failed(players, result.error or "no page")
            page = result.value
            if not page.data:
                break
            players.extend(page.data)
            cursor = page.meta.next_cursor if page.meta else None
            if cursor is None:
                break

        self._cache.set(key, tuple(players), self._policy.ttl_for(CacheRegion.SEARCH))
        return ProviderResult.ok(players) if players else ProviderResult.empty(players)

    def search_players(self, term: str) -> List[PlayerSearchResult]:
        return self.fetch_player_search(term).value

    def fetch_all_players(
        self,
        per_page: int = LISTING_PER_PAGE,
        max_pages: int = LISTING_MAX_PAGES,
    ) -> ProviderResult[List[PlayerSearchResult]]:
        key = listing_key(per_page, max_pages)
        cached = self._cached_list(key)
        if cached is not None:
            return cached

        players: List[PlayerSearchResult] = []
        for page_number in range(1, max_pages + 1):
            result = self._get_page("players", {"per_page": per_page, "page": page_number}, PlayersPage)
            if result.is_error or result.value is None:
                logger.error("Error listing players at page %d; returning %d partial results", page_number, len(players))
                return ProviderResult.failed(players, result.error or "no page")
            data = result.value.data
            if not data:
                break
            players.extend(data)
            # A short page is the last one.
            if len(data) < per_page:
                break

        self._cache.set(key, tuple(players), self._policy.ttl_for(CacheRegion.LISTING))
        return ProviderResult.ok(players) if players else ProviderResult.empty(players)

    def get_all_players(self, per_page: int = LISTING_PER_PAGE, max_pages: int = LISTING_MAX_PAGES) -> List[PlayerSearchResult]:
        return self.fetch_all_players(per_page, max_pages).value

    def fetch_player_stats(self, player_id: int, season: int) -> ProviderResult[Optional[PlayerAverageStats]]:
        key = stats_key(player_id, season)
        cached = self._cache.get(key)
        if cached is not None:
            return ProviderResult.ok(cached)

        params = [
            ("seasons[]", season),
            ("player_ids[]", player_id),
            ("per_page", STATS_PAGE_SIZE),
        ]
        result = self._get_page("stats", params, StatsPage)
        if result.is_error or result.value is None:
            logger.error("Error getting stats for player %d season %d", player_id, season)
            return ProviderResult.failed(None, result.error or "no page")

        averages = season_averages(player_id, season, result.value.data)
        if averages is None:
            return ProviderResult.empty(None)
        self._cache.set(key, averages, self._policy.ttl_for(CacheRegion.STATS))
        return ProviderResult.ok(averages)

    def get_player_stats(self, player_id: int, season: int) -> Optional[PlayerAverageStats]:
        return self.fetch_player_stats(player_id, season).value

    def get_available_seasons(self) -> List[int]:
        """Seasons from the configured start year through the current year.

        This is a synthesized range; the provider is not asked which seasons
        it actually has.
        """

        key = seasons_key()
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)
        seasons = tuple(range(self._settings.season_start, self._today().year + 1))
        self._cache.set(key, seasons, self._policy.ttl_for(CacheRegion.SEASONS))
        return list(seasons)
