"""REST API for player search and comparison."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.staticfiles import StaticFiles

from nbadata.api.schemas import (
    ComparisonResponse,
    ComparisonSlotResponse,
    FavoriteRequest,
    FavoriteResponse,
    MatchCandidateResponse,
    MatchDiagnosticsResponse,
    PlayerListResponse,
    PlayerResponse,
    PlayerStatsResponse,
    PlayerSuggestionResponse,
)
from nbadata.cache import TTLCache
from nbadata.compare import ComparisonService, SlotResolution, build_player
from nbadata.config import Settings
from nbadata.matching import find_match, search_term_for
from nbadata.models import Player, PlayerSearchResult
from nbadata.persistence import FavoritePlayer, PlayerStore
from nbadata.photos import find_photo_url
from nbadata.provider import StatsProviderClient


logger = logging.getLogger(__name__)

MIN_SUGGESTION_QUERY = 2
LISTING_PAGE_SIZE = 25
SEARCH_RESULT_LIMIT = 50


def _player_response(player: Player) -> PlayerResponse:
    return PlayerResponse(**player.model_dump())


def _candidate_response(candidate: PlayerSearchResult) -> MatchCandidateResponse:
    return MatchCandidateResponse(id=candidate.id, full_name=candidate.full_name, team=candidate.team.abbreviation)


def _favorite_response(favorite: FavoritePlayer) -> FavoriteResponse:
    return FavoriteResponse(
        favorite_id=favorite.favorite_id,
        user_id=favorite.user_id,
        player_id=favorite.player_id,
        player_name=favorite.player_name,
        team=favorite.team,
        position=favorite.position,
    )


def _listing_player(result: PlayerSearchResult) -> PlayerResponse:
    player = build_player(result)
    if not player.position.strip():
        player = player.model_copy(update={"position": "-"})
    return _player_response(player)


def _slot_response(slot: SlotResolution, images_dir: Optional[Path] = None) -> ComparisonSlotResponse:
    message = None
    if slot.query and slot.player is None:
        message = f"No player found for '{slot.query}'"
    elif slot.source == "local":
        message = "Stats provider unavailable; showing local player data"
    elif slot.player is not None and slot.player.games_played == 0:
        message = "No recent season stats available"
    return ComparisonSlotResponse(
        query=slot.query,
        source=slot.source,
        player=_player_response(slot.player) if slot.player else None,
        message=message,
        photo_url=find_photo_url(slot.player, images_dir),
    )


def create_app(
    settings: Settings | None = None,
    *,
    client: StatsProviderClient | None = None,
    store: PlayerStore | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    owns_client = client is None
    if client is None:
        client = StatsProviderClient(settings, TTLCache())
    if store is None:
        store = PlayerStore(settings.db_path)
    comparisons = ComparisonService(client, store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        if owns_client:
            client.close()

    app = FastAPI(title="nbadata", lifespan=lifespan)
    app.state.settings = settings
    app.state.provider = client
    app.state.player_store = store
    if settings.images_dir is not None and settings.images_dir.is_dir():
        app.mount("/images", StaticFiles(directory=settings.images_dir), name="images")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/players/search", response_model=List[PlayerSuggestionResponse])
    def search_local_players(query: str = "") -> List[PlayerSuggestionResponse]:
        query = query.strip()
        if len(query) < MIN_SUGGESTION_QUERY:
            return []
        return [
            PlayerSuggestionResponse(id=p.id, full_name=p.full_name, team=p.team, position=p.position)
            for p in store.search_players(query)
        ]

    @app.get("/api/players", response_model=PlayerListResponse)
    def list_players(q: Optional[str] = None) -> PlayerListResponse:
        term = (q or "").strip()
        if term:
            found = client.search_players(term)
            if found:
                return PlayerListResponse(
                    players=[_listing_player(p) for p in found[:SEARCH_RESULT_LIMIT]],
                    source="provider",
                )
            local = store.search_players(term, limit=None)
            return PlayerListResponse(
                players=[_player_response(p) for p in local],
                source="local",
                message=f"No provider players found for '{term}'; showing local players",
            )

        listing = client.get_all_players(per_page=LISTING_PAGE_SIZE, max_pages=1)
        if listing:
            return PlayerListResponse(players=[_listing_player(p) for p in listing], source="provider")
        return PlayerListResponse(
            players=[_player_response(p) for p in store.list_players(limit=LISTING_PAGE_SIZE)],
            source="local",
            message="Could not reach the stats provider; showing local players",
        )

    @app.get("/api/players/{player_id}", response_model=PlayerResponse)
    def get_local_player(player_id: int) -> PlayerResponse:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return _player_response(player)

    @app.get("/api/players/{player_id}/stats", response_model=PlayerStatsResponse)
    def get_player_stats(player_id: int, season: Optional[int] = None) -> PlayerStatsResponse:
        season = season if season is not None else settings.default_season
        stats = client.get_player_stats(player_id, season)
        if stats is None:
            raise HTTPException(status_code=404, detail=f"No stats for player {player_id} in {season}")
        return PlayerStatsResponse(**stats.model_dump())

    @app.get("/api/seasons", response_model=List[int])
    def seasons() -> List[int]:
        return client.get_available_seasons()

    @app.get("/api/compare", response_model=ComparisonResponse)
    def compare(
        player1: Optional[str] = None,
        player2: Optional[str] = None,
        season: Optional[int] = None,
        ids: Optional[str] = None,
    ) -> ComparisonResponse:
        season = season if season is not None else settings.default_season
        slot1 = comparisons.resolve(player1, season)
        slot2 = comparisons.resolve(player2, season)
        return ComparisonResponse(
            season=season,
            player1=_slot_response(slot1, settings.images_dir),
            player2=_slot_response(slot2, settings.images_dir),
            selected=[_player_response(p) for p in comparisons.selected_players(ids)],
        )

    @app.get("/api/debug/match", response_model=MatchDiagnosticsResponse)
    def debug_match(query: str = Query(..., min_length=1)) -> MatchDiagnosticsResponse:
        term = search_term_for(query)
        result = client.fetch_player_search(term)
        match = find_match(query, result.value)
        return MatchDiagnosticsResponse(
            query=query,
            search_term=term,
            provider_status=result.status.value,
            provider_error=result.error,
            candidates=[_candidate_response(c) for c in result.value],
            matched_tier=int(match.tier) if match else None,
            matched=_candidate_response(match.player) if match else None,
        )

    @app.get("/api/users/{user_id}/favorites", response_model=List[FavoriteResponse])
    def list_favorites(user_id: str) -> List[FavoriteResponse]:
        return [_favorite_response(f) for f in store.list_favorites(user_id)]

    @app.post("/api/users/{user_id}/favorites", response_model=FavoriteResponse, status_code=201)
    def add_favorite(user_id: str, payload: FavoriteRequest) -> FavoriteResponse:
        favorite = store.add_favorite(
            user_id,
            player_id=payload.player_id,
            player_name=payload.player_name,
            team=payload.team,
            position=payload.position,
        )
        logger.info("User %s saved favorite player %d", user_id, payload.player_id)
        return _favorite_response(favorite)

    @app.delete("/api/users/{user_id}/favorites/{favorite_id}")
    def remove_favorite(user_id: str, favorite_id: int) -> dict[str, int]:
        if not store.remove_favorite(user_id, favorite_id):
            raise HTTPException(status_code=404, detail="Favorite not found")
        return {"removed": favorite_id}

    return app
