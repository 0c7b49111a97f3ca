"""Provider stub and payload builders shared by the test modules."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

import httpx

from nbadata.cache import TTLCache
from nbadata.config import Settings
from nbadata.provider import StatsProviderClient


BASE_URL = "https://provider.test/v1/"


def player_payload(
    player_id: int,
    first_name: str,
    last_name: str,
    *,
    position: str = "F",
    height: Optional[str] = "6-9",
    weight: Optional[str] = "250",
    team: str = "LAL",
) -> dict:
    return {
        "id": player_id,
        "first_name": first_name,
        "last_name": last_name,
        "position": position,
        "height": height,
        "weight": weight,
        "team": {
            "id": 14,
            "abbreviation": team,
            "city": "Los Angeles",
            "name": "Lakers",
            "full_name": "Los Angeles Lakers",
        },
    }


def stat_row(**values: int) -> dict:
    row = {
        "id": values.pop("id", 1),
        "min": "34",
        "fgm": 0, "fga": 0, "fg3m": 0, "fg3a": 0, "ftm": 0, "fta": 0,
        "oreb": 0, "dreb": 0, "reb": 0, "ast": 0, "stl": 0, "blk": 0,
        "turnover": 0, "pf": 0, "pts": 0,
    }
    row.update(values)
    return row


def numbered_players(count: int, last_name: str = "Curry") -> list[dict]:
    return [player_payload(i, f"Player{i}", last_name) for i in range(1, count + 1)]


class FakeProvider:
    """In-memory stand-in for the provider's ``players`` and ``stats`` resources."""

    def __init__(
        self,
        players: Iterable[dict] = (),
        stats: Optional[Mapping[tuple[int, int], list[dict]]] = None,
    ):
        self.players = list(players)
        self.stats = dict(stats or {})
        self.requests: list[httpx.Request] = []
        self.fail = False
        self.fail_after: Optional[int] = None

    @property
    def calls(self) -> int:
        return len(self.requests)

    def requests_to(self, resource: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/" + resource)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail or (self.fail_after is not None and self.calls > self.fail_after):
            return httpx.Response(503, json={"error": "unavailable"})
        resource = request.url.path.rsplit("/", 1)[-1]
        if resource == "players":
            return self._players(request.url.params)
        if resource == "stats":
            return self._stats(request.url.params)
        return httpx.Response(404, json={"error": "not found"})

    def _players(self, params: httpx.QueryParams) -> httpx.Response:
        per_page = int(params.get("per_page", 25))
        rows = self.players
        term = params.get("search")
        if term:
            needle = term.lower()
            rows = [p for p in rows if needle in p["first_name"].lower() or needle in p["last_name"].lower()]
        if "page" in params:
            start = (int(params["page"]) - 1) * per_page
            return httpx.Response(200, json={"data": rows[start:start + per_page], "meta": {"per_page": per_page}})
        start = int(params.get("cursor", 0))
        meta: dict = {"per_page": per_page}
        if start + per_page < len(rows):
            meta["next_cursor"] = start + per_page
        return httpx.Response(200, json={"data": rows[start:start + per_page], "meta": meta})

    def _stats(self, params: httpx.QueryParams) -> httpx.Response:
        key = (int(params["player_ids[]"]), int(params["seasons[]"]))
        return httpx.Response(200, json={"data": self.stats.get(key, []), "meta": {"per_page": 100}})


def make_settings(tmp_path: Optional[Path] = None, **overrides) -> Settings:
    db_path = (tmp_path / "nbadata.sqlite") if tmp_path is not None else Path("nbadata-test.sqlite")
    values = dict(base_url=BASE_URL, api_key="test-key", db_path=db_path)
    values.update(overrides)
    return Settings(**values)


def make_client(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    settings: Optional[Settings] = None,
    cache: Optional[TTLCache] = None,
    today: Optional[Callable[[], date]] = None,
) -> StatsProviderClient:
    kwargs = {"today": today} if today is not None else {}
    return StatsProviderClient(
        settings or make_settings(),
        cache if cache is not None else TTLCache(),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )
