import pytest
from httpx import ASGITransport, AsyncClient

from nbadata.api import create_app
from nbadata.persistence import PlayerStore

from tests.helpers import FakeProvider, make_client, make_settings, player_payload, stat_row


LEBRON = player_payload(237, "LeBron", "James")
CURRY = player_payload(115, "Stephen", "Curry", position="G", height="6-2", weight="185", team="GSW")


@pytest.fixture
def provider():
    return FakeProvider(
        [LEBRON, CURRY],
        stats={
            (237, 2024): [stat_row(pts=24, reb=7, ast=8), stat_row(pts=26, reb=9, ast=6)],
            (115, 2023): [stat_row(pts=27, fg3a=10, fg3m=4)],
        },
    )


@pytest.fixture
async def client(tmp_path, provider):
    settings = make_settings(tmp_path, season_start=2022)
    app = create_app(
        settings,
        client=make_client(provider, settings=settings),
        store=PlayerStore(settings.db_path),
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_local_suggestions(client: AsyncClient):
    resp = await client.get("/api/players/search", params={"query": "cur"})
    assert resp.status_code == 200
    assert resp.json() == [{"id": 2, "fullName": "Stephen Curry", "team": "GSW", "position": "G"}]

    resp = await client.get("/api/players/search", params={"query": "c"})
    assert resp.json() == []


@pytest.mark.anyio
async def test_local_player_by_id(client: AsyncClient):
    resp = await client.get("/api/players/3")
    assert resp.status_code == 200
    assert resp.json()["full_name"] == "Nikola Jokić"
    assert resp.json()["birth_date"] == "1995-02-19"

    resp = await client.get("/api/players/999")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_player_listing_uses_provider(client: AsyncClient, provider: FakeProvider):
    resp = await client.get("/api/players", params={"q": "curry"})
    body = resp.json()
    assert body["source"] == "provider"
    assert body["message"] is None
    assert [p["full_name"] for p in body["players"]] == ["Stephen Curry"]
    assert body["players"][0]["height_cm"] == 188

    resp = await client.get("/api/players")
    body = resp.json()
    assert len(body["players"]) == 2
    assert provider.requests[-1].url.params["per_page"] == "25"


@pytest.mark.anyio
async def test_player_listing_falls_back_to_local(client: AsyncClient, provider: FakeProvider):
    resp = await client.get("/api/players", params={"q": "Durant"})
    body = resp.json()
    assert body["source"] == "local"
    assert [p["full_name"] for p in body["players"]] == ["Kevin Durant"]
    assert "Durant" in body["message"]

    provider.fail = True
    resp = await client.get("/api/players")
    body = resp.json()
    assert body["source"] == "local"
    assert len(body["players"]) == 10


@pytest.mark.anyio
async def test_player_listing_shows_dash_for_blank_position(client: AsyncClient, provider: FakeProvider):
    provider.players.append(player_payload(9, "Old", "Curry", position=""))

    resp = await client.get("/api/players", params={"q": "curry"})
    positions = {p["full_name"]: p["position"] for p in resp.json()["players"]}
    assert positions == {"Stephen Curry": "G", "Old Curry": "-"}

    resp = await client.get("/api/players")
    assert resp.json()["players"][-1]["position"] == "-"


@pytest.mark.anyio
async def test_player_stats(client: AsyncClient):
    resp = await client.get("/api/players/237/stats", params={"season": 2024})
    assert resp.status_code == 200
    body = resp.json()
    assert body["games_played"] == 2
    assert body["pts"] == pytest.approx(25.0)

    resp = await client.get("/api/players/237/stats", params={"season": 2010})
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_seasons(client: AsyncClient):
    resp = await client.get("/api/seasons")
    seasons = resp.json()
    assert seasons[0] == 2022
    assert seasons == sorted(seasons)


@pytest.mark.anyio
async def test_compare(client: AsyncClient):
    resp = await client.get(
        "/api/compare",
        params={"player1": "LeBron James", "player2": "Steph Curry", "season": 2024, "ids": "1,x,4"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["season"] == 2024

    first = body["player1"]
    assert first["source"] == "provider"
    assert first["player"]["full_name"] == "LeBron James"
    assert first["player"]["reb"] == pytest.approx(8.0)
    assert first["message"] is None

    second = body["player2"]["player"]
    assert second["full_name"] == "Stephen Curry"
    assert second["season"] == 2023
    assert second["tp_pct"] == pytest.approx(0.4)

    assert [p["full_name"] for p in body["selected"]] == ["LeBron James", "Luka Dončić"]


@pytest.mark.anyio
async def test_compare_not_found_slot(client: AsyncClient):
    resp = await client.get("/api/compare", params={"player1": "Nonexistent Player"})
    body = resp.json()
    assert body["player1"]["player"] is None
    assert body["player1"]["message"] == "No player found for 'Nonexistent Player'"
    assert body["player2"] == {"query": "", "source": "none", "player": None, "message": None, "photo_url": None}
    assert body["selected"] == []


@pytest.mark.anyio
async def test_debug_match(client: AsyncClient, provider: FakeProvider):
    resp = await client.get("/api/debug/match", params={"query": "Steph Curry"})
    body = resp.json()
    assert body["search_term"] == "Curry"
    assert body["provider_status"] == "ok"
    assert body["matched_tier"] == 2
    assert body["matched"]["id"] == 115

    provider.fail = True
    resp = await client.get("/api/debug/match", params={"query": "Kevin Durant"})
    body = resp.json()
    assert body["provider_status"] == "error"
    assert body["provider_error"]
    assert body["matched"] is None


@pytest.mark.anyio
async def test_favorites_flow(client: AsyncClient):
    payload = {"player_id": 115, "player_name": "Stephen Curry", "team": "GSW", "position": "G"}
    resp = await client.post("/api/users/u1/favorites", json=payload)
    assert resp.status_code == 201
    favorite_id = resp.json()["favorite_id"]

    resp = await client.get("/api/users/u1/favorites")
    assert [f["player_id"] for f in resp.json()] == [115]

    resp = await client.post("/api/users/u1/favorites", json={"player_id": 0, "player_name": ""})
    assert resp.status_code == 422

    resp = await client.delete(f"/api/users/u2/favorites/{favorite_id}")
    assert resp.status_code == 404

    resp = await client.delete(f"/api/users/u1/favorites/{favorite_id}")
    assert resp.status_code == 200
    resp = await client.get("/api/users/u1/favorites")
    assert resp.json() == []


@pytest.mark.anyio
async def test_compare_links_player_photo(tmp_path, provider: FakeProvider):
    images = tmp_path / "images"
    images.mkdir()
    (images / "237.jpg").write_bytes(b"\xff\xd8\xff")
    settings = make_settings(tmp_path, images_dir=images)
    app = create_app(settings, client=make_client(provider, settings=settings), store=PlayerStore(settings.db_path))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as async_client:
        resp = await async_client.get(
            "/api/compare", params={"player1": "LeBron James", "player2": "Stephen Curry", "season": 2024}
        )
        body = resp.json()
        assert body["player1"]["photo_url"] == "/images/237.jpg"
        assert body["player2"]["photo_url"] is None

        resp = await async_client.get(body["player1"]["photo_url"])
        assert resp.status_code == 200
        assert resp.content == b"\xff\xd8\xff"
