from datetime import date

from nbadata.models import Player
from nbadata.persistence import SEED_PLAYERS, PlayerStore


def test_store_seeds_once(tmp_path):
    path = tmp_path / "players.sqlite"
    store = PlayerStore(path)
    assert len(store.list_players()) == len(SEED_PLAYERS)

    assert store.seed_players([Player(id=99, full_name="Extra Player")]) == 0
    assert PlayerStore(path).get_player(99) is None


def test_unseeded_store_is_empty(tmp_path):
    store = PlayerStore(tmp_path / "empty.sqlite", seed=False)
    assert store.list_players() == []
    assert store.find_player("james") is None


def test_get_player_round_trip(tmp_path):
    store = PlayerStore(tmp_path / "players.sqlite")

    player = store.get_player(1)

    assert player.full_name == "LeBron James"
    assert player.birth_date == date(1984, 12, 30)
    assert player.fg_pct == 0.525
    assert store.get_player(12345) is None


def test_search_is_case_insensitive_for_accented_names(tmp_path):
    store = PlayerStore(tmp_path / "players.sqlite")

    assert [p.full_name for p in store.search_players("JOKIĆ")] == ["Nikola Jokić"]
    assert [p.full_name for p in store.search_players("dav")] == ["Anthony Davis"]
    assert store.search_players("  ") == []


def test_search_orders_by_name_and_limits(tmp_path):
    store = PlayerStore(tmp_path / "players.sqlite")

    names = [p.full_name for p in store.search_players("a", limit=3)]

    assert names == sorted(names)
    assert len(names) == 3


def test_get_players_preserves_requested_order(tmp_path):
    store = PlayerStore(tmp_path / "players.sqlite")

    assert [p.id for p in store.get_players([5, 2, 404])] == [5, 2]
    assert store.get_players([]) == []


def test_favorites(tmp_path):
    store = PlayerStore(tmp_path / "players.sqlite")

    saved = store.add_favorite("user-1", player_id=115, player_name="Stephen Curry", team="GSW", position="G")
    again = store.add_favorite("user-1", player_id=115, player_name="Stephen Curry")
    store.add_favorite("user-1", player_id=237, player_name="LeBron James", team="LAL", position="F")
    store.add_favorite("user-2", player_id=237, player_name="LeBron James")

    assert again.favorite_id == saved.favorite_id
    assert [f.player_name for f in store.list_favorites("user-1")] == ["LeBron James", "Stephen Curry"]

    assert store.remove_favorite("user-2", saved.favorite_id) is False
    assert store.remove_favorite("user-1", saved.favorite_id) is True
    assert [f.player_id for f in store.list_favorites("user-1")] == [237]
    assert len(store.list_favorites("user-2")) == 1
