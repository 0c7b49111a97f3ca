from nbadata.models import Player
from nbadata.photos import find_photo_url, photo_candidates


def _player(player_id=237, name="LeBron James"):
    return Player(id=player_id, full_name=name)


def test_candidates_prefer_id_then_compact_name():
    candidates = photo_candidates(_player(name="Shai Gilgeous-Alexander"))

    assert candidates[:2] == ["237.jpg", "237.png"]
    assert "ShaiGilgeousAlexander.png" in candidates
    assert candidates[-1] == "shaigilgeousalexander.jpg"


def test_find_photo_by_id(tmp_path):
    (tmp_path / "237.jpg").write_bytes(b"jpg")
    (tmp_path / "LeBronJames.png").write_bytes(b"png")

    assert find_photo_url(_player(), tmp_path) == "/images/237.jpg"


def test_find_photo_by_name(tmp_path):
    (tmp_path / "lebronjames.jpg").write_bytes(b"jpg")

    assert find_photo_url(_player(), tmp_path) == "/images/lebronjames.jpg"


def test_no_photo(tmp_path):
    assert find_photo_url(_player(), tmp_path) is None
    assert find_photo_url(_player(), tmp_path / "missing") is None
    assert find_photo_url(_player(), None) is None
    assert find_photo_url(None, tmp_path) is None
