"""SQLite-backed local player table and per-user favorites."""

from __future__ import annotations

import logging
import sqlite3
import tempfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from nbadata.models import Player


logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 10

SEED_PLAYERS: Sequence[Player] = (
    Player(id=1, full_name="LeBron James", team="LAL", position="F", height_cm=206, weight_kg=113,
           birth_date=date(1984, 12, 30), pts=25.3, reb=7.4, ast=7.9, stl=1.1, blk=0.5, tov=3.2,
           fg_pct=0.525, tp_pct=0.367, ft_pct=0.750),
    Player(id=2, full_name="Stephen Curry", team="GSW", position="G", height_cm=188, weight_kg=84,
           birth_date=date(1988, 3, 14), pts=27.3, reb=4.5, ast=6.2, stl=1.0, blk=0.4, tov=3.1,
           fg_pct=0.487, tp_pct=0.421, ft_pct=0.915),
    Player(id=3, full_name="Nikola Jokić", team="DEN", position="C", height_cm=211, weight_kg=129,
           birth_date=date(1995, 2, 19), pts=26.4, reb=12.4, ast=9.0, stl=1.2, blk=0.8, tov=3.4,
           fg_pct=0.580, tp_pct=0.370, ft_pct=0.830),
    Player(id=4, full_name="Luka Dončić", team="DAL", position="G", height_cm=201, weight_kg=104,
           birth_date=date(1999, 2, 28), pts=28.4, reb=8.7, ast=8.7, stl=1.1, blk=0.5, tov=4.0,
           fg_pct=0.459, tp_pct=0.346, ft_pct=0.743),
    Player(id=5, full_name="Giannis Antetokounmpo", team="MIL", position="F", height_cm=211, weight_kg=110,
           birth_date=date(1994, 12, 6), pts=31.1, reb=11.8, ast=5.7, stl=0.8, blk=0.8, tov=3.4,
           fg_pct=0.553, tp_pct=0.275, ft_pct=0.656),
    Player(id=6, full_name="Jayson Tatum", team="BOS", position="F", height_cm=203, weight_kg=95,
           birth_date=date(1998, 3, 3), pts=30.1, reb=8.8, ast=4.6, stl=1.1, blk=0.7, tov=2.9,
           fg_pct=0.466, tp_pct=0.350, ft_pct=0.854),
    Player(id=7, full_name="Joel Embiid", team="PHI", position="C", height_cm=213, weight_kg=127,
           birth_date=date(1994, 3, 16), pts=33.1, reb=10.2, ast=4.2, stl=1.0, blk=1.7, tov=3.4,
           fg_pct=0.548, tp_pct=0.330, ft_pct=0.857),
    Player(id=8, full_name="Kevin Durant", team="PHX", position="F", height_cm=208, weight_kg=109,
           birth_date=date(1988, 9, 29), pts=29.1, reb=6.7, ast=5.0, stl=0.9, blk=1.2, tov=3.3,
           fg_pct=0.559, tp_pct=0.404, ft_pct=0.918),
    Player(id=9, full_name="Damian Lillard", team="MIL", position="G", height_cm=188, weight_kg=88,
           birth_date=date(1990, 7, 15), pts=25.1, reb=4.2, ast=6.8, stl=1.0, blk=0.3, tov=2.9,
           fg_pct=0.424, tp_pct=0.351, ft_pct=0.914),
    Player(id=10, full_name="Anthony Davis", team="LAL", position="F-C", height_cm=208, weight_kg=115,
           birth_date=date(1993, 3, 11), pts=24.1, reb=12.6, ast=3.5, stl=1.2, blk=2.3, tov=2.6,
           fg_pct=0.563, tp_pct=0.259, ft_pct=0.784),
)

_PLAYER_COLUMNS = (
    "id", "full_name", "team", "position", "height_cm", "weight_kg", "birth_date",
    "pts", "reb", "ast", "stl", "blk", "tov", "fg_pct", "tp_pct", "ft_pct",
)


@dataclass
class FavoritePlayer:
    favorite_id: int
    user_id: str
    player_id: int
    player_name: str
    team: str
    position: str


class PlayerStore:
    """Simple SQLite-backed store for the seed player table and favorites."""

    def __init__(self, db_path: Path | str, *, seed: bool = True):
        self._use_uri = isinstance(db_path, str) and db_path.startswith("file:")
        self.db_path: Path | str = db_path if self._use_uri else Path(db_path)
        self._ensure_schema()
        if seed:
            self.seed_players(SEED_PLAYERS)

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / "nbadata-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "nbadata.sqlite"
            logger.warning("Cannot open %s; using %s instead", self.db_path, fallback)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id INTEGER PRIMARY KEY,
                full_name TEXT NOT NULL,
                team TEXT NOT NULL DEFAULT '',
                position TEXT NOT NULL DEFAULT '',
                height_cm INTEGER NOT NULL DEFAULT 0,
                weight_kg INTEGER NOT NULL DEFAULT 0,
                birth_date TEXT,
                pts REAL NOT NULL DEFAULT 0,
                reb REAL NOT NULL DEFAULT 0,
                ast REAL NOT NULL DEFAULT 0,
                stl REAL NOT NULL DEFAULT 0,
                blk REAL NOT NULL DEFAULT 0,
                tov REAL NOT NULL DEFAULT 0,
                fg_pct REAL NOT NULL DEFAULT 0,
                tp_pct REAL NOT NULL DEFAULT 0,
                ft_pct REAL NOT NULL DEFAULT 0
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS favorite_players (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                player_id INTEGER NOT NULL,
                player_name TEXT NOT NULL,
                team TEXT NOT NULL DEFAULT '',
                position TEXT NOT NULL DEFAULT '',
                UNIQUE (user_id, player_id)
            )
            """
        )
        conn.commit()

    def seed_players(self, players: Iterable[Player]) -> int:
        """Insert ``players`` only when the table is empty; return rows added."""

        with self._connect() as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM players").fetchone()
            if count:
                return 0
            rows = [self._player_to_row(player) for player in players]
            conn.executemany(
                f"INSERT INTO players ({', '.join(_PLAYER_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in _PLAYER_COLUMNS)})",
                rows,
            )
            conn.commit()
        logger.info("Seeded %d local players", len(rows))
        return len(rows)

    def get_player(self, player_id: int) -> Optional[Player]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        return self._row_to_player(row) if row is not None else None

    def get_players(self, player_ids: Sequence[int]) -> List[Player]:
        """Players for ``player_ids`` in the order given; unknown ids are skipped."""

        if not player_ids:
            return []
        placeholders = ", ".join("?" for _ in player_ids)
        with self._connect() as conn:
            rows = conn.execute(f"SELECT * FROM players WHERE id IN ({placeholders})", tuple(player_ids)).fetchall()
        by_id = {row["id"]: self._row_to_player(row) for row in rows}
        return [by_id[player_id] for player_id in player_ids if player_id in by_id]

    def list_players(self, limit: Optional[int] = None) -> List[Player]:
        with self._connect() as conn:
            if limit is None:
                rows = conn.execute("SELECT * FROM players ORDER BY full_name").fetchall()
            else:
                rows = conn.execute("SELECT * FROM players ORDER BY full_name LIMIT ?", (limit,)).fetchall()
        return [self._row_to_player(row) for row in rows]

    def search_players(self, term: str, limit: Optional[int] = SUGGESTION_LIMIT) -> List[Player]:
        """Case-insensitive substring search on the full name, ordered by name.

        SQLite's LIKE only folds ASCII case, so matching is done in Python to
        handle names such as "Jokić".
        """

        needle = term.strip().casefold()
        if not needle:
            return []
        matches = [player for player in self.list_players() if needle in player.full_name.casefold()]
        return matches if limit is None else matches[:limit]

    def find_player(self, term: str) -> Optional[Player]:
        matches = self.search_players(term, limit=1)
        return matches[0] if matches else None

    def add_favorite(self, user_id: str, *, player_id: int, player_name: str, team: str = "", position: str = "") -> FavoritePlayer:
        """Add a favorite, or return the existing one for the same player."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR IGNORE INTO favorite_players (user_id, player_id, player_name, team, position)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user_id, player_id, player_name, team, position),
            )
            conn.commit()
            row = conn.execute(
                "SELECT * FROM favorite_players WHERE user_id = ? AND player_id = ?",
                (user_id, player_id),
            ).fetchone()
        return self._row_to_favorite(row)

    def list_favorites(self, user_id: str) -> List[FavoritePlayer]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM favorite_players WHERE user_id = ? ORDER BY player_name",
                (user_id,),
            ).fetchall()
        return [self._row_to_favorite(row) for row in rows]

    def remove_favorite(self, user_id: str, favorite_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM favorite_players WHERE id = ? AND user_id = ?",
                (favorite_id, user_id),
            )
            conn.commit()
        return cursor.rowcount > 0

    @staticmethod
    def _player_to_row(player: Player) -> tuple:
        data = player.model_dump(include=set(_PLAYER_COLUMNS))
        data["birth_date"] = player.birth_date.isoformat() if player.birth_date else None
        return tuple(data[column] for column in _PLAYER_COLUMNS)

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        data = {column: row[column] for column in _PLAYER_COLUMNS}
        data["birth_date"] = date.fromisoformat(row["birth_date"]) if row["birth_date"] else None
        return Player(**data)

    @staticmethod
    def _row_to_favorite(row: sqlite3.Row) -> FavoritePlayer:
        return FavoritePlayer(
            favorite_id=row["id"],
            user_id=row["user_id"],
            player_id=row["player_id"],
            player_name=row["player_name"],
            team=row["team"],
            position=row["position"],
        )
