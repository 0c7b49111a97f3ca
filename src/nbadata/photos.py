"""Locate player photos in a local images directory."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from nbadata.models import Player

PHOTO_URL_PREFIX = "/images/"


def _alnum(name: str) -> str:
    return "".join(ch for ch in name if ch.isalnum())


def photo_candidates(player: Player) -> List[str]:
    """File names tried for ``player``: by id, then by name, then lower-cased name."""

    compact = _alnum(player.full_name)
    names = [
        f"{player.id}.jpg",
        f"{player.id}.png",
        f"{compact}.png",
        f"{compact}.jpg",
        f"{compact.lower()}.png",
        f"{compact.lower()}.jpg",
    ]
    return list(dict.fromkeys(names))


def find_photo_url(player: Optional[Player], images_dir: Optional[Path]) -> Optional[str]:
    if player is None or images_dir is None or not images_dir.is_dir():
        return None
    for file_name in photo_candidates(player):
        if (images_dir / file_name).is_file():
            return PHOTO_URL_PREFIX + file_name
    return None
