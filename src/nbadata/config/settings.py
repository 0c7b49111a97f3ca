"""Runtime settings for the stats provider, cache and local store."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from nbadata.cache import CachePolicy


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.balldontlie.io/v1/"
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "nbadata.sqlite"

_ENV_PREFIX = "NBADATA_"


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip())


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s%s: %s; using default %d", _ENV_PREFIX, name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s%s: %s; using default %.1f", _ENV_PREFIX, name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    timeout_seconds: float = 30.0
    max_pages: int = 3
    per_page: int = 25
    season_start: int = 2015
    default_season: int = 2024
    db_path: Path = DEFAULT_DB_PATH
    images_dir: Optional[Path] = None
    cache_policy: CachePolicy = field(default_factory=CachePolicy)

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        settings = cls(
            base_url=_env_str("BASE_URL", defaults.base_url),
            api_key=_env_str("API_KEY", defaults.api_key),
            timeout_seconds=_env_float("TIMEOUT_SECONDS", defaults.timeout_seconds, clamp_min=1.0),
            max_pages=_env_int("MAX_PAGES", defaults.max_pages, min_value=1),
            per_page=_env_int("PER_PAGE", defaults.per_page, min_value=1),
            season_start=_env_int("SEASON_START", defaults.season_start),
            default_season=_env_int("DEFAULT_SEASON", defaults.default_season),
            db_path=Path(_env_str("DB_PATH", str(defaults.db_path))),
            images_dir=_env_path("IMAGES_DIR"),
        )
        if not settings.api_key:
            logger.warning("%sAPI_KEY is not set; provider requests will be unauthenticated", _ENV_PREFIX)
        return settings

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, base: Optional["Settings"] = None) -> "Settings":
        """Overlay known keys from ``data`` on ``base`` (or the defaults)."""

        current = asdict(base or cls())
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown settings key %r", key)
                continue
            current[key] = value
        policy = current.get("cache_policy")
        if isinstance(policy, Mapping):
            current["cache_policy"] = CachePolicy(**policy)
        current["db_path"] = Path(current["db_path"])
        if current.get("images_dir") is not None:
            current["images_dir"] = Path(current["images_dir"])
        return cls(**current)

    @classmethod
    def load(cls, path: Path, *, base: Optional["Settings"] = None) -> "Settings":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.from_mapping(data, base=base)

    def save(self, path: Path) -> None:
        payload = asdict(self)
        payload["db_path"] = str(self.db_path)
        payload["images_dir"] = str(self.images_dir) if self.images_dir else None
        payload.pop("api_key", None)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
