"""Player comparison assembly."""

from .service import ComparisonService, SlotResolution, build_player, parse_ids

__all__ = ["ComparisonService", "SlotResolution", "build_player", "parse_ids"]
