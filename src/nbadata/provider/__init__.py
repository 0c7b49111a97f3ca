"""Stats provider integration (HTTP client, result type, aggregation)."""

from .aggregation import season_averages
from .client import StatsProviderClient
from .results import ProviderResult, ResultStatus

__all__ = ["ProviderResult", "ResultStatus", "StatsProviderClient", "season_averages"]
