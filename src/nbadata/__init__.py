"""Basketball player search and comparison backed by the balldontlie stats API."""

__version__ = "0.1.0"
