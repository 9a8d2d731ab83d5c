"""API routers."""

from . import players, stats

__all__ = ["players", "stats"]
