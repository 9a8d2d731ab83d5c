"""
HTTP API for Fantasy Trends.

Usage:
    uvicorn fantasy_trends.api.main:app
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
