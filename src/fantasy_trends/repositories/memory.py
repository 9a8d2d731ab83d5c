"""
In-memory repository over a list of observation rows.

Evaluates TrendQuery descriptions in process with the same null and
ordering rules as Postgres. Used for tests and for serving a JSON
fixture without a database.

JSON Format:
    [
        {
            "id": 1,
            "player_name": "Puka Nacua",
            "position": "WR",
            "team": "LAR",
            "percent_rostered": 99.1,
            "percent_started_change": 4.5,
            "adds": 120,
            "semana": 3,
            "timestamp": "2025-09-21T12:00:00+00:00"
        },
        ...
    ]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from ..core.models import Observation
from ..query_builder import TrendQuery
from .base import TrendsRepository

logger = logging.getLogger(__name__)


class InMemoryTrendsRepository(TrendsRepository):
    """Repository backed by a list of row dicts."""

    def __init__(self, rows: Iterable[dict[str, Any]] = (), timeout: Optional[float] = None):
        super().__init__(timeout=timeout)
        self.rows = [dict(row) for row in rows]

    async def _fetch(self, query: TrendQuery) -> list[dict[str, Any]]:
        matched = [row for row in self.rows if query.matches(row)]
        return [query.project(row) for row in query.sort_rows(matched)]

    @classmethod
    def from_json(cls, file_path: str | Path, timeout: Optional[float] = None) -> "InMemoryTrendsRepository":
        """
        Load observations from a JSON fixture file.

        Each entry is validated as an Observation; invalid entries are
        skipped with a warning. Rows without an id get their list index.

        Args:
            file_path: Path to a JSON array of observations
            timeout: Optional per-query timeout in seconds

        Returns:
            Repository holding the loaded rows
        """
        path = Path(file_path)
        with path.open(encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Fixture {path} must contain a JSON array")

        rows = []
        for index, item in enumerate(data):
            try:
                observation = Observation.model_validate(item)
            except PydanticValidationError as e:
                logger.warning("Skipping fixture row %d in %s: %s", index, path, e)
                continue
            row = observation.model_dump()
            if row["id"] is None:
                row["id"] = index + 1
            rows.append(row)

        logger.info("Loaded %d observations from %s", len(rows), path)
        return cls(rows, timeout=timeout)
