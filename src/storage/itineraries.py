"""SQLite persistence for itinerary form submissions."""
from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from src.core.errors import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS itineraries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    phone TEXT,
    destinations TEXT NOT NULL,
    budget REAL NOT NULL,
    days INTEGER NOT NULL,
    food_preferences TEXT,
    stay_preferences TEXT,
    sightseeing TEXT,
    permissions TEXT,
    special_requests TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

_COLUMNS = (
    "name",
    "email",
    "phone",
    "destinations",
    "budget",
    "days",
    "food_preferences",
    "stay_preferences",
    "sightseeing",
    "permissions",
    "special_requests",
)


class ItinerarySubmission(BaseModel):
    """Original form fields as they are stored; destinations are pre-joined."""

    name: str
    email: str
    phone: Optional[str] = None
    destinations: str
    budget: float = Field(ge=0)
    days: int = Field(ge=0)
    food_preferences: Optional[str] = None
    stay_preferences: Optional[str] = None
    sightseeing: Optional[str] = None
    permissions: Optional[str] = None
    special_requests: Optional[str] = None


class ItineraryRecord(ItinerarySubmission):
    """A stored submission, including its row id and creation timestamp."""

    id: int
    created_at: Optional[str] = None


def join_destinations(destinations: Sequence[str]) -> str:
    return ", ".join(destinations)


class ItineraryStore:
    """Single-table store keyed by autoincrement id.

    A fresh connection is opened per call so the store can be shared across
    FastAPI's worker threads.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self.init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_schema(self) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(SCHEMA)
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not initialise itinerary table: {exc}") from exc
        logger.info("Itinerary table ready at %s", self.path)

    def insert(self, submission: ItinerarySubmission) -> int:
        """Store ``submission`` and return its new row id."""

        values = [getattr(submission, column) for column in _COLUMNS]
        placeholders = ", ".join("?" for _ in _COLUMNS)
        sql = f"INSERT INTO itineraries ({', '.join(_COLUMNS)}) VALUES ({placeholders})"
        try:
            with closing(self._connect()) as conn, conn:
                cursor = conn.execute(sql, values)
                return int(cursor.lastrowid)
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not save itinerary request: {exc}") from exc

    def list_all(self) -> List[ItineraryRecord]:
        """Return every stored submission, newest first."""

        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    "SELECT * FROM itineraries ORDER BY created_at DESC, id DESC"
                ).fetchall()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not fetch itineraries: {exc}") from exc
        return [_to_record(row) for row in rows]

    def get(self, itinerary_id: int) -> Optional[ItineraryRecord]:
        """Return the submission with ``itinerary_id`` or ``None``."""

        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT * FROM itineraries WHERE id = ?", (itinerary_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not fetch itinerary {itinerary_id}: {exc}") from exc
        return _to_record(row) if row is not None else None


def _to_record(row: Any) -> ItineraryRecord:
    return ItineraryRecord(**dict(row))
