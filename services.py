# services.py
import json
import logging
import sqlite3
import traceback
from dataclasses import asdict
from typing import Iterable, List, Optional, Tuple

import requests

from models import MovieRecord

logger = logging.getLogger(__name__)

MISSING = "N/A"


def normalize_movie(item: dict) -> MovieRecord:
    """Maps a raw OMDb search entry onto our MovieRecord data model."""
    poster = item.get("Poster")
    return MovieRecord(
        id=item.get("imdbID"),
        title=item.get("Title"),
        year=item.get("Year"),
        kind=item.get("Type"),
        poster_url=None if poster in (None, "", MISSING) else poster,
    )


class StorageService:
    """A small durable key-value store on top of SQLite."""
    def __init__(self, db_name: str):
        self.db_name = db_name
        self.conn = sqlite3.connect(db_name)
        self.conn.row_factory = sqlite3.Row
        self.create_table()

    def create_table(self):
        """Creates the kv table if it doesn't exist."""
        with self.conn:
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

    def get(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self.conn:
            self.conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value)
            )

    def close(self):
        self.conn.close()


class NominationRepository:
    """Mirrors the nomination list to storage under a single fixed key."""
    def __init__(self, storage: StorageService, key: str):
        self.storage = storage
        self.key = key

    def load(self) -> List[MovieRecord]:
        """Returns the saved nominations, or an empty list if none can be read."""
        payload = self.storage.get(self.key)
        if payload is None:
            return []
        try:
            data = json.loads(payload)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            records = []
            for entry in data:
                if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
                    raise ValueError(f"unexpected saved entry: {entry!r}")
                records.append(MovieRecord(**entry))
            return records
        except (ValueError, TypeError) as e:
            logger.warning("Discarding unreadable saved nominations: %s", e)
            return []

    def save(self, records: Iterable[MovieRecord]) -> None:
        self.storage.set(self.key, json.dumps([asdict(r) for r in records]))


class MovieSearchService:
    """A service to handle interactions with the OMDb title search."""
    def __init__(self, api_key: str, url: str, timeout: float):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def search(self, query: str) -> Tuple[Optional[List[dict]], Optional[str]]:
        """Performs the search and returns the raw entries, or error details."""
        params = {"apikey": self.api_key, "s": query}
        try:
            resp = requests.get(self.url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError):
            return None, traceback.format_exc()

        if not isinstance(data, dict):
            return None, f"Unexpected OMDb payload: {data!r}"
        if data.get("Response") == "False":
            logger.debug("OMDb returned no match for %r: %s", query, data.get("Error"))
            return [], None
        return data.get("Search") or [], None
