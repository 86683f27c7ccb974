# search.py
import asyncio
import logging
from typing import Dict, List, Optional

from models import MovieRecord, SearchOutcome
from services import MovieSearchService, normalize_movie

logger = logging.getLogger(__name__)


class SearchSession:
    """Holds the pending query, the last result set and the query that produced it.

    Every lookup is tagged with a generation number. Editing the query,
    clearing, or starting another search bumps the generation, so a response
    that arrives late is dropped instead of overwriting newer state.
    """

    def __init__(self, search_service: MovieSearchService):
        self.search_service = search_service
        self._query = ""
        self._active_query: Optional[str] = None
        self._results: List[MovieRecord] = []
        self._generation = 0

    @property
    def query(self) -> str:
        return self._query

    @property
    def active_query(self) -> Optional[str]:
        return self._active_query

    @property
    def results(self) -> List[MovieRecord]:
        return list(self._results)

    def set_query(self, text: str) -> None:
        if text != self._query:
            self._query = text
            self._generation += 1

    def clear(self) -> None:
        self._generation += 1
        self._reset_results()

    async def execute_search(self) -> SearchOutcome:
        query = self._query
        if not query:
            self.clear()
            return SearchOutcome.CLEARED

        self._generation += 1
        tag = self._generation
        entries, error_details = await asyncio.to_thread(self.search_service.search, query)

        if tag != self._generation:
            logger.debug("Discarding stale results for %r", query)
            return SearchOutcome.STALE

        records = None
        if error_details:
            logger.warning("Search for %r failed:\n%s", query, error_details)
        else:
            try:
                unique_results: Dict[str, MovieRecord] = {}
                for entry in entries:
                    record = normalize_movie(entry)
                    unique_results.setdefault(record.id, record)
                records = list(unique_results.values())
            except (AttributeError, TypeError) as e:
                logger.warning("Malformed search payload for %r: %s", query, e)

        if not records:
            self._reset_results()
            return SearchOutcome.NO_RESULTS

        self._results = records
        self._active_query = query
        return SearchOutcome.FOUND

    def _reset_results(self) -> None:
        self._results = []
        self._active_query = None
