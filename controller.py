# controller.py
import logging
import sqlite3
from typing import Optional

from models import AppState, MovieRecord, NotificationKind, SearchOutcome, ToggleResult
from nominations import NominationSet
from notifications import NotificationCoordinator
from search import SearchSession
from services import NominationRepository

logger = logging.getLogger(__name__)

FULL_MESSAGE = "You've selected all your nominations!"
SAVED_MESSAGE = "Nominations saved! 🎉"
SAVE_FAILED_MESSAGE = "Could not save nominations."
RESET_MESSAGE = "Nominations have been reset"
NO_RESULTS_MESSAGE = "No movies related to that title were found!"


class NominationController:
    """Receives user intents and keeps search, nominations and storage in step."""

    def __init__(
        self,
        search: SearchSession,
        nominations: NominationSet,
        repository: NominationRepository,
        notifier: NotificationCoordinator,
    ):
        self.search = search
        self.nominations = nominations
        self.repository = repository
        self.notifier = notifier
        self.started = False

    def start(self) -> None:
        """Seeds the nominations from storage."""
        if self.nominations.restore(self.repository.load()):
            self.notifier.notify(FULL_MESSAGE, NotificationKind.SUCCESS)
        self.started = True
        logger.info("Restored %d saved nominations", self.nominations.size())

    def is_nominated(self, movie_id: str) -> bool:
        return self.nominations.is_selected(movie_id)

    def set_query(self, text: str) -> None:
        self.search.set_query(text)

    async def execute_search(self) -> SearchOutcome:
        outcome = await self.search.execute_search()
        if outcome is SearchOutcome.NO_RESULTS:
            self.notifier.notify(NO_RESULTS_MESSAGE)
        return outcome

    def clear_search(self) -> None:
        self.search.clear()

    def toggle(self, record: MovieRecord) -> ToggleResult:
        result = self.nominations.toggle(record)
        if result is ToggleResult.FULL:
            self.notifier.notify(FULL_MESSAGE, NotificationKind.SUCCESS)
        elif result is ToggleResult.REJECTED:
            self.notifier.notify(FULL_MESSAGE)
        return result

    def toggle_by_id(self, movie_id: str) -> Optional[ToggleResult]:
        """Toggles a movie shown either in the results or in the nominations."""
        candidates = list(self.search.results) + list(self.nominations)
        record = next((r for r in candidates if r.id == movie_id), None)
        if record is None:
            logger.debug("Ignoring toggle for unknown movie %s", movie_id)
            return None
        return self.toggle(record)

    def reset(self) -> None:
        self.nominations.reset()
        self.notifier.notify(RESET_MESSAGE)

    def save(self) -> bool:
        try:
            self.repository.save(self.nominations.records)
        except sqlite3.Error:
            logger.exception("Saving nominations failed")
            self.notifier.notify(SAVE_FAILED_MESSAGE)
            return False
        self.notifier.notify(SAVED_MESSAGE, NotificationKind.SUCCESS)
        return True

    def teardown(self) -> None:
        """Best-effort flush for the host to call when the session ends."""
        if not self.started:
            return
        try:
            self.repository.save(self.nominations.records)
        except sqlite3.Error:
            logger.exception("Flushing nominations on exit failed")

    def snapshot(self) -> AppState:
        return AppState(
            query=self.search.query,
            active_query=self.search.active_query,
            results=self.search.results,
            nominations=list(self.nominations.records),
            notification=self.notifier.current,
            complete=self.nominations.is_full(),
        )
