# nominations.py
import logging
from typing import Iterable, Iterator, List, Tuple

from models import MovieRecord, NominationInvariantError, ToggleResult

logger = logging.getLogger(__name__)


class NominationSet:
    """The capped, ordered shortlist of nominated movies.

    Membership only changes through ``toggle``, ``reset`` and the startup
    ``restore``; every one of them leaves the set free of duplicate ids and
    no larger than ``capacity``.
    """

    def __init__(self, capacity: int = 5):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._records: List[MovieRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MovieRecord]:
        return iter(list(self._records))

    @property
    def records(self) -> Tuple[MovieRecord, ...]:
        return tuple(self._records)

    def size(self) -> int:
        return len(self._records)

    def is_full(self) -> bool:
        return len(self._records) == self.capacity

    def is_selected(self, movie_id: str) -> bool:
        return any(r.id == movie_id for r in self._records)

    def toggle(self, record: MovieRecord) -> ToggleResult:
        """Removes the record if nominated, otherwise adds it when there is room."""
        if self.is_selected(record.id):
            self._records = [r for r in self._records if r.id != record.id]
            result = ToggleResult.REMOVED
        elif self.is_full():
            return ToggleResult.REJECTED
        else:
            self._records.append(record)
            result = ToggleResult.FULL if self.is_full() else ToggleResult.ADDED
        self._check_invariants()
        return result

    def reset(self) -> None:
        self._records = []

    def restore(self, records: Iterable[MovieRecord]) -> bool:
        """Seeds the set from a saved snapshot. Returns True if it is now full."""
        restored: List[MovieRecord] = []
        for record in records:
            if any(r.id == record.id for r in restored):
                logger.warning("Dropping duplicate saved nomination %s", record.id)
                continue
            if len(restored) == self.capacity:
                logger.warning("Saved nominations exceed capacity %d, truncating", self.capacity)
                break
            restored.append(record)
        self._records = restored
        self._check_invariants()
        return self.is_full()

    def _check_invariants(self) -> None:
        ids = [r.id for r in self._records]
        if len(ids) != len(set(ids)):
            raise NominationInvariantError(f"duplicate nomination ids: {ids}")
        if len(ids) > self.capacity:
            raise NominationInvariantError(
                f"{len(ids)} nominations exceed capacity {self.capacity}"
            )
