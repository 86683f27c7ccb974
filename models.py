# models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class NominationInvariantError(RuntimeError):
    """Raised when the nomination set holds a duplicate id or overflows."""


@dataclass(frozen=True)
class MovieRecord:
    """A single catalog entry, identified by its IMDb id."""
    id: str
    title: str
    year: str
    kind: str
    poster_url: Optional[str] = None

    @property
    def imdb_url(self) -> str:
        return f"https://www.imdb.com/title/{self.id}/"


class ToggleResult(Enum):
    ADDED = "added"
    FULL = "full"
    REMOVED = "removed"
    REJECTED = "rejected"


class SearchOutcome(Enum):
    CLEARED = "cleared"
    FOUND = "found"
    NO_RESULTS = "no_results"
    STALE = "stale"


class NotificationKind(Enum):
    INFO = "info"
    SUCCESS = "success"


@dataclass(frozen=True)
class Notification:
    text: str
    kind: NotificationKind = NotificationKind.INFO


@dataclass
class AppState:
    """A single object to hold the entire application state."""
    query: str = ""
    active_query: Optional[str] = None
    results: List[MovieRecord] = field(default_factory=list)
    nominations: List[MovieRecord] = field(default_factory=list)
    notification: Optional[Notification] = None
    complete: bool = False
