import pytest

from controller import NominationController
from models import MovieRecord
from nominations import NominationSet
from notifications import NotificationCoordinator
from search import SearchSession
from services import NominationRepository, StorageService

NOMINATION_KEY = "SHOPPIES_LOCAL_NOMINATIONS"


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records scheduled callbacks so tests can fire them by hand."""

    def __init__(self):
        self.handles = []

    def schedule(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def fire_pending(self):
        for handle in self.pending:
            handle.callback()


class FakeSearchService:
    """Stands in for the OMDb client; returns canned responses per query."""

    def __init__(self, responses=None, on_call=None):
        self.responses = responses or {}
        self.on_call = on_call
        self.calls = []

    def search(self, query):
        self.calls.append(query)
        if self.on_call:
            self.on_call(query)
        return self.responses.get(query, ([], None))


def omdb_entry(imdb_id, title, year="1977", kind="movie", poster="https://img/poster.jpg"):
    return {"imdbID": imdb_id, "Title": title, "Year": year, "Type": kind, "Poster": poster}


def make_movie(index):
    return MovieRecord(id=f"tt{index:07d}", title=f"Movie {index}", year="2020", kind="movie")


@pytest.fixture
def star_wars():
    return MovieRecord(id="tt0076759", title="Star Wars", year="1977", kind="movie")


@pytest.fixture
def movies():
    return [make_movie(i) for i in range(1, 8)]


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifier(scheduler):
    return NotificationCoordinator(scheduler, timeout=2.2)


@pytest.fixture
def storage():
    service = StorageService(":memory:")
    yield service
    service.close()


@pytest.fixture
def repository(storage):
    return NominationRepository(storage, NOMINATION_KEY)


@pytest.fixture
def search_service():
    return FakeSearchService(
        responses={
            "star wars": (
                [
                    omdb_entry("tt0076759", "Star Wars"),
                    omdb_entry("tt0080684", "Star Wars: Episode V - The Empire Strikes Back", "1980"),
                ],
                None,
            ),
        }
    )


@pytest.fixture
def controller(search_service, repository, notifier):
    return NominationController(
        search=SearchSession(search_service),
        nominations=NominationSet(5),
        repository=repository,
        notifier=notifier,
    )
