import random

import pytest

from models import MovieRecord, NominationInvariantError, ToggleResult
from nominations import NominationSet

from conftest import make_movie


class TestNominationSet:
    """Unit tests for NominationSet"""

    def test_starts_empty(self):
        nominations = NominationSet()
        assert nominations.size() == 0
        assert len(nominations) == 0
        assert not nominations.is_full()
        assert nominations.capacity == 5

    def test_toggle_adds_then_removes(self, star_wars):
        nominations = NominationSet()

        assert nominations.toggle(star_wars) is ToggleResult.ADDED
        assert nominations.is_selected("tt0076759")
        assert nominations.size() == 1

        assert nominations.toggle(star_wars) is ToggleResult.REMOVED
        assert not nominations.is_selected("tt0076759")
        assert nominations.size() == 0

    def test_toggle_twice_restores_prior_state(self, movies):
        nominations = NominationSet()
        for movie in movies[:3]:
            nominations.toggle(movie)
        before = nominations.records

        nominations.toggle(movies[4])
        nominations.toggle(movies[4])

        assert nominations.records == before

    def test_order_follows_insertion(self, movies):
        nominations = NominationSet()
        for movie in (movies[2], movies[0], movies[1]):
            nominations.toggle(movie)

        assert [m.id for m in nominations] == [movies[2].id, movies[0].id, movies[1].id]

    def test_removing_keeps_remaining_order(self, movies):
        nominations = NominationSet()
        for movie in movies[:4]:
            nominations.toggle(movie)

        nominations.toggle(movies[1])

        assert [m.id for m in nominations] == [movies[0].id, movies[2].id, movies[3].id]

    def test_membership_is_by_id(self, star_wars):
        nominations = NominationSet()
        nominations.toggle(star_wars)
        same_id = MovieRecord(id="tt0076759", title="Star Wars (Special Edition)", year="1997", kind="movie")

        assert nominations.toggle(same_id) is ToggleResult.REMOVED
        assert nominations.size() == 0

    def test_fifth_toggle_reports_full(self, movies):
        nominations = NominationSet()
        results = [nominations.toggle(m) for m in movies[:5]]

        assert results == [ToggleResult.ADDED] * 4 + [ToggleResult.FULL]
        assert nominations.is_full()

    def test_toggle_new_record_when_full_is_rejected(self, movies):
        nominations = NominationSet()
        for movie in movies[:5]:
            nominations.toggle(movie)
        before = nominations.records

        assert nominations.toggle(movies[5]) is ToggleResult.REJECTED
        assert nominations.records == before
        assert not nominations.is_selected(movies[5].id)

    def test_removing_from_full_set_is_allowed(self, movies):
        nominations = NominationSet()
        for movie in movies[:5]:
            nominations.toggle(movie)

        assert nominations.toggle(movies[0]) is ToggleResult.REMOVED
        assert nominations.size() == 4
        assert not nominations.is_full()

    def test_refilling_reports_full_again(self, movies):
        nominations = NominationSet()
        for movie in movies[:5]:
            nominations.toggle(movie)
        nominations.toggle(movies[0])

        assert nominations.toggle(movies[5]) is ToggleResult.FULL

    def test_reset_clears_everything(self, movies):
        nominations = NominationSet()
        for movie in movies[:5]:
            nominations.toggle(movie)

        nominations.reset()

        assert nominations.size() == 0
        assert nominations.records == ()

    def test_reset_on_empty_set(self):
        nominations = NominationSet()
        nominations.reset()
        assert nominations.size() == 0

    def test_random_toggles_never_break_invariants(self):
        rng = random.Random(1234)
        pool = [make_movie(i) for i in range(10)]
        nominations = NominationSet()

        for _ in range(500):
            nominations.toggle(rng.choice(pool))
            ids = [m.id for m in nominations]
            assert len(ids) <= 5
            assert len(ids) == len(set(ids))

    def test_custom_capacity(self, movies):
        nominations = NominationSet(capacity=2)
        nominations.toggle(movies[0])

        assert nominations.toggle(movies[1]) is ToggleResult.FULL
        assert nominations.toggle(movies[2]) is ToggleResult.REJECTED

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            NominationSet(capacity=0)

    def test_restore_keeps_order(self, movies):
        nominations = NominationSet()

        full = nominations.restore(movies[:3])

        assert not full
        assert [m.id for m in nominations] == [m.id for m in movies[:3]]

    def test_restore_drops_duplicates_and_truncates(self, movies):
        nominations = NominationSet()
        snapshot = [movies[0], movies[0]] + movies[1:7]

        full = nominations.restore(snapshot)

        assert full
        assert [m.id for m in nominations] == [m.id for m in movies[:5]]

    def test_restore_replaces_current_contents(self, movies):
        nominations = NominationSet()
        nominations.toggle(movies[6])

        nominations.restore(movies[:2])

        assert not nominations.is_selected(movies[6].id)
        assert nominations.size() == 2

    def test_invariant_violation_is_detected(self, star_wars):
        nominations = NominationSet()
        nominations._records = [star_wars, star_wars]

        with pytest.raises(NominationInvariantError):
            nominations._check_invariants()

    def test_fill_reject_then_remove(self, star_wars, movies):
        nominations = NominationSet()

        nominations.toggle(star_wars)
        assert nominations.size() == 1

        for movie in movies[:4]:
            nominations.toggle(movie)
        assert nominations.size() == 5
        assert nominations.is_full()

        assert nominations.toggle(movies[4]) is ToggleResult.REJECTED
        assert nominations.size() == 5

        assert nominations.toggle(star_wars) is ToggleResult.REMOVED
        assert nominations.size() == 4
