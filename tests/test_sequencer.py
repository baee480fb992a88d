import random

from services.sequencer import (
    NOT_FOUND,
    current_index,
    next_index,
    pick_random_index,
    previous_index,
)


class TestCurrentIndex:
    """Tests for current_index()."""

    def test_found(self, sample_tracks):
        assert current_index(sample_tracks, "/m/Jazz/night.mp3") == 2

    def test_not_in_view(self, sample_tracks):
        """Test a cursor that was filtered out."""
        assert current_index(sample_tracks, "/elsewhere.mp3") == NOT_FOUND

    def test_no_cursor(self, sample_tracks):
        assert current_index(sample_tracks, "") == NOT_FOUND

    def test_empty_view(self):
        """Test that an empty view never raises."""
        assert current_index([], "/m/Jazz/night.mp3") == NOT_FOUND


class TestLinearMode:
    """Tests for sequential next/previous."""

    def test_next(self):
        assert next_index(4, 1) == 2

    def test_next_wraps(self):
        """Test wrapping from the last track to the first."""
        assert next_index(4, 3) == 0

    def test_previous(self):
        assert previous_index(4, 2) == 1

    def test_previous_wraps(self):
        """Test wrapping from the first track to the last."""
        assert previous_index(4, 0) == 3

    def test_not_found_starts_at_beginning(self):
        """Test that an unknown position starts fresh at 0."""
        assert next_index(4, NOT_FOUND) == 0
        assert previous_index(4, NOT_FOUND) == 0

    def test_empty_view_is_noop(self):
        assert next_index(0, NOT_FOUND) is None
        assert previous_index(0, NOT_FOUND) is None

    def test_single_track(self):
        assert next_index(1, 0) == 0
        assert previous_index(1, 0) == 0

    def test_next_then_previous_round_trip(self):
        """Test that previous undoes next for every position."""
        for length in range(1, 8):
            for idx in range(length):
                assert previous_index(length, next_index(length, idx)) == idx
                assert next_index(length, previous_index(length, idx)) == idx

    def test_scenario_wraparound(self):
        """Test previous from 0 and next from 3 in a 4-track view."""
        assert previous_index(4, 0) == 3
        assert next_index(4, 3) == 0


class TestShuffleMode:
    """Tests for random next/previous."""

    def test_never_repeats_current(self):
        """Test that shuffle avoids the current track."""
        rng = random.Random(7)
        for current in range(5):
            for _ in range(200):
                assert next_index(5, current, shuffle=True, rng=rng) != current
                assert previous_index(5, current, shuffle=True, rng=rng) != current

    def test_two_tracks_alternate(self):
        """Test that with two tracks shuffle must pick the other one."""
        rng = random.Random(1)
        for _ in range(50):
            assert next_index(2, 0, shuffle=True, rng=rng) == 1
            assert next_index(2, 1, shuffle=True, rng=rng) == 0

    def test_single_track_selected(self):
        """Test that the only track is chosen even though it is current."""
        assert next_index(1, 0, shuffle=True) == 0
        assert previous_index(1, 0, shuffle=True) == 0

    def test_empty_view_is_noop(self):
        assert next_index(0, NOT_FOUND, shuffle=True) is None

    def test_not_found_can_pick_any(self):
        """Test that every position is reachable without a current track."""
        rng = random.Random(3)
        seen = {next_index(4, NOT_FOUND, shuffle=True, rng=rng) for _ in range(400)}

        assert seen == {0, 1, 2, 3}

    def test_covers_all_other_positions(self):
        """Test that all positions except the current one get drawn."""
        rng = random.Random(11)
        seen = {pick_random_index(6, 2, rng) for _ in range(600)}

        assert seen == {0, 1, 3, 4, 5}

    def test_default_generator(self):
        """Test that a module-level generator is used when none is given."""
        assert pick_random_index(3, 0) in (1, 2)
