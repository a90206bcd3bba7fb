"""Tests for new-game detection from the move-list size."""

import pytest

from bullet_pacer.core.boundary import MoveListShrinkDetector
from bullet_pacer.core.errors import ConfigError


@pytest.fixture
def detector():
    return MoveListShrinkDetector()


class TestMoveListShrinkDetector:
    def test_growing_list_is_same_game(self, detector):
        assert [detector.observe(n) for n in (0, 2, 4, 10, 40)] == [False] * 5

    def test_collapse_to_empty_is_new_game(self, detector):
        detector.observe(40)
        assert detector.observe(0)

    def test_small_shrink_is_ignored(self, detector):
        """A re-render that drops a few rows is not a new game."""
        detector.observe(40)
        assert not detector.observe(30)
        assert not detector.observe(12)

    def test_boundary_is_strict(self, detector):
        detector.observe(10)
        assert not detector.observe(3)
        detector.observe(10)
        assert detector.observe(2)

    def test_fires_once_per_contraction(self, detector):
        detector.observe(40)
        assert detector.observe(0)
        assert not detector.observe(0)
        assert not detector.observe(2)
        assert detector.last_size == 2

    def test_first_observation_never_fires(self, detector):
        assert not detector.observe(0)
        assert not detector.observe(50)

    def test_reset(self, detector):
        detector.observe(40)
        detector.reset()
        assert detector.last_size == 0
        assert not detector.observe(0)

    @pytest.mark.parametrize("ratio", [0.0, 1.0, -0.2, 1.5])
    def test_invalid_ratio(self, ratio):
        with pytest.raises(ConfigError):
            MoveListShrinkDetector(ratio)
