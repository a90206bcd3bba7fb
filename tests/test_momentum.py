"""Tests for MomentumTracker."""

import pytest

from bullet_pacer.core.errors import ConfigError
from bullet_pacer.core.pacing import Momentum, MomentumConfig, MomentumTracker, rate_move


def move_with_ratio(ratio: float):
    return rate_move(ratio, 1.0)


@pytest.fixture
def tracker():
    return MomentumTracker()


class TestMomentumTracker:
    def test_empty_is_neutral(self, tracker):
        assert tracker.current_momentum() == Momentum.NEUTRAL
        assert tracker.mean_ratio() is None

    def test_single_record_is_neutral(self, tracker):
        tracker.record(move_with_ratio(0.1))
        assert tracker.current_momentum() == Momentum.NEUTRAL

    def test_gaining(self, tracker):
        tracker.record(move_with_ratio(0.2))
        tracker.record(move_with_ratio(0.4))
        assert tracker.mean_ratio() == pytest.approx(0.3)
        assert tracker.current_momentum() == Momentum.GAINING

    def test_losing(self, tracker):
        tracker.record(move_with_ratio(1.5))
        tracker.record(move_with_ratio(2.0))
        assert tracker.current_momentum() == Momentum.LOSING

    def test_thresholds_are_exclusive(self, tracker):
        tracker.record(move_with_ratio(0.5))
        tracker.record(move_with_ratio(0.5))
        assert tracker.current_momentum() == Momentum.NEUTRAL
        tracker.clear()
        tracker.record(move_with_ratio(1.4))
        tracker.record(move_with_ratio(1.4))
        assert tracker.current_momentum() == Momentum.NEUTRAL

    def test_window_evicts_oldest(self, tracker):
        for ratio in (3.0, 0.1, 0.1, 0.1, 0.1):
            tracker.record(move_with_ratio(ratio))
        # mean 0.68 with the slow move still in the window
        assert tracker.current_momentum() == Momentum.NEUTRAL

        tracker.record(move_with_ratio(0.1))
        assert len(tracker) == 5
        assert [m.ratio for m in tracker.records] == pytest.approx([0.1] * 5)
        assert tracker.current_momentum() == Momentum.GAINING

    def test_window_never_exceeds_size(self, tracker):
        for i in range(50):
            tracker.record(move_with_ratio(i / 10))
            assert len(tracker) <= tracker.config.window

    def test_clear(self, tracker):
        tracker.record(move_with_ratio(2.0))
        tracker.record(move_with_ratio(2.0))
        tracker.clear()
        assert len(tracker) == 0
        assert tracker.current_momentum() == Momentum.NEUTRAL

    def test_custom_window(self):
        tracker = MomentumTracker(MomentumConfig(window=2))
        for ratio in (0.1, 2.0, 2.0):
            tracker.record(move_with_ratio(ratio))
        assert len(tracker) == 2
        assert tracker.current_momentum() == Momentum.LOSING

    @pytest.mark.parametrize(
        "ratio,expected",
        [
            (0.25, Momentum.GAINING),
            (0.49, Momentum.GAINING),
            (0.5, Momentum.NEUTRAL),
            (0.51, Momentum.NEUTRAL),
            (1.0, Momentum.NEUTRAL),
            (1.39, Momentum.NEUTRAL),
            (1.41, Momentum.LOSING),
            (3.0, Momentum.LOSING),
        ],
    )
    def test_full_window_of_one_ratio(self, tracker, ratio, expected):
        for _ in range(tracker.config.window):
            tracker.record(move_with_ratio(ratio))
        assert len(tracker) == tracker.config.window
        assert tracker.current_momentum() == expected

    @pytest.mark.parametrize(
        "ratio,expected",
        [
            (1.25, Momentum.NEUTRAL),
            (1.5, Momentum.NEUTRAL),
            (1.75, Momentum.LOSING),
        ],
    )
    def test_full_window_at_losing_threshold(self, ratio, expected):
        # 1.5 is exact in binary, so the mean lands on the threshold itself
        tracker = MomentumTracker(MomentumConfig(losing_threshold=1.5))
        for _ in range(tracker.config.window):
            tracker.record(move_with_ratio(ratio))
        assert tracker.current_momentum() == expected


class TestMomentumConfig:
    def test_zero_window_rejected(self):
        with pytest.raises(ConfigError):
            MomentumConfig(window=0)

    def test_inverted_thresholds_rejected(self):
        with pytest.raises(ConfigError):
            MomentumConfig(gaining_threshold=2.0, losing_threshold=1.0)
