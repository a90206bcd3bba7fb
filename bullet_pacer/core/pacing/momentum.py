"""Momentum tracking over a bounded window of recent move ratios."""

from __future__ import annotations

from collections import deque

from .config import DEFAULT_CONFIG, MomentumConfig
from .models import Momentum, MoveRecord

# Fewer records than this carry no trend
MIN_RECORDS_FOR_MOMENTUM = 2


class MomentumTracker:
    """FIFO window of the most recent ``config.window`` move records.

    Insertion order is eviction order; the window never holds more than
    ``config.window`` records.
    """

    def __init__(self, config: MomentumConfig = DEFAULT_CONFIG.momentum):
        self._config = config
        self._window: deque[MoveRecord] = deque(maxlen=config.window)

    @property
    def config(self) -> MomentumConfig:
        return self._config

    @property
    def records(self) -> tuple[MoveRecord, ...]:
        """Snapshot of the window, oldest first."""
        return tuple(self._window)

    def __len__(self) -> int:
        return len(self._window)

    def record(self, move: MoveRecord) -> None:
        """Append a move, evicting the oldest once the window is full."""
        self._window.append(move)

    def clear(self) -> None:
        self._window.clear()

    def mean_ratio(self) -> float | None:
        if not self._window:
            return None
        return sum(m.ratio for m in self._window) / len(self._window)

    def current_momentum(self) -> Momentum:
        """GAINING below the gaining threshold, LOSING above the losing one.

        Returns NEUTRAL with fewer than two records.
        """
        if len(self._window) < MIN_RECORDS_FOR_MOMENTUM:
            return Momentum.NEUTRAL
        mean = self.mean_ratio()
        if mean < self._config.gaining_threshold:
            return Momentum.GAINING
        if mean > self._config.losing_threshold:
            return Momentum.LOSING
        return Momentum.NEUTRAL
