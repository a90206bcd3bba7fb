"""Turn detection.

The user's turn is inferred purely from successive readings of the user's
clock: while it is counting down the user is thinking; when it stops, the
move has been played. The opponent's clock is recorded but never drives a
transition.

    IDLE --(user clock starts ticking)--> USER_TURN_ACTIVE
    USER_TURN_ACTIVE --(user clock stops)--> IDLE   [emits MoveRecord]
"""

from __future__ import annotations

import logging

from .budget import calculate_budget
from .config import DEFAULT_CONFIG, PacerConfig
from .models import ClockSample, MoveRecord, TurnPhase, TurnState
from .rating import rate_move

_logger = logging.getLogger(__name__)


class TurnStateMachine:
    """Consumes one ClockSample per tick and emits a MoveRecord when a user move completes.

    Never blocks; detection latency is one polling interval.
    """

    def __init__(self, config: PacerConfig = DEFAULT_CONFIG):
        self._config = config
        self._state = TurnState()
        self._move_count = 0

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def phase(self) -> TurnPhase:
        if self._state.turn_start_remaining is not None:
            return TurnPhase.USER_TURN_ACTIVE
        return TurnPhase.IDLE

    def reset(self) -> None:
        self._state = TurnState()
        self._move_count = 0

    def is_ticking(self, user_seconds: float) -> bool:
        """True if the user's clock dropped by more than epsilon since the last sample."""
        prev = self._state.prev_user_seconds
        return prev is not None and user_seconds < prev - self._config.tick_epsilon

    def advance(self, sample: ClockSample) -> MoveRecord | None:
        """Feed one sample; return the completed move, if this sample ended one."""
        state = self._state
        ticking = self.is_ticking(sample.user_seconds)
        completed: MoveRecord | None = None

        if ticking and not state.user_was_ticking:
            # The current sample already reflects elapsed time
            state.turn_start_remaining = state.prev_user_seconds

        if not ticking and state.user_was_ticking and state.turn_start_remaining is not None:
            completed = self._complete_move(state.turn_start_remaining, sample)
            state.turn_start_remaining = None
            self._move_count += 1

        state.prev_user_seconds = sample.user_seconds
        state.prev_opp_seconds = sample.opp_seconds
        state.user_was_ticking = ticking
        return completed

    def _complete_move(self, start_remaining: float, sample: ClockSample) -> MoveRecord:
        time_spent = start_remaining - sample.user_seconds
        budget_at_start = calculate_budget(start_remaining, self._config.budget)
        move = rate_move(time_spent, budget_at_start, self._config.rating, timestamp=sample.sampled_at)
        _logger.debug("[Move] %.2fs / %.2fs = %s", move.time_spent, move.budget, move.rating)
        return move
