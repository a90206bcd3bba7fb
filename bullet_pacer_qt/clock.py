"""
Simulated two-player chess clock.

Stands in for the live game the pacer normally watches: it keeps both
players' remaining time, switches sides on every press and exposes the
formatted clock text through ``read()``, so the pacer core parses it exactly
as it would parse a clock read off a real board.

The move-list size reported to the boundary detector is the number of
plies played; starting a new game drops it to zero.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from bullet_pacer.core.formatting import format_clock
from bullet_pacer.core.scheduler import ClockReading

_logger = logging.getLogger(__name__)

DEFAULT_BASE_SECONDS = 60.0
DEFAULT_INCREMENT_SECONDS = 0.0
CLOCK_TEXT_PRECISION = 2


class Side(Enum):
    USER = "user"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.USER else Side.USER


@dataclass
class ClockState:
    user_seconds: float
    opp_seconds: float
    turn: Side = Side.USER
    running: bool = False
    started_at: Optional[float] = None
    flagged: Optional[Side] = None
    plies: int = 0
    started: bool = False


class SimulatedChessClock:
    """
    Chess clock with base time and increment.

    - press() ends the running side's move: commit elapsed, add increment,
      hand the clock to the other side (starts the clock if idle).
    - pause()/resume() stop and restart the side to move.
    - new_game() resets both clocks to base.
    - read() returns the current ClockReading.
    """

    def __init__(
        self,
        base_seconds: float = DEFAULT_BASE_SECONDS,
        increment_seconds: float = DEFAULT_INCREMENT_SECONDS,
        time_source: Callable[[], float] = time.monotonic,
    ):
        self.base_seconds = base_seconds
        self.increment_seconds = increment_seconds
        self._now = time_source
        self.state = ClockState(user_seconds=base_seconds, opp_seconds=base_seconds)

    # ----- queries -----

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def turn(self) -> Side:
        return self.state.turn

    @property
    def flagged(self) -> Optional[Side]:
        return self.state.flagged or self._live_flag()

    @property
    def plies(self) -> int:
        return self.state.plies

    @property
    def started(self) -> bool:
        """True once the clock has run since the last new_game()."""
        return self.state.started

    def remaining(self, side: Side) -> float:
        """Remaining seconds for ``side`` with live elapsed time applied."""
        s = self.state
        value = s.user_seconds if side is Side.USER else s.opp_seconds
        if s.running and s.turn is side and s.started_at is not None:
            value -= self._now() - s.started_at
        return max(0.0, value)

    def read(self) -> ClockReading:
        # Centiseconds: a 50 ms poll must always see a running clock move
        return ClockReading(
            user_text=format_clock(self.remaining(Side.USER), precision=CLOCK_TEXT_PRECISION),
            opp_text=format_clock(self.remaining(Side.OPPONENT), precision=CLOCK_TEXT_PRECISION),
            move_list_size=self.state.plies,
        )

    # ----- control -----

    def start(self, turn: Side = Side.USER) -> None:
        if self.flagged is not None:
            return
        self.state.turn = turn
        self.resume()

    def resume(self) -> None:
        if self.state.running or self.flagged is not None:
            return
        self.state.running = True
        self.state.started = True
        self.state.started_at = self._now()

    def pause(self) -> None:
        if not self.state.running:
            return
        self._apply_elapsed()
        self.state.running = False
        self.state.started_at = None

    def press(self) -> None:
        """End the move of the side to move and start the other side's clock."""
        s = self.state
        self._apply_elapsed()
        if s.flagged is not None:
            return
        if not s.running:
            self.start(s.turn)
            return
        if s.turn is Side.USER:
            s.user_seconds += self.increment_seconds
        else:
            s.opp_seconds += self.increment_seconds
        s.plies += 1
        s.turn = s.turn.other
        s.started_at = self._now()

    def new_game(self, base_seconds: Optional[float] = None, increment_seconds: Optional[float] = None) -> None:
        if base_seconds is not None:
            self.base_seconds = base_seconds
        if increment_seconds is not None:
            self.increment_seconds = increment_seconds
        self.state = ClockState(user_seconds=self.base_seconds, opp_seconds=self.base_seconds)
        _logger.info("New game on simulated clock: %.0f+%.0f", self.base_seconds, self.increment_seconds)

    # ----- internals -----

    def _live_flag(self) -> Optional[Side]:
        if not self.state.running:
            return None
        return self.state.turn if self.remaining(self.state.turn) <= 0 else None

    def _apply_elapsed(self) -> None:
        s = self.state
        if not s.running or s.started_at is None:
            return
        now = self._now()
        elapsed = now - s.started_at
        if s.turn is Side.USER:
            s.user_seconds = max(0.0, s.user_seconds - elapsed)
            if s.user_seconds <= 0:
                s.flagged = Side.USER
        else:
            s.opp_seconds = max(0.0, s.opp_seconds - elapsed)
            if s.opp_seconds <= 0:
                s.flagged = Side.OPPONENT
        s.started_at = now
        if s.flagged is not None:
            s.running = False
            _logger.info("%s flagged", s.flagged.value)
