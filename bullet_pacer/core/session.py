"""Pacer session.

One PacerSession owns every piece of per-game mutable state: the turn
detector, the momentum window and the last rated move. The polling loop
calls ``advance()`` once per tick; nothing else mutates the session except
``reset()``, which the loop calls when a new game is detected.

``advance()`` never raises. Availability of the pacing signal matters more
than precision under malformed input, so an unexpected failure yields a
conservative, clearly marked (``degraded=True``) event instead.
"""

from __future__ import annotations

import logging

from bullet_pacer.core.pacing.budget import calculate_budget
from bullet_pacer.core.pacing.classify import classify_position, classify_urgency
from bullet_pacer.core.pacing.clock_parser import MISSING_TIME_SENTINEL, try_parse_clock_text
from bullet_pacer.core.pacing.config import DEFAULT_CONFIG, PacerConfig
from bullet_pacer.core.pacing.models import (
    ClockSample,
    Momentum,
    MoveRecord,
    Position,
    TickEvent,
    Urgency,
)
from bullet_pacer.core.pacing.momentum import MomentumTracker
from bullet_pacer.core.pacing.turn import TurnStateMachine

_logger = logging.getLogger(__name__)


class PacerSession:
    """Session-scoped pacing context for a single game at a time."""

    def __init__(self, config: PacerConfig = DEFAULT_CONFIG):
        self._config = config
        self._turns = TurnStateMachine(config)
        self._momentum = MomentumTracker(config.momentum)
        self._last_move: MoveRecord | None = None
        self._last_move_at: float | None = None

    # -------------------------------------------------------------------------
    # State accessors
    # -------------------------------------------------------------------------

    @property
    def config(self) -> PacerConfig:
        return self._config

    @property
    def turns(self) -> TurnStateMachine:
        return self._turns

    @property
    def momentum_tracker(self) -> MomentumTracker:
        return self._momentum

    @property
    def last_move(self) -> MoveRecord | None:
        return self._last_move

    @property
    def move_count(self) -> int:
        return self._turns.move_count

    def current_momentum(self) -> Momentum:
        return self._momentum.current_momentum()

    def feedback_visible(self, now: float) -> bool:
        """True while the last move's feedback is younger than feedback_duration_sec."""
        if self._last_move_at is None:
            return False
        return now - self._last_move_at <= self._config.feedback_duration_sec

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Discard turn state, momentum window and last move; back to the initial state."""
        self._turns.reset()
        self._momentum.clear()
        self._last_move = None
        self._last_move_at = None
        _logger.info("Pacer session reset for new game")

    def advance(self, sample: ClockSample, new_game: bool = False) -> TickEvent:
        """Process one clock sample and return the event for the presentation layer."""
        try:
            return self._advance(sample, new_game=new_game, mutate=True)
        except Exception:
            _logger.exception("Pacing tick failed for %r, emitting conservative event", sample)
            return self.degraded_event(sample, new_game=new_game)

    def advance_text(
        self,
        user_text: str | None,
        opp_text: str | None,
        sampled_at: float,
        new_game: bool = False,
    ) -> TickEvent:
        """Process one tick of raw clock text.

        If either side is missing or unparsable the tick is skipped for state
        purposes (no turn transition is inferred, previous readings are kept),
        but the classifiers still run with the sentinel in place of the
        missing side.
        """
        user = try_parse_clock_text(user_text)
        opp = try_parse_clock_text(opp_text)
        sample = ClockSample(
            user_seconds=MISSING_TIME_SENTINEL if user is None else user,
            opp_seconds=MISSING_TIME_SENTINEL if opp is None else opp,
            sampled_at=sampled_at,
        )
        complete = user is not None and opp is not None
        if not complete:
            _logger.debug("Incomplete clock reading user=%r opp=%r, skipping turn detection", user_text, opp_text)
        try:
            return self._advance(
                sample,
                new_game=new_game,
                mutate=complete,
                user_text=user_text,
                opp_text=opp_text,
            )
        except Exception:
            _logger.exception("Pacing tick failed for %r / %r, emitting conservative event", user_text, opp_text)
            return self.degraded_event(sample, new_game=new_game, user_text=user_text, opp_text=opp_text)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _advance(
        self,
        sample: ClockSample,
        new_game: bool,
        mutate: bool,
        user_text: str | None = None,
        opp_text: str | None = None,
    ) -> TickEvent:
        if new_game:
            self.reset()

        move: MoveRecord | None = None
        if mutate:
            move = self._turns.advance(sample)
            if move is not None:
                self._momentum.record(move)
                self._last_move = move
                self._last_move_at = sample.sampled_at

        delta = sample.delta
        return TickEvent(
            position=classify_position(delta, self._config.position),
            urgency=classify_urgency(sample.user_seconds, self._config.urgency),
            delta=delta,
            user_seconds=sample.user_seconds,
            opp_seconds=sample.opp_seconds,
            budget=calculate_budget(sample.user_seconds, self._config.budget),
            momentum=self._momentum.current_momentum(),
            move_count=self._turns.move_count,
            user_text=user_text,
            opp_text=opp_text,
            move=move,
            last_move=self._last_move,
            feedback_visible=self.feedback_visible(sample.sampled_at),
            new_game=new_game,
            skipped=not mutate,
        )

    def degraded_event(
        self,
        sample: ClockSample,
        new_game: bool = False,
        user_text: str | None = None,
        opp_text: str | None = None,
    ) -> TickEvent:
        """Most conservative event: LOSING position, PREMOVE urgency, scramble budget."""
        return TickEvent(
            position=Position.LOSING,
            urgency=Urgency.PREMOVE,
            delta=0.0,
            user_seconds=getattr(sample, "user_seconds", MISSING_TIME_SENTINEL),
            opp_seconds=getattr(sample, "opp_seconds", MISSING_TIME_SENTINEL),
            budget=self._config.budget.scramble_budget,
            momentum=Momentum.LOSING,
            move_count=self._turns.move_count,
            user_text=user_text,
            opp_text=opp_text,
            last_move=self._last_move,
            new_game=new_game,
            skipped=True,
            degraded=True,
        )
