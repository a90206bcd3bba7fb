# -*- coding: utf-8 -*-
"""Pacing Data Models.

This module defines the value types that flow through the pacing engine:
- ClockSample: one polled reading of both clocks
- MoveRecord: a completed, rated user move
- TurnState: the turn detector's mutable bookkeeping
- TickEvent: everything the presentation layer receives per tick

and the qualitative buckets (Position, Urgency, MoveRating, Momentum).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


# =============================================================================
# Enums
# =============================================================================


class Position(StrEnum):
    """Clock-delta standing of the user relative to the opponent.

    Ordered best to worst; the classifier checks them in this order.
    """

    DOMINATING = "DOMINATING"
    AHEAD = "AHEAD"
    EVEN = "EVEN"
    BEHIND = "BEHIND"
    LOSING = "LOSING"


class Urgency(StrEnum):
    """Absolute time pressure on the user's clock, calmest first."""

    RELAXED = "RELAXED"
    ALERT = "ALERT"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"
    PREMOVE = "PREMOVE"


class MoveRating(StrEnum):
    """Rating of a single move by time spent relative to its budget.

    Precedence order (checked first to last, inclusive upper bounds):
    PREMOVE, EXCELLENT, GOOD, SLOW, COSTLY, then CRITICAL as fallback.
    """

    PREMOVE = "PREMOVE"
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    SLOW = "SLOW"
    COSTLY = "COSTLY"
    CRITICAL = "CRITICAL"


class Momentum(StrEnum):
    """Trend of recent move ratios."""

    GAINING = "GAINING"
    NEUTRAL = "NEUTRAL"
    LOSING = "LOSING"


class TurnPhase(StrEnum):
    """Turn detector state."""

    IDLE = "IDLE"
    USER_TURN_ACTIVE = "USER_TURN_ACTIVE"


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True)
class ClockSample:
    """Both clocks as read on one polling tick.

    Attributes:
        user_seconds: User's remaining time in seconds
        opp_seconds: Opponent's remaining time in seconds
        sampled_at: Monotonic timestamp of the read (seconds)
    """

    user_seconds: float
    opp_seconds: float
    sampled_at: float = 0.0

    @property
    def delta(self) -> float:
        """Positive means the user has more time left."""
        return self.user_seconds - self.opp_seconds


@dataclass(frozen=True)
class MoveRecord:
    """A completed user move and its rating.

    Guarantees:
        - time_spent >= 0.0
        - budget > 0.0 for budgets produced by calculate_budget()
        - ratio >= 0.0
    """

    time_spent: float
    budget: float
    ratio: float
    rating: MoveRating
    timestamp: float = 0.0

    @property
    def within_budget(self) -> bool:
        return self.ratio <= 1.0

    @property
    def overspend(self) -> float:
        """Seconds spent beyond the budget (0.0 when within budget)."""
        return max(0.0, self.time_spent - self.budget)


@dataclass
class TurnState:
    """Mutable bookkeeping of the turn detector; reset between games."""

    turn_start_remaining: float | None = None
    user_was_ticking: bool = False
    prev_user_seconds: float | None = None
    prev_opp_seconds: float | None = None


@dataclass(frozen=True)
class TickEvent:
    """Everything the presentation layer needs for one tick.

    ``move`` is set only on the tick a move completes; ``last_move`` persists
    until the session is reset. ``degraded`` marks a tick produced from the
    conservative fallback after an unexpected error.
    """

    position: Position
    urgency: Urgency
    delta: float
    user_seconds: float
    opp_seconds: float
    budget: float
    momentum: Momentum
    move_count: int
    user_text: str | None = None
    opp_text: str | None = None
    move: MoveRecord | None = None
    last_move: MoveRecord | None = None
    feedback_visible: bool = False
    new_game: bool = False
    skipped: bool = False
    degraded: bool = False
