# -*- coding: utf-8 -*-
"""Pacing Engine Package - Public API.

Pure, deterministic computations over a stream of clock samples:

    - classify_position() / classify_urgency(): qualitative buckets
    - calculate_budget(): per-move time allowance (square-root decay model)
    - rate_move(): time spent vs. budget -> MoveRecord
    - MomentumTracker: bounded window of recent ratios -> Momentum
    - TurnStateMachine: detects user turns from clock samples
    - parse_clock_text(): clock display text -> seconds

Example usage:
    >>> from bullet_pacer.core.pacing import ClockSample, TurnStateMachine
    >>> machine = TurnStateMachine()
    >>> moves = [machine.advance(ClockSample(u, 60.0)) for u in (10.0, 10.0, 7.5, 7.5)]
    >>> [m.time_spent for m in moves if m]
    [2.5]
"""

from .budget import calculate_budget, estimate_moves_remaining
from .classify import classify_position, classify_urgency
from .clock_parser import MISSING_TIME_SENTINEL, parse_clock_text, try_parse_clock_text
from .config import (
    DEFAULT_CONFIG,
    BudgetConfig,
    MomentumConfig,
    PacerConfig,
    PositionThresholds,
    RatingThresholds,
    UrgencyThresholds,
)
from .models import (
    ClockSample,
    Momentum,
    MoveRating,
    MoveRecord,
    Position,
    TickEvent,
    TurnPhase,
    TurnState,
    Urgency,
)
from .momentum import MomentumTracker
from .rating import INFINITE_RATIO, rate_move, rating_for_ratio
from .turn import TurnStateMachine

__all__ = [
    # Models
    "ClockSample",
    "Momentum",
    "MoveRating",
    "MoveRecord",
    "Position",
    "TickEvent",
    "TurnPhase",
    "TurnState",
    "Urgency",
    # Config
    "DEFAULT_CONFIG",
    "BudgetConfig",
    "MomentumConfig",
    "PacerConfig",
    "PositionThresholds",
    "RatingThresholds",
    "UrgencyThresholds",
    # Functions
    "calculate_budget",
    "estimate_moves_remaining",
    "classify_position",
    "classify_urgency",
    "parse_clock_text",
    "try_parse_clock_text",
    "rate_move",
    "rating_for_ratio",
    "MISSING_TIME_SENTINEL",
    "INFINITE_RATIO",
    # Stateful components
    "MomentumTracker",
    "TurnStateMachine",
]
