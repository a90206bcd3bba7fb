"""Move rating.

Compares the time actually spent on a move with the budget computed at the
start of that move. The budget is never recomputed after the fact.
"""

from __future__ import annotations

import logging
import math

from .config import DEFAULT_CONFIG, RatingThresholds
from .models import MoveRating, MoveRecord

_logger = logging.getLogger(__name__)

# Stand-in ratio for a move whose ratio cannot be computed
INFINITE_RATIO = 999.0


def rating_for_ratio(ratio: float, table: RatingThresholds = DEFAULT_CONFIG.rating) -> MoveRating:
    """First inclusive upper bound that ``ratio`` fits under; CRITICAL otherwise."""
    if ratio <= table.premove:
        return MoveRating.PREMOVE
    if ratio <= table.excellent:
        return MoveRating.EXCELLENT
    if ratio <= table.good:
        return MoveRating.GOOD
    if ratio <= table.slow:
        return MoveRating.SLOW
    if ratio <= table.costly:
        return MoveRating.COSTLY
    return MoveRating.CRITICAL


def rate_move(
    time_spent: float,
    budget: float,
    table: RatingThresholds = DEFAULT_CONFIG.rating,
    timestamp: float = 0.0,
) -> MoveRecord:
    """Rate one move. Total: always returns a record with a rating.

    Degenerate input is clamped to the worst rating rather than raised:
    a non-positive (or NaN) budget, or a negative/NaN ``time_spent`` from
    clock desynchronisation, produces ``ratio = INFINITE_RATIO`` and
    CRITICAL.
    """
    if not time_spent >= 0.0:
        _logger.warning("Negative or invalid time spent %r, rating as CRITICAL", time_spent)
        return MoveRecord(
            time_spent=0.0,
            budget=budget,
            ratio=INFINITE_RATIO,
            rating=MoveRating.CRITICAL,
            timestamp=timestamp,
        )

    if budget > 0.0:
        ratio = time_spent / budget
    else:
        ratio = INFINITE_RATIO
    if math.isnan(ratio):
        ratio = INFINITE_RATIO

    return MoveRecord(
        time_spent=time_spent,
        budget=budget,
        ratio=ratio,
        rating=rating_for_ratio(ratio, table),
        timestamp=timestamp,
    )
