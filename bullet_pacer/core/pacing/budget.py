"""Per-move time budget.

The number of moves left is estimated with a square-root decay model: a
game with four times the clock is assumed to last twice as many moves, not
four times as many. Below the scramble threshold every move gets the same
flat allowance.
"""

from __future__ import annotations

import math

from .config import DEFAULT_CONFIG, BudgetConfig


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate_moves_remaining(remaining_seconds: float, config: BudgetConfig = DEFAULT_CONFIG.budget) -> int:
    """``max(min_moves, round(base_moves * sqrt(remaining / 60)))``.

    Never below ``min_moves_estimate``, which keeps the budget division safe.
    """
    if not remaining_seconds > 0.0 or math.isinf(remaining_seconds):
        return config.min_moves_estimate
    estimate = _round_half_up(config.base_moves_estimate * math.sqrt(remaining_seconds / 60.0))
    return max(config.min_moves_estimate, estimate)


def calculate_budget(remaining_seconds: float, config: BudgetConfig = DEFAULT_CONFIG.budget) -> float:
    """Fair time allowance for the move about to start, in seconds.

    Args:
        remaining_seconds: Clock of the player whose turn is starting.
        config: Budget model parameters.

    Returns:
        A strictly positive float. Non-finite or scramble-range input
        returns ``scramble_budget``.
    """
    if not math.isfinite(remaining_seconds) or remaining_seconds <= config.scramble_threshold:
        return config.scramble_budget
    moves = estimate_moves_remaining(remaining_seconds, config)
    return (remaining_seconds / moves) * config.safety_factor
