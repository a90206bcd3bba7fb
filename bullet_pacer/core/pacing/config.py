"""Pacing Configuration.

Thresholds for the classifiers, the budget model, the move rating table and
the momentum tracker. They are tuned constants with no derivation beyond
play-testing in bullet; treat them as configuration, never as invariants.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from bullet_pacer.common.typed_config import safe_bool, safe_float, safe_int, section
from bullet_pacer.core.errors import ConfigError

# =============================================================================
# Constants
# =============================================================================

# Position thresholds (delta in seconds, user minus opponent)
POSITION_DOMINATING = 5.0
POSITION_AHEAD = 2.0
POSITION_EVEN = 1.0  # symmetric band +/-
POSITION_BEHIND = -2.5

# Urgency thresholds (user's remaining seconds, strict >)
URGENCY_RELAXED = 25.0
URGENCY_ALERT = 15.0
URGENCY_HIGH = 8.0
URGENCY_CRITICAL = 4.0
URGENCY_PREMOVE = 2.0  # presentation hint only; PREMOVE is the fallback bucket

# Budget model
BASE_MOVES_ESTIMATE = 35
MIN_MOVES_ESTIMATE = 8
SAFETY_FACTOR = 0.85
SCRAMBLE_THRESHOLD = 10.0
SCRAMBLE_BUDGET = 0.5

# Move rating (ratio of budget, inclusive upper bounds)
RATING_PREMOVE = 0.15
RATING_EXCELLENT = 0.5
RATING_GOOD = 1.0
RATING_SLOW = 1.5
RATING_COSTLY = 2.5

# Momentum
MOMENTUM_WINDOW = 5
MOMENTUM_GAINING_THRESHOLD = 0.5
MOMENTUM_LOSING_THRESHOLD = 1.4

# Loop / presentation
TICK_EPSILON = 0.01
FEEDBACK_DURATION_SEC = 2.5
UPDATE_INTERVAL_MS = 50
BOARD_MAX_DELTA = 8.0
NEW_GAME_CONTRACTION_RATIO = 0.3


def _require(condition: bool, message: str, **context: Any) -> None:
    if not condition:
        raise ConfigError(message, context=context)


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True)
class PositionThresholds:
    """Delta thresholds: dominating >= ahead > even >= 0 > behind."""

    dominating: float = POSITION_DOMINATING
    ahead: float = POSITION_AHEAD
    even: float = POSITION_EVEN
    behind: float = POSITION_BEHIND

    def __post_init__(self):
        _require(
            self.dominating >= self.ahead >= self.even >= 0.0 and -self.even >= self.behind,
            "position thresholds must satisfy dominating >= ahead >= even >= 0 and behind <= -even",
            thresholds=asdict(self),
        )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "PositionThresholds":
        return cls(
            dominating=safe_float(d.get("dominating"), POSITION_DOMINATING),
            ahead=safe_float(d.get("ahead"), POSITION_AHEAD),
            even=safe_float(d.get("even"), POSITION_EVEN),
            behind=safe_float(d.get("behind"), POSITION_BEHIND),
        )


@dataclass(frozen=True)
class UrgencyThresholds:
    """Remaining-time thresholds, strictly descending."""

    relaxed: float = URGENCY_RELAXED
    alert: float = URGENCY_ALERT
    high: float = URGENCY_HIGH
    critical: float = URGENCY_CRITICAL
    premove: float = URGENCY_PREMOVE

    def __post_init__(self):
        _require(
            self.relaxed > self.alert > self.high > self.critical >= self.premove >= 0.0,
            "urgency thresholds must be strictly descending and non-negative",
            thresholds=asdict(self),
        )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "UrgencyThresholds":
        return cls(
            relaxed=safe_float(d.get("relaxed"), URGENCY_RELAXED),
            alert=safe_float(d.get("alert"), URGENCY_ALERT),
            high=safe_float(d.get("high"), URGENCY_HIGH),
            critical=safe_float(d.get("critical"), URGENCY_CRITICAL),
            premove=safe_float(d.get("premove"), URGENCY_PREMOVE),
        )


@dataclass(frozen=True)
class BudgetConfig:
    """Square-root decay budget model parameters."""

    base_moves_estimate: int = BASE_MOVES_ESTIMATE
    min_moves_estimate: int = MIN_MOVES_ESTIMATE
    safety_factor: float = SAFETY_FACTOR
    scramble_threshold: float = SCRAMBLE_THRESHOLD
    scramble_budget: float = SCRAMBLE_BUDGET

    def __post_init__(self):
        _require(self.base_moves_estimate >= 1, "base_moves_estimate must be >= 1", value=self.base_moves_estimate)
        _require(self.min_moves_estimate >= 1, "min_moves_estimate must be >= 1", value=self.min_moves_estimate)
        _require(0.0 < self.safety_factor <= 1.0, "safety_factor must be in (0, 1]", value=self.safety_factor)
        _require(self.scramble_threshold >= 0.0, "scramble_threshold must be >= 0", value=self.scramble_threshold)
        _require(self.scramble_budget > 0.0, "scramble_budget must be > 0", value=self.scramble_budget)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "BudgetConfig":
        return cls(
            base_moves_estimate=safe_int(d.get("base_moves_estimate"), BASE_MOVES_ESTIMATE),
            min_moves_estimate=safe_int(d.get("min_moves_estimate"), MIN_MOVES_ESTIMATE),
            safety_factor=safe_float(d.get("safety_factor"), SAFETY_FACTOR),
            scramble_threshold=safe_float(d.get("scramble_threshold"), SCRAMBLE_THRESHOLD),
            scramble_budget=safe_float(d.get("scramble_budget"), SCRAMBLE_BUDGET),
        )


@dataclass(frozen=True)
class RatingThresholds:
    """Inclusive upper ratio bounds; anything above ``costly`` is CRITICAL."""

    premove: float = RATING_PREMOVE
    excellent: float = RATING_EXCELLENT
    good: float = RATING_GOOD
    slow: float = RATING_SLOW
    costly: float = RATING_COSTLY

    def __post_init__(self):
        _require(
            0.0 <= self.premove <= self.excellent <= self.good <= self.slow <= self.costly,
            "rating thresholds must be non-negative and ascending",
            thresholds=asdict(self),
        )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "RatingThresholds":
        return cls(
            premove=safe_float(d.get("premove"), RATING_PREMOVE),
            excellent=safe_float(d.get("excellent"), RATING_EXCELLENT),
            good=safe_float(d.get("good"), RATING_GOOD),
            slow=safe_float(d.get("slow"), RATING_SLOW),
            costly=safe_float(d.get("costly"), RATING_COSTLY),
        )


@dataclass(frozen=True)
class MomentumConfig:
    """Momentum window size and mean-ratio thresholds."""

    window: int = MOMENTUM_WINDOW
    gaining_threshold: float = MOMENTUM_GAINING_THRESHOLD
    losing_threshold: float = MOMENTUM_LOSING_THRESHOLD

    def __post_init__(self):
        _require(self.window >= 1, "momentum window must be >= 1", value=self.window)
        _require(
            self.gaining_threshold <= self.losing_threshold,
            "gaining_threshold must not exceed losing_threshold",
            gaining=self.gaining_threshold,
            losing=self.losing_threshold,
        )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "MomentumConfig":
        return cls(
            window=safe_int(d.get("window"), MOMENTUM_WINDOW),
            gaining_threshold=safe_float(d.get("gaining_threshold"), MOMENTUM_GAINING_THRESHOLD),
            losing_threshold=safe_float(d.get("losing_threshold"), MOMENTUM_LOSING_THRESHOLD),
        )


@dataclass(frozen=True)
class PacerConfig:
    """Complete pacer configuration.

    Thread-safety: Immutable (frozen=True)
    """

    position: PositionThresholds = field(default_factory=PositionThresholds)
    urgency: UrgencyThresholds = field(default_factory=UrgencyThresholds)
    budget: BudgetConfig = field(default_factory=BudgetConfig)
    rating: RatingThresholds = field(default_factory=RatingThresholds)
    momentum: MomentumConfig = field(default_factory=MomentumConfig)
    tick_epsilon: float = TICK_EPSILON
    feedback_duration_sec: float = FEEDBACK_DURATION_SEC
    update_interval_ms: int = UPDATE_INTERVAL_MS
    board_color_enabled: bool = True
    board_max_delta: float = BOARD_MAX_DELTA
    new_game_contraction_ratio: float = NEW_GAME_CONTRACTION_RATIO

    def __post_init__(self):
        _require(
            self.tick_epsilon >= 0.0 and math.isfinite(self.tick_epsilon),
            "tick_epsilon must be >= 0",
            value=self.tick_epsilon,
        )
        _require(self.feedback_duration_sec >= 0.0, "feedback_duration_sec must be >= 0", value=self.feedback_duration_sec)
        _require(self.update_interval_ms >= 1, "update_interval_ms must be >= 1", value=self.update_interval_ms)
        _require(self.board_max_delta > 0.0, "board_max_delta must be > 0", value=self.board_max_delta)
        _require(
            0.0 < self.new_game_contraction_ratio < 1.0,
            "new_game_contraction_ratio must be in (0, 1)",
            value=self.new_game_contraction_ratio,
        )

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "PacerConfig":
        """Build from a nested dict. Missing keys use defaults, bad values are coerced safely.

        Raises:
            ConfigError: If the resulting thresholds are inconsistent.
        """
        return cls(
            position=PositionThresholds.from_dict(section(d, "position")),
            urgency=UrgencyThresholds.from_dict(section(d, "urgency")),
            budget=BudgetConfig.from_dict(section(d, "budget")),
            rating=RatingThresholds.from_dict(section(d, "rating")),
            momentum=MomentumConfig.from_dict(section(d, "momentum")),
            tick_epsilon=safe_float(d.get("tick_epsilon"), TICK_EPSILON),
            feedback_duration_sec=safe_float(d.get("feedback_duration_sec"), FEEDBACK_DURATION_SEC),
            update_interval_ms=safe_int(d.get("update_interval_ms"), UPDATE_INTERVAL_MS),
            board_color_enabled=safe_bool(d.get("board_color_enabled"), True),
            board_max_delta=safe_float(d.get("board_max_delta"), BOARD_MAX_DELTA),
            new_game_contraction_ratio=safe_float(d.get("new_game_contraction_ratio"), NEW_GAME_CONTRACTION_RATIO),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = PacerConfig()
