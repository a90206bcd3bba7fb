"""Position and urgency classification.

Both functions are total: any float, including NaN and infinities, lands in
exactly one bucket. NaN fails every comparison and so falls through to the
most conservative bucket.
"""

from __future__ import annotations

from .config import DEFAULT_CONFIG, PositionThresholds, UrgencyThresholds
from .models import Position, Urgency


def classify_position(delta: float, thresholds: PositionThresholds = DEFAULT_CONFIG.position) -> Position:
    """Classify the clock delta (user minus opponent).

    Checked highest bucket first with >= comparisons, so a delta exactly on
    a boundary belongs to the better bucket. EVEN is the closed band
    [-even, +even]; a delta between ``even`` and ``ahead`` matches neither
    and drops through to BEHIND.
    """
    if delta >= thresholds.dominating:
        return Position.DOMINATING
    if delta >= thresholds.ahead:
        return Position.AHEAD
    if -thresholds.even <= delta <= thresholds.even:
        return Position.EVEN
    if delta >= thresholds.behind:
        return Position.BEHIND
    return Position.LOSING


def classify_urgency(seconds: float, thresholds: UrgencyThresholds = DEFAULT_CONFIG.urgency) -> Urgency:
    """Classify the user's remaining time.

    Strict > comparisons: a value exactly on a threshold falls into the more
    relaxed bucket below it (25.0 is ALERT, not RELAXED).
    """
    if seconds > thresholds.relaxed:
        return Urgency.RELAXED
    if seconds > thresholds.alert:
        return Urgency.ALERT
    if seconds > thresholds.high:
        return Urgency.HIGH
    if seconds > thresholds.critical:
        return Urgency.CRITICAL
    return Urgency.PREMOVE
