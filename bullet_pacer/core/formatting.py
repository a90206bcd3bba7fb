"""Text formatting for pacing values (no GUI dependency)."""

from __future__ import annotations

import math

from bullet_pacer.core.pacing.models import Momentum, MoveRating, MoveRecord

MOMENTUM_GLYPHS = {
    Momentum.GAINING: "▲",
    Momentum.NEUTRAL: "●",
    Momentum.LOSING: "▼",
}

PLACEHOLDER = "--:--"


def format_delta(seconds: float) -> str:
    """Signed delta with one decimal: ``+1.5``, ``-2.0``, ``+0.0``."""
    sign = "+" if seconds >= 0 else ""
    return f"{sign}{seconds:.1f}"


def format_budget(seconds: float) -> str:
    """Sub-second budgets in milliseconds (``450ms``), otherwise seconds (``1.5s``)."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def format_clock(seconds: float | None, precision: int = 1) -> str:
    """Clock display text, truncated (never rounded up) like a real clock.

    ``format_clock(62.37)`` is ``1:02.3``; hours appear only when needed
    (``1:00:05.0``). The output is always readable by parse_clock_text().
    """
    if seconds is None or not math.isfinite(seconds):
        return PLACEHOLDER
    scale = 10**precision
    units = math.floor(max(0.0, seconds) * scale + 1e-9)
    whole, fraction = divmod(units, scale)
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    tail = f".{fraction:0{precision}d}" if precision > 0 else ""
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}{tail}"
    return f"{minutes}:{secs:02d}{tail}"


def feedback_text(move: MoveRecord) -> str:
    """Short verdict for a completed move.

    ``instant`` for premoves, percentage of budget when within it, and the
    overspend in seconds otherwise.
    """
    if move.rating == MoveRating.PREMOVE:
        return "instant"
    if move.within_budget:
        return f"{move.time_spent:.1f}s ({round(move.ratio * 100)}%)"
    return f"{move.time_spent:.1f}s (+{move.time_spent - move.budget:.1f}s)"


def urgency_fill_percent(user_seconds: float, relaxed_threshold: float) -> float:
    """Urgency bar fill: 100% at or above the relaxed threshold, linear below."""
    if relaxed_threshold <= 0 or not user_seconds > 0:
        return 0.0
    return min(100.0, user_seconds / relaxed_threshold * 100.0)


def momentum_glyph(momentum: Momentum) -> str:
    return MOMENTUM_GLYPHS[momentum]
