"""
Colour tables for the Bullet Pacer HUD.

Position controls COLOUR (green -> neutral -> red); urgency controls
INTENSITY (subtle -> screaming). Move ratings pick an icon and a flash
strength. The board tint lerps square colours towards "ahead" or "behind"
as the clock delta grows.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from PySide6.QtGui import QColor

from bullet_pacer.core.pacing.models import MoveRating, Position, Urgency

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class PositionColors:
    """HUD colours for one position bucket."""

    hud_bg: str
    hud_border: str
    hud_text: str
    vignette: RGB
    delta: str


@dataclass(frozen=True)
class UrgencyIntensity:
    """How loud the HUD is for one urgency bucket.

    pulse_ms is the period of the scale pulse (0 = no pulse).
    """

    opacity: float
    vignette_alpha: float
    pulse_ms: int
    glow_size: int


@dataclass(frozen=True)
class MoveStyle:
    icon: str
    intensity: float


POSITION_COLORS: Dict[Position, PositionColors] = {
    Position.DOMINATING: PositionColors("#152515", "#2a9a2a", "#55ff77", (0, 220, 80), "#00ff55"),
    Position.AHEAD: PositionColors("#1a2a1a", "#2a6a2a", "#77dd88", (0, 180, 80), "#55cc66"),
    Position.EVEN: PositionColors("#1a1a18", "#3a3a38", "#cccccc", (100, 100, 80), "#888888"),
    Position.BEHIND: PositionColors("#2a2010", "#aa7030", "#ffbb55", (240, 150, 0), "#ffaa33"),
    Position.LOSING: PositionColors("#2a1210", "#cc4030", "#ff8866", (240, 60, 20), "#ff5533"),
}

URGENCY_INTENSITY: Dict[Urgency, UrgencyIntensity] = {
    Urgency.RELAXED: UrgencyIntensity(opacity=0.50, vignette_alpha=0.00, pulse_ms=0, glow_size=0),
    Urgency.ALERT: UrgencyIntensity(opacity=0.70, vignette_alpha=0.10, pulse_ms=0, glow_size=0),
    Urgency.HIGH: UrgencyIntensity(opacity=0.85, vignette_alpha=0.18, pulse_ms=2000, glow_size=12),
    Urgency.CRITICAL: UrgencyIntensity(opacity=1.00, vignette_alpha=0.28, pulse_ms=800, glow_size=22),
    Urgency.PREMOVE: UrgencyIntensity(opacity=1.00, vignette_alpha=0.42, pulse_ms=400, glow_size=35),
}

MOVE_STYLES: Dict[MoveRating, MoveStyle] = {
    MoveRating.PREMOVE: MoveStyle("⚡", 1.0),
    MoveRating.EXCELLENT: MoveStyle("✦", 0.8),
    MoveRating.GOOD: MoveStyle("✓", 0.4),
    MoveRating.SLOW: MoveStyle("⏱", 0.6),
    MoveRating.COSTLY: MoveStyle("⚠", 0.8),
    MoveRating.CRITICAL: MoveStyle("⛔", 1.0),
}

# Board square colours: LOSING <- DEFAULT -> WINNING
LIGHT_AHEAD: RGB = (220, 240, 210)
LIGHT_DEFAULT: RGB = (235, 236, 208)
LIGHT_BEHIND: RGB = (245, 220, 210)
DARK_AHEAD: RGB = (85, 160, 95)
DARK_DEFAULT: RGB = (115, 149, 82)
DARK_BEHIND: RGB = (165, 100, 80)

NEUTRAL_GLYPH_COLOR = "#666666"
LOSING_MOMENTUM_WARN_COLOR = "#ffaa44"
OVERSPEND_TEXT_COLOR = "#dddd88"
OVERSPEND_BG: Tuple[int, int, int, float] = (180, 180, 80, 0.25)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * max(0.0, min(1.0, t))


def lerp_rgb(c1: RGB, c2: RGB, t: float) -> RGB:
    """Linear interpolation between two colours, t clamped to [0, 1]."""
    return (
        round(_lerp(c1[0], c2[0], t)),
        round(_lerp(c1[1], c2[1], t)),
        round(_lerp(c1[2], c2[2], t)),
    )


def board_colors(delta: float, max_delta: float) -> Tuple[RGB, RGB]:
    """(light, dark) square colours for a clock delta.

    The shift is fully applied at |delta| >= max_delta.
    """
    normalized = max(-1.0, min(1.0, delta / max_delta))
    if normalized >= 0:
        return (
            lerp_rgb(LIGHT_DEFAULT, LIGHT_AHEAD, normalized),
            lerp_rgb(DARK_DEFAULT, DARK_AHEAD, normalized),
        )
    t = abs(normalized)
    return lerp_rgb(LIGHT_DEFAULT, LIGHT_BEHIND, t), lerp_rgb(DARK_DEFAULT, DARK_BEHIND, t)


def rgba(rgb: RGB, alpha: float) -> QColor:
    color = QColor(*rgb)
    color.setAlphaF(max(0.0, min(1.0, alpha)))
    return color


def css_rgba(rgb: RGB, alpha: float) -> str:
    return f"rgba({rgb[0]}, {rgb[1]}, {rgb[2]}, {alpha:.2f})"
