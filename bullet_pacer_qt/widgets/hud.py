"""
PacerHud - heads-up display for live pacing feedback.

Layout:
┌──────────────────────────────┐
│ 0:58.2      -2.0        ▲    │  opponent time, delta, momentum
│           0:56.2             │  user time
│ ████████████████░░░░░░░░░░░  │  urgency bar
│ budget: 1.4s                 │
│ ✓ 1.1s (80%)                 │  last move feedback (fades)
└──────────────────────────────┘

Colour follows Position, loudness (opacity, glow, pulse) follows Urgency.
The HUD only renders TickEvents; it never touches pacer state.
"""

from typing import Optional

from PySide6.QtCore import QPropertyAnimation, QTimer, QEasingCurve
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from bullet_pacer.core.formatting import (
    PLACEHOLDER,
    feedback_text,
    format_budget,
    format_clock,
    format_delta,
    momentum_glyph,
    urgency_fill_percent,
)
from bullet_pacer.core.pacing.clock_parser import MISSING_TIME_SENTINEL
from bullet_pacer.core.pacing.config import DEFAULT_CONFIG, PacerConfig
from bullet_pacer.core.pacing.models import Momentum, MoveRecord, Position, TickEvent
from bullet_pacer_qt.theme import (
    LOSING_MOMENTUM_WARN_COLOR,
    MOVE_STYLES,
    NEUTRAL_GLYPH_COLOR,
    OVERSPEND_BG,
    OVERSPEND_TEXT_COLOR,
    POSITION_COLORS,
    URGENCY_INTENSITY,
    css_rgba,
    rgba,
)

FLASH_MS = 100
BAR_WIDTH = 220


def _clock_display(seconds: float) -> str:
    if seconds >= MISSING_TIME_SENTINEL:
        return PLACEHOLDER
    return format_clock(seconds)


class PacerHud(QWidget):
    """Floating pacing panel driven by ``apply_event()``."""

    def __init__(self, config: PacerConfig = DEFAULT_CONFIG, parent=None):
        super().__init__(parent)
        self._config = config
        self._pulse_ms = 0
        self._glow_size = 0
        self._pulse_anim: Optional[QPropertyAnimation] = None
        self._setup_ui()
        self.clear()

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(12, 12, 12, 12)

        self.panel = QFrame(self)
        self.panel.setObjectName("PacerHudPanel")
        outer.addWidget(self.panel)

        layout = QVBoxLayout(self.panel)
        layout.setContentsMargins(14, 10, 14, 10)
        layout.setSpacing(4)

        top_row = QHBoxLayout()
        self.opp_time_label = QLabel(PLACEHOLDER)
        self.opp_time_label.setStyleSheet("color: #999999; font-size: 14px;")
        top_row.addWidget(self.opp_time_label)
        top_row.addStretch()
        self.delta_label = QLabel("+0.0")
        self.delta_label.setStyleSheet("font-size: 16px; font-weight: bold;")
        top_row.addWidget(self.delta_label)
        top_row.addStretch()
        self.momentum_label = QLabel(momentum_glyph(Momentum.NEUTRAL))
        top_row.addWidget(self.momentum_label)
        layout.addLayout(top_row)

        self.user_time_label = QLabel(PLACEHOLDER)
        self.user_time_label.setStyleSheet("font-size: 34px; font-weight: bold;")
        layout.addWidget(self.user_time_label)

        self.urgency_track = QFrame()
        self.urgency_track.setFixedSize(BAR_WIDTH, 6)
        self.urgency_track.setStyleSheet("background-color: #333333; border-radius: 3px;")
        self.urgency_fill = QFrame(self.urgency_track)
        self.urgency_fill.setFixedHeight(6)
        layout.addWidget(self.urgency_track)

        budget_row = QHBoxLayout()
        budget_caption = QLabel("budget:")
        budget_caption.setStyleSheet("color: #888888; font-size: 11px;")
        budget_row.addWidget(budget_caption)
        self.budget_label = QLabel("--")
        self.budget_label.setStyleSheet("color: #bbbbbb; font-size: 11px;")
        budget_row.addWidget(self.budget_label)
        budget_row.addStretch()
        layout.addLayout(budget_row)

        self.feedback_frame = QFrame()
        feedback_row = QHBoxLayout(self.feedback_frame)
        feedback_row.setContentsMargins(6, 2, 6, 2)
        self.feedback_icon = QLabel("")
        self.feedback_text = QLabel("")
        feedback_row.addWidget(self.feedback_icon)
        feedback_row.addWidget(self.feedback_text)
        feedback_row.addStretch()
        layout.addWidget(self.feedback_frame)

        self.flash_overlay = QFrame(self.panel)
        self.flash_overlay.hide()

        self._glow = QGraphicsDropShadowEffect(self.panel)
        self._glow.setOffset(0, 0)
        self._glow.setBlurRadius(0)
        self.panel.setGraphicsEffect(self._glow)

        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def opacity(self) -> float:
        return self._opacity.opacity()

    @property
    def glow_size(self) -> int:
        """Target glow radius (the pulse animates around it)."""
        return self._glow_size

    @property
    def pulse_ms(self) -> int:
        return self._pulse_ms

    def is_feedback_visible(self) -> bool:
        return not self.feedback_frame.isHidden()

    def clear(self):
        """Back to the idle look used before the first reading and after a reset."""
        self.opp_time_label.setText(PLACEHOLDER)
        self.user_time_label.setText(PLACEHOLDER)
        self.delta_label.setText("+0.0")
        self.budget_label.setText("--")
        self.momentum_label.setText(momentum_glyph(Momentum.NEUTRAL))
        self.momentum_label.setStyleSheet(f"color: {NEUTRAL_GLYPH_COLOR};")
        self.feedback_frame.hide()
        self.flash_overlay.hide()
        self._apply_position(Position.EVEN)
        self._set_urgency_fill(0.0, POSITION_COLORS[Position.EVEN].hud_text)
        self._opacity.setOpacity(1.0)
        self._set_glow(0, 0)

    def apply_event(self, event: TickEvent):
        """Render one tick."""
        colors = POSITION_COLORS[event.position]
        intensity = URGENCY_INTENSITY[event.urgency]

        self.user_time_label.setText(_clock_display(event.user_seconds))
        self.opp_time_label.setText(_clock_display(event.opp_seconds))
        self.delta_label.setText(format_delta(event.delta))
        self.budget_label.setText(format_budget(event.budget))

        self._apply_position(event.position)

        self._opacity.setOpacity(intensity.opacity)
        self._glow.setColor(rgba(colors.vignette, 0.5))
        self._set_glow(intensity.glow_size, intensity.pulse_ms)

        fill = urgency_fill_percent(event.user_seconds, self._config.urgency.relaxed)
        self._set_urgency_fill(fill, colors.hud_text)

        self._apply_momentum(event.momentum, event.position)

        if event.move is not None:
            self._show_feedback(event.move, event.position)
            self._flash(event.move, event.position)
        elif not event.feedback_visible:
            self.feedback_frame.hide()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _apply_position(self, position: Position):
        colors = POSITION_COLORS[position]
        self.panel.setStyleSheet(f"""
            QFrame#PacerHudPanel {{
                background-color: {colors.hud_bg};
                border: 2px solid {colors.hud_border};
                border-radius: 10px;
            }}
        """)
        self.user_time_label.setStyleSheet(f"color: {colors.hud_text}; font-size: 34px; font-weight: bold;")
        self.delta_label.setStyleSheet(f"color: {colors.delta}; font-size: 16px; font-weight: bold;")

    def _set_urgency_fill(self, percent: float, color: str):
        self.urgency_fill.setFixedWidth(round(BAR_WIDTH * percent / 100.0))
        self.urgency_fill.setStyleSheet(f"background-color: {color}; border-radius: 3px;")

    def _apply_momentum(self, momentum: Momentum, position: Position):
        colors = POSITION_COLORS[position]
        self.momentum_label.setText(momentum_glyph(momentum))
        if momentum == Momentum.GAINING:
            color = colors.delta
        elif momentum == Momentum.LOSING:
            # Losing tempo while not ahead is the case worth shouting about
            if position in (Position.EVEN, Position.BEHIND, Position.LOSING):
                color = LOSING_MOMENTUM_WARN_COLOR
            else:
                color = colors.hud_text
        else:
            color = NEUTRAL_GLYPH_COLOR
        self.momentum_label.setStyleSheet(f"color: {color};")

    def _show_feedback(self, move: MoveRecord, position: Position):
        colors = POSITION_COLORS[position]
        self.feedback_icon.setText(MOVE_STYLES[move.rating].icon)
        self.feedback_text.setText(feedback_text(move))
        if move.within_budget or position in (Position.BEHIND, Position.LOSING):
            text_color = colors.hud_text
            background = css_rgba(colors.vignette, 0.3)
        else:
            text_color = OVERSPEND_TEXT_COLOR
            background = css_rgba(OVERSPEND_BG[:3], OVERSPEND_BG[3])
        self.feedback_frame.setStyleSheet(
            f"color: {text_color}; background-color: {background}; border-radius: 4px;"
        )
        self.feedback_frame.show()

    def _flash(self, move: MoveRecord, position: Position):
        alpha = 0.15 + MOVE_STYLES[move.rating].intensity * 0.25
        self.flash_overlay.setGeometry(self.panel.rect())
        self.flash_overlay.setStyleSheet(
            f"background-color: {css_rgba(POSITION_COLORS[position].vignette, alpha)}; border-radius: 10px;"
        )
        self.flash_overlay.show()
        self.flash_overlay.raise_()
        QTimer.singleShot(FLASH_MS, self.flash_overlay.hide)

    def _set_glow(self, glow_size: int, pulse_ms: int):
        """Static glow, or a looping blur pulse around ``glow_size`` when pulse_ms > 0."""
        if pulse_ms == self._pulse_ms and glow_size == self._glow_size:
            return
        self._pulse_ms = pulse_ms
        self._glow_size = glow_size
        if self._pulse_anim is not None:
            self._pulse_anim.stop()
            self._pulse_anim = None
        self._glow.setBlurRadius(glow_size)
        if pulse_ms <= 0:
            return
        anim = QPropertyAnimation(self._glow, b"blurRadius", self)
        anim.setDuration(pulse_ms)
        anim.setStartValue(float(glow_size))
        anim.setKeyValueAt(0.5, glow_size * 1.5 + 4)
        anim.setEndValue(float(glow_size))
        anim.setEasingCurve(QEasingCurve.InOutSine)
        anim.setLoopCount(-1)
        anim.start()
        self._pulse_anim = anim
