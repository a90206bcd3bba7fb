"""
VignetteOverlay - urgency glow around the edges of the window.

Sits on top of its parent, follows the parent's size and never takes mouse
input. The colour follows Position, the strength follows Urgency: nothing
is drawn while RELAXED, and the glow reaches further in as time runs out.

The edge band is ``spread`` pixels of solid colour fading out over ``blur``
more pixels towards the centre, both growing with the urgency's vignette
alpha.
"""

from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QBrush, QPainter, QRadialGradient
from PySide6.QtWidgets import QWidget

from bullet_pacer.core.pacing.models import Position, TickEvent, Urgency
from bullet_pacer_qt.theme import POSITION_COLORS, RGB, URGENCY_INTENSITY, rgba

BASE_SPREAD_PX = 60
SPREAD_PER_ALPHA = 250
BASE_BLUR_PX = 80
BLUR_PER_ALPHA = 200


def vignette_extent(alpha: float) -> tuple:
    """(spread, blur) in pixels for a vignette alpha."""
    return BASE_SPREAD_PX + alpha * SPREAD_PER_ALPHA, BASE_BLUR_PX + alpha * BLUR_PER_ALPHA


class VignetteOverlay(QWidget):
    """Transparent edge glow driven by ``apply_event()``."""

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_NoSystemBackground)
        self._color: RGB = POSITION_COLORS[Position.EVEN].vignette
        self._alpha = 0.0
        self.setGeometry(parent.rect())
        parent.installEventFilter(self)
        self.hide()

    @property
    def color(self) -> RGB:
        return self._color

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def spread(self) -> float:
        return vignette_extent(self._alpha)[0]

    @property
    def blur(self) -> float:
        return vignette_extent(self._alpha)[1]

    def apply_event(self, event: TickEvent):
        self.set_level(event.position, event.urgency)

    def set_level(self, position: Position, urgency: Urgency):
        color = POSITION_COLORS[position].vignette
        alpha = URGENCY_INTENSITY[urgency].vignette_alpha
        if (color, alpha) == (self._color, self._alpha):
            return
        self._color = color
        self._alpha = alpha
        if alpha > 0:
            self.setGeometry(self.parentWidget().rect())
            self.show()
            self.raise_()
            self.update()
        else:
            self.hide()

    def clear(self):
        self.set_level(Position.EVEN, Urgency.RELAXED)

    def eventFilter(self, watched, event):
        if watched is self.parentWidget() and event.type() == QEvent.Resize:
            self.setGeometry(self.parentWidget().rect())
        return super().eventFilter(watched, event)

    def paintEvent(self, event):
        if self._alpha <= 0:
            return
        rect = self.rect()
        radius = max(1.0, (rect.width() ** 2 + rect.height() ** 2) ** 0.5 / 2)
        spread, blur = vignette_extent(self._alpha)
        solid_from = max(0.0, 1.0 - spread / radius)
        clear_until = max(0.0, solid_from - blur / radius)

        gradient = QRadialGradient(QPointF(rect.center()), radius)
        gradient.setColorAt(0.0, rgba(self._color, 0.0))
        gradient.setColorAt(clear_until, rgba(self._color, 0.0))
        gradient.setColorAt(solid_from, rgba(self._color, self._alpha))
        gradient.setColorAt(1.0, rgba(self._color, self._alpha))

        painter = QPainter(self)
        painter.fillRect(rect, QBrush(gradient))
        painter.end()
