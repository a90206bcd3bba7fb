"""
BoardTintWidget - an 8x8 board whose square colours follow the clock delta.

Light and dark squares drift towards green while the user is ahead on the
clock and towards red while behind, fully shifted at ``max_delta`` seconds.
Purely a display: the colour maths lives in ``bullet_pacer_qt.theme``.
"""

from PySide6.QtCore import QRectF, QSize
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QSizePolicy, QWidget

from bullet_pacer_qt.theme import DARK_DEFAULT, LIGHT_DEFAULT, RGB, board_colors

BOARD_SQUARES = 8
MIN_SQUARE_PX = 12


class BoardTintWidget(QWidget):
    """Square chess board painted with delta-dependent colours."""

    def __init__(self, max_delta: float = 8.0, parent=None):
        super().__init__(parent)
        self._max_delta = max_delta
        self._delta = 0.0
        self._tint_enabled = True
        self._light: RGB = LIGHT_DEFAULT
        self._dark: RGB = DARK_DEFAULT
        self.setMinimumSize(MIN_SQUARE_PX * BOARD_SQUARES, MIN_SQUARE_PX * BOARD_SQUARES)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def square_colors(self) -> tuple:
        """Current (light, dark) RGB pair."""
        return self._light, self._dark

    def is_tint_enabled(self) -> bool:
        return self._tint_enabled

    def set_tint_enabled(self, enabled: bool):
        self._tint_enabled = bool(enabled)
        self._recompute()

    def set_delta(self, delta: float):
        if delta == self._delta:
            return
        self._delta = delta
        self._recompute()

    def sizeHint(self) -> QSize:
        return QSize(320, 320)

    def _recompute(self):
        if self._tint_enabled:
            light, dark = board_colors(self._delta, self._max_delta)
        else:
            light, dark = LIGHT_DEFAULT, DARK_DEFAULT
        if (light, dark) != (self._light, self._dark):
            self._light, self._dark = light, dark
            self.update()

    def _board_rect(self) -> QRectF:
        """Largest square centred in the widget."""
        side = min(self.width(), self.height())
        return QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)

    def paintEvent(self, event):
        painter = QPainter(self)
        board = self._board_rect()
        square = board.width() / BOARD_SQUARES
        light = QColor(*self._light)
        dark = QColor(*self._dark)
        for row in range(BOARD_SQUARES):
            for col in range(BOARD_SQUARES):
                # a1 (bottom-left) is dark
                color = dark if (row + col) % 2 == 1 else light
                painter.fillRect(
                    QRectF(board.left() + col * square, board.top() + row * square, square, square),
                    color,
                )
        painter.end()
