"""
Bullet Pacer Qt Shell - live pacing HUD over a simulated bullet clock.

Run with:
    python -m bullet_pacer_qt

Keys:
  - Space: press the clock (ends the side to move's turn; starts an idle clock)
  - N: new game
  - Esc: pause / resume

The Game menu switches time control, the View menu toggles the board tint
and stay-on-top; both persist through Settings.

The window polls the clock every ``update_interval_ms`` through the same
PollingLoop the replay tool uses, so the HUD sees exactly what the pacer
core computes from the clock text.

Logging:
  - Set BULLET_PACER_LOGLEVEL=DEBUG to log every completed move
  - Default level is INFO
"""

import sys

from bullet_pacer.common.log_setup import setup_logging

# Setup logging early
_logger = setup_logging("bullet_pacer")
setup_logging("bullet_pacer_qt")

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QActionGroup, QKeySequence, QShortcut
from PySide6.QtWidgets import QApplication, QHBoxLayout, QLabel, QMainWindow, QStatusBar, QWidget

from bullet_pacer.core.boundary import MoveListShrinkDetector
from bullet_pacer.core.pacing.models import TickEvent
from bullet_pacer.core.scheduler import PollingLoop
from bullet_pacer.core.session import PacerSession
from bullet_pacer_qt.clock import Side, SimulatedChessClock
from bullet_pacer_qt.settings import Settings
from bullet_pacer_qt.widgets.board_tint import BoardTintWidget
from bullet_pacer_qt.widgets.hud import PacerHud
from bullet_pacer_qt.widgets.vignette import VignetteOverlay


# =============================================================================
# Constants
# =============================================================================

KEY_HINTS = "Space: press clock   N: new game   Esc: pause"

# (label, base seconds, increment seconds)
TIME_CONTROLS = (
    ("1+0", 60.0, 0.0),
    ("2+0", 120.0, 0.0),
    ("3+0", 180.0, 0.0),
    ("1+1", 60.0, 1.0),
    ("2+1", 120.0, 1.0),
    ("3+2", 180.0, 2.0),
)

# The clock shows the increment as soon as a move is made, so a move faster
# than the increment reads as time gained and is rated CRITICAL.
INCREMENT_NOTE = "Increment game: moves faster than the increment are rated CRITICAL"


# =============================================================================
# MainWindow
# =============================================================================

class MainWindow(QMainWindow):
    """Board tint on the left, pacing HUD on the right, clock driven by the keyboard."""

    BASE_TITLE = "Bullet Pacer"

    def __init__(self, settings: Settings = None):
        super().__init__()
        self.setMinimumSize(560, 360)

        self._settings = settings if settings is not None else Settings()
        config = self._settings.load_pacer_config()

        self.session = PacerSession(config)
        self.clock = SimulatedChessClock(self._settings.base_seconds, self._settings.increment_seconds)
        self.detector = MoveListShrinkDetector(config.new_game_contraction_ratio)
        self.loop = PollingLoop(self.session, self.clock, sink=self, detector=self.detector)

        self._setup_ui()
        self._setup_menu()
        self._setup_shortcuts()

        if self._settings.stay_on_top:
            self._apply_stay_on_top(True)

        geometry = self._settings.load_window_geometry()
        if geometry is not None:
            self.restoreGeometry(geometry)

        self._timer = QTimer(self)
        self._timer.setInterval(config.update_interval_ms)
        self._timer.timeout.connect(self.loop.tick)
        self._timer.start()

        self._update_status()
        _logger.info(
            "Bullet Pacer started: %.0f+%.0f, polling every %d ms, thresholds from %s%s",
            self.clock.base_seconds,
            self.clock.increment_seconds,
            config.update_interval_ms,
            self._settings.pacer_config_path or "built-in defaults",
            " (BULLET_PACER_CONFIG)" if self._settings.is_pacer_config_from_env() else "",
        )

    def _setup_ui(self):
        self.setWindowTitle(self.BASE_TITLE)
        config = self.session.config

        central = QWidget(self)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)

        self.board = BoardTintWidget(config.board_max_delta, central)
        self.board.set_tint_enabled(config.board_color_enabled and self._settings.board_tint_enabled)
        layout.addWidget(self.board, stretch=1)

        self.hud = PacerHud(config, central)
        layout.addWidget(self.hud, alignment=Qt.AlignTop)

        self.setCentralWidget(central)
        self.vignette = VignetteOverlay(central)

        self.status_label = QLabel()
        status_bar = QStatusBar(self)
        status_bar.addWidget(self.status_label)
        self.setStatusBar(status_bar)

    def _setup_menu(self):
        """Setup menu bar."""
        menubar = self.menuBar()

        # Game menu
        game_menu = menubar.addMenu("&Game")

        new_action = QAction("&New Game", self)
        new_action.triggered.connect(self._new_game)
        game_menu.addAction(new_action)

        time_menu = game_menu.addMenu("&Time Control")
        self._time_control_group = QActionGroup(self)
        self._time_control_group.setExclusionPolicy(QActionGroup.ExclusionPolicy.ExclusiveOptional)
        self._time_control_actions = []
        for label, base, increment in TIME_CONTROLS:
            action = QAction(label, self)
            action.setCheckable(True)
            if increment > 0:
                action.setStatusTip(INCREMENT_NOTE)
                action.setToolTip(INCREMENT_NOTE)
            action.triggered.connect(lambda checked=False, b=base, i=increment: self._set_time_control(b, i))
            self._time_control_group.addAction(action)
            self._time_control_actions.append((action, base, increment))
            time_menu.addAction(action)

        game_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.Quit)
        exit_action.triggered.connect(self.close)
        game_menu.addAction(exit_action)

        # View menu (display options)
        view_menu = menubar.addMenu("&View")

        self.board_tint_action = QAction("&Board Tint", self)
        self.board_tint_action.setCheckable(True)
        self.board_tint_action.triggered.connect(self._toggle_board_tint)
        view_menu.addAction(self.board_tint_action)

        self.stay_on_top_action = QAction("Stay on &Top", self)
        self.stay_on_top_action.setCheckable(True)
        self.stay_on_top_action.triggered.connect(self._toggle_stay_on_top)
        view_menu.addAction(self.stay_on_top_action)

        view_menu.addSeparator()

        reset_action = QAction("&Reset Settings", self)
        reset_action.triggered.connect(self._reset_settings)
        view_menu.addAction(reset_action)

        self._sync_menu()

    def _sync_menu(self):
        """Check the menu entries that match the current settings."""
        current = (self._settings.base_seconds, self._settings.increment_seconds)
        for action, base, increment in self._time_control_actions:
            action.setChecked((base, increment) == current)
        self.board_tint_action.setChecked(self._settings.board_tint_enabled)
        self.stay_on_top_action.setChecked(self._settings.stay_on_top)

    def _setup_shortcuts(self):
        QShortcut(QKeySequence(Qt.Key_Space), self, self._press_clock)
        QShortcut(QKeySequence(Qt.Key_N), self, self._new_game)
        QShortcut(QKeySequence(Qt.Key_Escape), self, self._toggle_pause)

    # -------------------------------------------------------------------------
    # Presentation sink
    # -------------------------------------------------------------------------

    def on_tick(self, event: TickEvent):
        """Called by the polling loop with every pacer event."""
        if event.new_game:
            self.hud.clear()
        self.hud.apply_event(event)
        self.vignette.apply_event(event)
        self.board.set_delta(event.delta)
        if self.clock.flagged is not None:
            self._update_status()

    # -------------------------------------------------------------------------
    # Clock control
    # -------------------------------------------------------------------------

    def _press_clock(self):
        self.clock.press()
        self._update_status()

    def _toggle_pause(self):
        if self.clock.running:
            self.clock.pause()
        else:
            self.clock.resume()
        self._update_status()

    def _new_game(self):
        self.clock.new_game(self._settings.base_seconds, self._settings.increment_seconds)
        # The window knows a game ended, no need to wait for the move list to shrink
        self.detector.reset()
        self.session.reset()
        self.hud.clear()
        self.vignette.clear()
        self.board.set_delta(0.0)
        self._update_status()

    def _update_status(self):
        flagged = self.clock.flagged
        if flagged is not None:
            state = "You flagged" if flagged is Side.USER else "Opponent flagged"
        elif self.clock.running:
            state = "Your move" if self.clock.turn is Side.USER else "Opponent to move"
        elif not self.clock.started:
            state = "Ready"
        else:
            state = "Paused"
        self.status_label.setText(f"{state}  |  {KEY_HINTS}")

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def _set_time_control(self, base_seconds: float, increment_seconds: float):
        """Switch the simulated clock's time control and start a fresh game."""
        self._settings.base_seconds = base_seconds
        self._settings.increment_seconds = increment_seconds
        self._settings.save()
        self._sync_menu()
        self._new_game()
        if increment_seconds > 0:
            self.statusBar().showMessage(INCREMENT_NOTE, 5000)

    def _toggle_board_tint(self):
        enabled = self.board_tint_action.isChecked()
        self._settings.board_tint_enabled = enabled
        self._settings.save()
        self.board.set_tint_enabled(self.session.config.board_color_enabled and enabled)

    def _toggle_stay_on_top(self):
        on_top = self.stay_on_top_action.isChecked()
        self._settings.stay_on_top = on_top
        self._settings.save()
        self._apply_stay_on_top(on_top)

    def _apply_stay_on_top(self, on_top: bool):
        was_visible = self.isVisible()
        self.setWindowFlag(Qt.WindowStaysOnTopHint, on_top)
        # Changing window flags hides a shown window
        if was_visible:
            self.show()

    def _reset_settings(self):
        self._settings.reset_to_defaults()
        self._sync_menu()
        self.board.set_tint_enabled(self.session.config.board_color_enabled and self._settings.board_tint_enabled)
        self._apply_stay_on_top(self._settings.stay_on_top)
        self._new_game()

    def closeEvent(self, event):
        """Stop polling and save window geometry."""
        self._timer.stop()
        self.loop.stop()
        self._settings.save_window_geometry(self.saveGeometry())
        event.accept()


# =============================================================================
# Main
# =============================================================================

def main():
    """Entry point for the Qt shell."""
    app = QApplication(sys.argv)
    app.setApplicationName("Bullet Pacer")
    app.setOrganizationName("BulletPacer")

    window = MainWindow()

    # Only resize if no saved geometry
    if window._settings.load_window_geometry() is None:
        window.resize(720, 420)

    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
