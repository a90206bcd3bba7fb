"""Tests for the main window wiring: clock keys, polling, menus and new games."""

import pytest
from PySide6.QtCore import QSettings, Qt

from bullet_pacer_qt.app_qt import INCREMENT_NOTE, TIME_CONTROLS
from bullet_pacer_qt.clock import Side
from bullet_pacer_qt.settings import QSETTINGS_APP, QSETTINGS_ORG, Settings


@pytest.fixture
def main_window(app, tmp_path, monkeypatch):
    """Create MainWindow with settings in a temporary directory."""
    monkeypatch.delenv("BULLET_PACER_CONFIG", raising=False)
    from bullet_pacer_qt.app_qt import MainWindow

    window = MainWindow(Settings(settings_dir=tmp_path))
    yield window
    window.close()


class TestMainWindow:
    def test_polling_timer_uses_config_interval(self, main_window):
        assert main_window._timer.interval() == main_window.session.config.update_interval_ms
        assert main_window._timer.isActive()

    def test_tick_renders_clock(self, main_window):
        main_window.loop.tick()
        assert main_window.hud.user_time_label.text() == "1:00.0"

    def test_press_starts_clock(self, main_window):
        main_window._press_clock()
        assert main_window.clock.running
        assert main_window.clock.turn is Side.USER
        assert "Your move" in main_window.status_label.text()

    def test_pause_toggle(self, main_window):
        main_window._press_clock()
        main_window._toggle_pause()
        assert not main_window.clock.running
        assert "Paused" in main_window.status_label.text()
        main_window._toggle_pause()
        assert main_window.clock.running

    def test_new_game_resets_session(self, main_window):
        main_window._press_clock()
        main_window._press_clock()
        main_window.loop.tick()
        main_window._new_game()
        assert main_window.session.move_count == 0
        assert main_window.clock.plies == 0
        assert not main_window.clock.running
        assert main_window.hud.user_time_label.text() == "--:--"
        event = main_window.loop.tick()
        assert not event.new_game


class TestVignette:
    def test_relaxed_clock_has_no_vignette(self, main_window):
        main_window.loop.tick()
        assert main_window.vignette.isHidden()

    def test_low_clock_shows_vignette(self, main_window):
        main_window.clock.new_game(base_seconds=3.0)
        main_window.loop.tick()
        assert main_window.vignette.alpha > 0
        assert not main_window.vignette.isHidden()

        main_window._new_game()
        assert main_window.vignette.isHidden()

    def test_covers_central_widget(self, main_window):
        main_window.resize(700, 400)
        main_window.clock.new_game(base_seconds=3.0)
        main_window.loop.tick()
        assert main_window.vignette.geometry() == main_window.centralWidget().rect()


class TestMenus:
    def test_default_time_control_checked(self, main_window):
        checked = [a.text() for a, _, _ in main_window._time_control_actions if a.isChecked()]
        assert checked == ["1+0"]

    def test_set_time_control_persists_and_restarts(self, main_window, tmp_path):
        main_window._press_clock()
        main_window._set_time_control(180.0, 0.0)
        assert main_window.clock.base_seconds == 180.0
        assert not main_window.clock.running
        assert Settings(settings_dir=tmp_path).base_seconds == 180.0
        checked = [a.text() for a, _, _ in main_window._time_control_actions if a.isChecked()]
        assert checked == ["3+0"]

    def test_increment_presets_carry_note(self, main_window):
        for action, _, increment in main_window._time_control_actions:
            assert (action.statusTip() == INCREMENT_NOTE) == (increment > 0)
        assert any(increment > 0 for _, _, increment in TIME_CONTROLS)

    def test_board_tint_toggle(self, main_window, tmp_path):
        main_window.board_tint_action.setChecked(False)
        main_window._toggle_board_tint()
        assert not main_window.board.is_tint_enabled()
        assert Settings(settings_dir=tmp_path).board_tint_enabled is False

    def test_stay_on_top_toggle(self, main_window, tmp_path):
        main_window.stay_on_top_action.setChecked(True)
        main_window._toggle_stay_on_top()
        assert main_window.windowFlags() & Qt.WindowStaysOnTopHint
        assert Settings(settings_dir=tmp_path).stay_on_top is True

    def test_reset_settings(self, main_window, tmp_path):
        main_window._set_time_control(120.0, 1.0)
        main_window.board_tint_action.setChecked(False)
        main_window._toggle_board_tint()
        main_window._reset_settings()
        assert main_window.clock.base_seconds == 60.0
        assert main_window.clock.increment_seconds == 0.0
        assert main_window.board_tint_action.isChecked()
        assert main_window.board.is_tint_enabled()
        assert Settings(settings_dir=tmp_path).base_seconds == 60.0


class TestGeometry:
    def test_geometry_saved_outside_user_profile(self, app, tmp_path, qsettings_dir, monkeypatch):
        monkeypatch.delenv("BULLET_PACER_CONFIG", raising=False)
        from bullet_pacer_qt.app_qt import MainWindow

        window = MainWindow(Settings(settings_dir=tmp_path))
        window.close()
        stored = QSettings(QSETTINGS_ORG, QSETTINGS_APP)
        assert stored.fileName().startswith(qsettings_dir)
        assert stored.value("window/geometry") is not None
