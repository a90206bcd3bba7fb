"""Tests for the pacing HUD, the board tint widget and the edge vignette."""

import pytest

from PySide6.QtWidgets import QWidget

from bullet_pacer.core.formatting import format_budget
from bullet_pacer.core.pacing import ClockSample, MoveRating, Momentum, Position, Urgency, calculate_budget
from bullet_pacer.core.pacing.clock_parser import MISSING_TIME_SENTINEL
from bullet_pacer.core.session import PacerSession
from bullet_pacer_qt.theme import (
    DARK_AHEAD,
    DARK_DEFAULT,
    LIGHT_AHEAD,
    LIGHT_DEFAULT,
    MOVE_STYLES,
    POSITION_COLORS,
    URGENCY_INTENSITY,
)
from bullet_pacer_qt.widgets.board_tint import BoardTintWidget
from bullet_pacer_qt.widgets.hud import PacerHud
from bullet_pacer_qt.widgets.vignette import VignetteOverlay, vignette_extent


@pytest.fixture
def hud(app):
    widget = PacerHud()
    yield widget
    widget.deleteLater()


def event_for(user, opp, session=None):
    return (session or PacerSession()).advance(ClockSample(user, opp))


class TestPacerHud:
    def test_initial_state(self, hud):
        assert hud.user_time_label.text() == "--:--"
        assert not hud.is_feedback_visible()
        assert hud.pulse_ms == 0

    def test_apply_event_texts(self, hud):
        hud.apply_event(event_for(58.0, 60.0))
        assert hud.user_time_label.text() == "0:58.0"
        assert hud.opp_time_label.text() == "1:00.0"
        assert hud.delta_label.text() == "-2.0"
        assert hud.budget_label.text() == format_budget(calculate_budget(58.0))

    def test_urgency_drives_intensity(self, hud):
        hud.apply_event(event_for(3.0, 3.0))
        premove = URGENCY_INTENSITY[Urgency.PREMOVE]
        assert hud.opacity == pytest.approx(premove.opacity, abs=0.01)
        assert hud.glow_size == premove.glow_size
        assert hud.pulse_ms == premove.pulse_ms

        hud.apply_event(event_for(60.0, 60.0))
        assert hud.pulse_ms == 0
        assert hud.glow_size == 0

    def test_move_feedback_shown_then_hidden(self, hud):
        session = PacerSession()
        events = [session.advance(ClockSample(u, 10.0, sampled_at=t)) for u, t in ((10.0, 0.0), (7.5, 0.05), (7.5, 0.1))]
        hud.apply_event(events[-1])
        assert hud.is_feedback_visible()
        assert hud.feedback_icon.text() == MOVE_STYLES[MoveRating.CRITICAL].icon
        assert hud.feedback_text.text() == "2.5s (+2.0s)"

        stale = session.advance(ClockSample(7.5, 10.0, sampled_at=10.0))
        hud.apply_event(stale)
        assert not hud.is_feedback_visible()

    def test_momentum_glyph(self, hud):
        session = PacerSession()
        for u in (60.0, 59.9, 59.9, 59.8, 59.8):
            event = session.advance(ClockSample(u, 60.0))
        assert event.momentum == Momentum.GAINING
        hud.apply_event(event)
        assert hud.momentum_label.text() == "▲"

    def test_missing_clock_shows_placeholder(self, hud):
        event = PacerSession().advance_text(None, "0:30.0", sampled_at=0.0)
        assert event.user_seconds == MISSING_TIME_SENTINEL
        hud.apply_event(event)
        assert hud.user_time_label.text() == "--:--"
        assert hud.opp_time_label.text() == "0:30.0"

    def test_clear(self, hud):
        hud.apply_event(event_for(3.0, 10.0))
        hud.clear()
        assert hud.user_time_label.text() == "--:--"
        assert hud.delta_label.text() == "+0.0"
        assert hud.pulse_ms == 0
        assert hud.opacity == pytest.approx(1.0)

    def test_degraded_event_renders(self, hud):
        event = PacerSession().degraded_event(ClockSample(30.0, 30.0))
        hud.apply_event(event)
        assert event.position == Position.LOSING
        assert hud.budget_label.text() == "500ms"


class TestBoardTintWidget:
    @pytest.fixture
    def board(self, app):
        widget = BoardTintWidget(max_delta=8.0)
        yield widget
        widget.deleteLater()

    def test_default_colors(self, board):
        assert board.square_colors == (LIGHT_DEFAULT, DARK_DEFAULT)

    def test_delta_tints(self, board):
        board.set_delta(10.0)
        assert board.square_colors == (LIGHT_AHEAD, DARK_AHEAD)
        assert board.delta == 10.0

    def test_disabled_tint_stays_default(self, board):
        board.set_tint_enabled(False)
        board.set_delta(10.0)
        assert board.square_colors == (LIGHT_DEFAULT, DARK_DEFAULT)
        board.set_tint_enabled(True)
        assert board.square_colors == (LIGHT_AHEAD, DARK_AHEAD)

    def test_paints_offscreen(self, board):
        board.resize(160, 160)
        image = board.grab().toImage()
        assert image.width() == 160


class TestVignetteOverlay:
    @pytest.fixture
    def host(self, app):
        widget = QWidget()
        widget.resize(400, 300)
        yield widget
        widget.deleteLater()

    @pytest.fixture
    def vignette(self, host):
        return VignetteOverlay(host)

    def test_hidden_while_relaxed(self, vignette):
        vignette.apply_event(event_for(60.0, 60.0))
        assert vignette.alpha == 0.0
        assert vignette.isHidden()

    def test_premove_while_losing(self, vignette):
        vignette.apply_event(event_for(3.0, 10.0))
        alpha = URGENCY_INTENSITY[Urgency.PREMOVE].vignette_alpha
        assert vignette.alpha == pytest.approx(alpha)
        assert vignette.color == POSITION_COLORS[Position.LOSING].vignette
        assert vignette.spread == pytest.approx(60 + alpha * 250)
        assert vignette.blur == pytest.approx(80 + alpha * 200)
        assert not vignette.isHidden()

    def test_extent_grows_with_urgency(self):
        alert = vignette_extent(URGENCY_INTENSITY[Urgency.ALERT].vignette_alpha)
        critical = vignette_extent(URGENCY_INTENSITY[Urgency.CRITICAL].vignette_alpha)
        assert critical[0] > alert[0]
        assert critical[1] > alert[1]

    def test_follows_parent_size(self, host, vignette):
        host.resize(500, 320)
        vignette.apply_event(event_for(3.0, 10.0))
        assert vignette.geometry() == host.rect()

    def test_clear(self, vignette):
        vignette.apply_event(event_for(3.0, 10.0))
        vignette.clear()
        assert vignette.alpha == 0.0
        assert vignette.isHidden()

    def test_paints_offscreen(self, vignette):
        vignette.apply_event(event_for(20.0, 22.0))
        assert vignette.alpha == pytest.approx(URGENCY_INTENSITY[Urgency.ALERT].vignette_alpha)
        image = vignette.grab().toImage()
        assert image.width() == 400
        # edges carry the glow, the centre stays clear
        assert image.pixelColor(0, 0).alpha() > 0
        assert image.pixelColor(200, 150).alpha() == 0
