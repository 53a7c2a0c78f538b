"""Tests for the timer widget and the main window.

Covers:
- Readout text, play button label and enabled state per status
- Warning indicator visibility in the last three seconds
- Phase selector gating and orientation-dependent layout
- Window keyboard handling, display policy hooks and settings toggles
"""

import json

import pytest
from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QKeyEvent

from judotimer.app import JudoTimerApp
from judotimer.display import DisplayPolicy
from judotimer.settings import Settings
from judotimer.timer.reducer import PhaseKind, RunStatus
from judotimer.ui.timer_widget import TimerWidget, format_time


@pytest.fixture
def widget(engine):
    return TimerWidget(engine)


def press(window, key):
    event = QKeyEvent(QEvent.Type.KeyPress, key, Qt.KeyboardModifier.NoModifier)
    window.keyPressEvent(event)


# ═══════════════════════════════════════════════════════════════════════════
#  FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("seconds,text", [
    (210, "3:30"),
    (90, "1:30"),
    (59, "0:59"),
    (3, "0:03"),
    (0, "0:00"),
    (-4, "0:00"),
])
def test_format_time(seconds, text):
    assert format_time(seconds) == text


# ═══════════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════════


class TestTimerWidget:

    def test_initial_render(self, widget):
        assert widget._phase_label.text() == "Randori"
        assert widget._time_label.text() == "3:30"
        assert widget._play_btn.text() == "Start"
        assert widget._warning_label.isHidden()
        assert widget._phase_buttons[PhaseKind.WORK].isChecked()

    def test_play_starts_preparation(self, widget, engine, scheduler):
        widget._play_btn.click()
        assert engine.status == RunStatus.PREPARING
        assert widget._play_btn.text() == "Get ready"
        assert not widget._play_btn.isEnabled()
        assert not widget._skip_btn.isEnabled()

        scheduler.advance(1)
        assert widget._play_btn.text() == "Pause"
        assert widget._play_btn.isEnabled()
        assert widget._skip_btn.isEnabled()

    def test_play_pauses_and_resumes(self, widget, engine, scheduler):
        widget._play_btn.click()
        scheduler.advance(3)
        widget._play_btn.click()
        assert engine.status == RunStatus.PAUSED
        assert widget._play_btn.text() == "Resume"
        assert widget._time_label.text() == "3:28"
        widget._play_btn.click()
        assert engine.status == RunStatus.RUNNING

    def test_warning_in_last_three_seconds(self, widget, engine, scheduler):
        widget._play_btn.click()
        scheduler.advance(1 + 206)
        assert engine.remaining == 4
        assert widget._warning_label.isHidden()
        scheduler.advance(1)
        assert widget._time_label.text() == "0:03"
        assert not widget._warning_label.isHidden()

        widget._play_btn.click()  # pause
        assert widget._warning_label.isHidden()

    def test_reset_button(self, widget, engine, scheduler):
        widget._play_btn.click()
        scheduler.advance(10)
        widget._reset_btn.click()
        assert engine.status == RunStatus.IDLE
        assert widget._time_label.text() == "3:30"
        assert widget._play_btn.text() == "Start"

    def test_skip_button_switches_phase(self, widget, engine):
        widget._skip_btn.click()
        assert engine.phase == PhaseKind.REST
        assert widget._phase_label.text() == "Rest"
        assert widget._time_label.text() == "1:30"
        assert widget._phase_buttons[PhaseKind.REST].isChecked()

    def test_phase_buttons_select_when_idle(self, widget, engine):
        widget._phase_buttons[PhaseKind.REST].click()
        assert engine.phase == PhaseKind.REST
        assert widget._time_label.text() == "1:30"

    def test_phase_buttons_disabled_while_running(self, widget, scheduler):
        widget._play_btn.click()
        assert all(b.isEnabled() for b in widget._phase_buttons.values())
        scheduler.advance(1)
        assert not any(b.isEnabled() for b in widget._phase_buttons.values())

    def test_landscape_font_sizes(self, widget):
        widget.resize(800, 400)
        widget.set_landscape(True)
        assert widget.is_landscape
        assert widget._font_px == {"time": 200, "phase": 32, "warning": 60}

    def test_portrait_font_sizes_are_capped(self, widget):
        widget.resize(400, 800)
        widget.set_landscape(False)
        assert not widget.is_landscape
        assert widget._font_px == {"time": 120, "phase": 32, "warning": 40}

    def test_resize_switches_orientation(self, widget, qapp):
        widget.resize(400, 700)
        widget.show()
        qapp.processEvents()
        assert not widget.is_landscape
        widget.resize(900, 400)
        qapp.processEvents()
        assert widget.is_landscape
        widget.close()


# ═══════════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def window(qapp, scheduler, sounds):
    win = JudoTimerApp(
        settings=Settings(),
        sounds=sounds,
        display_policy=DisplayPolicy(command=[]),
        scheduler=scheduler,
    )
    yield win
    win.close()


class TestMainWindow:

    def test_space_toggles(self, window, scheduler):
        press(window, Qt.Key.Key_Space)
        assert window.engine.status == RunStatus.PREPARING
        press(window, Qt.Key.Key_Space)  # ignored while preparing
        assert window.engine.status == RunStatus.PREPARING
        scheduler.advance(1)
        press(window, Qt.Key.Key_Space)
        assert window.engine.status == RunStatus.PAUSED
        press(window, Qt.Key.Key_Space)
        assert window.engine.status == RunStatus.RUNNING

    def test_escape_resets(self, window, scheduler):
        press(window, Qt.Key.Key_Space)
        scheduler.advance(5)
        press(window, Qt.Key.Key_Escape)
        assert window.engine.status == RunStatus.IDLE
        assert window.engine.remaining == 210

    def test_skip_ignored_while_preparing(self, window, scheduler):
        window.engine.start()
        window._on_skip()
        assert window.engine.phase == PhaseKind.WORK
        scheduler.advance(1)
        window._on_skip()
        assert window.engine.phase == PhaseKind.REST
        assert window.engine.status == RunStatus.IDLE

    def test_show_engages_display_policy(self, window):
        window.show()
        assert window.display_policy.engaged
        assert window.engine.status == RunStatus.IDLE
        window.hide()
        assert not window.display_policy.engaged

    def test_close_releases_and_stops_timers(self, window, scheduler):
        window.show()
        window.engine.start()
        scheduler.advance(2)
        window.close()
        assert not window.display_policy.engaged
        assert scheduler._entries == {}

    def test_toggle_sound_persists(self, window, settings_path):
        window._toggle_sound()
        assert window.settings.sound_enabled is False
        saved = json.loads(settings_path.read_text(encoding="utf-8"))
        assert saved["sound_enabled"] is False

    def test_toggle_keep_awake(self, window, settings_path):
        window.show()
        window._toggle_keep_awake()
        assert not window.display_policy.enabled
        assert not window.display_policy.engaged
        window._toggle_keep_awake()
        assert window.display_policy.engaged
        saved = json.loads(settings_path.read_text(encoding="utf-8"))
        assert saved["keep_screen_awake"] is True

    def test_always_on_top_flag(self, window):
        window._toggle_always_on_top()
        assert window.settings.always_on_top is True
        assert window.windowFlags() & Qt.WindowType.WindowStaysOnTopHint
