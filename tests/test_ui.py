"""Tests for the timer screen, main window, and command line."""

from __future__ import annotations

import pytest
from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QKeyEvent

from debatetimer.__main__ import parse_args
from debatetimer.alerts.devices import AlertDevices
from debatetimer.app import DebateTimerApp
from debatetimer.settings import (
    END_MINUTES_KEY,
    SIGNAL_MODE_KEY,
    JsonSettingsStore,
    MemorySettingsStore,
    SignalMode,
)
from debatetimer.ui.styles import build_stylesheet, get_palette
from debatetimer.ui.timer_widget import STOPPED_TEXT, TimerWidget

from helpers import RecordingInhibitor, tick_at


@pytest.fixture
def store():
    return MemorySettingsStore()


@pytest.fixture
def widget(controller, store):
    return TimerWidget(controller, store)


# ═══════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════


class TestTimerWidget:

    def test_initial_display(self, widget):
        assert widget._time_label.text() == STOPPED_TEXT
        assert widget._start_stop_btn.text() == "Start"
        assert widget._test_btn.isEnabled()
        assert not widget.is_lit

    def test_pickers_reflect_config(self, controller, store, config):
        config.end_minutes = 7
        config.signal_mode = SignalMode.SOUND
        w = TimerWidget(controller, store)
        assert w._length_combo.currentData() == 7
        assert w._signal_combo.currentText() == "Sound"

    def test_start_button_starts_timer(self, widget, controller):
        widget._start_stop_btn.click()
        assert controller.is_running
        assert widget._start_stop_btn.text() == "Stop"
        assert widget._start_stop_btn.objectName() == "stopButton"
        assert widget._time_label.text() == "0:00"

    def test_test_button_disabled_while_running(self, widget, controller):
        controller.start()
        assert not widget._test_btn.isEnabled()
        controller.stop()
        assert widget._test_btn.isEnabled()

    def test_display_follows_ticks(self, widget, controller, clock):
        controller.start()
        tick_at(controller, clock, 83)
        assert widget._time_label.text() == "1:23"

    def test_stop_shows_stopped(self, widget, controller, clock):
        controller.start()
        tick_at(controller, clock, 10)
        widget._start_stop_btn.click()
        assert not controller.is_running
        assert widget._time_label.text() == STOPPED_TEXT
        assert widget._start_stop_btn.text() == "Start"

    def test_auto_stop_shows_stopped(self, widget, controller, clock):
        controller.start()
        tick_at(controller, clock, 301)
        tick_at(controller, clock, 316)
        assert widget._time_label.text() == STOPPED_TEXT

    def test_test_alert_button_flashes(self, widget, devices):
        widget._test_btn.click()
        assert devices.torch.flashes == 1
        assert widget.is_lit

    def test_flash_signal_toggles_screen(self, widget, dispatcher):
        assert "background-color: #FFFFFF" not in widget.styleSheet()
        dispatcher.flash_changed.emit(True)
        assert widget.is_lit
        assert "background-color: #FFFFFF" in widget.styleSheet()
        dispatcher.flash_changed.emit(False)
        assert not widget.is_lit
        assert "background-color: #000000" in widget.styleSheet()

    def test_length_picker_saves(self, widget, config, store):
        widget._length_combo.setCurrentIndex(widget._length_combo.findData(7))
        assert config.end_minutes == 7
        assert store.get(END_MINUTES_KEY) == 7

    def test_signal_picker_saves(self, widget, config, store):
        widget._signal_combo.setCurrentIndex(
            widget._signal_combo.findData(SignalMode.VIBRATE.value)
        )
        assert config.signal_mode is SignalMode.VIBRATE
        assert store.get(SIGNAL_MODE_KEY) == "vibrate"

    def test_unwritable_settings_keep_timer_running(self, controller, config, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        w = TimerWidget(controller, JsonSettingsStore(blocker / "settings.json"))
        controller.start()

        w._length_combo.setCurrentIndex(w._length_combo.findData(7))
        w._signal_combo.setCurrentIndex(w._signal_combo.findData(SignalMode.SOUND.value))

        assert controller.is_running
        assert config.end_minutes == 7
        assert config.signal_mode is SignalMode.SOUND
        assert any("Could not save settings" in r.getMessage() for r in caplog.records)


class TestStyles:

    def test_palettes_invert(self):
        dark, lit = get_palette(False), get_palette(True)
        assert dark["bg"] == lit["text"] == "#000000"
        assert lit["bg"] == dark["text"] == "#FFFFFF"

    def test_stylesheet_mentions_buttons(self):
        qss = build_stylesheet(get_palette(False))
        assert "QPushButton#startButton" in qss
        assert "QPushButton#stopButton" in qss
        assert "#0A84FF" in qss


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestDebateTimerApp:

    def _make(self, store=None, inhibitor=None):
        return DebateTimerApp(
            store=store or MemorySettingsStore(),
            devices=AlertDevices(),
            inhibitor=inhibitor or RecordingInhibitor(),
        )

    def test_loads_preferences(self):
        store = MemorySettingsStore({END_MINUTES_KEY: 7, SIGNAL_MODE_KEY: "vibrate"})
        win = self._make(store)
        assert win.config.end_minutes == 7
        assert win.config.signal_mode is SignalMode.VIBRATE
        assert win.controller.config is win.config

    def test_idle_suppressed_once_on_show(self):
        inhibitor = RecordingInhibitor()
        win = self._make(inhibitor=inhibitor)
        assert inhibitor.enabled == 0
        win.show()
        win.hide()
        win.show()
        assert inhibitor.enabled == 1
        win.close()

    def test_close_stops_timer_and_releases_idle(self):
        inhibitor = RecordingInhibitor()
        win = self._make(inhibitor=inhibitor)
        win.show()
        win.controller.start()
        win.close()
        assert not win.controller.is_running
        assert inhibitor.disabled == 1

    def test_space_toggles_and_escape_stops(self):
        win = self._make()
        no_mods = Qt.KeyboardModifier.NoModifier
        win.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Space, no_mods))
        assert win.controller.is_running
        win.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Escape, no_mods))
        assert not win.controller.is_running

    def test_title_tracks_state(self):
        win = self._make()
        win.controller.start()
        assert "running" in win.windowTitle()
        win.controller.stop()
        assert win.windowTitle() == "Debate Timer"

    def test_builds_sound_devices_by_default(self, tmp_path):
        win = DebateTimerApp(
            store=MemorySettingsStore(),
            sounds_dir=tmp_path,
            inhibitor=RecordingInhibitor(),
        )
        assert win.controller.alerts.devices.chime.available
        assert (tmp_path / "chime.wav").exists()

    def test_starts_without_writable_sound_cache(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        win = DebateTimerApp(
            store=MemorySettingsStore(),
            sounds_dir=blocker / "sounds",
            inhibitor=RecordingInhibitor(),
        )
        devices = win.controller.alerts.devices
        assert not devices.chime.available
        assert not devices.haptics.available

        win.config.signal_mode = SignalMode.SOUND
        win.controller.test_alert()  # should not raise
        win.controller.alerts.cancel_pending()


class TestCommandLine:

    def test_debug_flag(self):
        assert parse_args(["--debug"]).debug is True

    def test_default(self):
        assert parse_args([]).debug is False

    def test_qt_arguments_ignored(self):
        assert parse_args(["-platform", "offscreen"]).debug is False
