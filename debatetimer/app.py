"""Main application window for Debate Timer."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence, QShowEvent
from PyQt6.QtWidgets import QMainWindow

from .alerts.devices import AlertDevices, IdleInhibitor, detect_devices
from .alerts.dispatcher import AlertDispatcher
from .audio.sounds import SoundManager
from .settings import JsonSettingsStore, SettingsStore, TimerConfig
from .timer.engine import TimerController, TimerState
from .ui.timer_widget import TimerWidget


logger = logging.getLogger(__name__)


class DebateTimerApp(QMainWindow):
    """Main application window.

    Every collaborator can be injected; anything left out is built the
    way the real app needs it (JSON settings on disk, synthesised
    sounds, sysfs torch, D-Bus idle inhibitor).
    """

    def __init__(
        self,
        *,
        store: SettingsStore | None = None,
        devices: AlertDevices | None = None,
        sounds_dir: Path | None = None,
        inhibitor: IdleInhibitor | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Debate Timer")
        self.setMinimumSize(360, 560)

        # ── settings ──────────────────────────────────────────────────
        self._store: SettingsStore = store or JsonSettingsStore()
        self._config = TimerConfig.load(self._store)
        logger.info(
            "Preferences: %d min speeches, %s alerts",
            self._config.end_minutes, self._config.signal_mode.label,
        )

        # ── alert channels ────────────────────────────────────────────
        if devices is None:
            self._sound_manager = SoundManager(parent=self, sounds_dir=sounds_dir)
            devices = detect_devices(self._sound_manager)
        else:
            self._sound_manager = None
        self._alerts = AlertDispatcher(self._config, devices, parent=self)

        # ── timer ─────────────────────────────────────────────────────
        self._controller = TimerController(self._config, self._alerts, parent=self)
        self._controller.state_changed.connect(self._on_state_changed)

        # ── central widget ────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._controller, self._store, self)
        self.setCentralWidget(self._timer_widget)

        # ── idle suppression (enabled once, on first show) ────────────
        self._inhibitor = inhibitor or IdleInhibitor()
        self._shown_once = False

        self._setup_shortcuts()

    # ── properties ───────────────────────────────────────────────────

    @property
    def controller(self) -> TimerController:
        return self._controller

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def config(self) -> TimerConfig:
        return self._config

    # ── shortcuts ────────────────────────────────────────────────────

    def _setup_shortcuts(self) -> None:
        """Register Ctrl+T for Test Alert (Space/Esc handled via keyPressEvent)."""
        test_alert = QAction("Test Alert", self)
        test_alert.setShortcut(QKeySequence("Ctrl+T"))
        test_alert.triggered.connect(self._controller.test_alert)
        self.addAction(test_alert)

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space starts/stops, Escape stops."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._controller.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._controller.stop()
            event.accept()
            return
        super().keyPressEvent(event)

    # ── slots ────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        if state == TimerState.RUNNING:
            self.setWindowTitle("Debate Timer (running)")
        else:
            self.setWindowTitle("Debate Timer")

    # ── window events ────────────────────────────────────────────────

    def showEvent(self, event: QShowEvent) -> None:
        super().showEvent(event)
        if not self._shown_once:
            self._shown_once = True
            self._inhibitor.enable()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._controller.stop()
        self._alerts.cancel_pending()
        self._inhibitor.disable()
        super().closeEvent(event)
