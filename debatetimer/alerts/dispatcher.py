"""Alert sequencing: flash, vibrate, chime, and the delayed repeats.

A single alert is a 0.2 s flash (screen + torch) plus haptic and/or
audible feedback depending on the configured alert type:

    Flash     flash only
    Vibrate   flash + vibration
    Sound     flash + vibration + chime

The end-of-speech "triple" alert repeats the flash at +0.4 s and +0.8 s.
All delayed work runs through a ``DeferredScheduler`` so it can be
cancelled when a new session starts.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..settings import SignalMode, TimerConfig
from .devices import AlertDevices


logger = logging.getLogger(__name__)

FLASH_SECONDS = 0.2
TRIPLE_OFFSETS = (0.4, 0.8)


class DeferredScheduler(QObject):
    """Single-shot callbacks on the Qt event loop that can all be cancelled."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending: list[QTimer] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def call_later(self, delay_s: float, fn: Callable[[], None]) -> QTimer:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(int(round(delay_s * 1000)))
        timer.timeout.connect(lambda: self._run(timer, fn))
        self._pending.append(timer)
        timer.start()
        return timer

    def cancel_all(self) -> None:
        for timer in self._pending:
            timer.stop()
            timer.deleteLater()
        self._pending.clear()

    def _run(self, timer: QTimer, fn: Callable[[], None]) -> None:
        if timer not in self._pending:
            return
        self._pending.remove(timer)
        timer.deleteLater()
        fn()


class AlertDispatcher(QObject):
    """Fans an alert out to every channel.

    Signals
    -------
    flash_changed(lit: bool)
        The screen should turn white (``True``) or back to black.
    alert_fired()
        Emitted once per full alert (not for the repeat flashes).
    """

    flash_changed = pyqtSignal(bool)
    alert_fired = pyqtSignal()

    def __init__(
        self,
        config: TimerConfig,
        devices: AlertDevices | None = None,
        parent: QObject | None = None,
        *,
        scheduler: DeferredScheduler | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._devices = devices or AlertDevices()
        self._scheduler = scheduler or DeferredScheduler(self)
        self._lit = False

    @property
    def devices(self) -> AlertDevices:
        return self._devices

    @property
    def scheduler(self) -> DeferredScheduler:
        return self._scheduler

    @property
    def is_lit(self) -> bool:
        return self._lit

    # ── alerts ────────────────────────────────────────────────────────

    def fire_alert(self) -> None:
        self.flash()
        self.feedback()
        self.alert_fired.emit()

    def fire_triple(self) -> None:
        self.fire_alert()
        for offset in TRIPLE_OFFSETS:
            self._scheduler.call_later(offset, self.flash)

    def flash(self) -> None:
        self._set_lit(True)
        self._scheduler.call_later(FLASH_SECONDS, lambda: self._set_lit(False))

    def feedback(self) -> None:
        mode = self._config.signal_mode
        if mode in (SignalMode.VIBRATE, SignalMode.SOUND):
            self._devices.haptics.vibrate()
        if mode == SignalMode.SOUND:
            self._devices.chime.play()

    def cancel_pending(self) -> None:
        """Drop scheduled flashes and make sure the flash is off."""
        if self._scheduler.pending:
            logger.debug("Cancelling %d pending alert callbacks", self._scheduler.pending)
        self._scheduler.cancel_all()
        if self._lit:
            self._set_lit(False)

    # ── internal ──────────────────────────────────────────────────────

    def _set_lit(self, lit: bool) -> None:
        self._lit = lit
        self._devices.torch.set_on(lit)
        self.flash_changed.emit(lit)
