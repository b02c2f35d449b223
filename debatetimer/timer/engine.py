"""Speech timer state machine.

States
------
STOPPED   No session.  The display reads "Stopped".
RUNNING   Stopwatch counting up from the moment Start was pressed.

Transitions
-----------
STOPPED → RUNNING   (start)
RUNNING → STOPPED   (stop, or automatically 15 s into overtime)

Milestones
----------
Checked in order on every 0.1 s tick, each at most once per session:

ONE_MINUTE   elapsed minute == 1                → alert
NEAR_END     elapsed minute == end - 1          → alert
END          minute >= end and second > 0       → triple alert
OVERTIME     after END, second > 15             → triple alert, then stop

With a 2 minute length ONE_MINUTE and NEAR_END land on the same tick and
both fire.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..alerts.dispatcher import AlertDispatcher
from ..settings import TimerConfig


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class Milestone(Enum):
    ONE_MINUTE = "one_minute"
    NEAR_END = "near_end"
    END = "end"
    OVERTIME = "overtime"


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 100
OVERTIME_GRACE_SECONDS = 15
INITIAL_DISPLAY = "0:00"


def format_elapsed(seconds: float) -> str:
    """``m:ss`` for a non-negative number of seconds (both parts floored)."""
    minutes = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    return f"{minutes}:{secs:02d}"


@dataclass
class MilestoneFlags:
    one_minute: bool = False
    near_end: bool = False
    end_reached: bool = False

    def reset(self) -> None:
        self.one_minute = False
        self.near_end = False
        self.end_reached = False

    def any_set(self) -> bool:
        return self.one_minute or self.near_end or self.end_reached


# ── controller ────────────────────────────────────────────────────────────


class TimerController(QObject):
    """Qt-driven speech stopwatch with milestone alerts.

    Signals
    -------
    display_changed(text: str)
        Emitted on every tick with the ``m:ss`` text.
    state_changed(new_state: TimerState)
        Emitted on every transition.
    milestone_reached(milestone: Milestone)
        Emitted after the alert for a milestone has been fired.
    """

    display_changed = pyqtSignal(str)
    state_changed = pyqtSignal(object)
    milestone_reached = pyqtSignal(object)

    def __init__(
        self,
        config: TimerConfig,
        alerts: AlertDispatcher,
        parent: QObject | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._alerts = alerts
        self._clock = clock

        self._start_instant: float | None = None
        self._flags = MilestoneFlags()
        self._display_text = INITIAL_DISPLAY

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        if self._start_instant is None:
            return TimerState.STOPPED
        return TimerState.RUNNING

    @property
    def is_running(self) -> bool:
        return self._start_instant is not None

    @property
    def start_instant(self) -> float | None:
        return self._start_instant

    @property
    def elapsed(self) -> float:
        """Seconds since start (0.0 when stopped)."""
        if self._start_instant is None:
            return 0.0
        return abs(self._clock() - self._start_instant)

    @property
    def display_text(self) -> str:
        return self._display_text

    @property
    def flags(self) -> MilestoneFlags:
        return self._flags

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def alerts(self) -> AlertDispatcher:
        return self._alerts

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin a new session.  Only valid from STOPPED."""
        if self.is_running:
            return
        self._alerts.cancel_pending()
        self._flags.reset()
        self._start_instant = self._clock()
        self._set_display(INITIAL_DISPLAY)
        self._qt_timer.start()
        logger.info(
            "Session started (%d min, %s alerts)",
            self._config.end_minutes, self._config.signal_mode.label,
        )
        self.state_changed.emit(TimerState.RUNNING)

    def stop(self) -> None:
        """End the session and drop any flashes still scheduled."""
        if not self.is_running:
            return
        self._alerts.cancel_pending()
        self._end_session()
        logger.info("Session stopped")

    def toggle(self) -> None:
        if self.is_running:
            self.stop()
        else:
            self.start()

    def test_alert(self) -> None:
        """Fire one alert without touching timer state.  Ignored while running."""
        if self.is_running:
            return
        self._alerts.fire_alert()

    # ══════════════════════════════════════════════════════════════════
    #  TICK
    # ══════════════════════════════════════════════════════════════════

    def tick(self) -> None:
        if self._start_instant is None:
            return

        elapsed = self.elapsed
        minutes = math.floor(elapsed / 60)
        seconds = math.floor(elapsed % 60)
        self._set_display(format_elapsed(elapsed))

        end = self._config.end_minutes

        if minutes == 1 and not self._flags.one_minute:
            self._flags.one_minute = True
            self._alerts.fire_alert()
            self._reached(Milestone.ONE_MINUTE)

        if minutes == end - 1 and not self._flags.near_end:
            self._flags.near_end = True
            self._alerts.fire_alert()
            self._reached(Milestone.NEAR_END)

        if minutes >= end:
            if seconds > 0 and not self._flags.end_reached:
                self._flags.end_reached = True
                self._alerts.fire_triple()
                self._reached(Milestone.END)
            elif seconds > OVERTIME_GRACE_SECONDS:
                # The final triple alert keeps rendering after the stop
                self._alerts.fire_triple()
                self._end_session()
                logger.info("Session finished automatically at %s", self._display_text)
                self._reached(Milestone.OVERTIME)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _end_session(self) -> None:
        self._qt_timer.stop()
        self._start_instant = None
        self._flags.reset()
        self.state_changed.emit(TimerState.STOPPED)

    def _set_display(self, text: str) -> None:
        self._display_text = text
        self.display_changed.emit(text)

    def _reached(self, milestone: Milestone) -> None:
        logger.info("Milestone %s at %s", milestone.value, self._display_text)
        self.milestone_reached.emit(milestone)
