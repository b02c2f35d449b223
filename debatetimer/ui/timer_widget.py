"""The timer screen.

Layout (top → bottom):
    - Elapsed time (or "Stopped")
    - Start / Stop button
    - Length picker (5 or 7 minutes)
    - Alert type picker + Test Alert button
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QComboBox,
)

from ..settings import END_MINUTES_CHOICES, SignalMode, SettingsStore
from ..timer.engine import TimerController, TimerState
from .styles import build_stylesheet, get_palette


STOPPED_TEXT = "Stopped"


class TimerWidget(QWidget):
    """Display and controls for a single ``TimerController``.

    Picker changes are written to the shared config immediately and
    persisted through *store*, so they also affect a running session.
    """

    def __init__(
        self,
        controller: TimerController,
        store: SettingsStore,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._controller = controller
        self._store = store
        self._lit = False
        self._build_ui()
        self._populate()
        self._connect_signals()
        self._on_state_changed(controller.state)
        self._apply_style()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout.addStretch()

        self._time_label = QLabel(STOPPED_TEXT, self)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        layout.addStretch()

        btn_row = QHBoxLayout()
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._start_stop_btn = QPushButton("Start", self)
        self._start_stop_btn.setObjectName("startButton")
        btn_row.addWidget(self._start_stop_btn)
        layout.addLayout(btn_row)

        layout.addStretch()

        length_row = QHBoxLayout()
        length_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        length_row.addWidget(QLabel("Length: ", self))
        self._length_combo = QComboBox(self)
        for minutes in END_MINUTES_CHOICES:
            self._length_combo.addItem(str(minutes), minutes)
        length_row.addWidget(self._length_combo)
        layout.addLayout(length_row)

        layout.addStretch()

        alert_row = QHBoxLayout()
        alert_row.setSpacing(16)
        alert_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._signal_combo = QComboBox(self)
        for mode in SignalMode:
            self._signal_combo.addItem(mode.label, mode.value)
        alert_row.addWidget(self._signal_combo)

        self._test_btn = QPushButton("Test Alert", self)
        self._test_btn.setObjectName("testButton")
        alert_row.addWidget(self._test_btn)
        layout.addLayout(alert_row)

        layout.addStretch()

    def _populate(self) -> None:
        config = self._controller.config
        self._length_combo.setCurrentIndex(
            self._length_combo.findData(config.end_minutes)
        )
        self._signal_combo.setCurrentIndex(
            self._signal_combo.findData(config.signal_mode.value)
        )

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_stop_btn.clicked.connect(self._controller.toggle)
        self._test_btn.clicked.connect(self._controller.test_alert)
        self._length_combo.currentIndexChanged.connect(self._on_length_changed)
        self._signal_combo.currentIndexChanged.connect(self._on_signal_changed)

        self._controller.display_changed.connect(self._on_display_changed)
        self._controller.state_changed.connect(self._on_state_changed)
        self._controller.alerts.flash_changed.connect(self.set_flash)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_display_changed(self, text: str) -> None:
        if self._controller.is_running:
            self._time_label.setText(text)

    def _on_state_changed(self, state: TimerState) -> None:
        running = state == TimerState.RUNNING
        self._start_stop_btn.setText("Stop" if running else "Start")
        self._start_stop_btn.setObjectName("stopButton" if running else "startButton")
        self._test_btn.setEnabled(not running)
        self._time_label.setText(
            self._controller.display_text if running else STOPPED_TEXT
        )
        # Object name changed; re-polish so the QSS selector applies
        self._start_stop_btn.style().unpolish(self._start_stop_btn)
        self._start_stop_btn.style().polish(self._start_stop_btn)

    def _on_length_changed(self, index: int) -> None:
        minutes = self._length_combo.itemData(index)
        if minutes is None:
            return
        config = self._controller.config
        config.end_minutes = minutes
        config.save(self._store)

    def _on_signal_changed(self, index: int) -> None:
        value = self._signal_combo.itemData(index)
        if value is None:
            return
        config = self._controller.config
        config.signal_mode = SignalMode(value)
        config.save(self._store)

    def set_flash(self, lit: bool) -> None:
        """Turn the whole screen white (``True``) or back to black."""
        if lit == self._lit:
            return
        self._lit = lit
        self._apply_style()

    @property
    def is_lit(self) -> bool:
        return self._lit

    # ── theming ───────────────────────────────────────────────────────────

    def _apply_style(self) -> None:
        self.setStyleSheet(build_stylesheet(get_palette(self._lit)))
