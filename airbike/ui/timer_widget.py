"""Main timer display.

Layout (top → bottom):
    - Round counter  ("Round 2/4")
    - Remaining time (MM:SS, large)
    - Phase label    (colour-coded)
    - Acceleration indicator (only while a burst is active)
    - Workout-completed banner (until dismissed)
    - Start/Pause, Reset, Settings and Mute buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame,
)

from ..timefmt import format_clock
from ..timer.engine import TimerEngine
from ..timer.state import Phase
from .styles import PHASE_COLORS


PHASE_LABELS: dict[Phase, str] = {
    Phase.PREPARATION: "Get ready",
    Phase.WORK:        "Work",
    Phase.REST:        "Rest",
}

ACCELERATION_TEXT = "SPEED UP!"


class TimerWidget(QWidget):
    """The workout screen.  Reads the engine, issues commands to it."""

    settings_requested = pyqtSignal()
    mute_toggled = pyqtSignal()

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(8)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._round_label = QLabel(self)
        self._round_label.setObjectName("roundLabel")
        self._round_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._round_label)

        self._time_label = QLabel(self)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._phase_label = QLabel(self)
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        self._accel_label = QLabel(ACCELERATION_TEXT, self)
        self._accel_label.setObjectName("accelerationLabel")
        self._accel_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._accel_label.setVisible(False)
        layout.addWidget(self._accel_label)

        # ── completion banner ────────────────────────────────────────
        self._banner = QFrame(self)
        self._banner.setObjectName("completedBanner")
        banner_layout = QVBoxLayout(self._banner)
        banner_layout.setContentsMargins(24, 16, 24, 16)
        title = QLabel("Workout complete!", self._banner)
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 22px; font-weight: 800; background: transparent;")
        banner_layout.addWidget(title)
        self._banner_close = QPushButton("Close", self._banner)
        self._banner_close.setObjectName("secondaryButton")
        banner_layout.addWidget(self._banner_close, alignment=Qt.AlignmentFlag.AlignCenter)
        self._banner.setVisible(False)
        layout.addWidget(self._banner)

        layout.addSpacing(16)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(16)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._settings_btn = QPushButton("Settings", self)
        self._settings_btn.setObjectName("secondaryButton")

        self._start_pause_btn = QPushButton("Start", self)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", self)
        self._reset_btn.setObjectName("secondaryButton")

        self._mute_btn = QPushButton("Mute", self)
        self._mute_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._settings_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._mute_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._settings_btn.clicked.connect(lambda: self.settings_requested.emit())
        self._mute_btn.clicked.connect(lambda: self.mute_toggled.emit())
        self._banner_close.clicked.connect(self._on_banner_closed)

        self._engine.state_changed.connect(lambda _state: self.refresh())
        self._engine.tick.connect(lambda _remaining: self.refresh())
        self._engine.acceleration_changed.connect(self._on_acceleration_changed)
        self._engine.workout_completed.connect(self.refresh)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_acceleration_changed(self, interval) -> None:
        self._accel_label.setVisible(interval is not None)

    def _on_banner_closed(self) -> None:
        self._engine.dismiss_completion()
        self._banner.setVisible(False)

    def set_muted(self, muted: bool) -> None:
        self._mute_btn.setText("Unmute" if muted else "Mute")

    def refresh(self) -> None:
        engine = self._engine
        phase = engine.phase

        self._round_label.setText(f"Round {engine.current_round}/{engine.rounds}")
        self._time_label.setText(format_clock(engine.remaining))
        self._phase_label.setText(PHASE_LABELS[phase])
        self._phase_label.setStyleSheet(
            f"font-size: 20px; font-weight: 600; color: {PHASE_COLORS[phase]};"
        )
        self._start_pause_btn.setText("Pause" if engine.is_running else "Start")
        self._accel_label.setVisible(engine.active_acceleration is not None)
        self._banner.setVisible(engine.workout_just_completed)

    # ── read-only accessors (tests, shortcuts) ────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def phase_text(self) -> str:
        return self._phase_label.text()

    @property
    def round_text(self) -> str:
        return self._round_label.text()

    @property
    def acceleration_visible(self) -> bool:
        return not self._accel_label.isHidden()

    @property
    def completion_visible(self) -> bool:
        return not self._banner.isHidden()
