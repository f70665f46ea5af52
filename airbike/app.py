"""Main application window for the Airbike timer."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QStatusBar

from .audio.sounds import SoundManager
from .settings import Settings, load_settings
from .timefmt import format_clock
from .timer.engine import TimerEngine
from .timer.state import Phase
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget
from .wakelock import KeepAwake


_STATUS_MESSAGES: dict[Phase, str] = {
    Phase.PREPARATION: "Get on the bike…",
    Phase.WORK:        "Work!",
    Phase.REST:        "Rest, breathe",
}


class AirbikeApp(QMainWindow):
    """Wires the engine to its collaborators and the timer screen."""

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Airbike Timer")
        self.setMinimumSize(480, 560)

        self._settings: Settings = settings or load_settings()

        # ── collaborators ─────────────────────────────────────────────
        self._sound_manager = SoundManager(parent=self)
        self._keep_awake = KeepAwake()

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self,
            settings=self._settings,
            cue_sink=self._sound_manager.play,
            keep_awake=self._keep_awake,
        )

        self.setStyleSheet(build_stylesheet())

        self._timer_widget = TimerWidget(self._timer_engine, self)
        self.setCentralWidget(self._timer_widget)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready")

        # ── wire signals ──────────────────────────────────────────────
        self._timer_widget.settings_requested.connect(self._open_settings)
        self._timer_widget.mute_toggled.connect(self._toggle_mute)
        self._timer_engine.phase_changed.connect(self._on_phase_changed)
        self._timer_engine.workout_completed.connect(self._on_workout_completed)
        self._timer_engine.tick.connect(self._on_tick)

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_phase_changed(self, phase: Phase) -> None:
        self._status_bar.showMessage(_STATUS_MESSAGES[phase])

    def _on_workout_completed(self) -> None:
        self._status_bar.showMessage("Workout complete. One more round?")

    def _on_tick(self, remaining: int) -> None:
        self.setWindowTitle(f"Airbike Timer ({format_clock(remaining)})")

    def _toggle_mute(self) -> None:
        muted = self._sound_manager.toggle_mute()
        self._timer_widget.set_muted(muted)

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        """Edit settings; any change restarts the workout from the top."""
        from .ui.settings_dialog import SettingsDialog

        self._timer_engine.pause()
        dlg = SettingsDialog(self._settings, parent=self)
        dlg.exec()

        if dlg.settings != self._settings:
            self._settings = dlg.settings
            self._timer_engine.apply_settings(self._settings)
            self._status_bar.showMessage("Settings updated")

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer_engine.pause()
        self._keep_awake.disable()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space toggles start/pause, Escape resets."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._timer_engine.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)
