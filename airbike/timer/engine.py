"""Qt host for the interval workout state machine.

``TimerEngine`` owns the one mutable ``TimerState``, the settings
snapshot it was built from, the acceleration set for the current work
phase, and the 1 Hz ``QTimer`` that drives ticks.  All transitions are
computed by the pure functions in :mod:`.state`; the engine applies the
result, keeps the ``QTimer`` in step with ``is_running``, and forwards
cues to its collaborators.

Collaborators
-------------
cue_sink(cue)         Plays a sound for a :class:`Cue`.  Best-effort.
keep_awake            Object with ``enable()`` / ``disable()``; held
                      while the workout is running.  Best-effort.

A failing collaborator is logged and otherwise ignored: the timer keeps
advancing no matter what the audio or power plumbing does.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..settings import Settings
from .accelerations import (
    AccelerationInterval,
    describe_intervals,
    find_active_acceleration,
    generate_acceleration_intervals,
)
from .state import (
    Command,
    Cue,
    Phase,
    TimerState,
    Transition,
    dispatch,
    initial_state,
)

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerEngine(QObject):
    """Interval workout timer with randomized accelerations.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every processed tick.
    state_changed(state: TimerState)
        Emitted whenever the state object is replaced.
    phase_changed(phase: Phase)
        Emitted for each phase entered, in order.
    cue(cue: Cue)
        Emitted for every cue, after the sink has been called.
    acceleration_changed(interval: AccelerationInterval | None)
        Emitted when the active acceleration changes.
    accelerations_generated(intervals: tuple)
        Emitted after a new acceleration set replaces the old one.
    workout_completed()
        Emitted once when the last round's work phase ends.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    cue = pyqtSignal(object)
    acceleration_changed = pyqtSignal(object)
    accelerations_generated = pyqtSignal(object)
    workout_completed = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        settings: Settings | None = None,
        cue_sink: Callable[[Cue], None] | None = None,
        keep_awake=None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(parent)

        self._settings: Settings = settings or Settings()
        self._cue_sink = cue_sink
        self._keep_awake = keep_awake
        self._rng = rng or random.Random()

        self._state: TimerState = initial_state(self._settings)
        self._intervals: tuple[AccelerationInterval, ...] = ()
        self._active: AccelerationInterval | None = None
        self._completed: bool = False
        # Set once the current work phase has rung its start bell.
        self._work_announced: bool = False

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

        if self._state.phase is Phase.WORK:
            self.regenerate_accelerations()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def elapsed(self) -> int:
        return self._state.elapsed

    @property
    def total(self) -> int:
        return self._state.total

    @property
    def remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._state.remaining

    @property
    def current_round(self) -> int:
        return self._state.current_round

    @property
    def rounds(self) -> int:
        return self._settings.rounds

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        if self._state.total <= 0:
            return 0.0
        return max(0.0, min(1.0, self._state.elapsed / self._state.total))

    @property
    def acceleration_intervals(self) -> tuple[AccelerationInterval, ...]:
        return self._intervals

    @property
    def active_acceleration(self) -> AccelerationInterval | None:
        return self._active

    @property
    def workout_just_completed(self) -> bool:
        """Set when the last round finishes; cleared by start/reset/dismiss."""
        return self._completed

    @property
    def timer_active(self) -> bool:
        """Whether the 1 Hz ``QTimer`` is currently scheduled."""
        return self._qt_timer.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        self._completed = False
        transition = dispatch(self._state, self._settings, Command.START)
        if self._work_announced and not self._state.is_finished:
            # Resuming a work phase paused before its first tick.
            transition = replace(transition, cues=(), entered=())
        self._apply(transition)

    def pause(self) -> None:
        """Stop ticking in place.  Calling it twice changes nothing."""
        self._apply(dispatch(self._state, self._settings, Command.PAUSE))

    def toggle(self) -> None:
        if self._state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Return to the beginning of the workout, stopped."""
        self._completed = False
        self._work_announced = False
        self._apply(dispatch(self._state, self._settings, Command.RESET))

    def apply_settings(self, settings: Settings) -> None:
        """Swap in a new settings snapshot.  The workout starts over."""
        self._settings = settings
        self._intervals = ()
        self.reset()

    def dismiss_completion(self) -> None:
        self._completed = False

    def regenerate_accelerations(self) -> None:
        """Draw a fresh acceleration set for the current work phase."""
        s = self._settings
        if s.accelerations_enabled:
            intervals = generate_acceleration_intervals(
                s.work_time,
                s.min_acceleration_duration,
                s.max_acceleration_duration,
                s.accelerations_per_minute,
                rng=self._rng,
            )
        else:
            intervals = ()
        self._intervals = intervals
        if intervals:
            logger.debug(
                "Generated %d accelerations for %ds work: %s",
                len(intervals), s.work_time,
                ", ".join(describe_intervals(intervals)),
            )
        self.accelerations_generated.emit(intervals)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        self._apply(dispatch(self._state, self._settings, Command.TICK))
        self.tick.emit(self._state.remaining)

    def _apply(self, transition: Transition) -> None:
        was_running = self._state.is_running
        previous = self._state
        self._state = transition.state

        # Stop or start the clock before anything observable happens,
        # so no stale tick can fire after a pause or completion.
        self._sync_clock()

        if transition.regenerate_accelerations:
            self.regenerate_accelerations()
        elif self._state.phase is not Phase.WORK and self._intervals:
            self._intervals = ()

        for cue in transition.cues:
            self._emit_cue(cue)
        if transition.workout_completed:
            self._work_announced = False
        elif Cue.WORK_START in transition.cues:
            self._work_announced = True
        for phase in transition.entered:
            self.phase_changed.emit(phase)

        self._update_acceleration()

        if transition.workout_completed:
            self._completed = True
            logger.info("Workout completed (%d rounds)", self._settings.rounds)
            self.workout_completed.emit()

        if was_running != self._state.is_running:
            self._sync_keep_awake()

        if self._state != previous:
            self.state_changed.emit(self._state)

    def _sync_clock(self) -> None:
        if self._state.is_running:
            if not self._qt_timer.isActive():
                self._qt_timer.start()
        else:
            self._qt_timer.stop()

    def _update_acceleration(self) -> None:
        s = self._state
        if s.is_running and s.phase is Phase.WORK:
            current = find_active_acceleration(self._intervals, s.elapsed)
        else:
            current = None

        previous = self._active
        if current == previous:
            return
        self._active = current

        # Leaving work mid-burst (reset, settings change) ends it silently.
        if s.is_running and s.phase is Phase.WORK:
            if previous is not None:
                self._emit_cue(Cue.ACCELERATION_END)
            if current is not None:
                self._emit_cue(Cue.ACCELERATION_START)
        self.acceleration_changed.emit(current)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: collaborators
    # ══════════════════════════════════════════════════════════════════

    def _emit_cue(self, cue: Cue) -> None:
        if self._cue_sink is not None:
            try:
                self._cue_sink(cue)
            except Exception:
                logger.exception("Cue sink failed to play %s", cue.value)
        self.cue.emit(cue)

    def _sync_keep_awake(self) -> None:
        if self._keep_awake is None:
            return
        try:
            if self._state.is_running:
                self._keep_awake.enable()
            else:
                self._keep_awake.disable()
        except Exception:
            logger.exception("Keep-awake collaborator failed")
