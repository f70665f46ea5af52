"""Pure phase state machine for the interval workout.

Phases
------
PREPARATION   Count-in before the first work phase (skipped when 0 s).
WORK          Work phase; accelerations live here.
REST          Recovery between rounds (skipped when 0 s).

Transitions (on phase completion)
---------------------------------
PREPARATION → WORK                          work_start
WORK → REST         (rounds left, rest > 0) work_end
WORK → WORK, +1     (rounds left, rest = 0) work_end, work_start
WORK → start, round 1, stopped (last round) work_end, workout completed
REST → WORK, +1                             work_start

Every function takes a ``TimerState`` plus the ``Settings`` snapshot
and returns a ``Transition``: the next state and what happened on the
way.  Nothing here touches a clock, a sound device or a random source.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..settings import Settings


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    PREPARATION = "preparation"
    WORK = "work"
    REST = "rest"


class Cue(Enum):
    WORK_START = "work_start"
    WORK_END = "work_end"
    ACCELERATION_START = "acceleration_start"
    ACCELERATION_END = "acceleration_end"


class Command(Enum):
    TICK = "tick"
    START = "start"
    PAUSE = "pause"
    RESET = "reset"


# ── state ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerState:
    phase: Phase
    elapsed: int
    total: int
    is_running: bool
    current_round: int

    @property
    def remaining(self) -> int:
        return max(0, self.total - self.elapsed)

    @property
    def is_finished(self) -> bool:
        return self.elapsed >= self.total


@dataclass(frozen=True)
class Transition:
    """Result of one state-machine step.

    ``entered`` lists phases entered in order (a zero-rest round change
    enters WORK once).  ``regenerate_accelerations`` is set whenever the
    step leaves the machine at the start of a work phase with
    accelerations enabled.
    """

    state: TimerState
    cues: tuple[Cue, ...] = ()
    entered: tuple[Phase, ...] = ()
    workout_completed: bool = False
    regenerate_accelerations: bool = False


def phase_duration(phase: Phase, settings: Settings) -> int:
    if phase is Phase.PREPARATION:
        return settings.preparation_time
    if phase is Phase.WORK:
        return settings.work_time
    return settings.rest_time


def initial_state(settings: Settings, *, running: bool = False) -> TimerState:
    """Canonical beginning: preparation, or work when preparation is 0."""
    phase = Phase.PREPARATION if settings.preparation_time > 0 else Phase.WORK
    return TimerState(
        phase=phase,
        elapsed=0,
        total=phase_duration(phase, settings),
        is_running=running,
        current_round=1,
    )


def _enter(state: TimerState, phase: Phase, settings: Settings, **changes) -> TimerState:
    return replace(
        state,
        phase=phase,
        elapsed=0,
        total=phase_duration(phase, settings),
        **changes,
    )


def _fresh_work(state: TimerState, settings: Settings) -> bool:
    return (
        settings.accelerations_enabled
        and state.phase is Phase.WORK
        and state.elapsed == 0
    )


# ── operations ────────────────────────────────────────────────────────────


def tick(state: TimerState, settings: Settings) -> Transition:
    """Advance one second.  No-op unless running with time left."""
    if not state.is_running or state.is_finished:
        return Transition(state)
    advanced = replace(state, elapsed=state.elapsed + 1)
    if advanced.is_finished:
        return complete_phase(advanced, settings)
    return Transition(advanced)


def complete_phase(state: TimerState, settings: Settings) -> Transition:
    """Apply the transition table for the phase that just ended.

    Zero-length phases reached on the way are completed in the same
    step, so the returned state never sits in a running 0 s phase.
    """
    cues: list[Cue] = []
    entered: list[Phase] = []
    completed = False

    while True:
        if state.phase is Phase.PREPARATION:
            state = _enter(state, Phase.WORK, settings)
            cues.append(Cue.WORK_START)
            entered.append(Phase.WORK)

        elif state.phase is Phase.WORK:
            cues.append(Cue.WORK_END)
            if state.current_round >= settings.rounds:
                state = initial_state(settings, running=False)
                completed = True
            elif settings.rest_time > 0:
                state = _enter(state, Phase.REST, settings)
                entered.append(Phase.REST)
            else:
                state = _enter(
                    state, Phase.WORK, settings,
                    current_round=state.current_round + 1,
                )
                cues.append(Cue.WORK_START)
                entered.append(Phase.WORK)

        else:
            state = _enter(
                state, Phase.WORK, settings,
                current_round=state.current_round + 1,
            )
            cues.append(Cue.WORK_START)
            entered.append(Phase.WORK)

        if not (state.is_running and state.total == 0):
            break

    return Transition(
        state=state,
        cues=tuple(cues),
        entered=tuple(entered),
        workout_completed=completed,
        regenerate_accelerations=_fresh_work(state, settings),
    )


def start(state: TimerState, settings: Settings) -> Transition:
    """Resume in place, or restart from the beginning if the phase is used up."""
    if not state.is_finished:
        resumed = replace(state, is_running=True)
        if state.is_running or state.phase is not Phase.WORK or state.elapsed:
            return Transition(resumed)
        # Starting at 0 s of a work phase (preparation disabled): the
        # phase begins now, so it gets its bell.
        return Transition(resumed, cues=(Cue.WORK_START,), entered=(Phase.WORK,))

    fresh = initial_state(settings, running=True)
    cues: tuple[Cue, ...] = ()
    entered: tuple[Phase, ...] = (fresh.phase,)
    if fresh.phase is Phase.WORK:
        cues = (Cue.WORK_START,)
    return Transition(
        state=fresh,
        cues=cues,
        entered=entered,
        regenerate_accelerations=_fresh_work(fresh, settings),
    )


def pause(state: TimerState, settings: Settings) -> Transition:
    if not state.is_running:
        return Transition(state)
    return Transition(replace(state, is_running=False))


def reset(state: TimerState, settings: Settings) -> Transition:
    """Back to the canonical beginning, stopped.

    A new acceleration set is only asked for when the beginning is a
    work phase; preparation has no use for one.
    """
    fresh = initial_state(settings, running=False)
    return Transition(
        state=fresh,
        regenerate_accelerations=_fresh_work(fresh, settings),
    )


_HANDLERS = {
    Command.TICK: tick,
    Command.START: start,
    Command.PAUSE: pause,
    Command.RESET: reset,
}


def dispatch(state: TimerState, settings: Settings, command: Command) -> Transition:
    """Single entry point: apply *command* to *state*."""
    return _HANDLERS[command](state, settings)
