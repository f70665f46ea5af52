"""Timer package."""

from .accelerations import (
    AccelerationInterval,
    generate_acceleration_intervals,
    find_active_acceleration,
    MAX_ATTEMPTS,
    SAFETY_MARGIN,
    MIN_WORK_TIME,
)
from .state import (
    Phase,
    Cue,
    Command,
    TimerState,
    Transition,
    initial_state,
    tick,
    complete_phase,
    start,
    pause,
    reset,
    dispatch,
)
from .engine import TimerEngine

__all__ = [
    "AccelerationInterval",
    "generate_acceleration_intervals",
    "find_active_acceleration",
    "MAX_ATTEMPTS",
    "SAFETY_MARGIN",
    "MIN_WORK_TIME",
    "Phase",
    "Cue",
    "Command",
    "TimerState",
    "Transition",
    "initial_state",
    "tick",
    "complete_phase",
    "start",
    "pause",
    "reset",
    "dispatch",
    "TimerEngine",
]
