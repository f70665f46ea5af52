"""Randomized acceleration intervals inside a work phase.

An acceleration is a short burst the rider is cued to push through.
Each work phase gets a fresh, unrelated set.  Placement is a greedy
random packing with a hard attempt ceiling: it may produce fewer
intervals than requested, which is normal output.

All times are seconds from the start of the current work phase.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..timefmt import seconds_to_time_string

logger = logging.getLogger(__name__)


MAX_ATTEMPTS = 100       # bounded best-effort; under-filling is expected
SAFETY_MARGIN = 2        # no accelerations in the first/last 2 s of work
MIN_WORK_TIME = 10       # shorter work phases get no accelerations


@dataclass(frozen=True)
class AccelerationInterval:
    start_time: int
    duration: int
    end_time: int

    @classmethod
    def starting_at(cls, start_time: int, duration: int) -> AccelerationInterval:
        return cls(start_time, duration, start_time + duration)

    def contains(self, elapsed: int) -> bool:
        """Half-open: the tick at ``end_time`` is outside."""
        return self.start_time <= elapsed < self.end_time

    def overlaps(self, other: AccelerationInterval) -> bool:
        return self.start_time < other.end_time and other.start_time < self.end_time


def generate_acceleration_intervals(
    work_time: int,
    min_duration: int,
    max_duration: int,
    accelerations_per_minute: int,
    rng: random.Random | None = None,
) -> tuple[AccelerationInterval, ...]:
    """Place up to ``floor(per_minute * work_time / 60)`` intervals.

    Candidates draw a start in ``[2, work_time - 2 - min_duration]`` and
    a duration in ``[min_duration, max_duration]``; a candidate is kept
    only if it ends by ``work_time - 2`` and overlaps nothing already
    kept.  Stops after :data:`MAX_ATTEMPTS` draws.  The result is sorted
    by start time.
    """
    if work_time < MIN_WORK_TIME:
        return ()

    rng = rng or random.Random()
    target = (accelerations_per_minute * work_time) // 60

    safe_start = SAFETY_MARGIN
    safe_end = work_time - SAFETY_MARGIN
    if safe_end <= safe_start:
        return ()

    latest_start = safe_end - min_duration
    if latest_start < safe_start:
        return ()

    accepted: list[AccelerationInterval] = []
    attempts = 0
    while len(accepted) < target and attempts < MAX_ATTEMPTS:
        attempts += 1
        candidate = AccelerationInterval.starting_at(
            rng.randint(safe_start, latest_start),
            rng.randint(min_duration, max_duration),
        )
        if candidate.end_time > safe_end:
            continue
        if any(candidate.overlaps(kept) for kept in accepted):
            continue
        accepted.append(candidate)

    accepted.sort(key=lambda interval: interval.start_time)
    if len(accepted) < target:
        logger.debug(
            "Placed %d of %d accelerations after %d attempts",
            len(accepted), target, attempts,
        )
    return tuple(accepted)


def find_active_acceleration(
    intervals: Iterable[AccelerationInterval],
    elapsed: int,
) -> AccelerationInterval | None:
    """First interval containing *elapsed*, in sequence order."""
    for interval in intervals:
        if interval.contains(elapsed):
            return interval
    return None


def describe_intervals(intervals: Sequence[AccelerationInterval]) -> list[str]:
    """Human-readable ``"0:12-0:17 (5s)"`` entries for logs."""
    return [
        f"{seconds_to_time_string(i.start_time)}-"
        f"{seconds_to_time_string(i.end_time)} ({i.duration}s)"
        for i in intervals
    ]
