"""Workout settings with clamping and JSON persistence.

Settings are stored at:
    ~/Library/Application Support/AirbikeTimer/settings.json

Every write goes through a clamp, so a ``Settings`` value is always
within bounds.  Reads never adjust anything.

Usage::

    settings = load_settings()
    settings = update_settings(settings, work_time=90, rounds=8)
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "AirbikeTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


# ── bounds (inclusive) ────────────────────────────────────────────────────

PREPARATION_TIME_RANGE = (0, 30)
WORK_TIME_RANGE = (5, 3600)
REST_TIME_RANGE = (0, 1800)
ROUNDS_RANGE = (1, 100)
MIN_ACCELERATION_RANGE = (2, 10)
MAX_ACCELERATION_LIMIT = 20  # lower bound is the current minimum
ACCELERATIONS_PER_MINUTE_RANGE = (3, 6)

# Not persisted: accelerations always start disabled in a new session.
_TRANSIENT_FIELDS = frozenset({"accelerations_enabled"})


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the workout configuration (seconds)."""

    preparation_time: int = 10
    work_time: int = 120
    rest_time: int = 60
    rounds: int = 4
    accelerations_enabled: bool = False
    min_acceleration_duration: int = 2
    max_acceleration_duration: int = 15
    accelerations_per_minute: int = 4


DEFAULT_SETTINGS = Settings()

_SIMPLE_BOUNDS: dict[str, tuple[int, int]] = {
    "preparation_time": PREPARATION_TIME_RANGE,
    "work_time": WORK_TIME_RANGE,
    "rest_time": REST_TIME_RANGE,
    "rounds": ROUNDS_RANGE,
    "accelerations_per_minute": ACCELERATIONS_PER_MINUTE_RANGE,
}


def _as_int(name: str, value) -> int | None:
    if isinstance(value, bool):
        logger.warning("Ignoring boolean value for %s: %r", name, value)
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric value for %s: %r", name, value)
        return None


def update_settings(settings: Settings, **changes) -> Settings:
    """Return a copy of *settings* with *changes* applied and clamped.

    Out-of-range numbers snap to the nearest bound.  Non-numeric values
    and unknown keys are dropped.  ``max_acceleration_duration`` never
    ends up below ``min_acceleration_duration``: raising the minimum
    drags the maximum up with it, and a maximum written below the
    minimum is clamped up to it.
    """
    valid = {f.name for f in fields(Settings)}
    updates: dict[str, object] = {}

    for name, value in changes.items():
        if name not in valid:
            logger.debug("Ignoring unknown setting %r", name)
            continue
        if name == "accelerations_enabled":
            updates[name] = bool(value)
            continue
        number = _as_int(name, value)
        if number is None:
            continue
        if name in _SIMPLE_BOUNDS:
            updates[name] = clamp(number, *_SIMPLE_BOUNDS[name])
        else:
            updates[name] = number

    new_min = settings.min_acceleration_duration
    if "min_acceleration_duration" in updates:
        new_min = clamp(updates["min_acceleration_duration"], *MIN_ACCELERATION_RANGE)
        updates["min_acceleration_duration"] = new_min

    if "max_acceleration_duration" in updates:
        requested = updates["max_acceleration_duration"]
    else:
        requested = settings.max_acceleration_duration
    updates["max_acceleration_duration"] = clamp(
        requested, new_min, MAX_ACCELERATION_LIMIT,
    )

    return replace(settings, **updates)


# ── single-field writers ──────────────────────────────────────────────────


def with_preparation_time(settings: Settings, seconds: int) -> Settings:
    return update_settings(settings, preparation_time=seconds)


def with_work_time(settings: Settings, seconds: int) -> Settings:
    return update_settings(settings, work_time=seconds)


def with_rest_time(settings: Settings, seconds: int) -> Settings:
    return update_settings(settings, rest_time=seconds)


def with_rounds(settings: Settings, rounds: int) -> Settings:
    return update_settings(settings, rounds=rounds)


def with_accelerations_enabled(settings: Settings, enabled: bool) -> Settings:
    return update_settings(settings, accelerations_enabled=enabled)


def with_min_acceleration_duration(settings: Settings, seconds: int) -> Settings:
    return update_settings(settings, min_acceleration_duration=seconds)


def with_max_acceleration_duration(settings: Settings, seconds: int) -> Settings:
    return update_settings(settings, max_acceleration_duration=seconds)


def with_accelerations_per_minute(settings: Settings, count: int) -> Settings:
    return update_settings(settings, accelerations_per_minute=count)


def reset_to_defaults() -> Settings:
    return DEFAULT_SETTINGS


# ── persistence ───────────────────────────────────────────────────────────


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    Stored values pass through :func:`update_settings`, so a hand-edited
    file can never produce an out-of-range snapshot.
    """
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                logger.warning("Settings file %s is not an object", SETTINGS_PATH)
                return Settings()
            persisted = {
                k: v for k, v in data.items() if k not in _TRANSIENT_FIELDS
            }
            return update_settings(Settings(), **persisted)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read settings from %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write the persisted subset of *settings* to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    data = {
        k: v for k, v in asdict(settings).items() if k not in _TRANSIENT_FIELDS
    }
    SETTINGS_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
