"""Clock-style formatting helpers shared by the engine and the UI."""

from __future__ import annotations

import re

_TIME_STRING = re.compile(r"^(\d+):(\d{2})$")


def format_clock(seconds: int) -> str:
    """``125`` → ``"02:05"``.  Used for the big remaining-time display."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def seconds_to_time_string(seconds: int) -> str:
    """``125`` → ``"2:05"``.  Used in settings fields and log output."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


def parse_time_string(text: str) -> int | None:
    """Parse ``"m:ss"`` into seconds, or ``None`` if malformed."""
    match = _TIME_STRING.match(text.strip())
    if not match:
        return None
    minutes, secs = int(match.group(1)), int(match.group(2))
    if secs >= 60:
        return None
    return minutes * 60 + secs
