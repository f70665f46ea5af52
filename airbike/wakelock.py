"""Keep the display awake while a workout is running.

Holds a helper process for as long as the lock is enabled:

- macOS: ``caffeinate -d -w <pid>`` (exits by itself if we crash)
- Linux: ``systemd-inhibit`` wrapped around ``sleep infinity``

Anything else, or a missing/failed helper, leaves the lock inactive
with a warning.  The timer never depends on this succeeding.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)


def _inhibit_command() -> list[str] | None:
    if sys.platform == "darwin":
        if shutil.which("caffeinate"):
            return ["caffeinate", "-d", "-w", str(os.getpid())]
        return None
    if sys.platform.startswith("linux"):
        if shutil.which("systemd-inhibit"):
            return [
                "systemd-inhibit",
                "--what=idle:sleep",
                "--who=AirbikeTimer",
                "--why=Workout in progress",
                "--mode=block",
                "sleep", "infinity",
            ]
        return None
    return None


class KeepAwake:
    """Screen keep-awake lock.  ``enable``/``disable`` are idempotent."""

    def __init__(self) -> None:
        self._proc: subprocess.Popen | None = None

    @property
    def active(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    def enable(self) -> None:
        if self.active:
            return
        cmd = _inhibit_command()
        if cmd is None:
            logger.warning(
                "No keep-awake helper on %s; the screen may sleep during the workout",
                sys.platform,
            )
            return
        try:
            self._proc = subprocess.Popen(
                cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.warning("Keep-awake helper %s failed to start: %s", cmd[0], exc)
            self._proc = None
            return
        logger.debug("Keep-awake enabled via %s", cmd[0])

    def disable(self) -> None:
        proc, self._proc = self._proc, None
        if proc is None:
            return
        if proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=2)
            except subprocess.TimeoutExpired:
                proc.kill()
        logger.debug("Keep-awake released")
