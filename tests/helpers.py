"""Shared test helpers for Airbike Timer."""

from airbike.timer.engine import TimerEngine
from airbike.timer.state import Cue


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class CueRecorder:
    """Cue sink that remembers what it was asked to play."""

    def __init__(self):
        self.played: list[Cue] = []

    def __call__(self, cue: Cue) -> None:
        self.played.append(cue)

    def clear(self):
        self.played.clear()


class FakeKeepAwake:
    def __init__(self):
        self.active = False
        self.calls: list[str] = []

    def enable(self):
        self.active = True
        self.calls.append("enable")

    def disable(self):
        self.active = False
        self.calls.append("disable")


def run_ticks(engine: TimerEngine, count: int) -> None:
    """Drive the engine's tick slot directly, *count* times."""
    for _ in range(count):
        engine._on_tick()
