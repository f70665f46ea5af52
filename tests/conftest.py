"""Shared pytest fixtures for Airbike Timer tests."""

import os
import random
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from airbike.settings import Settings
from airbike.timer.engine import TimerEngine

from helpers import CueRecorder, FakeKeepAwake


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_dir(tmp_path, monkeypatch):
    """Point settings persistence at a throwaway directory."""
    monkeypatch.setattr("airbike.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("airbike.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield tmp_path


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def cues():
    return CueRecorder()


@pytest.fixture
def keep_awake():
    return FakeKeepAwake()


@pytest.fixture
def make_engine(qapp, cues, keep_awake, rng):
    """Factory: ``make_engine(work_time=10, rounds=3, ...)``."""
    def _make(**overrides) -> TimerEngine:
        return TimerEngine(
            parent=None,
            settings=Settings(**overrides),
            cue_sink=cues,
            keep_awake=keep_awake,
            rng=rng,
        )
    return _make


@pytest.fixture
def engine(make_engine):
    """Fresh engine on default settings (10 s preparation, 4 rounds)."""
    return make_engine()
