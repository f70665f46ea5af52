"""Workout cue sounds: numpy synthesis + QSoundEffect playback.

Every cue is generated as a WAV file from sine partials with an ADSR
envelope and cached to disk, so later launches only load files.

Cue sounds
----------
- ``work_start``          boxing-bell double strike
- ``work_end``            long descending bell
- ``acceleration_start``  three rising beeps
- ``acceleration_end``    single low beep
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..timer.state import Cue

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "AirbikeTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

CUE_NAMES = tuple(cue.value for cue in Cue)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: float = 0.005,
    decay: float = 0.05,
    sustain: float = 0.6,
    release: float = 0.1,
) -> np.ndarray:
    """ADSR envelope.  Segment lengths are in seconds."""
    a = min(int(SAMPLE_RATE * attack), length)
    d = min(int(SAMPLE_RATE * decay), length - a)
    r = min(int(SAMPLE_RATE * release), length - a - d)
    s = length - a - d - r
    return np.concatenate([
        np.linspace(0.0, 1.0, a, endpoint=False),
        np.linspace(1.0, sustain, d, endpoint=False),
        np.full(s, sustain),
        np.linspace(sustain, 0.0, r),
    ])


def _tone(freq: float, seconds: float, partials: tuple[float, ...] = (1.0,)) -> np.ndarray:
    """Sum of harmonics of *freq*; ``partials[i]`` weights harmonic ``i+1``."""
    t = np.arange(int(SAMPLE_RATE * seconds)) / SAMPLE_RATE
    wave_ = np.zeros_like(t)
    for n, weight in enumerate(partials, start=1):
        wave_ += weight * np.sin(2 * np.pi * freq * n * t)
    peak = np.max(np.abs(wave_)) or 1.0
    return wave_ / peak


def _silence(seconds: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * seconds))


def _wav_bytes(samples: np.ndarray, gain: float = 0.8) -> bytes:
    """Float samples (-1..1) → mono 16-bit PCM WAV."""
    pcm = (np.clip(samples * gain, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


_BELL_PARTIALS = (1.0, 0.6, 0.0, 0.35, 0.0, 0.2)


def _bell(freq: float, seconds: float) -> np.ndarray:
    tone = _tone(freq, seconds, _BELL_PARTIALS)
    decay = np.exp(-np.arange(len(tone)) / (SAMPLE_RATE * seconds / 4))
    return tone * decay * _envelope(len(tone), attack=0.002, decay=0.02, sustain=0.9, release=0.05)


def _beep(freq: float, seconds: float) -> np.ndarray:
    tone = _tone(freq, seconds)
    return tone * _envelope(len(tone), attack=0.005, decay=0.02, sustain=0.7, release=0.03)


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_work_start() -> bytes:
    strike = _bell(880.0, 0.45)
    return _wav_bytes(np.concatenate([strike, _silence(0.05), strike]))


def _generate_work_end() -> bytes:
    return _wav_bytes(np.concatenate([_bell(660.0, 0.5), _bell(440.0, 1.1)]))


def _generate_acceleration_start() -> bytes:
    parts: list[np.ndarray] = []
    for freq in (988.0, 1175.0, 1319.0):
        parts.append(_beep(freq, 0.09))
        parts.append(_silence(0.04))
    return _wav_bytes(np.concatenate(parts))


def _generate_acceleration_end() -> bytes:
    return _wav_bytes(np.concatenate([_beep(523.0, 0.25), _silence(0.05)]), gain=0.6)


_GENERATORS = {
    Cue.WORK_START.value: _generate_work_start,
    Cue.WORK_END.value: _generate_work_end,
    Cue.ACCELERATION_START.value: _generate_acceleration_start,
    Cue.ACCELERATION_END.value: _generate_acceleration_end,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Audio cue sink for the timer engine.

    Usage::

        sounds = SoundManager(parent=self)
        engine = TimerEngine(self, cue_sink=sounds.play)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._muted = False
        self._volume = 0.8  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        try:
            self._ensure_wav_files()
        except OSError:
            logger.exception("Could not write cue sounds to %s", self._sounds_dir)
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def play(self, cue: Cue | str) -> None:
        """Play a cue.  No-op when muted or the cue has no sound."""
        if self._muted:
            return
        name = cue.value if isinstance(cue, Cue) else cue
        effect = self._effects.get(name)
        if effect is None:
            return
        try:
            effect.play()
        except Exception:
            logger.exception("Failed to play cue %s", name)

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    def mute(self) -> None:
        self._muted = True

    def unmute(self) -> None:
        self._muted = False

    def toggle_mute(self) -> bool:
        """Flip the mute flag and return the new value."""
        self._muted = not self._muted
        return self._muted

    @property
    def is_muted(self) -> bool:
        return self._muted

    @property
    def loaded_cues(self) -> tuple[str, ...]:
        return tuple(self._effects)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, generate in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate())

    def _load_effects(self) -> None:
        for name in CUE_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.warning("Missing cue sound %s", path)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
