"""Audio cue sink."""

from .sounds import SoundManager, CUE_NAMES

__all__ = ["SoundManager", "CUE_NAMES"]
