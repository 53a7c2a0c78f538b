"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES, synthesize_beep

__all__ = ["SoundManager", "SOUND_NAMES", "synthesize_beep"]
