"""Sound synthesis and playback using numpy + QSoundEffect.

Both cues are generated programmatically as WAV files and cached to
disk so subsequent app launches are instant.

Sound names
-----------
- ``tick``   countdown beep at 3, 2 and 1 seconds remaining (0.12 s)
- ``start``  longer beep when a phase is about to begin (0.5 s)

Both share one timbre: a 2800 Hz fundamental with 0.3× second and 0.15×
third harmonics under a sharp envelope (5 % attack, flat sustain, last
40 % linear decay).
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect
from PyQt6.QtWidgets import QApplication

from ..settings import APP_SUPPORT_DIR


logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = ("tick", "start")

# Bump when the synthesis changes so stale cached WAVs are not reused.
SOUND_CACHE_VERSION = 1

SAMPLE_RATE = 44100

BEEP_FREQUENCY = 2800.0
HARMONICS = ((1.0, 1.0), (2.0, 0.3), (3.0, 0.15))  # (multiple, weight)
BEEP_GAIN = 0.85
ATTACK_FRACTION = 0.05
DECAY_START = 0.6

TICK_DURATION = 0.12
START_DURATION = 0.5


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _beep_envelope(length: int) -> np.ndarray:
    """Sharp attack, strong sustain, quick linear decay."""
    progress = np.arange(length, dtype=np.float64) / max(length, 1)
    env = np.ones(length, dtype=np.float64)
    attack = progress < ATTACK_FRACTION
    env[attack] = progress[attack] / ATTACK_FRACTION
    decay = progress > DECAY_START
    env[decay] = (1.0 - progress[decay]) / (1.0 - DECAY_START)
    return env


def synthesize_beep(
    duration_s: float, frequency: float = BEEP_FREQUENCY,
) -> np.ndarray:
    """Harmonic-rich beep as float64 samples, not yet clipped."""
    n_samples = int(SAMPLE_RATE * duration_s)
    t = np.arange(n_samples, dtype=np.float64) / SAMPLE_RATE
    wave_ = np.zeros(n_samples, dtype=np.float64)
    for multiple, weight in HARMONICS:
        wave_ += weight * np.sin(2 * np.pi * frequency * multiple * t)
    return wave_ * _beep_envelope(n_samples) * BEEP_GAIN


def wav_filename(name: str) -> str:
    """Cache file name for a cue, e.g. ``tick-v1.wav``."""
    return f"{name}-v{SOUND_CACHE_VERSION}.wav"


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_tick() -> bytes:
    """Countdown beep: short and sharp."""
    return _to_wav_bytes(synthesize_beep(TICK_DURATION))


def _generate_start() -> bytes:
    """Start beep: same timbre as the countdown, held longer."""
    return _to_wav_bytes(synthesize_beep(START_DURATION))


_GENERATORS = {
    "tick": _generate_tick,
    "start": _generate_start,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Plays the two timer cues.  Never raises.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(100)
        mgr.play_start()

    When a cue can't be played from its WAV (file missing, backend
    error) the system beep is used instead.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 1.0  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        try:
            self._ensure_wav_files()
        except OSError:
            logger.warning(
                "could not write sounds to %s", self._sounds_dir, exc_info=True,
            )
        self._load_effects()

    # ── SoundSignal ───────────────────────────────────────────────────

    def play_tick(self) -> None:
        self.play("tick")

    def play_start(self) -> None:
        self.play("start")

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled or name not in _GENERATORS:
            return
        try:
            effect = self._effects.get(name)
            if effect is None or effect.status() == QSoundEffect.Status.Error:
                self._fallback_beep()
                return
            effect.play()
        except Exception:
            logger.warning("failed to play %r", name, exc_info=True)

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _fallback_beep(self) -> None:
        logger.debug("falling back to system beep")
        QApplication.beep()

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / wav_filename(name)
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / wav_filename(name)
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
