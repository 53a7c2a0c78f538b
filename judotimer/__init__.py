"""JudoTimer: randori interval timer with audio cues."""

__version__ = "0.1.0"
