"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/JudoTimer/settings.json

Phase durations are fixed (Randori 3:30, Rest 1:30) and are
not part of the settings.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "JudoTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 100                # 0-100

    # ── display ───────────────────────────────────────────────────────
    keep_screen_awake: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 640
    always_on_top: bool = False

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "WARNING"


def _value_fits(default, value) -> bool:
    # bool is an int subclass, so compare exact types.
    if default is None:
        return value is None or type(value) is int
    return type(value) is type(default)


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are ignored.  A value whose type doesn't match the
    field's default is dropped and the default kept.
    """
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            defaults = asdict(Settings())
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {}
            for k, v in data.items():
                if k not in valid_keys:
                    continue
                if not _value_fits(defaults[k], v):
                    logger.warning("ignoring setting %s=%r (wrong type)", k, v)
                    continue
                filtered[k] = v
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.debug("ignoring unreadable settings at %s", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
