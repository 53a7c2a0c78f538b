"""Timer package."""

from .engine import TimerEngine
from .reducer import (
    PhaseKind,
    RunStatus,
    ScheduleId,
    SoundKind,
    TimerState,
    PHASE_DURATIONS,
    PHASE_LABELS,
    apply,
    show_warning,
)
from .scheduler import QtScheduler

__all__ = [
    "TimerEngine",
    "PhaseKind",
    "RunStatus",
    "ScheduleId",
    "SoundKind",
    "TimerState",
    "PHASE_DURATIONS",
    "PHASE_LABELS",
    "apply",
    "show_warning",
    "QtScheduler",
]
