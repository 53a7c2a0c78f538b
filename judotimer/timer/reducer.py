"""Timer transition function for JudoTimer.

States
------
IDLE          Not running, waiting for the user to start.
PREPARING     One-second pre-roll after the start tone.
RUNNING       Counting down, tick loop active.
PAUSED        Countdown frozen, tick loop cancelled.
FINISHED      Reserved; nothing transitions here yet.

Transitions
-----------
Any → PREPARING                          (start)
PREPARING → RUNNING                      (preparation complete, +1 s)
RUNNING → PAUSED                         (pause)
PAUSED → RUNNING                         (resume)
RUNNING @ 0 → PREPARING (other phase)    (phase elapsed, +1 s gap)
Any → IDLE                               (reset / fast forward)

``apply`` never sleeps and never touches a clock.  Everything that
happens later is described by the effects it returns; the runtime in
``engine.py`` hands those to a scheduler.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


# ── enums ─────────────────────────────────────────────────────────────────


class PhaseKind(Enum):
    WORK = "work"
    REST = "rest"

    @property
    def duration(self) -> int:
        """Full length of the phase in seconds."""
        return PHASE_DURATIONS[self]

    @property
    def label(self) -> str:
        return PHASE_LABELS[self]

    @property
    def other(self) -> PhaseKind:
        return PhaseKind.REST if self is PhaseKind.WORK else PhaseKind.WORK


class RunStatus(Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class ScheduleId(Enum):
    TICK_LOOP = "tick_loop"
    PREPARATION_DELAY = "preparation_delay"


class SoundKind(Enum):
    COUNTDOWN = "countdown"
    START = "start"


# ── constants ─────────────────────────────────────────────────────────────

PHASE_DURATIONS: dict[PhaseKind, int] = {
    PhaseKind.WORK: 3 * 60 + 30,
    PhaseKind.REST: 90,
}

PHASE_LABELS: dict[PhaseKind, str] = {
    PhaseKind.WORK: "Randori",
    PhaseKind.REST: "Rest",
}

PREPARATION_SECONDS = 1
PHASE_GAP_SECONDS = 1
TICK_PERIOD_SECONDS = 1
COUNTDOWN_SECONDS = 3  # countdown tone at 3, 2, 1

SELECTABLE_STATUSES = frozenset(
    {RunStatus.IDLE, RunStatus.FINISHED, RunStatus.PREPARING}
)


# ── state ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerState:
    phase: PhaseKind = PhaseKind.WORK
    remaining: int = PHASE_DURATIONS[PhaseKind.WORK]
    status: RunStatus = RunStatus.IDLE

    @property
    def show_warning(self) -> bool:
        """True during the last three seconds of a running phase."""
        return show_warning(self)


def show_warning(state: TimerState) -> bool:
    return (
        state.status == RunStatus.RUNNING
        and 0 < state.remaining <= COUNTDOWN_SECONDS
    )


# ── actions ───────────────────────────────────────────────────────────────


class Action:
    """Base class for everything ``apply`` understands."""


@dataclass(frozen=True)
class SelectPhase(Action):
    phase: PhaseKind


@dataclass(frozen=True)
class Start(Action):
    pass


@dataclass(frozen=True)
class PreparationComplete(Action):
    pass


@dataclass(frozen=True)
class Pause(Action):
    pass


@dataclass(frozen=True)
class Resume(Action):
    pass


@dataclass(frozen=True)
class Reset(Action):
    pass


@dataclass(frozen=True)
class FastForward(Action):
    pass


@dataclass(frozen=True)
class Tick(Action):
    pass


@dataclass(frozen=True)
class PhaseElapsed(Action):
    pass


# ── effects ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ScheduleDelayed:
    id: ScheduleId
    action: Action
    delay: int = PREPARATION_SECONDS


@dataclass(frozen=True)
class CancelScheduled:
    id: ScheduleId


@dataclass(frozen=True)
class StartTickLoop:
    id: ScheduleId
    action: Action
    period: int = TICK_PERIOD_SECONDS


@dataclass(frozen=True)
class PlaySound:
    kind: SoundKind


Effect = ScheduleDelayed | CancelScheduled | StartTickLoop | PlaySound


# ── transition function ───────────────────────────────────────────────────


def apply(action: Action, state: TimerState) -> tuple[TimerState, list[Effect]]:
    """Return the state after *action* and the effects it asks for.

    Actions that make no sense in the current state come back as the
    unchanged state with no effects.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state, []
    return handler(action, state)


def _select_phase(action: SelectPhase, state: TimerState):
    if state.status not in SELECTABLE_STATUSES:
        return state, []
    new_state = replace(
        state, phase=action.phase, remaining=action.phase.duration,
    )
    if state.status == RunStatus.PREPARING:
        return (
            replace(new_state, status=RunStatus.IDLE),
            [CancelScheduled(ScheduleId.PREPARATION_DELAY)],
        )
    return new_state, []


def _start(action: Start, state: TimerState):
    return replace(state, status=RunStatus.PREPARING), [
        PlaySound(SoundKind.START),
        CancelScheduled(ScheduleId.TICK_LOOP),
        *_schedule(ScheduleId.PREPARATION_DELAY, PreparationComplete()),
    ]


def _preparation_complete(action: PreparationComplete, state: TimerState):
    return replace(state, status=RunStatus.RUNNING), _tick_loop()


def _pause(action: Pause, state: TimerState):
    return replace(state, status=RunStatus.PAUSED), [
        CancelScheduled(ScheduleId.TICK_LOOP),
    ]


def _resume(action: Resume, state: TimerState):
    return replace(state, status=RunStatus.RUNNING), _tick_loop()


def _reset(action: Reset, state: TimerState):
    new_state = replace(
        state, status=RunStatus.IDLE, remaining=state.phase.duration,
    )
    return new_state, _cancel_all()


def _fast_forward(action: FastForward, state: TimerState):
    nxt = state.phase.other
    new_state = TimerState(
        phase=nxt, remaining=nxt.duration, status=RunStatus.IDLE,
    )
    if state.status in (
        RunStatus.RUNNING, RunStatus.PAUSED, RunStatus.PREPARING,
    ):
        return new_state, _cancel_all()
    return new_state, []


def _tick(action: Tick, state: TimerState):
    if state.status != RunStatus.RUNNING:
        return state, []

    if state.remaining <= 0:
        # Should not happen: the phase flips the moment remaining hits 0.
        return _flip_after_zero(state, [])

    effects: list[Effect] = []
    if state.remaining <= COUNTDOWN_SECONDS:
        effects.append(PlaySound(SoundKind.COUNTDOWN))

    remaining = state.remaining - 1
    if remaining == 0:
        return _flip_after_zero(state, effects)
    return replace(state, remaining=remaining), effects


def _phase_elapsed(action: PhaseElapsed, state: TimerState):
    return replace(state, status=RunStatus.PREPARING), [
        PlaySound(SoundKind.START),
        CancelScheduled(ScheduleId.TICK_LOOP),
        *_schedule(ScheduleId.PREPARATION_DELAY, PreparationComplete()),
    ]


# ── helpers ───────────────────────────────────────────────────────────────


def _flip_after_zero(state: TimerState, effects: list[Effect]):
    nxt = state.phase.other
    new_state = replace(state, phase=nxt, remaining=nxt.duration)
    effects.append(CancelScheduled(ScheduleId.TICK_LOOP))
    effects.extend(
        _schedule(
            ScheduleId.PREPARATION_DELAY, PhaseElapsed(), PHASE_GAP_SECONDS,
        )
    )
    return new_state, effects


def _schedule(
    schedule_id: ScheduleId, action: Action, delay: int = PREPARATION_SECONDS,
) -> list[Effect]:
    return [
        CancelScheduled(schedule_id),
        ScheduleDelayed(schedule_id, action, delay),
    ]


def _tick_loop() -> list[Effect]:
    return [
        CancelScheduled(ScheduleId.TICK_LOOP),
        StartTickLoop(ScheduleId.TICK_LOOP, Tick()),
    ]


def _cancel_all() -> list[Effect]:
    return [
        CancelScheduled(ScheduleId.TICK_LOOP),
        CancelScheduled(ScheduleId.PREPARATION_DELAY),
    ]


_HANDLERS = {
    SelectPhase: _select_phase,
    Start: _start,
    PreparationComplete: _preparation_complete,
    Pause: _pause,
    Resume: _resume,
    Reset: _reset,
    FastForward: _fast_forward,
    Tick: _tick,
    PhaseElapsed: _phase_elapsed,
}
