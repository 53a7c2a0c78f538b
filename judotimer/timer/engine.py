"""Runtime around the timer transition function.

``TimerEngine`` owns the one ``TimerState`` of the session.  Every user
control and every scheduler callback goes through ``send``, which runs
the pure ``apply`` and then carries out the returned effects:

ScheduleDelayed / StartTickLoop   → scheduler
CancelScheduled                   → scheduler.cancel (no-op if unknown)
PlaySound                         → SoundSignal, errors swallowed

Actions sent while another one is being processed (from a scheduler
callback, a sound callback or a slot connected to ``state_changed``)
are queued and handled afterwards, in order.
"""

from __future__ import annotations

import logging
from collections import deque

from PyQt6.QtCore import QObject, pyqtSignal

from .reducer import (
    Action,
    CancelScheduled,
    Effect,
    FastForward,
    Pause,
    PhaseKind,
    PlaySound,
    Reset,
    Resume,
    RunStatus,
    ScheduleDelayed,
    SelectPhase,
    SELECTABLE_STATUSES,
    SoundKind,
    Start,
    StartTickLoop,
    TimerState,
    apply,
)
from .scheduler import QtScheduler


logger = logging.getLogger(__name__)


class TimerEngine(QObject):
    """Interval timer driving Randori/Rest rounds.

    Signals
    -------
    state_changed(state: TimerState)
        Emitted after every action that changed the state.
    warning_changed(show: bool)
        Emitted when the last-three-seconds indicator toggles.
    sound_requested(kind: SoundKind)
        Emitted for every sound the engine asks for, whether or not
        playback succeeded.
    """

    state_changed = pyqtSignal(object)
    warning_changed = pyqtSignal(bool)
    sound_requested = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds=None,
        scheduler=None,
        initial_state: TimerState | None = None,
    ) -> None:
        super().__init__(parent)
        self._state: TimerState = initial_state or TimerState()
        self._sounds = sounds
        self._scheduler = scheduler if scheduler is not None else QtScheduler(self)
        self._queue: deque[Action] = deque()
        self._processing = False

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def phase(self) -> PhaseKind:
        return self._state.phase

    @property
    def remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._state.remaining

    @property
    def status(self) -> RunStatus:
        return self._state.status

    @property
    def show_warning(self) -> bool:
        return self._state.show_warning

    @property
    def can_select_phase(self) -> bool:
        return self._state.status in SELECTABLE_STATUSES

    @property
    def scheduler(self):
        return self._scheduler

    @property
    def sounds(self):
        return self._sounds

    @sounds.setter
    def sounds(self, value) -> None:
        self._sounds = value

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def select_phase(self, phase: PhaseKind) -> None:
        self.send(SelectPhase(phase))

    def start(self) -> None:
        self.send(Start())

    def pause(self) -> None:
        self.send(Pause())

    def resume(self) -> None:
        self.send(Resume())

    def reset(self) -> None:
        self.send(Reset())

    def fast_forward(self) -> None:
        self.send(FastForward())

    def toggle(self) -> None:
        """Play/pause button: pause, resume or start depending on status.

        Ignored while preparing.
        """
        status = self._state.status
        if status == RunStatus.RUNNING:
            self.pause()
        elif status == RunStatus.PAUSED:
            self.resume()
        elif status != RunStatus.PREPARING:
            self.start()

    def send(self, action: Action) -> None:
        """Queue *action* and process the queue unless already doing so."""
        self._queue.append(action)
        if self._processing:
            return
        self._processing = True
        try:
            while self._queue:
                self._process(self._queue.popleft())
        finally:
            self._processing = False

    def shutdown(self) -> None:
        """Stop every pending schedule (used when the window closes)."""
        self._queue.clear()
        self._scheduler.cancel_all()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _process(self, action: Action) -> None:
        old = self._state
        new, effects = apply(action, old)
        self._state = new
        if new != old:
            logger.debug(
                "%s: %s/%s/%s -> %s/%s/%s",
                type(action).__name__,
                old.phase.value, old.status.value, old.remaining,
                new.phase.value, new.status.value, new.remaining,
            )

        for effect in effects:
            self._run_effect(effect)

        if new != old:
            self.state_changed.emit(new)
        if new.show_warning != old.show_warning:
            self.warning_changed.emit(new.show_warning)

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, CancelScheduled):
            self._scheduler.cancel(effect.id)
        elif isinstance(effect, ScheduleDelayed):
            action = effect.action
            self._scheduler.schedule_once(
                effect.id, effect.delay, lambda: self.send(action),
            )
        elif isinstance(effect, StartTickLoop):
            action = effect.action
            self._scheduler.start_periodic(
                effect.id, effect.period, lambda: self.send(action),
            )
        elif isinstance(effect, PlaySound):
            self._play(effect.kind)

    def _play(self, kind: SoundKind) -> None:
        self.sound_requested.emit(kind)
        if self._sounds is None:
            return
        try:
            if kind == SoundKind.COUNTDOWN:
                self._sounds.play_tick()
            else:
                self._sounds.play_start()
        except Exception:
            logger.warning("sound playback failed (%s)", kind.value, exc_info=True)
