"""Shared test helpers for JudoTimer."""

from __future__ import annotations

from judotimer.timer.reducer import SoundKind


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualScheduler:
    """Virtual-clock stand-in for ``QtScheduler``.

    Nothing fires until ``advance`` moves the clock.  Due callbacks run
    in time order; ties run in the order they were scheduled.
    """

    def __init__(self):
        self.now = 0.0
        self._entries: dict = {}  # key -> [due, period | None, seq, callback]
        self._seq = 0
        self.cancelled: list = []

    def schedule_once(self, key, delay, callback):
        self._add(key, delay, None, callback)

    def start_periodic(self, key, period, callback):
        self._add(key, period, period, callback)

    def cancel(self, key):
        self.cancelled.append(key)
        self._entries.pop(key, None)

    def cancel_all(self):
        for key in list(self._entries):
            self.cancel(key)

    def is_active(self, key) -> bool:
        return key in self._entries

    def due_in(self, key):
        entry = self._entries.get(key)
        return None if entry is None else entry[0] - self.now

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [
                (entry[0], entry[2], key)
                for key, entry in self._entries.items()
                if entry[0] <= target
            ]
            if not due:
                break
            when, _seq, key = min(due)
            entry = self._entries[key]
            self.now = when
            if entry[1] is None:
                del self._entries[key]
            else:
                entry[0] = when + entry[1]
            entry[3]()
        self.now = target

    def _add(self, key, delay, period, callback):
        self._seq += 1
        self._entries[key] = [self.now + delay, period, self._seq, callback]


class RecordingSoundSignal:
    """SoundSignal double that records every call (and when, if clocked)."""

    def __init__(self, clock: ManualScheduler | None = None):
        self.calls: list[tuple[SoundKind, float | None]] = []
        self._clock = clock

    def play_tick(self):
        self._record(SoundKind.COUNTDOWN)

    def play_start(self):
        self._record(SoundKind.START)

    @property
    def kinds(self) -> list[SoundKind]:
        return [kind for kind, _ in self.calls]

    def count(self, kind: SoundKind) -> int:
        return self.kinds.count(kind)

    def times(self, kind: SoundKind) -> list[float | None]:
        return [when for k, when in self.calls if k == kind]

    def _record(self, kind: SoundKind):
        self.calls.append((kind, self._clock.now if self._clock else None))


class ExplodingSoundSignal:
    """SoundSignal double whose every call raises."""

    def __init__(self):
        self.attempts = 0

    def play_tick(self):
        self.attempts += 1
        raise RuntimeError("audio device gone")

    def play_start(self):
        self.attempts += 1
        raise RuntimeError("audio device gone")
