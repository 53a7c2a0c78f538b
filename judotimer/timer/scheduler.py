"""QTimer-backed scheduler for the timer's delayed and repeating actions.

Every schedule lives under a key.  Scheduling under a key that is
already in use replaces the old timer, and cancelling an unknown key
does nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable

from PyQt6.QtCore import QObject, QTimer


logger = logging.getLogger(__name__)


class QtScheduler(QObject):
    """One-shot and periodic callbacks on the Qt event loop.

    ``ms_per_second`` scales every delay; the app uses the real 1000,
    tests can shrink it to keep wall-clock waits short.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        ms_per_second: int = 1000,
    ) -> None:
        super().__init__(parent)
        self._ms_per_second = ms_per_second
        self._timers: dict[Hashable, QTimer] = {}

    # ── public API ────────────────────────────────────────────────────

    def schedule_once(
        self, key: Hashable, delay: float, callback: Callable[[], None],
    ) -> None:
        """Call *callback* once after *delay* seconds."""
        timer = self._make_timer(key, delay)
        timer.setSingleShot(True)

        def _fire() -> None:
            # Drop the entry first so the callback may reuse the key.
            if self._timers.get(key) is timer:
                del self._timers[key]
                timer.deleteLater()
            callback()

        timer.timeout.connect(_fire)
        timer.start()

    def start_periodic(
        self, key: Hashable, period: float, callback: Callable[[], None],
    ) -> None:
        """Call *callback* every *period* seconds until cancelled."""
        timer = self._make_timer(key, period)
        timer.timeout.connect(callback)
        timer.start()

    def cancel(self, key: Hashable) -> None:
        timer = self._timers.pop(key, None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()
        logger.debug("cancelled %s", key)

    def cancel_all(self) -> None:
        for key in list(self._timers):
            self.cancel(key)

    def is_active(self, key: Hashable) -> bool:
        return key in self._timers

    # ── internal ──────────────────────────────────────────────────────

    def _make_timer(self, key: Hashable, seconds: float) -> QTimer:
        self.cancel(key)
        timer = QTimer(self)
        timer.setInterval(int(seconds * self._ms_per_second))
        self._timers[key] = timer
        logger.debug("scheduled %s every/after %ss", key, seconds)
        return timer
