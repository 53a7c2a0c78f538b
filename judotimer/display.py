"""Keep-the-screen-awake policy.

While the timer window is visible the display must not sleep or lock.
The policy holds a platform inhibitor process for as long as it is
engaged:

- macOS:  ``caffeinate -d``
- Linux:  ``systemd-inhibit --what=idle sleep infinity``

When neither tool is installed the policy still tracks whether it is
engaged but does nothing else.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtCore import QObject, QProcess, QStandardPaths


logger = logging.getLogger(__name__)


def _inhibitor_command() -> list[str] | None:
    if sys.platform == "darwin":
        program = QStandardPaths.findExecutable("caffeinate")
        return [program, "-d"] if program else None
    program = QStandardPaths.findExecutable("systemd-inhibit")
    if program:
        return [
            program, "--what=idle", "--who=JudoTimer",
            "--why=Interval timer running", "sleep", "infinity",
        ]
    return None


class DisplayPolicy(QObject):
    """Engage/release the idle inhibitor.

    ``engage`` is safe to call repeatedly (e.g. on every application
    activation); only one inhibitor process runs at a time.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        enabled: bool = True,
        command: list[str] | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = enabled
        self._command = command if command is not None else _inhibitor_command()
        self._engaged = False
        self._process: QProcess | None = None

    @property
    def engaged(self) -> bool:
        return self._engaged

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.release()

    def engage(self) -> None:
        if not self._enabled:
            return
        self._engaged = True
        if self._process is not None or not self._command:
            return
        process = QProcess(self)
        process.errorOccurred.connect(self._on_error)
        process.start(self._command[0], self._command[1:])
        self._process = process
        logger.debug("screen idle inhibited via %s", self._command[0])

    def release(self) -> None:
        self._engaged = False
        process, self._process = self._process, None
        if process is None:
            return
        process.kill()
        process.waitForFinished(500)
        process.deleteLater()
        logger.debug("screen idle inhibitor released")

    def _on_error(self, error: QProcess.ProcessError) -> None:
        logger.warning("idle inhibitor failed: %s", error)
