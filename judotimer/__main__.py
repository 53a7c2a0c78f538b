"""Allow running JudoTimer as a module: python -m judotimer."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .settings import load_settings
from .app import JudoTimerApp


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    settings = load_settings()
    configure_logging(os.environ.get("JUDOTIMER_LOG_LEVEL", settings.log_level))

    app = QApplication(sys.argv)
    app.setApplicationName("JudoTimer")
    app.setOrganizationName("JudoTimer")

    window = JudoTimerApp(settings=settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
