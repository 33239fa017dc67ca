"""Application entry point and setup for the Taja boss typing game."""

import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from taja.core.script import Script, ScriptRepository, load_script_file
from taja.core.session import TypingSession
from taja.ui.main_window import MainWindow

SCRIPT_ENV = "TAJA_SCRIPT"
LOG_LEVEL_ENV = "TAJA_LOG_LEVEL"


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def load_script() -> Script:
    """Return the script named by ``TAJA_SCRIPT``, or the bundled default."""
    override = os.environ.get(SCRIPT_ENV)
    if override:
        return load_script_file(Path(override).expanduser())
    return ScriptRepository().default()


def run() -> None:
    """Load the script, build the session, and start the main window."""
    configure_logging()
    try:
        script = load_script()
    except (FileNotFoundError, ValueError):
        logging.exception("Could not load the typing script")
        sys.exit(1)

    logging.info("Loaded script %r (%d characters)", script.title, script.char_count)

    app = QApplication(sys.argv)
    app.setApplicationName("Taja")
    app.setApplicationDisplayName("Taja")

    window = MainWindow(script=script, session=TypingSession(script.lines))
    window.show()

    status = app.exec()
    logging.info("게임을 종료합니다.")
    sys.exit(status)


if __name__ == "__main__":
    run()
