'''
    File Name: main.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import sys
import logging

from PyQt6 import QtWidgets

from config import APP_NAME, APP_VERSION, LOGGING_CONFIG, ensure_data_dir
from ui.main_window import MainWindow

logging.basicConfig(**LOGGING_CONFIG)
logger = logging.getLogger(__name__)


def main() -> int:
    # Ensure runtime dirs exist early
    try:
        ensure_data_dir()
    except Exception:
        logger.exception("Failed to ensure data directory exists")

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    # Friendly global exception hook that logs and shows a dialog
    def _excepthook(exc_type, exc_value, exc_tb):
        logger.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))
        try:
            QtWidgets.QMessageBox.critical(None, "Unhandled Exception", str(exc_value))
        except Exception:
            logger.debug("Could not show the unhandled exception dialog")

    sys.excepthook = _excepthook

    window = MainWindow()
    # Show window (MainWindow restores geometry / default size)
    window.show()

    logger.info("%s %s started", APP_NAME, APP_VERSION)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
