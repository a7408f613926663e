"""
gui_entry.py - GUI Entry

Launch PySide6 GUI application
"""

import locale
import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from .gui_mainwindow import MainWindow


def main():
    """GUI main entry"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s.%(msecs)03d %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Title sorting follows the user's collation rules
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logging.warning(f"Cannot use system collation, falling back to default: {e}")

    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Research File Renamer")
    app.setApplicationVersion("1.0.0")

    # Set style
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
