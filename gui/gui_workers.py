"""
gui_workers.py - GUI Worker Threads

Runs archive export in the background to avoid blocking the UI
"""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QThread, Signal, QObject

from core import ExportPlan, export_archive


class ExportWorker(QThread):
    """Archive export worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # ExportResult
    error = Signal(str)                 # Error message

    def __init__(
        self,
        plan: ExportPlan,
        destination: Path,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.plan = plan
        self.destination = destination

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = export_archive(
                self.plan,
                self.destination,
                progress_callback=progress_callback,
            )

            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))
