"""
gui_mainwindow.py - GUI Main Window

Contains:
1. Numbering rule settings (left)
2. File table with preview names, date editors and sort toggle (right)
"""

from pathlib import Path
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QComboBox, QSpinBox, QRadioButton,
    QButtonGroup, QTableWidget, QTableWidgetItem, QProgressBar, QDateEdit,
    QFileDialog, QMessageBox, QHeaderView, QGroupBox
)
from PySide6.QtCore import Slot, Signal, QDate
from PySide6.QtGui import QColor, QFont

from core import (
    FileCollection, RenameRule, RenameMode, NumberFormat, SortOrder,
    ExportResult, collect_paths, ingest_paths, plan_export, check_export,
    default_archive_name, next_sort_order, format_number, SUPPORTED_SUFFIXES
)
from .gui_workers import ExportWorker


SORT_LABELS = {
    SortOrder.NEWEST: "Date (newest first)",
    SortOrder.OLDEST: "Date (oldest first)",
    SortOrder.NAME: "Name",
    SortOrder.NUMBER: "Original number",
}

FORMAT_LABELS = [
    (NumberFormat.BRACKETS, "[01] Brackets"),
    (NumberFormat.DOT, "01. Dot"),
    (NumberFormat.UNDERSCORE, "01_ Underscore"),
    (NumberFormat.HYPHEN, "01- Hyphen"),
    (NumberFormat.CUSTOM, "Custom prefix"),
]


class SettingsPanel(QGroupBox):
    """Numbering rule settings"""

    rule_changed = Signal(object)       # RenameRule

    def __init__(self, rule: RenameRule, parent=None):
        super().__init__("Numbering Rule", parent)
        self._init_ui(rule)

    def _init_ui(self, rule: RenameRule):
        layout = QGridLayout(self)

        # Mode selection
        self.sequential_radio = QRadioButton("Renumber by order")
        self.offset_radio = QRadioButton("Shift existing numbers")
        self.mode_group = QButtonGroup(self)
        self.mode_group.addButton(self.sequential_radio)
        self.mode_group.addButton(self.offset_radio)
        self.sequential_radio.setChecked(rule.mode == RenameMode.SEQUENTIAL)
        self.offset_radio.setChecked(rule.mode == RenameMode.OFFSET)
        layout.addWidget(self.sequential_radio, 0, 0, 1, 2)
        layout.addWidget(self.offset_radio, 1, 0, 1, 2)

        # Start number / offset
        self.start_label = QLabel("Start From:")
        layout.addWidget(self.start_label, 2, 0)
        self.start_spin = QSpinBox()
        self.start_spin.setRange(0, 99999)
        self.start_spin.setValue(rule.start_number)
        layout.addWidget(self.start_spin, 2, 1)

        self.offset_label = QLabel("Offset:")
        layout.addWidget(self.offset_label, 3, 0)
        self.offset_spin = QSpinBox()
        self.offset_spin.setRange(-99999, 99999)
        self.offset_spin.setValue(rule.offset_value)
        layout.addWidget(self.offset_spin, 3, 1)

        # Number format
        layout.addWidget(QLabel("Number Style:"), 4, 0)
        self.format_combo = QComboBox()
        for fmt, label in FORMAT_LABELS:
            self.format_combo.addItem(label, fmt)
        self.format_combo.setCurrentIndex([f for f, _ in FORMAT_LABELS].index(rule.number_format))
        layout.addWidget(self.format_combo, 4, 1)

        self.prefix_label = QLabel("Prefix:")
        layout.addWidget(self.prefix_label, 5, 0)
        self.prefix_edit = QLineEdit(rule.custom_prefix)
        self.prefix_edit.setPlaceholderText("e.g. P-")
        layout.addWidget(self.prefix_edit, 5, 1)

        layout.addWidget(QLabel("Separator:"), 6, 0)
        self.separator_edit = QLineEdit(rule.separator)
        self.separator_edit.setFont(QFont("monospace"))
        layout.addWidget(self.separator_edit, 6, 1)

        layout.addWidget(QLabel("Min Digits:"), 7, 0)
        digits_layout = QHBoxLayout()
        self.digits_spin = QSpinBox()
        self.digits_spin.setRange(1, 5)
        self.digits_spin.setValue(rule.min_digits)
        digits_layout.addWidget(self.digits_spin)
        self.digits_sample = QLabel()
        digits_layout.addWidget(self.digits_sample)
        layout.addLayout(digits_layout, 7, 1)

        layout.setRowStretch(8, 1)

        self.sequential_radio.toggled.connect(self._emit_rule)
        self.start_spin.valueChanged.connect(self._emit_rule)
        self.offset_spin.valueChanged.connect(self._emit_rule)
        self.format_combo.currentIndexChanged.connect(self._emit_rule)
        self.prefix_edit.textChanged.connect(self._emit_rule)
        self.separator_edit.textChanged.connect(self._emit_rule)
        self.digits_spin.valueChanged.connect(self._emit_rule)

        self._update_visibility()

    def current_rule(self) -> RenameRule:
        """Rule built from the widgets"""
        return RenameRule(
            mode=RenameMode.SEQUENTIAL if self.sequential_radio.isChecked() else RenameMode.OFFSET,
            start_number=self.start_spin.value(),
            offset_value=self.offset_spin.value(),
            number_format=self.format_combo.currentData(),
            custom_prefix=self.prefix_edit.text(),
            separator=self.separator_edit.text(),
            min_digits=self.digits_spin.value(),
        )

    def _update_visibility(self):
        """Show only the inputs used by the current mode and style"""
        sequential = self.sequential_radio.isChecked()
        self.start_label.setVisible(sequential)
        self.start_spin.setVisible(sequential)
        self.offset_label.setVisible(not sequential)
        self.offset_spin.setVisible(not sequential)

        custom = self.format_combo.currentData() == NumberFormat.CUSTOM
        self.prefix_label.setVisible(custom)
        self.prefix_edit.setVisible(custom)

        self.digits_sample.setText(format_number(1, self.digits_spin.value()))

    def _emit_rule(self, *_):
        self._update_visibility()
        self.rule_changed.emit(self.current_rule())


class FileTablePanel(QWidget):
    """File list with preview names"""

    sort_toggled = Signal()
    date_changed = Signal(str, str)     # record id, ISO date
    remove_requested = Signal(str)      # record id

    def __init__(self, parent=None):
        super().__init__(parent)
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        header_layout = QHBoxLayout()
        self.count_label = QLabel("Files (0)")
        header_layout.addWidget(self.count_label)
        header_layout.addStretch()
        self.sort_btn = QPushButton()
        self.sort_btn.clicked.connect(self.sort_toggled)
        header_layout.addWidget(self.sort_btn)
        layout.addLayout(header_layout)

        self.table = QTableWidget()
        self.table.setColumnCount(4)
        self.table.setHorizontalHeaderLabels(["Date", "Original Name", "New Name", ""])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(3, QHeaderView.ResizeMode.ResizeToContents)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        self.tip_label = QLabel("")
        self.tip_label.setStyleSheet("color: gray;")
        layout.addWidget(self.tip_label)

    def show_sequence(self, collection: FileCollection):
        """Rebuild the table from the display sequence"""
        entries = collection.display_sequence()
        sequential = collection.rule.mode == RenameMode.SEQUENTIAL

        self.count_label.setText(f"Files ({len(entries)})")
        self.sort_btn.setText(f"Sort: {SORT_LABELS[collection.sort_order]}")
        self.table.setHorizontalHeaderItem(0, QTableWidgetItem("Date" if sequential else "Number"))
        if sequential:
            self.tip_label.setText("Tip: edit a date to change the order, or shift existing numbers to keep their gaps")
        else:
            self.tip_label.setText("Tip: the number at the start of each filename is used as its original number")

        self.table.setRowCount(len(entries))
        for i, entry in enumerate(entries):
            record = entry.record

            if sequential:
                self.table.setCellWidget(i, 0, self._make_date_edit(record.id, record.publication_date,
                                                                    record.date_manually_set))
            else:
                self.table.removeCellWidget(i, 0)
                text = str(record.original_ordinal) if record.original_ordinal is not None else "-"
                self.table.setItem(i, 0, QTableWidgetItem(text))

            original_item = QTableWidgetItem(record.original_name)
            original_item.setToolTip(record.original_name)
            original_item.setForeground(QColor(120, 120, 120))
            self.table.setItem(i, 1, original_item)

            new_item = QTableWidgetItem(entry.new_name)
            new_item.setToolTip(entry.new_name)
            self.table.setItem(i, 2, new_item)

            remove_btn = QPushButton("Remove")
            remove_btn.clicked.connect(lambda _=False, rid=record.id: self.remove_requested.emit(rid))
            self.table.setCellWidget(i, 3, remove_btn)

    def _make_date_edit(self, record_id: str, iso_date: str, manual: bool) -> QDateEdit:
        """Date editor for one row"""
        date_edit = QDateEdit()
        date_edit.setCalendarPopup(True)
        date_edit.setDisplayFormat("yyyy-MM-dd")
        value = QDate.fromString(iso_date, "yyyy-MM-dd")
        if not value.isValid():
            # e.g. 2023-02-31 taken from a filename
            value = QDate(int(iso_date[:4]), 1, 1)
        date_edit.setDate(value)
        if manual:
            date_edit.setStyleSheet("QDateEdit { font-weight: bold; color: #1d4ed8; }")
        date_edit.editingFinished.connect(
            lambda rid=record_id, edit=date_edit: self.date_changed.emit(
                rid, edit.date().toString("yyyy-MM-dd"))
        )
        return date_edit


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self, collection: Optional[FileCollection] = None):
        super().__init__()
        self.collection = collection if collection is not None else FileCollection()
        self.export_worker: Optional[ExportWorker] = None

        self.setWindowTitle("Research File Renamer")
        self.setMinimumSize(1000, 600)

        self._init_ui()
        self._refresh()

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QHBoxLayout(central)

        # Left: settings
        self.settings = SettingsPanel(self.collection.rule)
        self.settings.setFixedWidth(300)
        self.settings.rule_changed.connect(self._on_rule_changed)
        layout.addWidget(self.settings)

        # Right: actions + table
        right = QVBoxLayout()

        actions = QHBoxLayout()
        self.add_btn = QPushButton("Add Files...")
        self.add_btn.clicked.connect(self._add_files)
        actions.addWidget(self.add_btn)
        self.add_dir_btn = QPushButton("Add Folder...")
        self.add_dir_btn.clicked.connect(self._add_folder)
        actions.addWidget(self.add_dir_btn)
        self.clear_btn = QPushButton("Clear")
        self.clear_btn.clicked.connect(self._clear)
        actions.addWidget(self.clear_btn)
        actions.addStretch()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        actions.addWidget(self.progress_bar, 1)

        self.export_btn = QPushButton("Export Renamed Files (ZIP)")
        self.export_btn.clicked.connect(self._do_export)
        self.export_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        actions.addWidget(self.export_btn)
        right.addLayout(actions)

        self.file_table = FileTablePanel()
        self.file_table.sort_toggled.connect(self._toggle_sort)
        self.file_table.date_changed.connect(self._on_date_changed)
        self.file_table.remove_requested.connect(self._on_remove)
        right.addWidget(self.file_table, 1)

        layout.addLayout(right, 1)

        self.statusBar().showMessage("Ready")

    def _refresh(self):
        """Recompute the display sequence and redraw"""
        self.file_table.show_sequence(self.collection)
        has_files = len(self.collection) > 0
        self.export_btn.setEnabled(has_files and self.export_worker is None)
        self.clear_btn.setEnabled(has_files)
        mode = "Sequential" if self.collection.rule.mode == RenameMode.SEQUENTIAL else "Offset Shift"
        self.statusBar().showMessage(f"Mode: {mode}   Files: {len(self.collection)}")

    def _ingest(self, paths: List[str]):
        try:
            files = collect_paths(Path(p) for p in paths)
        except ValueError as e:
            QMessageBox.warning(self, "Warning", str(e))
            return
        ingest_paths(self.collection, files)
        self._refresh()

    def _add_files(self):
        """Browse and select files"""
        patterns = " ".join(f"*{s}" for s in SUPPORTED_SUFFIXES)
        paths, _ = QFileDialog.getOpenFileNames(
            self, "Select Files", "", f"Documents ({patterns});;All Files (*)"
        )
        if paths:
            self._ingest(paths)

    def _add_folder(self):
        """Browse and select directory"""
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory:
            self._ingest([directory])

    def _clear(self):
        reply = QMessageBox.question(
            self, "Confirm", "Are you sure you want to clear all files?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.collection.clear()
            self._refresh()

    @Slot(object)
    def _on_rule_changed(self, rule: RenameRule):
        try:
            self.collection.set_rule(rule)
        except ValueError as e:
            self.statusBar().showMessage(str(e))
            return
        self._refresh()

    @Slot()
    def _toggle_sort(self):
        self.collection.set_sort_order(next_sort_order(self.collection.sort_order))
        self._refresh()

    @Slot(str, str)
    def _on_date_changed(self, record_id: str, iso_date: str):
        record = self.collection.get(record_id)
        if record is None or record.publication_date == iso_date:
            return
        self.collection.set_date(record_id, iso_date)
        self._refresh()

    @Slot(str)
    def _on_remove(self, record_id: str):
        self.collection.remove(record_id)
        self._refresh()

    def _do_export(self):
        """Export archive"""
        if not len(self.collection):
            return

        path, _ = QFileDialog.getSaveFileName(
            self, "Save Archive", default_archive_name(), "ZIP Archive (*.zip)"
        )
        if not path:
            return
        destination = Path(path)

        plan = plan_export(self.collection.display_sequence())
        errors = check_export(plan, destination)
        if errors:
            QMessageBox.warning(self, "Warning", "\n".join(errors))
            return

        if plan.conflict_count or plan.warnings:
            msg = f"{plan.conflict_count} duplicate names will get a _1, _2... suffix."
            if plan.warnings:
                msg += "\n\n" + "\n".join(plan.warnings[:10])
            reply = QMessageBox.question(
                self, "Confirm", msg + "\n\nContinue?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
            )
            if reply != QMessageBox.StandardButton.Yes:
                return

        self.export_btn.setEnabled(False)
        self.export_btn.setText("Processing...")
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, plan.total_count)

        self.export_worker = ExportWorker(plan, destination)
        self.export_worker.progress.connect(self._on_export_progress)
        self.export_worker.finished.connect(self._on_export_finished)
        self.export_worker.error.connect(self._on_export_error)
        self.export_worker.start()

    @Slot(int, int, str)
    def _on_export_progress(self, current: int, total: int, msg: str):
        self.progress_bar.setValue(current)
        self.statusBar().showMessage(msg)

    def _export_done(self):
        self.export_worker = None
        self.export_btn.setText("Export Renamed Files (ZIP)")
        self.progress_bar.setVisible(False)
        self._refresh()

    @Slot(object)
    def _on_export_finished(self, result: ExportResult):
        self._export_done()
        QMessageBox.information(
            self, "Complete",
            f"Export complete!\n\nArchive: {result.archive_path}\nFiles: {result.written_count}"
        )

    @Slot(str)
    def _on_export_error(self, error: str):
        self._export_done()
        QMessageBox.critical(self, "Error", f"Export failed. Please try again.\n\n{error}")
