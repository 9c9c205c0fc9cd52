'''
    File Name: export_pdf_dialog.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from pathlib import Path
from typing import Optional, Tuple

from PyQt6 import QtWidgets, QtCore

from reports.pdf_report import default_report_name


class ExportPdfDialog(QtWidgets.QDialog):
    """Ask for the report period and the destination file.

    `get_export()` returns (start_date, end_date, path) once accepted.
    """

    def __init__(self, parent=None, default_dir: Optional[Path] = None):
        super().__init__(parent)
        self.setWindowTitle("Export PDF Report")
        self.resize(420, 160)
        self._default_dir = Path(default_dir) if default_dir else Path.home()
        self._path: Optional[Path] = None

        layout = QtWidgets.QVBoxLayout()
        form = QtWidgets.QFormLayout()

        today = QtCore.QDate.currentDate()
        self.start_date = QtWidgets.QDateEdit()
        self.start_date.setCalendarPopup(True)
        self.start_date.setDisplayFormat("yyyy-MM-dd")
        self.start_date.setDate(QtCore.QDate(today.year(), today.month(), 1))

        self.end_date = QtWidgets.QDateEdit()
        self.end_date.setCalendarPopup(True)
        self.end_date.setDisplayFormat("yyyy-MM-dd")
        self.end_date.setDate(today)

        form.addRow("Start date:", self.start_date)
        form.addRow("End date:", self.end_date)
        layout.addLayout(form)

        buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel
        )
        buttons.button(QtWidgets.QDialogButtonBox.StandardButton.Ok).setText("Export")
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

    def period(self) -> Tuple[str, str]:
        return (
            self.start_date.date().toString("yyyy-MM-dd"),
            self.end_date.date().toString("yyyy-MM-dd"),
        )

    def _ask_path(self, suggested: Path) -> Optional[Path]:
        file_path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self,
            "Save PDF Report",
            str(suggested),
            "PDF Files (*.pdf);;All Files (*)",
        )
        return Path(file_path) if file_path else None

    def _on_accept(self) -> None:
        start, end = self.period()
        if start > end:
            QtWidgets.QMessageBox.warning(self, "Validation", "The start date must not be after the end date.")
            return
        path = self._ask_path(self._default_dir / default_report_name(start, end))
        if path is None:
            return
        self._path = path
        self.accept()

    def get_export(self) -> Tuple[str, str, Optional[Path]]:
        start, end = self.period()
        return start, end, self._path
