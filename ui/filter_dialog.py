'''
    File Name: filter_dialog.py
    Version: 2.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from typing import Optional
from PyQt6 import QtWidgets, QtCore

from models.filter_options import FilterOptions
from models.transaction import TransactionType

_NO_LIMIT = -1.0


def _qdate(iso: str) -> QtCore.QDate:
    return QtCore.QDate.fromString(iso, "yyyy-MM-dd")


class FilterDialog(QtWidgets.QDialog):
    """Dialog to collect filter/search criteria for transactions.

    Every criterion is optional. `get_filters()` returns a `FilterOptions`
    where unchecked or blank inputs are None.
    """

    def __init__(self, parent=None, filters: Optional[FilterOptions] = None):
        super().__init__(parent)
        self.setWindowTitle("Filter / Search Transactions")
        self.resize(420, 300)

        layout = QtWidgets.QVBoxLayout()
        form = QtWidgets.QFormLayout()

        # Date bounds only apply when their checkbox is ticked
        self.use_start = QtWidgets.QCheckBox()
        self.start_date = QtWidgets.QDateEdit()
        self.start_date.setCalendarPopup(True)
        self.start_date.setDisplayFormat("yyyy-MM-dd")
        self.start_date.setDate(QtCore.QDate.currentDate().addMonths(-1))

        self.use_end = QtWidgets.QCheckBox()
        self.end_date = QtWidgets.QDateEdit()
        self.end_date.setCalendarPopup(True)
        self.end_date.setDisplayFormat("yyyy-MM-dd")
        self.end_date.setDate(QtCore.QDate.currentDate())

        self.name = QtWidgets.QLineEdit()
        self.category = QtWidgets.QLineEdit()

        self.min_amount = self._amount_box()
        self.max_amount = self._amount_box()

        self.type = QtWidgets.QComboBox()
        self.type.addItem("All", "")
        self.type.addItem("Income", TransactionType.INCOME.value)
        self.type.addItem("Expense", TransactionType.EXPENSE.value)

        form.addRow("From:", self._row(self.use_start, self.start_date))
        form.addRow("To:", self._row(self.use_end, self.end_date))
        form.addRow("Name:", self.name)
        form.addRow("Category:", self.category)
        form.addRow("Min amount:", self.min_amount)
        form.addRow("Max amount:", self.max_amount)
        form.addRow("Type:", self.type)

        layout.addLayout(form)

        buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok
            | QtWidgets.QDialogButtonBox.StandardButton.Cancel
            | QtWidgets.QDialogButtonBox.StandardButton.Reset
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        buttons.button(QtWidgets.QDialogButtonBox.StandardButton.Reset).clicked.connect(self.reset)
        layout.addWidget(buttons)

        self.setLayout(layout)

        if filters:
            self.set_filters(filters)

    @staticmethod
    def _amount_box() -> QtWidgets.QDoubleSpinBox:
        box = QtWidgets.QDoubleSpinBox()
        box.setDecimals(2)
        box.setRange(_NO_LIMIT, 1_000_000_000)
        box.setSpecialValueText("No limit")
        box.setValue(_NO_LIMIT)
        return box

    @staticmethod
    def _row(check: QtWidgets.QCheckBox, editor: QtWidgets.QWidget) -> QtWidgets.QWidget:
        w = QtWidgets.QWidget()
        h = QtWidgets.QHBoxLayout(w)
        h.setContentsMargins(0, 0, 0, 0)
        h.addWidget(check)
        h.addWidget(editor, 1)
        editor.setEnabled(False)
        check.toggled.connect(editor.setEnabled)
        return w

    def reset(self) -> None:
        self.set_filters(FilterOptions())

    def set_filters(self, filters: FilterOptions) -> None:
        self.use_start.setChecked(bool(filters.start_date))
        if filters.start_date:
            self.start_date.setDate(_qdate(filters.start_date))
        self.use_end.setChecked(bool(filters.end_date))
        if filters.end_date:
            self.end_date.setDate(_qdate(filters.end_date))
        self.name.setText(filters.name or "")
        self.category.setText(filters.category or "")
        self.min_amount.setValue(_NO_LIMIT if filters.min_amount is None else filters.min_amount)
        self.max_amount.setValue(_NO_LIMIT if filters.max_amount is None else filters.max_amount)
        idx = self.type.findData(TransactionType(filters.type).value if filters.type else "")
        self.type.setCurrentIndex(idx if idx >= 0 else 0)

    def get_filters(self) -> FilterOptions:
        """Return the entered criteria; blank inputs mean no constraint."""
        def _amount(box):
            v = box.value()
            return None if v == _NO_LIMIT else float(v)

        return FilterOptions(
            start_date=self.start_date.date().toString("yyyy-MM-dd") if self.use_start.isChecked() else None,
            end_date=self.end_date.date().toString("yyyy-MM-dd") if self.use_end.isChecked() else None,
            name=self.name.text().strip() or None,
            category=self.category.text().strip() or None,
            min_amount=_amount(self.min_amount),
            max_amount=_amount(self.max_amount),
            type=TransactionType(self.type.currentData()) if self.type.currentData() else None,
        )
