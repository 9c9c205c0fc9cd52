'''
    File Name: transaction_form.py
    Version: 2.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import logging
from typing import List, Optional

from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QLineEdit,
    QPlainTextEdit,
    QDoubleSpinBox,
    QSpinBox,
    QDateEdit,
    QComboBox,
    QPushButton,
    QHBoxLayout,
    QMessageBox,
)
from PyQt6.QtCore import QDate

import config
from core.recurrence import expand
from models.transaction import Transaction, TransactionType

logger = logging.getLogger(__name__)


class TransactionForm(QDialog):
    """Dialog to create or edit a transaction.

    Usage:
        dlg = TransactionForm(parent, categories=names, transaction=maybe_tx)
        if dlg.exec():
            txs = dlg.get_transactions()

    With a repeat count N the dialog yields N + 1 monthly copies, each with
    its own id. This also holds when editing: the copies are new siblings and
    the edited record stays as it was. Editing with no repeat count yields the
    single replacement record under the original id.
    The caller persists them; the form never touches storage.
    """

    def __init__(self, parent=None, categories=None, transaction: Optional[Transaction] = None):
        super().__init__(parent)
        self._transaction = transaction
        self._transactions: List[Transaction] = []

        self.setWindowTitle("Edit Transaction" if transaction else "New Transaction")
        self.setup_ui()
        self._load_categories(categories or [])

        if transaction:
            # populate fields for editing
            self._load_transaction(transaction)

    def setup_ui(self) -> None:
        layout = QVBoxLayout()

        form = QFormLayout()

        self.name = QLineEdit()
        form.addRow("Name:", self.name)

        self.category = QComboBox()
        self.category.setEditable(True)
        form.addRow("Category:", self.category)

        self.type = QComboBox()
        self.type.addItem("Expense", TransactionType.EXPENSE.value)
        self.type.addItem("Income", TransactionType.INCOME.value)
        form.addRow("Type:", self.type)

        self.amount = QDoubleSpinBox()
        self.amount.setMinimum(0)
        self.amount.setMaximum(1_000_000_000)
        self.amount.setDecimals(2)
        form.addRow("Amount:", self.amount)

        self.date = QDateEdit()
        self.date.setCalendarPopup(True)
        self.date.setDisplayFormat("yyyy-MM-dd")
        self.date.setDate(QDate.currentDate())
        form.addRow("Date:", self.date)

        self.description = QPlainTextEdit()
        self.description.setFixedHeight(60)
        form.addRow("Description:", self.description)

        self.repeat_months = QSpinBox()
        self.repeat_months.setRange(0, config.MAX_REPEAT_MONTHS)
        self.repeat_months.setToolTip(f"0 = no repetition, up to {config.MAX_REPEAT_MONTHS} months")
        form.addRow("Repeat for (months):", self.repeat_months)

        layout.addLayout(form)

        # Buttons
        btn_layout = QHBoxLayout()
        self.save_btn = QPushButton()
        self.cancel_btn = QPushButton("Cancel")
        btn_layout.addStretch(1)
        btn_layout.addWidget(self.save_btn)
        btn_layout.addWidget(self.cancel_btn)

        layout.addLayout(btn_layout)

        self.setLayout(layout)

        # Connections
        self.save_btn.clicked.connect(self.save_transaction)
        self.cancel_btn.clicked.connect(self.reject)
        self.repeat_months.valueChanged.connect(self._update_save_label)
        self._update_save_label(self.repeat_months.value())

    def _update_save_label(self, repeat: int) -> None:
        if repeat > 0 and self._transaction:
            self.save_btn.setText(f"Save as {repeat + 1} New Transactions")
        elif repeat > 0:
            self.save_btn.setText(f"Add {repeat + 1} Transactions")
        elif self._transaction:
            self.save_btn.setText("Save")
        else:
            self.save_btn.setText("Add Transaction")

    def _load_transaction(self, tx: Transaction) -> None:
        self.name.setText(tx.name)
        idx = self.category.findText(tx.category)
        if idx >= 0:
            self.category.setCurrentIndex(idx)
        else:
            self.category.setEditText(tx.category)
        self.type.setCurrentIndex(max(self.type.findData(tx.type.value), 0))
        self.amount.setValue(tx.amount)
        qd = QDate.fromString(tx.date, "yyyy-MM-dd")
        if qd.isValid():
            self.date.setDate(qd)
        self.description.setPlainText(tx.description)

    def _load_categories(self, categories) -> None:
        # Expecting iterable of simple strings
        self.category.clear()
        for c in categories:
            if c:
                self.category.addItem(str(c))
        self.category.setEditText("")

    @property
    def is_edit(self) -> bool:
        return self._transaction is not None

    @property
    def replaces_original(self) -> bool:
        """True when saving overwrites the edited record instead of adding new ones."""
        return self.is_edit and self.repeat_months.value() == 0

    def save_transaction(self) -> None:
        """Validate the input, expand recurrences, then accept the dialog."""
        try:
            template = Transaction(
                name=self.name.text().strip(),
                category=self.category.currentText().strip(),
                amount=float(self.amount.value()),
                date=self.date.date().toString("yyyy-MM-dd"),
                type=self.type.currentData(),
                description=self.description.toPlainText().strip(),
                id=self._transaction.id if self._transaction else None,
            )
            if self.replaces_original:
                self._transactions = [template]
            else:
                self._transactions = expand(template, self.repeat_months.value())
        except ValueError as e:
            logger.debug("Transaction form validation failed: %s", e)
            QMessageBox.warning(self, "Validation", str(e))
            return

        self.accept()

    def get_transactions(self) -> List[Transaction]:
        return list(self._transactions)
