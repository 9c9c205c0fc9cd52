'''
    File Name: main_window.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from pathlib import Path
import logging
from typing import Any, Callable, List, Optional

from PyQt6 import QtWidgets, QtGui, QtCore
import config
from config import APP_NAME, APP_VERSION, ensure_data_dir

# Local UI components
from .transaction_form import TransactionForm
from .filter_dialog import FilterDialog
from .charts_view import ChartsView
from .export_pdf_dialog import ExportPdfDialog
from core.state import AppState
from database.db_manager import DatabaseManager
from models.filter_options import SortDirection, SortField
from models.transaction import Transaction
from reports.pdf_report import build_report
from utils.currency import format_currency

logger = logging.getLogger(__name__)

TABLE_HEADERS = ["ID", "Date", "Name", "Category", "Type", "Amount"]
COL_ID, COL_DATE, COL_NAME, COL_CATEGORY, COL_TYPE, COL_AMOUNT = range(len(TABLE_HEADERS))
SORTABLE_COLUMNS = {COL_DATE: SortField.DATE, COL_AMOUNT: SortField.AMOUNT}


class _TaskSignals(QtCore.QObject):
    finished = QtCore.pyqtSignal(object)
    error = QtCore.pyqtSignal(object)


class _DbTask(QtCore.QRunnable):
    """Runs one blocking call on a pool thread and reports through `signals`."""

    def __init__(self, func, args, kwargs):
        super().__init__()
        self.func = func
        self.args = args
        self.kwargs = kwargs
        self.signals = _TaskSignals()

    @QtCore.pyqtSlot()
    def run(self):
        try:
            res = self.func(*self.args, **self.kwargs)
            self.signals.finished.emit(res)
        except Exception as e:
            self.signals.error.emit(e)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, *args, db_manager: Optional[Any] = None, **kwargs):
        super().__init__(*args, **kwargs)

        # Ensure runtime data dir exists (safe)
        try:
            ensure_data_dir()
        except Exception:
            logger.exception("Failed ensuring data directory")

        # Window metadata and status bar
        try:
            self.setWindowTitle(f"{APP_NAME} — {APP_VERSION}")
        except Exception:
            logger.exception("Failed to set window title")

        self.status = self.statusBar()
        self.status.showMessage("Ready")

        # The single source of truth for what the window shows
        self.state = AppState()

        # DB manager may be injected by the app
        self.db_manager = db_manager
        # If caller provided a db_manager, ensure the DB file exists / is initialized.
        self.ensure_db_ready()

        # Thread pool for background tasks and the tasks still awaiting delivery
        self._pool = QtCore.QThreadPool.globalInstance()
        self._tasks = set()

        # Apply stylesheet if present (non-fatal)
        try:
            self._apply_stylesheet()
        except Exception:
            logger.exception("Failed to apply stylesheet")

        central_widget = QtWidgets.QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QtWidgets.QVBoxLayout()
        main_layout.setSpacing(15)
        main_layout.setContentsMargins(10, 10, 10, 10)

        # Summary cards
        cards_layout = QtWidgets.QHBoxLayout()
        self.balance_label = self._make_card(cards_layout, "Total Balance")
        self.income_label = self._make_card(cards_layout, "Total Income")
        self.expense_label = self._make_card(cards_layout, "Total Expenses")
        main_layout.addLayout(cards_layout)

        # Active filter summary
        self.filter_label = QtWidgets.QLabel("No filters applied")
        self.filter_label.setStyleSheet("color: #666666;")
        main_layout.addWidget(self.filter_label)

        # Charts and table share the vertical space
        splitter = QtWidgets.QSplitter(QtCore.Qt.Orientation.Vertical)
        self.charts_view = ChartsView(parent=self)
        splitter.addWidget(self.charts_view)

        # Transactions table (select rows to edit/delete)
        self.tx_table = QtWidgets.QTableWidget(0, len(TABLE_HEADERS))
        self.tx_table.setHorizontalHeaderLabels(TABLE_HEADERS)
        self.tx_table.setColumnHidden(COL_ID, True)
        self.tx_table.horizontalHeader().setStretchLastSection(True)
        self.tx_table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectionBehavior.SelectRows)
        self.tx_table.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)
        self.tx_table.setEditTriggers(QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers)
        self.tx_table.verticalHeader().setVisible(False)
        splitter.addWidget(self.tx_table)
        main_layout.addWidget(splitter, 1)
        # Connect row selection to highlight; header clicks drive sorting
        self.tx_table.selectionModel().selectionChanged.connect(self._on_table_selection_changed)
        self.tx_table.horizontalHeader().sectionClicked.connect(self.on_header_clicked)

        # Activity log
        self.text_display = QtWidgets.QTextEdit()
        self.text_display.setReadOnly(True)
        self.text_display.setMaximumHeight(80)
        main_layout.addWidget(self.text_display)

        # Transactions group
        transaction_group = QtWidgets.QGroupBox("Transactions")
        t_layout = QtWidgets.QHBoxLayout()
        self.button1 = QtWidgets.QPushButton("Add")
        self.button2 = QtWidgets.QPushButton("Edit")
        self.button3 = QtWidgets.QPushButton("Delete")
        t_layout.addWidget(self.button1)
        t_layout.addWidget(self.button2)
        t_layout.addWidget(self.button3)
        transaction_group.setLayout(t_layout)

        # Reports / Utilities group
        report_group = QtWidgets.QGroupBox("Filters & Reports")
        r_layout = QtWidgets.QHBoxLayout()
        self.button4 = QtWidgets.QPushButton("Filter/Search")
        self.button5 = QtWidgets.QPushButton("Clear Filters")
        self.button6 = QtWidgets.QPushButton("Export PDF")
        r_layout.addWidget(self.button4)
        r_layout.addWidget(self.button5)
        r_layout.addWidget(self.button6)
        report_group.setLayout(r_layout)

        groups_layout = QtWidgets.QHBoxLayout()
        groups_layout.addWidget(transaction_group)
        groups_layout.addWidget(report_group)
        main_layout.addLayout(groups_layout)

        # Connect buttons to their dedicated handlers
        self.button1.clicked.connect(self.on_add_clicked)
        self.button2.clicked.connect(self.on_edit_clicked)
        self.button3.clicked.connect(self.on_delete_clicked)
        self.button4.clicked.connect(self.on_filter_search_clicked)
        self.button5.clicked.connect(self.on_clear_filters_clicked)
        self.button6.clicked.connect(self.on_export_pdf_clicked)

        central_widget.setLayout(main_layout)

        # track highlighted row for edit visual cue
        self._highlighted_row = None

        self.refresh_view()

        # If a database exists, attach it and load transactions immediately so
        # the dashboard shows existing data on startup. Do NOT create a new DB here.
        try:
            if not getattr(self, "db_manager", None):
                dm = DatabaseManager()
                if dm.db_path.exists():
                    self.db_manager = dm
            if getattr(self, "db_manager", None):
                try:
                    self.load_transactions()
                except Exception:
                    logger.exception("Failed loading transactions on startup")
        except Exception:
            logger.exception("Failed to attach existing DatabaseManager on startup")

        # Restore/Set initial window size (remember last state with QSettings)
        try:
            settings = QtCore.QSettings("pbm", APP_NAME)
            geom = settings.value("geometry", None)
            if isinstance(geom, (bytes, bytearray)):
                geom = QtCore.QByteArray(bytes(geom))
            if isinstance(geom, QtCore.QByteArray) and not geom.isEmpty():
                self.restoreGeometry(geom)
            else:
                # Default startup size
                self.resize(1200, 900)
                self.setMinimumSize(900, 700)
        except Exception:
            logger.exception("Failed to restore/set window geometry")

    @staticmethod
    def _make_card(layout: QtWidgets.QHBoxLayout, title: str) -> QtWidgets.QLabel:
        box = QtWidgets.QGroupBox(title)
        inner = QtWidgets.QVBoxLayout()
        value = QtWidgets.QLabel(format_currency(0))
        value.setStyleSheet("font-size: 20px; font-weight: bold;")
        inner.addWidget(value)
        box.setLayout(inner)
        layout.addWidget(box)
        return value

    def _apply_stylesheet(self) -> None:
        """Load and apply a stylesheet if the file exists; otherwise skip quietly."""
        path = Path(config.STYLESHEET_PATH)
        if path.exists():
            try:
                with path.open("r", encoding="utf-8") as f:
                    self.setStyleSheet(f.read())
                logger.debug("Applied stylesheet: %s", path)
            except Exception:
                logger.exception("Error reading/applying stylesheet")
        else:
            logger.debug("Stylesheet not found at %s; skipping", path)

    def show_error(self, title: str, message: str, exc: Optional[Exception] = None) -> None:
        """Log and present a critical message box to the user."""
        if exc:
            logger.exception("%s: %s", title, message)
        else:
            logger.error("%s: %s", title, message)
        QtWidgets.QMessageBox.critical(self, title, message)

    def run_db_task(self, fn: Callable[..., Any], on_done: Optional[Callable[[Any], None]] = None, *args, **kwargs) -> None:
        """
        Run a blocking function in a background thread and call on_done(result) in the main thread.
        Usage: self.run_db_task(self.db_manager.fetch_transactions, self._on_transactions_loaded)

        The task's signals object stays referenced in `self._tasks` until its
        result or error has been delivered on the UI thread.
        """
        runner = _DbTask(fn, args, kwargs)
        signals = runner.signals
        self._tasks.add(signals)

        def _on_finished(result):
            self._tasks.discard(signals)
            if on_done:
                on_done(result)

        def _on_err(e):
            self._tasks.discard(signals)
            self.show_error("Background task error", str(e), exc=e)

        # queued back onto the main thread
        signals.finished.connect(_on_finished)
        signals.error.connect(_on_err)

        self._pool.start(runner)

    # --- State ---
    def set_state(self, state: AppState) -> None:
        """Swap in a new state and redraw everything derived from it."""
        self.state = state
        self.refresh_view()

    def refresh_view(self) -> None:
        self._populate_transactions(self.state.visible())
        self._update_sort_headers()
        self._update_filter_label()
        try:
            dashboard = self.state.dashboard()
        except Exception:
            logger.exception("Failed aggregating transactions")
            return
        self._update_cards(dashboard.totals)
        self.charts_view.set_dashboard(dashboard)

    def _update_cards(self, totals) -> None:
        balance_color = config.INCOME_COLOR if totals.total_balance >= 0 else config.EXPENSE_COLOR
        self.balance_label.setText(format_currency(totals.total_balance))
        self.balance_label.setStyleSheet(f"font-size: 20px; font-weight: bold; color: {balance_color};")
        self.income_label.setText(format_currency(totals.total_income))
        self.income_label.setStyleSheet(f"font-size: 20px; font-weight: bold; color: {config.INCOME_COLOR};")
        self.expense_label.setText(format_currency(totals.total_expenses))
        self.expense_label.setStyleSheet(f"font-size: 20px; font-weight: bold; color: {config.EXPENSE_COLOR};")

    def _update_filter_label(self) -> None:
        f = self.state.filters
        if f.is_empty():
            self.filter_label.setText("No filters applied")
            return
        parts = []
        if f.start_date:
            parts.append(f"from {f.start_date}")
        if f.end_date:
            parts.append(f"to {f.end_date}")
        if f.name:
            parts.append(f"name contains '{f.name}'")
        if f.category:
            parts.append(f"category contains '{f.category}'")
        if f.min_amount is not None:
            parts.append(f"amount >= {f.min_amount:.2f}")
        if f.max_amount is not None:
            parts.append(f"amount <= {f.max_amount:.2f}")
        if f.type is not None:
            parts.append(f"type = {f.type.value}")
        shown = len(self.state.filtered())
        self.filter_label.setText(f"Filters: {', '.join(parts)} ({shown} of {len(self.state.transactions)} shown)")

    def _update_sort_headers(self) -> None:
        sort = self.state.sort
        for col, sort_field in SORTABLE_COLUMNS.items():
            label = TABLE_HEADERS[col]
            if sort.active and sort.field == sort_field:
                label += " ▼" if sort.direction == SortDirection.DESC else " ▲"
            self.tx_table.setHorizontalHeaderItem(col, QtWidgets.QTableWidgetItem(label))

    def on_header_clicked(self, column: int) -> None:
        sort_field = SORTABLE_COLUMNS.get(column)
        if sort_field is None:
            return
        self.set_state(self.state.with_sort(sort_field))

    # --- Loading ---
    def load_transactions(self) -> None:
        """Load transactions using db_manager without blocking UI."""
        if not getattr(self, "db_manager", None):
            logger.warning("No db_manager available to load transactions")
            self.status.showMessage("No database available")
            return

        self.status.showMessage("Loading transactions...")

        def _on_loaded(result):
            if isinstance(result, Exception):
                self.show_error("Load failed", "Failed to load transactions", result)
                self.status.showMessage("Load failed")
                return
            try:
                self.set_state(self.state.with_transactions(result or []))
                self.status.showMessage("Transactions loaded")
            except Exception as e:
                self.show_error("UI update failed", "Failed updating UI with transactions", e)

        self.run_db_task(self.db_manager.fetch_transactions, _on_loaded)

    def update_text(self, message: str):
        self.text_display.append(message)

    def _populate_transactions(self, rows: List[Transaction]):
        """Populate the transactions table with a list of transactions."""
        try:
            self._highlighted_row = None
            if not rows:
                # clear table
                self.tx_table.setRowCount(0)
                return

            self.tx_table.setRowCount(len(rows))
            for r_idx, tx in enumerate(rows):
                amount = QtWidgets.QTableWidgetItem(format_currency(tx.amount))
                amount.setForeground(QtGui.QColor(config.INCOME_COLOR if tx.is_income else config.EXPENSE_COLOR))
                amount.setTextAlignment(QtCore.Qt.AlignmentFlag.AlignRight | QtCore.Qt.AlignmentFlag.AlignVCenter)

                self.tx_table.setItem(r_idx, COL_ID, QtWidgets.QTableWidgetItem(str(tx.id)))
                self.tx_table.setItem(r_idx, COL_DATE, QtWidgets.QTableWidgetItem(tx.date))
                self.tx_table.setItem(r_idx, COL_NAME, QtWidgets.QTableWidgetItem(tx.name))
                self.tx_table.setItem(r_idx, COL_CATEGORY, QtWidgets.QTableWidgetItem(tx.category))
                self.tx_table.setItem(r_idx, COL_TYPE, QtWidgets.QTableWidgetItem(tx.type.value.capitalize()))
                self.tx_table.setItem(r_idx, COL_AMOUNT, amount)

            # Resize columns reasonably
            self.tx_table.resizeColumnsToContents()
        except Exception:
            logger.exception("Failed populating transactions table")

    def _get_selected_transaction_id(self) -> Optional[str]:
        """Return the transaction ID for the currently selected row, or None."""
        sel = self.tx_table.selectionModel().selectedRows()
        if not sel:
            return None
        item = self.tx_table.item(sel[0].row(), COL_ID)
        return item.text() if item else None

    def _get_selected_row_index(self) -> Optional[int]:
        sel = self.tx_table.selectionModel().selectedRows()
        if not sel:
            return None
        return sel[0].row()

    def _on_table_selection_changed(self):
        """Highlight the selected row whenever selection changes."""
        row_idx = self._get_selected_row_index()
        if row_idx is None:
            return
        try:
            # Clear previous highlight
            if self._highlighted_row is not None and self._highlighted_row != row_idx:
                for col in range(self.tx_table.columnCount()):
                    item = self.tx_table.item(self._highlighted_row, col)
                    if item:
                        item.setBackground(QtGui.QBrush())
            # Apply new highlight
            brush = QtGui.QBrush(QtGui.QColor(173, 216, 230))  # light blue
            for col in range(self.tx_table.columnCount()):
                item = self.tx_table.item(row_idx, col)
                if item:
                    item.setBackground(brush)
            self._highlighted_row = row_idx
        except Exception:
            logger.exception("Failed highlighting selected row")

    def closeEvent(self, event):
        try:
            settings = QtCore.QSettings("pbm", APP_NAME)
            settings.setValue("geometry", self.saveGeometry())
        except Exception:
            logger.exception("Failed to save window geometry")
        super().closeEvent(event)

    # --- Handlers ---
    def _ensure_db_manager(self, purpose: str) -> bool:
        """Ensure a DatabaseManager exists (create DB if needed). Returns False on failure."""
        if getattr(self, "db_manager", None):
            return True
        try:
            dm = DatabaseManager()
            dm.ensure_database()
            self.db_manager = dm
            return True
        except Exception:
            logger.exception("Failed creating/initializing DatabaseManager for %s", purpose)
            self.show_error("No database", f"No database available to {purpose}")
            return False

    def _known_categories(self) -> List[str]:
        try:
            cats = self.db_manager.fetch_categories()
            return [str(c) for c in cats]
        except Exception:
            logger.exception("Failed fetching categories for transaction form")
            return sorted({t.category for t in self.state.transactions})

    def _insert_batch(self, txs: List[Transaction]) -> None:
        """Insert every transaction independently; re-fetch once all have answered.

        All inserts are started at once and may finish in any order. A failed
        insert neither stops nor undoes the others.
        """
        if not txs:
            return
        pending = {"left": len(txs), "saved": 0, "failed": 0}

        def _on_saved(res):
            pending["left"] -= 1
            if isinstance(res, Exception) or not res:
                pending["failed"] += 1
            else:
                pending["saved"] += 1
                self.update_text(f"Transaction added: {res.name} on {res.date}")
            if pending["left"] > 0:
                return
            if pending["failed"]:
                self.show_error(
                    "Save failed",
                    f"{pending['failed']} of {len(txs)} transaction(s) could not be saved",
                )
                self.status.showMessage("Save finished with errors")
            else:
                self.status.showMessage(f"{pending['saved']} transaction(s) saved")
            if pending["saved"]:
                try:
                    self.load_transactions()
                except Exception:
                    logger.exception("Failed reloading transactions after save")

        self.status.showMessage("Saving transaction(s)...")
        for tx in txs:
            self.run_db_task(self.db_manager.add_transaction, _on_saved, tx)

    def on_add_clicked(self) -> None:
        """Handle Add button clicked (open transaction form / create new entries)."""
        logger.debug("on_add_clicked")
        self.status.showMessage("Adding transaction...")
        if not self._ensure_db_manager("save transaction"):
            return

        try:
            dlg = TransactionForm(self, categories=self._known_categories())
        except Exception:
            logger.exception("Failed creating TransactionForm")
            self.show_error("Error", "Unable to open transaction form")
            return

        if not dlg.exec():
            self.status.showMessage("Add cancelled")
            return
        txs = dlg.get_transactions()
        if not txs:
            self.status.showMessage("No transaction data")
            return
        self._insert_batch(txs)

    def on_edit_clicked(self) -> None:
        logger.debug("on_edit_clicked")
        self.status.showMessage("Editing transaction...")
        if not self._ensure_db_manager("edit transaction"):
            return

        tx_id = self._get_selected_transaction_id()
        original = self.state.find(tx_id) if tx_id else None
        if original is None:
            QtWidgets.QMessageBox.information(self, "Select transaction", "Please select a transaction to edit from the table.")
            self.status.showMessage("No transaction selected")
            return

        # edit what is stored, not what the table last showed
        self.run_db_task(self.db_manager.fetch_transaction_by_id, self._open_edit_form, tx_id)

    def _open_edit_form(self, stored: Optional[Transaction]) -> None:
        if stored is None:
            QtWidgets.QMessageBox.information(self, "Transaction not found", "The selected transaction no longer exists.")
            self.status.showMessage("Transaction not found")
            self.load_transactions()
            return

        try:
            dlg = TransactionForm(self, categories=self._known_categories(), transaction=stored)
        except Exception:
            logger.exception("Failed creating TransactionForm for edit")
            self.show_error("Error", "Unable to open transaction form")
            return

        if not dlg.exec():
            self.status.showMessage("No changes made")
            return
        txs = dlg.get_transactions()
        if not txs:
            self.status.showMessage("No changes made")
            return
        # a repeat count turns the edit into new siblings; the original stays
        if len(txs) > 1 or txs[0].id != stored.id:
            self._insert_batch(txs)
            return

        def _on_updated(res):
            if isinstance(res, Exception) or not res:
                self.show_error("Update failed", "Failed to update transaction")
                self.status.showMessage("Update failed")
                return
            self.update_text(f"Transaction updated: {res.name} on {res.date}")
            self.status.showMessage("Transaction updated")
            self.set_state(self.state.with_updated(res))

        self.run_db_task(self.db_manager.update_transaction, _on_updated, txs[0])

    def on_delete_clicked(self) -> None:
        """Handle Delete button clicked (remove selected transaction)."""
        logger.debug("on_delete_clicked")
        self.status.showMessage("Deleting transaction...")
        if not self._ensure_db_manager("delete transaction"):
            return

        tx_id = self._get_selected_transaction_id()
        tx = self.state.find(tx_id) if tx_id else None
        if tx is None:
            QtWidgets.QMessageBox.information(self, "Select transaction", "Please select a transaction to delete from the table.")
            self.status.showMessage("Delete cancelled")
            return

        # Confirm
        reply = QtWidgets.QMessageBox.question(
            self,
            "Confirm delete",
            f"Are you sure you want to delete '{tx.name}' ({tx.date}, {format_currency(tx.amount)})?",
            QtWidgets.QMessageBox.StandardButton.Yes | QtWidgets.QMessageBox.StandardButton.No,
        )
        if reply != QtWidgets.QMessageBox.StandardButton.Yes:
            self.status.showMessage("Delete cancelled")
            return

        def _on_deleted(res):
            if isinstance(res, Exception) or not res:
                self.show_error("Delete failed", "Failed to delete transaction")
                self.status.showMessage("Delete failed")
                return
            self.update_text(f"Transaction deleted: {tx.name} on {tx.date}")
            self.status.showMessage("Transaction deleted")
            self.set_state(self.state.without(tx_id))

        self.run_db_task(self.db_manager.delete_transaction, _on_deleted, tx_id)

    def on_filter_search_clicked(self) -> None:
        """Handle Filter/Search button clicked (open search/filter UI)."""
        logger.debug("on_filter_search_clicked")
        self.status.showMessage("Opening filter/search...")

        try:
            dlg = FilterDialog(self, filters=self.state.filters)
        except Exception:
            logger.exception("Failed creating FilterDialog")
            self.show_error("Error", "Unable to open filter/search dialog")
            return

        if dlg.exec():
            self.set_state(self.state.with_filters(dlg.get_filters()))
            self.status.showMessage("Filter applied")
        else:
            self.status.showMessage("Filter cancelled")

    def on_clear_filters_clicked(self) -> None:
        logger.debug("on_clear_filters_clicked")
        self.set_state(self.state.with_filters(None))
        self.status.showMessage("Filters cleared")

    def on_export_pdf_clicked(self) -> None:
        """Handle Export PDF button clicked (period report over all transactions)."""
        logger.debug("on_export_pdf_clicked")
        self.status.showMessage("Export PDF...")

        try:
            dlg = ExportPdfDialog(self, default_dir=config.DATA_DIR)
        except Exception:
            logger.exception("Failed creating ExportPdfDialog")
            self.show_error("Error", "Unable to open export dialog")
            return

        if not dlg.exec():
            self.status.showMessage("Export cancelled")
            return
        start, end, path = dlg.get_export()
        if path is None:
            self.status.showMessage("Export cancelled")
            return

        try:
            chart_png = self.charts_view.snapshot_png()
        except Exception:
            logger.exception("Failed capturing charts for PDF export")
            chart_png = None

        def _on_export_done(result):
            if isinstance(result, Exception) or not result:
                self.show_error("Export failed", "Failed to export PDF report")
                self.status.showMessage("Export failed")
                return
            self.update_text(f"Report exported to {path}")
            self.status.showMessage("Export successful")
            QtWidgets.QMessageBox.information(self, "Success", f"Report exported to:\n{path}")

        # the report covers its own period, independent of the on-screen filters
        self.run_db_task(build_report, _on_export_done, list(self.state.transactions), start, end, path, chart_png)
        self.status.showMessage("Exporting report...")

    def ensure_db_ready(self) -> None:
        """Ensure the database file exists and is initialized."""
        if self.db_manager is not None:
            try:
                # prefer a method on the db_manager instance
                if hasattr(self.db_manager, "ensure_database"):
                    self.db_manager.ensure_database()
                else:
                    logger.debug("Injected db_manager has no ensure_database(); not creating DB")
            except Exception:
                logger.exception("Failed to ensure database exists via injected db_manager")
