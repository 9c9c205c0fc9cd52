'''
    File Name: charts_view.py
    Version: 2.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import io
import logging
from typing import Optional

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QSizePolicy
from PyQt6.QtCore import Qt

from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas, NavigationToolbar2QT

import config
from core.aggregation import Dashboard
from utils.currency import format_currency, format_percentage

logger = logging.getLogger(__name__)


class ChartsView(QWidget):
    """Dashboard charts drawn on a single matplotlib canvas.

    Features:
    - Expenses by category (donut, one palette colour per category)
    - Income vs expenses per month (bars)
    - Financial evolution (running balance area)
    - Clear empty state messaging

    The view never queries storage: the owner pushes a `Dashboard` through
    `set_dashboard()` after every state change.
    """

    def __init__(self, parent=None, dashboard: Optional[Dashboard] = None):
        super().__init__(parent)
        self._dashboard = dashboard or Dashboard()

        self._figure = Figure(figsize=(10, 7), dpi=100)
        self._canvas = FigureCanvas(self._figure)
        self._canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self._canvas.setMinimumHeight(420)
        self._toolbar = NavigationToolbar2QT(self._canvas, self)

        self._ax_category = self._figure.add_subplot(2, 2, 1)
        self._ax_monthly = self._figure.add_subplot(2, 2, 2)
        self._ax_balance = self._figure.add_subplot(2, 1, 2)

        self.setup_ui()

        try:
            self.plot_data()
        except Exception:
            logger.exception("Failed to initialize ChartsView")

    def setup_ui(self) -> None:
        """Build the UI: title, toolbar, canvas and stats line."""
        main_layout = QVBoxLayout()

        title = QLabel("Charts")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-weight: bold; font-size: 14px;")
        main_layout.addWidget(title)

        main_layout.addWidget(self._toolbar)
        main_layout.addWidget(self._canvas)

        self._stats_label = QLabel("")
        self._stats_label.setStyleSheet("padding: 5px; background-color: #f0f0f0; border-radius: 3px;")
        main_layout.addWidget(self._stats_label)

        self.setLayout(main_layout)

    def set_dashboard(self, dashboard: Dashboard) -> None:
        self._dashboard = dashboard or Dashboard()
        self.plot_data()

    def _update_stats(self) -> None:
        d = self._dashboard
        if not d.monthly:
            self._stats_label.setText("No transactions available")
            return
        self._stats_label.setText(
            f"Months: {len(d.monthly)} | Expense categories: {len(d.categories)} | "
            f"Balance: {format_currency(d.totals.total_balance)}"
        )

    def plot_data(self) -> None:
        """Redraw every chart from the current dashboard."""
        for ax in (self._ax_category, self._ax_monthly, self._ax_balance):
            ax.clear()

        try:
            self._plot_categories(self._ax_category)
            self._plot_monthly(self._ax_monthly)
            self._plot_balance(self._ax_balance)
            self._update_stats()
            self._figure.tight_layout()
        except Exception:
            logger.exception("Failed to plot dashboard charts")
            for ax in (self._ax_category, self._ax_monthly, self._ax_balance):
                ax.clear()
            self._ax_balance.text(0.5, 0.5, "Error rendering chart", ha="center", va="center")
        self._canvas.draw()

    @staticmethod
    def _empty(ax, message: str) -> None:
        ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=11, color="#666666")
        ax.set_xticks([])
        ax.set_yticks([])

    def _plot_categories(self, ax) -> None:
        """Expenses by category as a donut."""
        ax.set_title("Expenses by Category")
        slices = self._dashboard.categories
        if not slices:
            self._empty(ax, "No expenses recorded")
            return

        ax.pie(
            [s.total for s in slices],
            colors=[s.color for s in slices],
            startangle=90,
            counterclock=False,
            wedgeprops={"width": 0.35, "linewidth": 0},
        )
        ax.legend(
            [f"{s.category} ({format_percentage(s.percentage)})" for s in slices],
            loc="center left",
            bbox_to_anchor=(0.95, 0.5),
            fontsize=8,
            frameon=False,
        )
        ax.set_aspect("equal")

    def _plot_monthly(self, ax) -> None:
        """Income vs expenses per month."""
        ax.set_title("Income vs Expenses")
        points = self._dashboard.monthly
        if not points:
            self._empty(ax, "No transactions available")
            return

        xs = range(len(points))
        width = 0.4
        ax.bar([x - width / 2 for x in xs], [p.income for p in points], width,
               color=config.INCOME_COLOR, label="Income")
        ax.bar([x + width / 2 for x in xs], [p.expense for p in points], width,
               color=config.EXPENSE_COLOR, label="Expenses")
        ax.set_xticks(list(xs))
        ax.set_xticklabels([p.month for p in points], rotation=45, ha="right", fontsize=8)
        ax.legend(fontsize=8)
        ax.grid(axis="y", alpha=0.3)

    def _plot_balance(self, ax) -> None:
        """Running balance across months."""
        ax.set_title("Financial Evolution")
        points = self._dashboard.monthly
        if not points:
            self._empty(ax, "No transactions available\nAdd transactions to see charts")
            return

        xs = list(range(len(points)))
        balances = [p.balance for p in points]
        ax.plot(xs, balances, marker="o", linewidth=2, markersize=6, color=config.BALANCE_COLOR, label="Balance")
        ax.fill_between(xs, balances, alpha=0.2, color=config.BALANCE_COLOR)
        ax.axhline(0, color="#999999", linewidth=0.8)
        ax.set_xticks(xs)
        ax.set_xticklabels([p.month for p in points], rotation=45, ha="right", fontsize=8)
        ax.set_ylabel(f"Amount ({config.CURRENCY_SYMBOL})")
        ax.grid(alpha=0.3)

    def snapshot_png(self, dpi: int = 110) -> bytes:
        """Render the current charts to PNG bytes (used by the PDF export)."""
        buf = io.BytesIO()
        self._figure.savefig(buf, format="png", dpi=dpi, bbox_inches="tight", facecolor="white")
        return buf.getvalue()
