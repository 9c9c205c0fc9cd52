'''
    File Name: pdf_report.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from datetime import datetime
import io
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
import matplotlib.image as mpimg

import config
from core.aggregation import Totals, compute_totals
from core.filters import filter_by_period
from models.transaction import Transaction
from utils.currency import format_currency

logger = logging.getLogger(__name__)

A4_PORTRAIT = (8.27, 11.69)  # inches
TITLE = "Financial Report"
ROW_STEP = 0.022
TABLE_BOTTOM = 0.07
FIRST_PAGE_TABLE_TOP = 0.78
FIRST_PAGE_TABLE_TOP_WITH_CHART = 0.40
PAGE_TABLE_TOP = 0.90
MAX_CELL_CHARS = 20

# (header, x position, horizontal alignment)
TABLE_COLUMNS = [
    ("Date", 0.08, "left"),
    ("Name", 0.22, "left"),
    ("Category", 0.46, "left"),
    ("Type", 0.68, "left"),
    ("Amount", 0.92, "right"),
]


def default_report_name(start_date: str, end_date: str) -> str:
    return f"finance-report-{start_date}-{end_date}.pdf"


def _display_date(iso_date: str) -> str:
    return datetime.strptime(iso_date, config.DATE_FORMAT).strftime(config.DISPLAY_DATE_FORMAT)


def _clip(text: str) -> str:
    return (text or "")[:MAX_CELL_CHARS]


def _row_cells(tx: Transaction) -> List[str]:
    return [
        _display_date(tx.date),
        _clip(tx.name),
        _clip(tx.category),
        "Income" if tx.is_income else "Expense",
        format_currency(tx.amount),
    ]


def _rows_fitting(top: float) -> int:
    # one slot is taken by the header row
    return max(int((top - TABLE_BOTTOM) / ROW_STEP) - 1, 1)


def paginate(rows: Sequence[Transaction], first_page_rows: int, rows_per_page: int) -> List[List[Transaction]]:
    """Split table rows into pages. Always returns at least one (maybe empty) page."""
    pages = [list(rows[:first_page_rows])]
    rest = list(rows[first_page_rows:])
    while rest:
        pages.append(rest[:rows_per_page])
        rest = rest[rows_per_page:]
    return pages


def _draw_header_footer(fig: Figure, period: str, page_no: int, page_count: int) -> None:
    fig.text(0.5, 0.96, TITLE, ha="center", va="top", fontsize=20, weight="bold")
    fig.text(0.5, 0.925, f"Period: {period}", ha="center", va="top", fontsize=12)
    fig.text(0.08, 0.03, f"{config.APP_NAME} {config.APP_VERSION}", ha="left", fontsize=8, color="#666666")
    fig.text(0.92, 0.03, f"Page {page_no} / {page_count}", ha="right", fontsize=8, color="#666666")


def _draw_summary_cards(fig: Figure, totals: Totals) -> None:
    balance_color = config.INCOME_COLOR if totals.total_balance >= 0 else config.EXPENSE_COLOR
    cards = [
        ("Period balance", totals.total_balance, balance_color, 0.20),
        ("Total income", totals.total_income, config.INCOME_COLOR, 0.50),
        ("Total expenses", totals.total_expenses, config.EXPENSE_COLOR, 0.80),
    ]
    for label, value, color, x in cards:
        fig.text(
            x, 0.865, f"{label}\n{format_currency(value)}",
            ha="center", va="center", fontsize=11, color=color, linespacing=1.6,
            bbox={"boxstyle": "round,pad=0.6", "facecolor": "#f5f5f5", "edgecolor": "#dddddd"},
        )


def _draw_chart(fig: Figure, chart_png: bytes) -> None:
    image = mpimg.imread(io.BytesIO(chart_png), format="png")
    ax = fig.add_axes([0.08, 0.44, 0.84, 0.36])
    ax.imshow(image)
    ax.set_axis_off()


def _draw_table(fig: Figure, rows: Iterable[Transaction], top: float) -> None:
    for header, x, align in TABLE_COLUMNS:
        fig.text(x, top, header, ha=align, va="top", fontsize=11, weight="bold")
    y = top - ROW_STEP
    for tx in rows:
        for (_, x, align), cell in zip(TABLE_COLUMNS, _row_cells(tx)):
            fig.text(x, y, cell, ha=align, va="top", fontsize=9)
        y -= ROW_STEP


def build_report(
    transactions: Iterable[Transaction],
    start_date: str,
    end_date: str,
    path: Path,
    chart_png: Optional[bytes] = None,
) -> bool:
    """Write a paginated PDF report covering `start_date`..`end_date` (inclusive).

    The period is applied on its own, independent of whatever filters the
    dashboard currently shows. Returns True on success, False on failure.
    """
    try:
        rows = filter_by_period(transactions, start_date, end_date)
        rows.sort(key=lambda t: t.date)
        totals = compute_totals(rows)
        period = f"{_display_date(start_date)} - {_display_date(end_date)}"

        first_top = FIRST_PAGE_TABLE_TOP_WITH_CHART if chart_png else FIRST_PAGE_TABLE_TOP
        pages = paginate(rows, _rows_fitting(first_top), config.PDF_ROWS_PER_PAGE)

        with PdfPages(str(path)) as pdf:
            for page_no, page_rows in enumerate(pages, start=1):
                fig = Figure(figsize=A4_PORTRAIT)
                _draw_header_footer(fig, period, page_no, len(pages))
                if page_no == 1:
                    _draw_summary_cards(fig, totals)
                    if chart_png:
                        _draw_chart(fig, chart_png)
                    _draw_table(fig, page_rows, first_top)
                else:
                    _draw_table(fig, page_rows, PAGE_TABLE_TOP)
                pdf.savefig(fig)

            info = pdf.infodict()
            info["Title"] = f"{TITLE} {start_date} - {end_date}"
            info["Creator"] = config.APP_NAME

        logger.info("PDF report written to %s (%d transactions, %d pages)", path, len(rows), len(pages))
        return True
    except Exception:
        logger.exception("Failed building PDF report at %s", path)
        return False
