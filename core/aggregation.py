'''
    File Name: aggregation.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

import config
from models.transaction import Transaction, TransactionType

logger = logging.getLogger(__name__)

COLUMNS = ["id", "name", "category", "amount", "date", "type", "description"]


@dataclass(frozen=True)
class Totals:
    total_income: float = 0.0
    total_expenses: float = 0.0
    total_balance: float = 0.0


@dataclass(frozen=True)
class CategorySlice:
    category: str
    total: float
    color: str
    percentage: float  # 0..100


@dataclass(frozen=True)
class MonthlyPoint:
    month: str  # MM/YYYY
    income: float
    expense: float
    balance: float


@dataclass(frozen=True)
class Dashboard:
    """Everything one render pass needs: summary cards and chart data."""
    totals: Totals = field(default_factory=Totals)
    categories: List[CategorySlice] = field(default_factory=list)
    monthly: List[MonthlyPoint] = field(default_factory=list)


def to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build a DataFrame with one row per transaction, preserving input order."""
    rows = [t.to_dict() for t in transactions]
    df = pd.DataFrame(rows, columns=COLUMNS)
    df["amount"] = df["amount"].astype(float)
    return df


def _sum_of(df: pd.DataFrame, tx_type: TransactionType) -> float:
    return float(df.loc[df["type"] == tx_type.value, "amount"].sum())


def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Income, expense and balance over the given list. Empty input gives zeros."""
    df = to_frame(transactions)
    income = _sum_of(df, TransactionType.INCOME)
    expenses = _sum_of(df, TransactionType.EXPENSE)
    return Totals(total_income=income, total_expenses=expenses, total_balance=income - expenses)


def category_breakdown(transactions: Iterable[Transaction], palette: Optional[Sequence[str]] = None) -> List[CategorySlice]:
    """Expense totals per category, largest first.

    Colours follow the order in which each category is first seen in the
    input, cycling through `palette`. Equal totals keep that order too.
    """
    palette = list(palette or config.CHART_PALETTE)
    df = to_frame(transactions)
    expenses = df[df["type"] == TransactionType.EXPENSE.value]
    if expenses.empty:
        return []

    # sort=False keeps first-seen order of the group keys
    grouped = expenses.groupby("category", sort=False)["amount"].sum()
    color_index: Dict[str, int] = {cat: i for i, cat in enumerate(grouped.index)}
    total = float(grouped.sum())

    slices = [
        CategorySlice(
            category=cat,
            total=float(amount),
            color=palette[color_index[cat] % len(palette)],
            percentage=(float(amount) / total * 100.0) if total else 0.0,
        )
        for cat, amount in grouped.items()
    ]
    # sorted() is stable, also with reverse=True
    return sorted(slices, key=lambda s: s.total, reverse=True)


def monthly_series(transactions: Iterable[Transaction]) -> List[MonthlyPoint]:
    """Per-month income/expense with a running balance carried across months.

    Only months that contain at least one transaction are returned, in
    chronological order. The balance starts from 0 before the first month.
    """
    df = to_frame(transactions)
    if df.empty:
        return []

    df["day"] = pd.to_datetime(df["date"], format="%Y-%m-%d")
    df = df.sort_values("day", kind="stable")
    df["month"] = df["day"].dt.to_period("M")
    is_income = df["type"] == TransactionType.INCOME.value
    df["income"] = df["amount"].where(is_income, 0.0)
    df["expense"] = df["amount"].where(~is_income, 0.0)

    monthly = df.groupby("month", sort=True)[["income", "expense"]].sum()
    monthly["balance"] = (monthly["income"] - monthly["expense"]).cumsum()

    return [
        MonthlyPoint(
            month=period.strftime(config.MONTH_LABEL_FORMAT),
            income=float(row["income"]),
            expense=float(row["expense"]),
            balance=float(row["balance"]),
        )
        for period, row in monthly.iterrows()
    ]


def build_dashboard(transactions: Iterable[Transaction]) -> Dashboard:
    rows = list(transactions)
    logger.debug("Aggregating %d transactions", len(rows))
    return Dashboard(
        totals=compute_totals(rows),
        categories=category_breakdown(rows),
        monthly=monthly_series(rows),
    )
