'''
    File Name: filters.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from typing import Iterable, List, Optional

from models.filter_options import FilterOptions, SortConfig, SortDirection, SortField
from models.transaction import Transaction


def _contains(value: str, needle: Optional[str]) -> bool:
    if not needle:
        return True
    return needle.casefold() in (value or "").casefold()


def matches(tx: Transaction, filters: FilterOptions) -> bool:
    """Return True if `tx` satisfies every active constraint in `filters`."""
    # ISO dates: string order is chronological order
    if filters.start_date and tx.date < filters.start_date:
        return False
    if filters.end_date and tx.date > filters.end_date:
        return False
    if not _contains(tx.name, filters.name):
        return False
    if not _contains(tx.category, filters.category):
        return False
    if filters.min_amount is not None and tx.amount < filters.min_amount:
        return False
    if filters.max_amount is not None and tx.amount > filters.max_amount:
        return False
    if filters.type is not None and tx.type != filters.type:
        return False
    return True


def apply_filters(transactions: Iterable[Transaction], filters: Optional[FilterOptions]) -> List[Transaction]:
    """Narrow `transactions` to those matching `filters`, keeping input order."""
    if filters is None:
        return list(transactions)
    return [t for t in transactions if matches(t, filters)]


def filter_by_period(transactions: Iterable[Transaction], start_date: str, end_date: str) -> List[Transaction]:
    """Date-range only filter used by the PDF export."""
    return apply_filters(transactions, FilterOptions(start_date=start_date, end_date=end_date))


def sort_transactions(transactions: Iterable[Transaction], sort: Optional[SortConfig]) -> List[Transaction]:
    """Order transactions for display. Ties keep their input order."""
    rows = list(transactions)
    if sort is None or not sort.active:
        return rows
    key = (lambda t: t.amount) if sort.field == SortField.AMOUNT else (lambda t: t.date)
    return sorted(rows, key=key, reverse=sort.direction == SortDirection.DESC)


def next_sort(current: SortConfig, field: SortField) -> SortConfig:
    """Cycle a clicked column: new column -> desc -> asc -> unsorted."""
    if current.field != field or not current.active:
        return SortConfig(field, SortDirection.DESC)
    if current.direction == SortDirection.DESC:
        return SortConfig(field, SortDirection.ASC)
    return SortConfig()
