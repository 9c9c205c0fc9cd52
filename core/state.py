'''
    File Name: state.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from core.aggregation import Dashboard, build_dashboard
from core.filters import apply_filters, next_sort, sort_transactions
from models.filter_options import FilterOptions, SortConfig, SortField
from models.transaction import Transaction


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of what the dashboard shows.

    The main window holds exactly one of these and swaps it for a new one
    on every change; nothing mutates it in place.
    """
    transactions: Tuple[Transaction, ...] = ()
    filters: FilterOptions = field(default_factory=FilterOptions)
    sort: SortConfig = field(default_factory=SortConfig)

    def filtered(self) -> List[Transaction]:
        return apply_filters(self.transactions, self.filters)

    def visible(self) -> List[Transaction]:
        """Rows for the transactions table: filtered, then sorted."""
        return sort_transactions(self.filtered(), self.sort)

    def dashboard(self) -> Dashboard:
        return build_dashboard(self.filtered())

    def find(self, tx_id: str) -> Optional[Transaction]:
        return next((t for t in self.transactions if t.id == tx_id), None)

    def with_transactions(self, transactions: Iterable[Transaction]) -> "AppState":
        return replace(self, transactions=tuple(transactions))

    def with_updated(self, tx: Transaction) -> "AppState":
        return replace(
            self,
            transactions=tuple(tx if t.id == tx.id else t for t in self.transactions),
        )

    def without(self, tx_id: str) -> "AppState":
        return replace(self, transactions=tuple(t for t in self.transactions if t.id != tx_id))

    def with_filters(self, filters: Optional[FilterOptions]) -> "AppState":
        return replace(self, filters=filters or FilterOptions())

    def with_sort(self, sort_field: SortField) -> "AppState":
        return replace(self, sort=next_sort(self.sort, sort_field))
