'''
    File Name: filter_options.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Filter and sort criteria applied to the transaction list.
'''
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

from models.transaction import TransactionType


@dataclass(frozen=True)
class FilterOptions:
    """
    Optional bounds narrowing the transaction list.

    Every field defaults to None, meaning "no constraint". Active
    constraints are combined with AND.

    Attributes:
        start_date: Inclusive lower date bound (YYYY-MM-DD)
        end_date: Inclusive upper date bound (YYYY-MM-DD)
        name: Case-insensitive substring of the transaction name
        category: Case-insensitive substring of the category
        min_amount: Inclusive lower amount bound
        max_amount: Inclusive upper amount bound
        type: Exact transaction type
    """
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    type: Optional[TransactionType] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, "") for f in fields(self))


class SortField(str, Enum):
    AMOUNT = "amount"
    DATE = "date"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortConfig:
    """Table ordering; either field left as None means input order."""
    field: Optional[SortField] = None
    direction: Optional[SortDirection] = None

    @property
    def active(self) -> bool:
        return self.field is not None and self.direction is not None
