'''
    File Name: transaction.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Transaction data model for the finance dashboard.
'''
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
import math
from typing import Optional


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """
    Represents a single income or expense event.

    Records are immutable: an edit replaces the whole record.

    Attributes:
        name: Display label
        category: Grouping key (case-sensitive)
        amount: Non-negative magnitude; the sign comes from `type`
        date: Transaction date (YYYY-MM-DD)
        type: TransactionType.INCOME or TransactionType.EXPENSE
        description: Optional free text
        id: Unique identifier (None if not yet saved to DB)
    """
    name: str
    category: str
    amount: float
    date: str  # ISO format: YYYY-MM-DD
    type: TransactionType
    description: str = ""
    id: Optional[str] = None

    def __post_init__(self):
        """Validate transaction data after initialization."""
        if not self.name or not str(self.name).strip():
            raise ValueError("Name cannot be empty")
        if not self.category or not str(self.category).strip():
            raise ValueError("Category cannot be empty")
        try:
            amount = float(self.amount)
        except (ValueError, TypeError):
            raise ValueError(f"Invalid amount: {self.amount!r}")
        if not math.isfinite(amount):
            raise ValueError(f"Invalid amount: {self.amount!r}")
        if amount < 0:
            raise ValueError("Amount cannot be negative; use the transaction type for the sign")
        # Dates are compared as strings, so only zero-padded YYYY-MM-DD is accepted
        try:
            if len(self.date) != 10:
                raise ValueError(self.date)
            datetime.strptime(self.date, "%Y-%m-%d")
        except (ValueError, TypeError):
            raise ValueError(f"Invalid date format: {self.date}. Expected YYYY-MM-DD")
        try:
            tx_type = TransactionType(self.type)
        except ValueError:
            raise ValueError(f"Invalid transaction type: {self.type!r}")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "type", tx_type)
        object.__setattr__(self, "description", self.description or "")

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    def with_id(self, tx_id: Optional[str]) -> "Transaction":
        """Return a copy carrying a different id."""
        return replace(self, id=tx_id)

    def to_dict(self) -> dict:
        """Convert transaction to dictionary (useful for DB operations)."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "type": self.type.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Create a Transaction instance from a dictionary."""
        return cls(
            name=data.get("name", ""),
            category=data.get("category", ""),
            amount=data.get("amount", 0.0),
            date=data.get("date", ""),
            type=data.get("type", TransactionType.EXPENSE),
            description=data.get("description") or "",
            id=data.get("id", None),
        )

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, name='{self.name}', amount={self.amount}, "
            f"date={self.date}, category='{self.category}', type={self.type.value})"
        )
