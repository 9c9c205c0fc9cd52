import os

# Widgets are created in tests; no display is needed
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

import config
from models.transaction import Transaction, TransactionType


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep every test away from the user's real database."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr(config, "DATA_DIR", data_dir)
    monkeypatch.setattr(config, "DATABASE_PATH", data_dir / config.DB_FILENAME)
    return data_dir


def make_tx(amount, date, tx_type="expense", name="Item", category="General", description="", tx_id=None):
    return Transaction(
        name=name,
        category=category,
        amount=amount,
        date=date,
        type=TransactionType(tx_type),
        description=description,
        id=tx_id,
    )


@pytest.fixture
def scenario_a():
    """One income and two expenses across January and February 2024."""
    return [
        make_tx(1000, "2024-01-10", "income", name="Salary", category="Salary", tx_id="a1"),
        make_tx(300, "2024-01-15", "expense", name="Groceries", category="Food", tx_id="a2"),
        make_tx(200, "2024-02-01", "expense", name="Bus pass", category="Transport", tx_id="a3"),
    ]
