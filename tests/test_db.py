'''
    File Name: test_db.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import sqlite3

import pytest

from database.db_manager import DatabaseManager
from models.transaction import TransactionType
from conftest import make_tx

EPSILON = 1e-6


@pytest.fixture
def dm(tmp_path):
    manager = DatabaseManager(tmp_path / "test.db")
    manager.ensure_database()
    return manager


def test_ensure_and_fetch_empty(tmp_path):
    db_path = tmp_path / "test.db"
    dm = DatabaseManager(db_path)
    dm.ensure_database()
    assert db_path.exists()
    assert dm.fetch_transactions() == []


def test_ensure_database_is_idempotent(dm):
    dm.add_transaction(make_tx(5, "2025-12-01"))
    dm.ensure_database()
    assert len(dm.fetch_transactions()) == 1


def test_add_and_fetch_transaction(dm):
    tx = make_tx(2.5, "2025-12-01", name="Coffee", category="Food", description="flat white")
    stored = dm.add_transaction(tx)
    assert stored is not None
    assert stored.id
    fetched = dm.fetch_transaction_by_id(stored.id)
    assert fetched == stored
    assert fetched.name == "Coffee"
    assert abs(fetched.amount - 2.5) < EPSILON
    assert fetched.type is TransactionType.EXPENSE
    assert fetched.description == "flat white"
    assert dm.fetch_categories() == ["Food"]


def test_add_assigns_fresh_id_ignoring_given_one(dm):
    first = dm.add_transaction(make_tx(1, "2025-12-01", tx_id="template"))
    second = dm.add_transaction(make_tx(1, "2025-12-01", tx_id="template"))
    assert first.id != "template"
    assert second.id != "template"
    assert first.id != second.id


def test_fetch_orders_by_date_descending(dm):
    for d in ["2025-01-15", "2025-03-01", "2024-12-31"]:
        dm.add_transaction(make_tx(10, d))
    dates = [t.date for t in dm.fetch_transactions()]
    assert dates == ["2025-03-01", "2025-01-15", "2024-12-31"]


def test_update_transaction(dm):
    stored = dm.add_transaction(make_tx(500, "2025-12-01", name="Rent", category="Housing"))
    changed = make_tx(550, "2025-12-02", "expense", name="Rent Dec", category="Housing", tx_id=stored.id)
    result = dm.update_transaction(changed)
    assert result == changed
    fetched = dm.fetch_transaction_by_id(stored.id)
    assert fetched.name == "Rent Dec"
    assert fetched.date == "2025-12-02"
    assert abs(fetched.amount - 550) < EPSILON


def test_update_unknown_id_fails(dm):
    assert dm.update_transaction(make_tx(1, "2025-12-01", tx_id="missing")) is None
    assert dm.update_transaction(make_tx(1, "2025-12-01")) is None


def test_delete_transaction(dm):
    stored = dm.add_transaction(make_tx(1, "2025-12-01", name="Temp"))
    assert dm.delete_transaction(stored.id)
    assert dm.fetch_transaction_by_id(stored.id) is None
    assert not dm.delete_transaction(stored.id)


def test_fetch_categories_distinct_and_sorted(dm):
    for cat in ["Transport", "Food", "Food", "Rent"]:
        dm.add_transaction(make_tx(1, "2025-12-01", category=cat))
    assert dm.fetch_categories() == ["Food", "Rent", "Transport"]


def test_malformed_rows_are_skipped(dm):
    dm.add_transaction(make_tx(1, "2025-12-01", name="Good"))
    conn = sqlite3.connect(str(dm.db_path))
    conn.execute(
        "INSERT INTO transactions (id, name, category, amount, date, type, description) VALUES (?, ?, ?, ?, ?, ?, ?)",
        ("bad", "Bad", "X", -5, "2025-12-01", "expense", ""),
    )
    conn.commit()
    conn.close()
    names = [t.name for t in dm.fetch_transactions()]
    assert names == ["Good"]


def test_storage_failure_reports_instead_of_raising(tmp_path):
    # a directory where the database file should be makes every connect fail
    db_path = tmp_path / "as_dir.db"
    db_path.mkdir()
    dm = DatabaseManager(db_path)
    assert dm.fetch_transactions() == []
    assert dm.add_transaction(make_tx(1, "2025-12-01")) is None
    assert dm.update_transaction(make_tx(1, "2025-12-01", tx_id="x")) is None
    assert dm.delete_transaction("x") is False
    assert dm.fetch_categories() == []


class TrackingConnection:
    """Wraps a sqlite3 connection and records whether it was closed."""

    def __init__(self, conn):
        self._conn = conn
        self.closed = False

    def close(self):
        self.closed = True
        self._conn.close()

    def __getattr__(self, name):
        return getattr(self._conn, name)


def test_connections_are_closed_when_statements_fail(dm, monkeypatch):
    opened = []
    real_connect = dm._connect

    def tracking_connect():
        conn = TrackingConnection(real_connect())
        opened.append(conn)
        return conn

    monkeypatch.setattr(dm, "_connect", tracking_connect)
    with sqlite3.connect(str(dm.db_path)) as conn:
        conn.execute("DROP TABLE transactions")

    assert dm.fetch_transactions() == []
    assert dm.fetch_transaction_by_id("x") is None
    assert dm.add_transaction(make_tx(1, "2025-12-01")) is None
    assert dm.update_transaction(make_tx(1, "2025-12-01", tx_id="x")) is None
    assert dm.delete_transaction("x") is False
    assert dm.fetch_categories() == []
    assert len(opened) == 6
    assert all(c.closed for c in opened)
