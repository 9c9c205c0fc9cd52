'''
    File Name: db_manager.py
    Version: 3.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''

import sqlite3
from contextlib import closing
from pathlib import Path
import logging
from typing import Optional, List
import uuid

import config
from models.transaction import Transaction

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "id, name, category, amount, date, type, description"


class DatabaseManager:
    def __init__(self, db_path: Path = None):
        # prefer explicit path, otherwise config value or sensible default
        if db_path is not None:
            self.db_path = Path(db_path)
        else:
            self.db_path = Path(getattr(config, "DATABASE_PATH", "")) or (config.BASE_DIR / "data" / "dashboard.db")

    def _connect(self):
        """Return a new sqlite3 connection to the configured DB path."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(str(self.db_path))

    @staticmethod
    def _row_to_transaction(row) -> Optional[Transaction]:
        try:
            return Transaction(
                id=row[0],
                name=row[1],
                category=row[2],
                amount=row[3],
                date=row[4],
                type=row[5],
                description=row[6] or "",
            )
        except ValueError:
            logger.exception("Skipping malformed transaction row id=%s", row[0])
            return None

    def ensure_database(self) -> None:
        """
        Ensure the configured SQLite database file exists and initialize schema.
        Safe to call multiple times.
        """
        logger.debug("Ensuring database exists at %s", self.db_path)

        try:
            with closing(self._connect()) as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS transactions (
                        id TEXT PRIMARY KEY,
                        name TEXT NOT NULL,
                        category TEXT NOT NULL,
                        amount REAL NOT NULL,
                        date TEXT NOT NULL,
                        type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
                        description TEXT NOT NULL DEFAULT ''
                    );
                    """
                )
                cur.execute("CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date)")
                conn.commit()
            logger.info("Database ready at %s", self.db_path)
        except Exception:
            logger.exception("Failed to create/initialize database at %s", self.db_path)
            raise

    def fetch_categories(self) -> List[str]:
        """Return the distinct category names in use, sorted by name."""
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute("SELECT DISTINCT category FROM transactions ORDER BY category").fetchall()
            return [r[0] for r in rows]
        except Exception:
            logger.exception("Failed fetching categories")
            return []

    # --- Transaction CRUD ---
    def fetch_transaction_by_id(self, tx_id: str) -> Optional[Transaction]:
        """Return a single transaction or None if not found."""
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(f"SELECT {_SELECT_COLUMNS} FROM transactions WHERE id = ?", (tx_id,)).fetchone()
            if not row:
                return None
            return self._row_to_transaction(row)
        except Exception:
            logger.exception("Failed fetching transaction by id %s", tx_id)
            return None

    def fetch_transactions(self) -> List[Transaction]:
        """Fetch all transactions, newest date first."""
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    f"SELECT {_SELECT_COLUMNS} FROM transactions ORDER BY date DESC, rowid DESC"
                ).fetchall()
        except Exception:
            logger.exception("Failed fetching transactions")
            return []
        txs = (self._row_to_transaction(r) for r in rows)
        return [t for t in txs if t is not None]

    def add_transaction(self, tx: Transaction) -> Optional[Transaction]:
        """Insert a new transaction under a freshly assigned id.

        Any id already on `tx` is ignored. Returns the stored transaction on
        success, else None.
        """
        try:
            stored = tx.with_id(uuid.uuid4().hex)
            with closing(self._connect()) as conn:
                conn.execute(
                    f"INSERT INTO transactions ({_SELECT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (stored.id, stored.name, stored.category, stored.amount, stored.date,
                     stored.type.value, stored.description),
                )
                conn.commit()
            return stored
        except Exception:
            logger.exception("Failed adding transaction %s", tx)
            return None

    def update_transaction(self, tx: Transaction) -> Optional[Transaction]:
        """Replace an existing transaction. Returns it on success, None if no row has its id."""
        if tx is None or not tx.id:
            return None
        try:
            with closing(self._connect()) as conn:
                cur = conn.execute(
                    "UPDATE transactions SET name = ?, category = ?, amount = ?, date = ?, type = ?, description = ? "
                    "WHERE id = ?",
                    (tx.name, tx.category, tx.amount, tx.date, tx.type.value, tx.description, tx.id),
                )
                conn.commit()
                affected = cur.rowcount
            return tx if affected > 0 else None
        except Exception:
            logger.exception("Failed updating transaction %s", tx)
            return None

    def delete_transaction(self, tx_id: str) -> bool:
        """Delete transaction by id. Returns True if a row was deleted."""
        try:
            with closing(self._connect()) as conn:
                cur = conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
                conn.commit()
                affected = cur.rowcount
            return affected > 0
        except Exception:
            logger.exception("Failed deleting transaction id=%s", tx_id)
            return False
