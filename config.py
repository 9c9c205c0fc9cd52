'''
    File Name: config.py
    Version: 2.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''

from pathlib import Path
import logging

# Project paths & files
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
DB_FILENAME = "dashboard.db"
DATABASE_PATH = DATA_DIR / DB_FILENAME   # Path object

# App metadata
APP_NAME = "Finance Dashboard"
APP_VERSION = "2.0.0"

# UI / formatting
DEFAULT_CURRENCY = "EUR"
CURRENCY_SYMBOL = "€"
DATE_FORMAT = "%Y-%m-%d"
MONTH_LABEL_FORMAT = "%m/%Y"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"
STYLESHEET_PATH = BASE_DIR / "resources" / "styles.qss"

# Charts: category colours are handed out in first-seen order and cycle
CHART_PALETTE = [
    "#4F46E5",  # indigo
    "#10B981",  # emerald
    "#F59E0B",  # amber
    "#EC4899",  # pink
    "#8B5CF6",  # violet
    "#06B6D4",  # cyan
    "#F97316",  # orange
    "#14B8A6",  # teal
    "#6366F1",  # indigo light
    "#84CC16",  # lime
]
INCOME_COLOR = "#10B981"
EXPENSE_COLOR = "#EF4444"
BALANCE_COLOR = "#4F46E5"

# Recurrence
MAX_REPEAT_MONTHS = 60

# PDF report
PDF_ROWS_PER_PAGE = 34

# Logging (simple default; modules can call logging.basicConfig(**config))
LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
}

# Helpers
def ensure_data_dir():
    """
    Ensure the data directory exists. Database creation should be handled
    by the database manager (see `database.db_manager.DatabaseManager`).
    """
    DATA_DIR.mkdir(parents=True, exist_ok=True)
