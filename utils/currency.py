'''
    File Name: currency.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import config


def format_currency(amount: float, symbol: str = None) -> str:
    """Format a float as currency string, e.g. '€1,234.56' or '-€20.00'."""
    symbol = config.CURRENCY_SYMBOL if symbol is None else symbol
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"
