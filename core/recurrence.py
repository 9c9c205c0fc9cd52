'''
    File Name: recurrence.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from dataclasses import replace
from datetime import date, datetime
from typing import List
import uuid

from dateutil.relativedelta import relativedelta

import config
from models.transaction import Transaction


def new_id() -> str:
    return uuid.uuid4().hex


def add_months(iso_date: str, months: int) -> str:
    """Add calendar months to an ISO date.

    The day of month is kept where it exists; otherwise it is clamped to
    the last day of the target month (2024-01-31 + 1 -> 2024-02-29).
    """
    start: date = datetime.strptime(iso_date, config.DATE_FORMAT).date()
    return (start + relativedelta(months=months)).strftime(config.DATE_FORMAT)


def expand(template: Transaction, repeat_months: int) -> List[Transaction]:
    """Return `repeat_months + 1` monthly copies of `template`.

    The first copy keeps the template date. Every offset is computed from
    the template date, so month-end clamping never accumulates. Each copy
    gets a fresh id, unrelated to the template's.
    """
    if isinstance(repeat_months, bool) or not isinstance(repeat_months, int):
        raise ValueError(f"Repeat count must be an integer, got {repeat_months!r}")
    if not 0 <= repeat_months <= config.MAX_REPEAT_MONTHS:
        raise ValueError(f"Repeat count must be between 0 and {config.MAX_REPEAT_MONTHS}")

    return [
        replace(template, id=new_id(), date=add_months(template.date, i))
        for i in range(repeat_months + 1)
    ]
