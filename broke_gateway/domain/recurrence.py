"""Expansion of stored expenses into dated occurrences"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from broke_gateway.config import settings
from broke_gateway.domain.models import Expense, Occurrence
from broke_gateway.utils.date_utils import days_in_month, local_now

logger = logging.getLogger(__name__)


def next_monthly_date(moment: datetime, anchor_day: Optional[int] = None) -> Optional[datetime]:
    """
    Same day-of-month and time of day, one month later.

    anchor_day is the day-of-month the series started on. When the next month
    is too short it is clamped to that month's last day, but the clamp is
    always taken from anchor_day, so Jan 31 → Feb 29 → Mar 31 (not Mar 29).

    Returns None when the date cannot be represented (past datetime.max).
    """
    day = anchor_day if anchor_day is not None else moment.day

    year = moment.year
    month = moment.month + 1
    if month > 12:
        month = 1
        year += 1

    try:
        return moment.replace(year=year, month=month, day=min(day, days_in_month(year, month)))
    except ValueError:
        return None


def expansion_cutoff(expenses: Iterable[Expense], now: datetime) -> datetime:
    """Latest of now and the newest expense date"""
    return max([now] + [e.date for e in expenses])


def _occurrence(expense: Expense, when: datetime) -> Occurrence:
    return Occurrence(
        date=when,
        amount=float(expense.amount),
        category=expense.category,
        title=expense.title,
        is_recurring=expense.is_recurring,
    )


def expand_occurrences(
    expenses: List[Expense],
    through: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> List[Occurrence]:
    """
    Turn stored expenses into a flat list of dated occurrences.

    - One-off expenses yield exactly one occurrence at their own date
    - Recurring expenses yield one occurrence per month from their date
      through the cutoff, inclusive
    - Cutoff defaults to max(now, newest expense date); now defaults to the
      current wall-clock time in the configured timezone

    Amounts are converted from Decimal to float here and nowhere earlier.
    """
    if through is None:
        through = expansion_cutoff(expenses, now if now is not None else local_now(settings.timezone))

    occurrences: List[Occurrence] = []
    for expense in expenses:
        if not expense.is_recurring:
            occurrences.append(_occurrence(expense, expense.date))
            continue

        anchor_day = expense.date.day
        current: Optional[datetime] = expense.date
        while current is not None and current <= through:
            occurrences.append(_occurrence(expense, current))
            current = next_monthly_date(current, anchor_day)

        if current is None:
            logger.debug("Stopped expanding recurring expense", extra={"title": expense.title})

    return occurrences
