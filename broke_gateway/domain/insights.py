"""Spending aggregation - daily totals and the insights rollup"""

from datetime import datetime
from typing import Dict, List, Optional

from broke_gateway.domain.models import DailyPoint, InsightsSummary, Occurrence
from broke_gateway.utils.date_utils import shift_days, start_of_day


def daily_totals(occurrences: List[Occurrence]) -> List[DailyPoint]:
    """Sum occurrences per calendar day, ascending; days without spending are omitted"""
    totals_by_day: Dict[datetime, float] = {}
    for occ in occurrences:
        day = start_of_day(occ.date)
        totals_by_day[day] = totals_by_day.get(day, 0.0) + occ.amount

    return [DailyPoint(date=day, total=totals_by_day[day]) for day in sorted(totals_by_day)]


def _sum_between(occurrences: List[Occurrence], start: datetime, end: datetime, include_end: bool) -> float:
    if include_end:
        return sum((o.amount for o in occurrences if start <= o.date <= end), 0.0)
    return sum((o.amount for o in occurrences if start <= o.date < end), 0.0)


def summarize(occurrences: List[Occurrence], now: datetime) -> InsightsSummary:
    """
    Build the insights rollup as of now.

    Windows (all anchored at the start of today):
    - last 30 days: [today - 29d, now], average always divides by 30
    - last 7 days:  [today - 6d, now]
    - previous 7:   [today - 13d, today - 7d)

    Ties on top category and biggest day go to the first one encountered:
    the category seen first in the last-30 window, and the earliest day.
    Trend is None when the previous 7 days had no spending.
    """
    today = start_of_day(now)

    total_all_time = sum((o.amount for o in occurrences), 0.0)

    last30 = [o for o in occurrences if shift_days(today, -29) <= o.date <= now]
    last30_total = sum((o.amount for o in last30), 0.0)
    average_daily_last30 = last30_total / 30.0

    category_totals: Dict[str, float] = {}
    for occ in last30:
        category_totals[occ.category] = category_totals.get(occ.category, 0.0) + occ.amount

    top_category: Optional[str] = None
    top_category_total = 0.0
    if category_totals:
        # max() keeps the first maximal key, dicts preserve insertion order
        top_category = max(category_totals, key=category_totals.__getitem__)
        top_category_total = category_totals[top_category]

    days = daily_totals(occurrences)
    biggest_day = max(days, key=lambda point: point.total) if days else None

    last7_total = _sum_between(occurrences, shift_days(today, -6), now, include_end=True)
    previous7_total = _sum_between(occurrences, shift_days(today, -13), shift_days(today, -7), include_end=False)

    trend_percent = None
    if previous7_total > 0:
        trend_percent = (last7_total - previous7_total) / previous7_total * 100.0

    return InsightsSummary(
        total_all_time=total_all_time,
        last30_total=last30_total,
        average_daily_last30=average_daily_last30,
        top_category=top_category,
        top_category_total=top_category_total,
        biggest_day=biggest_day,
        last7_total=last7_total,
        previous7_total=previous7_total,
        trend_percent=trend_percent,
    )
