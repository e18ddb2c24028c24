"""Date manipulation utilities"""

from calendar import monthrange
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the calendar day containing moment"""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def shift_days(moment: datetime, days: int) -> datetime:
    """Move moment by a whole number of calendar days"""
    return moment + timedelta(days=days)


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month (leap years included)"""
    return monthrange(year, month)[1]


def to_local_naive(moment: datetime, tz_name: str) -> datetime:
    """Express an aware datetime as naive wall-clock time in tz_name; naive input is kept"""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def local_now(tz_name: str) -> datetime:
    """Current wall-clock time in tz_name, naive"""
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)
