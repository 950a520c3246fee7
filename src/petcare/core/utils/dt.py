"""Clock and calendar helpers.

All datetimes handled by petcare are expected to be timezone-aware. Day, week
and month boundaries are computed in the tzinfo of the reference instant, so
a caller that works in local time passes local-aware datetimes and gets local
midnights back.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from dateutil.relativedelta import relativedelta

Clock = Callable[[], datetime]
"""Zero-argument callable returning the current aware datetime."""

ONE_DAY = timedelta(days=1)


def utcnow() -> datetime:
    """Default clock: the current instant in UTC."""
    return datetime.now(UTC)


def local_now() -> datetime:
    """The current instant in the system's local timezone."""
    return datetime.now().astimezone()


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(dt: datetime) -> datetime:
    """Monday 00:00 of the ISO week containing *dt*."""
    return start_of_day(dt) - timedelta(days=dt.weekday())


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=1)


def add_months(dt: datetime, months: int) -> datetime:
    """Calendar-aware month arithmetic (Jan 31 + 1 month = Feb 28/29)."""
    return dt + relativedelta(months=months)


def whole_days_between(start: datetime, end: datetime) -> int:
    """Number of whole days from *start* to *end*, truncated toward zero."""
    return int((end - start) / ONE_DAY)


def day_of(dt: datetime) -> date:
    return dt.date()
