"""Calendar helpers shared by the schedule generator and the yield solver."""

from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta
from pandas import Timestamp

from ytmlib.config import DAYS_PER_YEAR

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"

DateLike = Union[str, date, datetime, Timestamp]


def to_date(date_like: DateLike) -> date:
    """
    Convert a string, datetime or Timestamp to a plain date.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like.strip(), fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Unsupported date string format: {date_like!r}")
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def step_back_months(date_like: DateLike, months: int) -> date:
    """
    Move a date back by a whole number of calendar months.

    The day of month is kept when it exists in the target month and clamped
    to that month's last day otherwise, so 2024-03-31 stepped back one month
    is 2024-02-29 and 2023-03-31 is 2023-02-28. Year boundaries roll over
    (2025-01-15 minus 2 months is 2024-11-15).
    """
    if months < 0:
        raise ValueError("months must be non-negative")
    return to_date(date_like) - relativedelta(months=months)


def years_between(start: DateLike, end: DateLike) -> float:
    """Year fraction between two dates on a 365.25-day year (negative if end < start)."""
    return (to_date(end) - to_date(start)).days / DAYS_PER_YEAR


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {plural if count > 1 else singular}"


def maturity_duration(maturity: DateLike, today: DateLike) -> str:
    """
    Remaining term as a short label, e.g. '1 yr, 2 mos, 3 days'.

    Returns 'Matured' for a maturity in the past and 'Matures Today' when the
    two dates coincide.
    """
    maturity_dt = to_date(maturity)
    today_dt = to_date(today)
    if maturity_dt < today_dt:
        return "Matured"
    if maturity_dt == today_dt:
        return "Matures Today"

    delta = relativedelta(maturity_dt, today_dt)
    parts = []
    if delta.years > 0:
        parts.append(_plural(delta.years, "yr", "yrs"))
    if delta.months > 0:
        parts.append(_plural(delta.months, "mo", "mos"))
    if delta.days > 0:
        parts.append(_plural(delta.days, "day", "days"))
    return ", ".join(parts)
