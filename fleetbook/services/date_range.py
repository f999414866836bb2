"""
Resolve dashboard period selectors into concrete date ranges.

Weeks start on Monday. The financial year starts on April 1. All ranges
are closed: `end` is the last microsecond of the final day.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional, Tuple

from fleetbook.services.records import to_naive_datetime

logger = logging.getLogger(__name__)

FINANCIAL_YEAR_START_MONTH = 4


class DatePeriod(str, enum.Enum):
    CURRENT_WEEK = "current_week"
    CURRENT_MONTH = "current_month"
    CURRENT_QUARTER = "current_quarter"
    CURRENT_FINANCIAL_YEAR = "current_financial_year"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def contains(self, moment: Optional[datetime]) -> bool:
        if moment is None:
            return False
        return self.start <= moment <= self.end

    @property
    def label(self) -> str:
        return f"{_short(self.start)} - {_short(self.end)}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
        }


def _short(moment: datetime) -> str:
    return f"{moment:%b} {moment.day}, {moment.year}"


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def _last_day_of_month(year: int, month: int) -> date:
    if month == 12:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - timedelta(days=1)


def week_range(now: datetime) -> DateRange:
    monday = now.date() - timedelta(days=now.weekday())
    return DateRange(_start_of_day(monday), _end_of_day(monday + timedelta(days=6)))


def month_range(now: datetime) -> DateRange:
    first = date(now.year, now.month, 1)
    return DateRange(_start_of_day(first), _end_of_day(_last_day_of_month(now.year, now.month)))


def quarter_range(now: datetime) -> DateRange:
    first_month = 3 * ((now.month - 1) // 3) + 1
    last_month = first_month + 2
    return DateRange(
        _start_of_day(date(now.year, first_month, 1)),
        _end_of_day(_last_day_of_month(now.year, last_month)),
    )


def financial_year_range(now: datetime) -> DateRange:
    start_year = now.year if now.month >= FINANCIAL_YEAR_START_MONTH else now.year - 1
    return DateRange(
        _start_of_day(date(start_year, FINANCIAL_YEAR_START_MONTH, 1)),
        _end_of_day(date(start_year + 1, FINANCIAL_YEAR_START_MONTH - 1, 31)),
    )


def _parse_bound(value: Any, *, is_end: bool) -> Optional[datetime]:
    """Parse a custom bound. Date-only ends cover the whole day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_naive_datetime(value)
    if isinstance(value, date):
        return _end_of_day(value) if is_end else _start_of_day(value)

    text = str(value).strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            day = date.fromisoformat(text)
            return _end_of_day(day) if is_end else _start_of_day(day)
    except ValueError:
        return None
    return to_naive_datetime(text)


def _custom_range(start: Any, end: Any) -> Optional[DateRange]:
    start_dt = _parse_bound(start, is_end=False)
    end_dt = _parse_bound(end, is_end=True)
    if start_dt is None or end_dt is None:
        return None
    if start_dt > end_dt:
        # Reversed bounds are swapped, keeping whole-day coverage on both ends
        start_dt, end_dt = _parse_bound(end, is_end=False), _parse_bound(start, is_end=True)
    return DateRange(start_dt, end_dt)


def _coerce_period(period: Any) -> Tuple[DatePeriod, bool]:
    if isinstance(period, DatePeriod):
        return period, True
    try:
        return DatePeriod(str(period)), True
    except ValueError:
        return DatePeriod.CURRENT_MONTH, False


def resolve_date_range(
    period: Any = DatePeriod.CURRENT_MONTH,
    start: Any = None,
    end: Any = None,
    now: Optional[datetime] = None,
) -> DateRange:
    """Return the closed [start, end] interval for a period selector.

    Never raises: unknown periods and unusable custom bounds fall back to
    the current month.
    """
    now = to_naive_datetime(now) or datetime.now()
    selected, known = _coerce_period(period)
    if not known:
        logger.warning("Unknown date period %r, using current month", period)

    if selected == DatePeriod.CURRENT_WEEK:
        return week_range(now)
    if selected == DatePeriod.CURRENT_QUARTER:
        return quarter_range(now)
    if selected == DatePeriod.CURRENT_FINANCIAL_YEAR:
        return financial_year_range(now)
    if selected == DatePeriod.CUSTOM:
        custom = _custom_range(start, end)
        if custom is not None:
            return custom
        logger.warning("Invalid custom date range start=%r end=%r, using current month", start, end)
    return month_range(now)
