"""Reporting periods and previous/next navigation"""

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from ..appointments.schemas import Appointment
from .schemas import Period

PERIODS = ("week", "month", "year", "all")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class DateRange:
    """Inclusive day range; an open bound matches every date"""

    start: Optional[dt.date] = None
    end: Optional[dt.date] = None

    def contains(self, day: dt.date) -> bool:
        return (self.start is None or day >= self.start) and (self.end is None or day <= self.end)


def _check_period(period: str) -> None:
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}', expected one of {', '.join(PERIODS)}")


def date_range(period: Period, anchor: dt.date) -> DateRange:
    """Range of the week (Monday first), month or year containing `anchor`"""
    _check_period(period)
    if period == "week":
        start = anchor - dt.timedelta(days=anchor.weekday())
        return DateRange(start, start + dt.timedelta(days=6))
    if period == "month":
        start = anchor.replace(day=1)
        return DateRange(start, start + relativedelta(months=1, days=-1))
    if period == "year":
        return DateRange(dt.date(anchor.year, 1, 1), dt.date(anchor.year, 12, 31))
    return DateRange()


def shift_anchor(period: Period, anchor: dt.date, steps: int) -> dt.date:
    """Move the anchor by `steps` periods; negative goes back"""
    _check_period(period)
    if period == "week":
        return anchor + relativedelta(weeks=steps)
    if period == "month":
        return anchor + relativedelta(months=steps)
    if period == "year":
        return anchor + relativedelta(years=steps)
    return anchor


def period_label(period: Period, anchor: dt.date) -> str:
    span = date_range(period, anchor)
    if period == "week":
        return f"{span.start:%d %b} - {span.end:%d %b %Y}"
    if period == "month":
        return f"{MONTH_NAMES[anchor.month - 1]} {anchor.year}"
    if period == "year":
        return str(anchor.year)
    return "All time"


def filter_by_range(appointments: Iterable[Appointment], span: DateRange) -> list[Appointment]:
    return [apt for apt in appointments if span.contains(apt.date)]
