# bookingsystem/picker.py - date-range selection behind the inline calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from bookingsystem.exceptions import SelectionRejected
from bookingsystem.utils import millis_to_date, start_of_day

MISSING_RANGE = 'Please select a start and an end date.'
START_IN_PAST = 'The start date cannot be before today!'
END_IN_PAST = 'The end date cannot be before today!'


def earliest_allowed(now: datetime, tolerance: timedelta = timedelta(0)) -> datetime:
    """Start of today in `now`'s timezone, moved back by `tolerance`."""
    return start_of_day(now) - tolerance


def _check_points(start: datetime | None, end: datetime | None, boundary: datetime):
    if start is None or end is None:
        raise SelectionRejected(MISSING_RANGE)
    if start < boundary:
        raise SelectionRejected(START_IN_PAST)
    if end < boundary:
        raise SelectionRejected(END_IN_PAST)


def validate_millis(start_ms, end_ms, now: datetime, tz=None, tolerance: timedelta = timedelta(0)):
    """Validate a picker result given as epoch milliseconds.

    Returns (arrival, departure) as calendar dates in `tz`. Raises
    SelectionRejected when a point is missing or lies before the boundary.
    """
    now = now.astimezone(tz)
    boundary = earliest_allowed(now, tolerance)
    start = datetime.fromtimestamp(start_ms / 1000, tz=now.tzinfo) if start_ms is not None else None
    end = datetime.fromtimestamp(end_ms / 1000, tz=now.tzinfo) if end_ms is not None else None
    _check_points(start, end, boundary)
    return millis_to_date(start_ms, now.tzinfo), millis_to_date(end_ms, now.tzinfo)


@dataclass
class DateRangeSelection:
    """Two points picked on a calendar; either may still be missing."""
    start: date | None = None
    end: date | None = None

    def select(self, day: date):
        if self.start is None or self.end is not None or day < self.start:
            self.start, self.end = day, None
        else:
            self.end = day

    def contains(self, day: date) -> bool:
        if self.start is None:
            return False
        if self.end is None:
            return day == self.start
        return self.start <= day <= self.end

    def confirm(self, now: datetime, tolerance: timedelta = timedelta(0)):
        boundary = earliest_allowed(now, tolerance)
        tz = now.tzinfo
        start = datetime.combine(self.start, datetime.min.time(), tzinfo=tz) if self.start else None
        end = datetime.combine(self.end, datetime.min.time(), tzinfo=tz) if self.end else None
        _check_points(start, end, boundary)
        return self.start, self.end

    def reset(self):
        self.start = self.end = None
