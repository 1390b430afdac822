# bookingsystem/utils.py
from datetime import date, datetime, time, timedelta

DISPLAY_FORMAT = '%d.%m.%Y'

def parse_yyyy_mm_dd(text: str):
    try:
        return datetime.strptime(text.strip(), '%Y-%m-%d').date()
    except (AttributeError, ValueError):
        return None

def format_date(d: date) -> str:
    return d.strftime(DISPLAY_FORMAT)

def days_between(start, end):
    return (end - start).days + 1

def ranges_overlap(a_start, a_end, b_start, b_end) -> bool:
    """Return True if two closed date ranges overlap."""
    return (a_start <= b_end) and (a_end >= b_start)

def start_of_day(now: datetime) -> datetime:
    """Midnight of the day `now` falls on, in the same timezone as `now`."""
    return datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)

def millis_to_date(millis: int, tz=None) -> date:
    """Epoch milliseconds -> calendar date in `tz` (local zone when None)."""
    return datetime.fromtimestamp(millis / 1000, tz=tz).date()

def month_shift(year: int, month: int, delta: int):
    """Return (year, month) moved by `delta` months."""
    first = date(year, month, 1)
    if delta < 0:
        for _ in range(-delta):
            first = (first - timedelta(days=1)).replace(day=1)
    else:
        for _ in range(delta):
            first = (first.replace(day=28) + timedelta(days=8)).replace(day=1)
    return first.year, first.month
