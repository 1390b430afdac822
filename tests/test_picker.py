from bookingsystem.picker import DateRangeSelection, validate_millis, START_IN_PAST, END_IN_PAST, MISSING_RANGE
from bookingsystem.exceptions import SelectionRejected
from datetime import date, datetime, time, timedelta, timezone
import pytest

NOW = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

def date_to_millis(d, tz):
    return int(datetime.combine(d, time.min, tzinfo=tz).timestamp() * 1000)

def test_select_sequence():
    sel = DateRangeSelection()
    sel.select(date(2024,6,3))
    assert (sel.start, sel.end) == (date(2024,6,3), None)
    sel.select(date(2024,6,5))
    assert (sel.start, sel.end) == (date(2024,6,3), date(2024,6,5))
    # a third tap starts over
    sel.select(date(2024,6,10))
    assert (sel.start, sel.end) == (date(2024,6,10), None)
    # tapping before the start moves the start
    sel.select(date(2024,6,8))
    assert (sel.start, sel.end) == (date(2024,6,8), None)
    sel.select(date(2024,6,8))
    assert (sel.start, sel.end) == (date(2024,6,8), date(2024,6,8))

def test_confirm_today_is_allowed():
    sel = DateRangeSelection(date(2024,6,1), date(2024,6,2))
    assert sel.confirm(NOW) == (date(2024,6,1), date(2024,6,2))

def test_confirm_requires_both_points():
    with pytest.raises(SelectionRejected) as exc:
        DateRangeSelection(date(2024,6,1)).confirm(NOW)
    assert exc.value.message == MISSING_RANGE

def test_confirm_rejects_past_start():
    sel = DateRangeSelection(date(2024,5,31), date(2024,6,2))
    with pytest.raises(SelectionRejected) as exc:
        sel.confirm(NOW)
    assert exc.value.message == START_IN_PAST
    # nothing is reset on rejection
    assert sel.start == date(2024,5,31)

def test_confirm_tolerance():
    sel = DateRangeSelection(date(2024,5,31), date(2024,6,2))
    assert sel.confirm(NOW, tolerance=timedelta(days=1)) == (date(2024,5,31), date(2024,6,2))

def test_validate_millis():
    start = date_to_millis(date(2024,6,1), timezone.utc)
    end = date_to_millis(date(2024,6,4), timezone.utc)
    assert validate_millis(start, end, NOW, timezone.utc) == (date(2024,6,1), date(2024,6,4))

def test_validate_millis_rejects():
    start = date_to_millis(date(2024,6,1), timezone.utc)
    past = start - 60 * 60 * 1000
    with pytest.raises(SelectionRejected) as exc:
        validate_millis(past, start, NOW, timezone.utc)
    assert exc.value.message == START_IN_PAST
    with pytest.raises(SelectionRejected) as exc:
        validate_millis(start, past, NOW, timezone.utc)
    assert exc.value.message == END_IN_PAST
    with pytest.raises(SelectionRejected) as exc:
        validate_millis(None, start, NOW, timezone.utc)
    assert exc.value.message == MISSING_RANGE

def test_validate_millis_tolerance_window():
    start = date_to_millis(date(2024,6,1), timezone.utc) - 30 * 60 * 1000
    end = date_to_millis(date(2024,6,2), timezone.utc)
    arrival, departure = validate_millis(start, end, NOW, timezone.utc, tolerance=timedelta(hours=1))
    assert arrival == date(2024,5,31)
    assert departure == date(2024,6,2)
