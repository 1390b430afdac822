from bookingsystem.calendar import build_month_keyboard, parse_callback
from bookingsystem.picker import DateRangeSelection
from datetime import date
import pytest

def _day_cells(kb):
    # weekday header first, nav and action rows last
    return [cell for row in kb[1:-2] for cell in row if cell['text'].strip()]

def test_calendar_keyboard():
    kb = build_month_keyboard(2025,8,'range')
    assert isinstance(kb, list)
    # header row + weeks + nav row + action row
    assert len(kb) >= 6
    assert len(_day_cells(kb)) == 31
    assert kb[-2][0]['callback_data'] == 'range:month:2025-07'
    assert kb[-2][2]['callback_data'] == 'range:month:2025-09'
    assert [c['callback_data'] for c in kb[-1]] == ['range:cancel:', 'range:ok:']

def test_past_days_are_inert():
    kb = build_month_keyboard(2025,8,'range', today=date(2025,8,10))
    cells = _day_cells(kb)
    assert all(c['callback_data'] == 'noop' for c in cells[:9])
    assert cells[9]['callback_data'] == 'range:day:2025-08-10'

def test_selection_marked():
    sel = DateRangeSelection(date(2025,8,3), date(2025,8,5))
    kb = build_month_keyboard(2025,8,'range', selection=sel)
    marked = [c['text'] for c in _day_cells(kb) if c['text'].startswith('[')]
    assert marked == ['[3]', '[4]', '[5]']

def test_year_boundary_navigation():
    kb = build_month_keyboard(2025,12,'range')
    assert kb[-2][2]['callback_data'] == 'range:month:2026-01'

def test_parse_callback():
    assert parse_callback('range:day:2025-08-13') == ('range', 'day', '2025-08-13')
    assert parse_callback('range:ok:') == ('range', 'ok', '')
    with pytest.raises(ValueError):
        parse_callback('noop')

def test_open_start_differs_from_single_day():
    open_kb = build_month_keyboard(2025,8,'range', selection=DateRangeSelection(date(2025,8,3)))
    closed_kb = build_month_keyboard(2025,8,'range', selection=DateRangeSelection(date(2025,8,3), date(2025,8,3)))
    assert [c['text'] for c in _day_cells(open_kb) if c['text'].startswith('[')] == ['[3…]']
    assert [c['text'] for c in _day_cells(closed_kb) if c['text'].startswith('[')] == ['[3]']
