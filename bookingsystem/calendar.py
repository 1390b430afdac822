# bookingsystem/calendar.py - Inline date-range calendar for Telegram using inline keyboards
from datetime import date
import calendar

from bookingsystem.utils import month_shift

# returns keyboard as list of lists for InlineKeyboardMarkup

def build_month_keyboard(year: int, month: int, prefix: str, today: date | None = None, selection=None):
    cal = calendar.Calendar()
    month_days = cal.monthdayscalendar(year, month)
    kb = []
    # week day names
    kb.append([{'text': d, 'callback_data': 'noop'} for d in ['Mo','Tu','We','Th','Fr','Sa','Su']])
    for week in month_days:
        row = []
        for d in week:
            if d == 0:
                row.append({'text': ' ', 'callback_data': 'noop'})
                continue
            day = date(year, month, d)
            if today is not None and day < today:
                # past days cannot be picked
                row.append({'text': '·', 'callback_data': 'noop'})
            elif selection is not None and selection.contains(day):
                # an open range shows where it starts
                text = f"[{d}…]" if selection.end is None else f"[{d}]"
                row.append({'text': text, 'callback_data': f"{prefix}:day:{day.isoformat()}"})
            else:
                row.append({'text': str(d), 'callback_data': f"{prefix}:day:{day.isoformat()}"})
        kb.append(row)
    # prev / next row
    prev_year, prev_month = month_shift(year, month, -1)
    next_year, next_month = month_shift(year, month, 1)
    kb.append([
        {'text': '<', 'callback_data': f"{prefix}:month:{prev_year}-{prev_month:02d}"},
        {'text': f"{calendar.month_name[month]} {year}", 'callback_data': 'noop'},
        {'text': '>', 'callback_data': f"{prefix}:month:{next_year}-{next_month:02d}"}
    ])
    kb.append([
        {'text': 'Cancel', 'callback_data': f"{prefix}:cancel:"},
        {'text': 'OK', 'callback_data': f"{prefix}:ok:"}
    ])
    return kb

def parse_callback(data: str):
    """Split callback data into (prefix, action, value)."""
    parts = data.split(':', 2)
    if len(parts) != 3:
        raise ValueError(f"unexpected callback data: {data!r}")
    return parts[0], parts[1], parts[2]
