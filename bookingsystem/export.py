# bookingsystem/export.py - CSV export and JSON snapshot of bookings
import csv
import io
import json

from bookingsystem.models import BookingEntry

CSV_HEADER = ['index', 'name', 'arrival_date', 'departure_date', 'days']

def bookings_csv(entries) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_HEADER)
    for i, e in enumerate(entries, start=1):
        writer.writerow([i, e.name, e.arrival_date.isoformat(), e.departure_date.isoformat(), e.days])
    return buf.getvalue()

def dump_entries(entries) -> str:
    return json.dumps([e.to_dict() for e in entries])

def load_entries(text: str) -> list:
    return [BookingEntry.from_dict(item) for item in json.loads(text)]
