# bookingsystem/models.py - booking entry value type
from dataclasses import dataclass
from datetime import date

from bookingsystem.utils import days_between, format_date, parse_yyyy_mm_dd


@dataclass(frozen=True)
class BookingEntry:
    name: str
    arrival_date: date
    departure_date: date

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return days_between(self.arrival_date, self.departure_date)

    def display(self) -> str:
        return f"{self.name}: {format_date(self.arrival_date)} - {format_date(self.departure_date)}"

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'arrival_date': self.arrival_date.isoformat(),
            'departure_date': self.departure_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'BookingEntry':
        arrival = parse_yyyy_mm_dd(data['arrival_date'])
        departure = parse_yyyy_mm_dd(data['departure_date'])
        if arrival is None or departure is None:
            raise ValueError(f"bad date in booking record: {data!r}")
        return cls(data['name'], arrival, departure)
