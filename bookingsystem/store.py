# bookingsystem/store.py - in-memory store of accepted bookings
import logging
import threading
from datetime import date

from bookingsystem.exceptions import InvalidInput, InvalidRange, NotFound, OverlapConflict
from bookingsystem.models import BookingEntry
from bookingsystem.utils import ranges_overlap

logger = logging.getLogger(__name__)


class BookingStore:
    """Ordered collection of validated bookings.

    One instance is owned by the running application and handed to every
    collaborator that needs it. `clock` supplies "today" when a caller does
    not pass it explicitly. With `allow_overlap=False` a booking whose dates
    touch any stored booking is refused.
    """

    def __init__(self, allow_overlap: bool = True, clock=date.today):
        self.allow_overlap = allow_overlap
        self._clock = clock
        self._entries: list[BookingEntry] = []
        self._lock = threading.Lock()

    def add_entry(self, name, arrival_date, departure_date, today: date | None = None) -> BookingEntry:
        if name is None or not name.strip():
            logger.info('Rejected booking for %r: name required', name)
            raise InvalidInput('name required')
        if arrival_date is None or departure_date is None:
            logger.info('Rejected booking for %r: date range required', name)
            raise InvalidInput('date range required')
        if arrival_date > departure_date:
            logger.info('Rejected booking for %r: arrival %s after departure %s', name, arrival_date, departure_date)
            raise InvalidRange('arrival after departure')
        if today is None:
            today = self._clock()
        if arrival_date < today or departure_date < today:
            logger.info('Rejected booking for %r: %s - %s before %s', name, arrival_date, departure_date, today)
            raise InvalidRange('date in the past')

        entry = BookingEntry(name.strip(), arrival_date, departure_date)
        with self._lock:
            if not self.allow_overlap:
                for other in self._entries:
                    if ranges_overlap(entry.arrival_date, entry.departure_date, other.arrival_date, other.departure_date):
                        logger.info('Rejected %s: overlaps %s', entry, other)
                        raise OverlapConflict('dates overlap an existing booking')
            self._entries.append(entry)
        logger.info('Added booking %s', entry)
        return entry

    def add(self, entry: BookingEntry, today: date | None = None) -> BookingEntry:
        return self.add_entry(entry.name, entry.arrival_date, entry.departure_date, today=today)

    def list_entries(self) -> tuple:
        with self._lock:
            return tuple(self._entries)

    def remove_entry(self, entry: BookingEntry) -> BookingEntry:
        with self._lock:
            try:
                idx = self._entries.index(entry)
            except ValueError:
                raise NotFound('booking not found') from None
            removed = self._entries.pop(idx)
        logger.info('Removed booking %s', removed)
        return removed

    def clear(self):
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info('Store cleared (%d bookings discarded)', count)

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __iter__(self):
        return iter(self.list_entries())
