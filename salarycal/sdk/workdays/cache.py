"""Working-day cache backed by a production calendar provider.

One WorkingDayCache is created per run and handed to every component that
needs day types. Entries are never evicted: once a day is known (from the
provider or from the weekend fallback) it stays known for the whole run.

Lookups go through two layers:
1. _provider_lookup() - single-day provider call, None on failure
2. weekend_heuristic() - Saturday/Sunday are days off, everything else works

load_range() should be called before any per-day counting so that those
lookups are cache hits and the provider sees one request per month.
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Dict, Optional, Set, Tuple, Union

from .provider import CalendarProvider, ProviderError

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

# Backward walks stop trusting the calendar after this many days off in a row.
MAX_LOOKBACK_DAYS = 31


def normalize_date(value: DateLike) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def weekend_heuristic(day: date) -> bool:
    """Working unless the day is a Saturday or Sunday."""
    return day.weekday() < 5


def iter_months(start: date, end: date):
    """Yield (year, month) pairs from start's month through end's month."""
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1


class WorkingDayCache:
    """Memoizes working-day flags per calendar date."""

    def __init__(self, provider: CalendarProvider):
        self.provider = provider
        self._days: Dict[date, bool] = {}
        self._months: Set[Tuple[int, int]] = set()
        self.provider_calls = 0

    def __contains__(self, day: DateLike) -> bool:
        return normalize_date(day) in self._days

    def __len__(self) -> int:
        return len(self._days)

    def _store(self, day: date, is_working: bool) -> None:
        self._days[day] = is_working
        self._months.add((day.year, day.month))

    def has_month(self, year: int, month: int) -> bool:
        """True if at least one day of the month is cached."""
        return (year, month) in self._months

    async def load_range(self, start: DateLike, end: DateLike) -> None:
        """Prefetch every month touching [start, end], one request per month.

        Months that already have cached days are skipped. A failed month is
        logged and left for per-day lookups to resolve.
        """
        start, end = normalize_date(start), normalize_date(end)
        if start > end:
            start, end = end, start

        for year, month in iter_months(start, end):
            if self.has_month(year, month):
                continue
            try:
                self.provider_calls += 1
                flags = await self.provider.fetch_month(year, month)
            except ProviderError as e:
                logger.warning(f"Calendar load failed for {year}-{month:02d}: {e}")
                continue

            days_in_month = calendar.monthrange(year, month)[1]
            for day_num, is_working in enumerate(flags[:days_in_month], start=1):
                self._store(date(year, month, day_num), is_working)
            logger.debug(f"Loaded calendar for {year}-{month:02d} ({min(len(flags), days_in_month)} days)")

    async def _provider_lookup(self, day: date) -> Optional[bool]:
        try:
            self.provider_calls += 1
            return await self.provider.fetch_day(day)
        except ProviderError as e:
            logger.warning(f"Calendar lookup failed for {day.isoformat()}, using weekend rule: {e}")
            return None

    async def is_working(self, day: DateLike) -> bool:
        """Whether the day is a working day per the production calendar."""
        day = normalize_date(day)
        cached = self._days.get(day)
        if cached is not None:
            return cached

        result = await self._provider_lookup(day)
        if result is None:
            result = weekend_heuristic(day)
        self._store(day, result)
        return result

    async def latest_working_day(self, day: DateLike) -> date:
        """Closest working day on or before the given day.

        Gives up on the calendar after MAX_LOOKBACK_DAYS non-working days in a
        row and picks the closest weekday instead.
        """
        current = normalize_date(day)
        for _ in range(MAX_LOOKBACK_DAYS):
            if await self.is_working(current):
                return current
            current -= timedelta(days=1)

        logger.warning(
            f"No working day in the {MAX_LOOKBACK_DAYS} days up to {normalize_date(day).isoformat()}, "
            f"using weekend rule"
        )
        current = normalize_date(day)
        while not weekend_heuristic(current):
            current -= timedelta(days=1)
        return current

    async def previous_working_day(self, day: DateLike) -> date:
        """Closest working day strictly before the given day."""
        return await self.latest_working_day(normalize_date(day) - timedelta(days=1))
