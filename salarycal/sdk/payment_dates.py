"""Payment date resolution.

Salary is nominally paid on fixed days of month. When that day is a
weekend or holiday the money arrives on the closest earlier working day.
Vacations play no part here.
"""

import calendar
from datetime import date
from typing import Iterable, List, Tuple

from .workdays import WorkingDayCache


DEFAULT_PAYMENT_DAYS: Tuple[int, ...] = (14, 29)

# December pays the second half early, before the New Year holidays.
DECEMBER_LATE_DAY = 29
DECEMBER_SUBSTITUTE_DAY = 26


def payment_days_for_month(month: int, payment_days: Iterable[int]) -> List[int]:
    """Nominal payment days for a month, with the December 29 -> 26 swap."""
    days = list(payment_days)
    if month == 12 and DECEMBER_LATE_DAY in days:
        days = [d for d in days if d != DECEMBER_LATE_DAY]
        if DECEMBER_SUBSTITUTE_DAY not in days:
            days.append(DECEMBER_SUBSTITUTE_DAY)
    return days


async def last_working_day_of_month(cache: WorkingDayCache, year: int, month: int) -> date:
    return await cache.latest_working_day(date(year, month, calendar.monthrange(year, month)[1]))


class PaymentDateResolver:
    """Maps a nominal payment day to the date money is actually paid."""

    def __init__(self, cache: WorkingDayCache):
        self.cache = cache

    async def resolve(self, year: int, month: int, nominal_day: int) -> date:
        """Concrete payment date for (year, month, nominal_day).

        Days past the end of the month (31 in April, 30 in February) pay on
        the last working day of the month. Otherwise a non-working nominal
        day rolls back to the previous working day.
        """
        if nominal_day < 1:
            raise ValueError(f"Payment day must be positive, got {nominal_day}")

        if nominal_day > calendar.monthrange(year, month)[1]:
            return await last_working_day_of_month(self.cache, year, month)

        candidate = date(year, month, nominal_day)
        if await self.cache.is_working(candidate):
            return candidate
        return await self.cache.previous_working_day(candidate)
