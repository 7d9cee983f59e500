"""Vacation ranges and working-day counting.

A vacation day is never a working day, whatever the production calendar
says. Payment dates ignore vacations entirely; only worked-day counts
for accrual periods take them into account.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Sequence

from .workdays import WorkingDayCache, normalize_date


DISPLAY_DATE_FORMAT = "%d.%m.%Y"


@dataclass(frozen=True, order=True)
class VacationRange:
    """Inclusive span of vacation days. start <= end always holds."""

    start: date
    end: date

    def __post_init__(self):
        # Calendar-day precision; datetime endpoints lose their time of day.
        object.__setattr__(self, "start", normalize_date(self.start))
        object.__setattr__(self, "end", normalize_date(self.end))
        if self.start > self.end:
            raise ValueError(f"Vacation start {self.start} is after end {self.end}")

    @classmethod
    def of(cls, start, end=None) -> "VacationRange":
        """Build a range from two dates in any order (end defaults to start)."""
        start = normalize_date(start)
        end = start if end is None else normalize_date(end)
        if start > end:
            start, end = end, start
        return cls(start=start, end=end)

    def contains(self, day: date) -> bool:
        return self.start <= normalize_date(day) <= self.end

    @property
    def days(self) -> int:
        """Calendar days in the range, weekends and holidays included."""
        return (self.end - self.start).days + 1

    def format(self) -> str:
        """Render as DD.MM.YYYY, or DD.MM.YYYY-DD.MM.YYYY for multi-day ranges."""
        start = self.start.strftime(DISPLAY_DATE_FORMAT)
        if self.start == self.end:
            return start
        return f"{start}-{self.end.strftime(DISPLAY_DATE_FORMAT)}"

    def to_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def is_vacation_day(day, vacations: Optional[Iterable[VacationRange]]) -> bool:
    """True if the day falls inside any of the ranges (bounds inclusive)."""
    if not vacations:
        return False
    return any(v.contains(day) for v in vacations)


def _coerce_date(value: Any) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    if isinstance(value, (date, datetime)):
        return normalize_date(value)
    raise TypeError(f"Cannot interpret {value!r} as a date")


def normalize_vacations(vacations: Optional[Iterable[Any]]) -> List[VacationRange]:
    """Coerce vacation inputs to VacationRange at calendar-day precision.

    Accepts VacationRange objects, (start, end) pairs, dicts with
    start/end (or start_date/end_date) keys, and single dates. Dates may be
    date, datetime or ISO strings.
    """
    result: List[VacationRange] = []
    for item in vacations or []:
        if isinstance(item, VacationRange):
            result.append(item)
        elif isinstance(item, dict):
            start = item.get("start", item.get("start_date"))
            end = item.get("end", item.get("end_date", start))
            result.append(VacationRange.of(_coerce_date(start), _coerce_date(end)))
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            result.append(VacationRange.of(_coerce_date(item[0]), _coerce_date(item[1])))
        else:
            result.append(VacationRange.of(_coerce_date(item)))
    return result


async def count_working_days(
    cache: WorkingDayCache,
    start,
    end,
    vacations: Optional[Sequence[VacationRange]] = None,
) -> int:
    """Count working days in [start, end], treating vacation days as days off."""
    current = normalize_date(start)
    end = normalize_date(end)
    count = 0
    while current <= end:
        if not is_vacation_day(current, vacations) and await cache.is_working(current):
            count += 1
        current += timedelta(days=1)
    return count
