"""Shared fixtures: an in-memory production calendar that records its calls."""

import calendar
from datetime import date

import pytest

from salarycal.sdk import ProviderError, WorkingDayCache


class FakeProvider:
    """Weekends plus explicit holidays are days off.

    Set fail_months / fail_days to simulate a calendar service outage.
    """

    def __init__(self, holidays=(), working_weekends=(), fail_months=False, fail_days=False):
        self.holidays = set(holidays)
        self.working_weekends = set(working_weekends)
        self.fail_months = fail_months
        self.fail_days = fail_days
        self.month_calls = []
        self.day_calls = []

    def _is_working(self, day: date) -> bool:
        if day in self.holidays:
            return False
        if day in self.working_weekends:
            return True
        return day.weekday() < 5

    async def fetch_month(self, year, month):
        self.month_calls.append((year, month))
        if self.fail_months:
            raise ProviderError("service unavailable")
        days = calendar.monthrange(year, month)[1]
        return [self._is_working(date(year, month, d)) for d in range(1, days + 1)]

    async def fetch_day(self, day):
        self.day_calls.append(day)
        if self.fail_days:
            raise ProviderError("service unavailable")
        return self._is_working(day)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def cache(provider):
    return WorkingDayCache(provider)
