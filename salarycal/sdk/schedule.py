"""Upcoming salary schedule.

SDK layer - pure logic over the working-day cache. No CLI or presentation.

For every nominal payment day in the coming months:
1. Resolve the concrete payment date (weekends/holidays roll back)
2. Skip payments on or before today
3. Find the accrual period and its month's working days (daily-rate divisor)
4. Count worked days in the period, with and without vacations
5. Amount = daily rate x worked days, rounded half up, capped at MAX_SALARY_AMOUNT

Usage:
    cache = WorkingDayCache(IsDayOffProvider())
    events = await SalaryScheduleGenerator(cache).generate(150000)
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .payment_dates import DEFAULT_PAYMENT_DAYS, PaymentDateResolver, payment_days_for_month
from .periods import PeriodCalculator, daily_rate
from .vacations import VacationRange, count_working_days, normalize_vacations
from .workdays import WorkingDayCache

logger = logging.getLogger(__name__)

MAX_SALARY_AMOUNT = 5_000_000
DEFAULT_COUNT = 5
# Months scanned per requested payment; leaves room for skipped (already paid) days.
MONTHS_BUFFER_MULTIPLIER = 2

HOURS_PER_WORKING_DAY = 8
OVERTIME_MULTIPLIER = 1.5


@dataclass(frozen=True)
class SalaryEvent:
    """One upcoming salary payment."""

    date: date
    amount: int
    worked_days: int
    total_days: int  # working days in the period's reference month
    period_start: date
    period_end: date
    vacation_days_deducted: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "amount": self.amount,
            "worked_days": self.worked_days,
            "total_days": self.total_days,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "vacation_days_deducted": self.vacation_days_deducted,
        }


@dataclass(frozen=True)
class HourlyRate:
    """Hourly and overtime rate for a month's salary."""

    year: int
    month: int
    working_days: int
    hourly: float
    overtime: float


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cap_amount(amount: int) -> int:
    """Clamp a computed amount to the salary ceiling."""
    return min(amount, MAX_SALARY_AMOUNT)


def validate_salary(monthly_salary: int) -> None:
    if isinstance(monthly_salary, bool) or not isinstance(monthly_salary, (int, float)):
        raise TypeError(f"Monthly salary must be a number, got {type(monthly_salary).__name__}")
    if not 0 < monthly_salary <= MAX_SALARY_AMOUNT:
        raise ValueError(
            f"Monthly salary must be between 1 and {MAX_SALARY_AMOUNT:,}, got {monthly_salary}"
        )


def candidate_months(today: date, count: int) -> List[Tuple[int, int]]:
    """Distinct (year, month) pairs from today's month, count x buffer months ahead."""
    months: List[Tuple[int, int]] = []
    seen = set()
    for offset in range(count * MONTHS_BUFFER_MULTIPLIER):
        index = today.month - 1 + offset
        key = (today.year + index // 12, index % 12 + 1)
        if key not in seen:
            seen.add(key)
            months.append(key)
    return months


class SalaryScheduleGenerator:
    """Produces the next salary payments for a monthly salary.

    Shares its WorkingDayCache with the resolver and period calculator, so
    calendar data fetched for one schedule is reused by later calls.
    """

    def __init__(self, cache: WorkingDayCache):
        self.cache = cache
        self.resolver = PaymentDateResolver(cache)
        self.periods = PeriodCalculator(cache)

    async def prefetch(self, months: List[Tuple[int, int]]) -> None:
        """Batch-load the calendar from the month before the first through the last."""
        if not months:
            return
        first_year, first_month = months[0]
        start = date(first_year, first_month, 1) - timedelta(days=1)
        start = start.replace(day=1)
        last_year, last_month = months[-1]
        end = date(last_year, last_month, calendar.monthrange(last_year, last_month)[1])
        await self.cache.load_range(start, end)

    async def generate(
        self,
        monthly_salary: int,
        payment_days: Optional[Iterable[int]] = None,
        count: int = DEFAULT_COUNT,
        vacations: Optional[Iterable[Any]] = None,
        *,
        today: Optional[date] = None,
    ) -> List[SalaryEvent]:
        """Compute the next `count` salary payments after today.

        Args:
            monthly_salary: Salary per month (1 .. MAX_SALARY_AMOUNT)
            payment_days: Nominal payment days of month (default 14 and 29)
            count: Number of payments to return
            vacations: Vacation ranges; see normalize_vacations() for accepted shapes
            today: Reference date, defaults to the current date

        Returns:
            Up to `count` SalaryEvent objects in payment date order
        """
        validate_salary(monthly_salary)
        if count < 1:
            raise ValueError(f"Count must be positive, got {count}")

        today = today or date.today()
        days = list(payment_days) if payment_days else list(DEFAULT_PAYMENT_DAYS)
        vacation_ranges: List[VacationRange] = normalize_vacations(vacations)

        months = candidate_months(today, count)
        calls_before = self.cache.provider_calls
        await self.prefetch(months)
        logger.debug(
            f"Prefetched {len(months)} month(s) with {self.cache.provider_calls - calls_before} provider call(s)"
        )

        events: List[SalaryEvent] = []
        for year, month in months:
            if len(events) >= count:
                break

            for payment_day in payment_days_for_month(month, days):
                if len(events) >= count:
                    break

                payment_date = await self.resolver.resolve(year, month, payment_day)
                if payment_date <= today:
                    continue

                period = await self.periods.period_for(year, month, payment_day)
                rate = daily_rate(monthly_salary, period.total_working_days)

                worked = await count_working_days(self.cache, period.start, period.end, vacation_ranges)
                without_vacations = await count_working_days(self.cache, period.start, period.end)

                events.append(SalaryEvent(
                    date=payment_date,
                    amount=cap_amount(round_half_up(rate * worked)),
                    worked_days=worked,
                    total_days=period.total_working_days,
                    period_start=period.start,
                    period_end=period.end,
                    vacation_days_deducted=without_vacations - worked,
                ))

        logger.debug(f"Generated {len(events)} salary event(s), cache holds {len(self.cache)} day(s)")
        return events[:count]

    async def hourly_rate(self, monthly_salary: int, *, today: Optional[date] = None) -> Optional[HourlyRate]:
        """Hourly and overtime rate for the current month.

        Returns:
            HourlyRate, or None if the month has no working days
        """
        validate_salary(monthly_salary)
        today = today or date.today()
        first = today.replace(day=1)
        last = today.replace(day=calendar.monthrange(today.year, today.month)[1])

        await self.cache.load_range(first, last)
        working_days = await count_working_days(self.cache, first, last)
        if working_days <= 0:
            return None

        hourly = monthly_salary / working_days / HOURS_PER_WORKING_DAY
        return HourlyRate(
            year=today.year,
            month=today.month,
            working_days=working_days,
            hourly=hourly,
            overtime=hourly * OVERTIME_MULTIPLIER,
        )
