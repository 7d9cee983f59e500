"""Accrual periods for salary payments.

Which days a payment compensates depends only on the month and the
nominal payment day, never on the resolved payment date:

    month  day  rule                period
    12     26   DECEMBER_EARLY      Dec 1 - Dec 19
    1      14   JANUARY_CARRYOVER   Dec 20 - Dec 31 of the prior year
    12     14   DECEMBER_MID_MONTH  Nov 16 - Nov 30
    other  14   MID_MONTH_STANDARD  16th - last day of the previous month
    other  any  STANDARD            1st - 15th of the month

The daily rate divides the monthly salary by the working days of the whole
month containing the period start, not by the working days of the period
itself. A 16th-31st period is paid at the same daily rate as 1st-15th of
that month.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, Tuple

from .vacations import count_working_days
from .workdays import WorkingDayCache


class PeriodRule(str, Enum):
    STANDARD = "standard"
    DECEMBER_EARLY = "december_early"
    JANUARY_CARRYOVER = "january_carryover"
    DECEMBER_MID_MONTH = "december_mid_month"
    MID_MONTH_STANDARD = "mid_month_standard"


MID_MONTH_PAYMENT_DAY = 14

_SPECIAL_RULES: Dict[Tuple[int, int], PeriodRule] = {
    (12, 26): PeriodRule.DECEMBER_EARLY,
    (1, 14): PeriodRule.JANUARY_CARRYOVER,
    (12, 14): PeriodRule.DECEMBER_MID_MONTH,
}


def _previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _standard(year: int, month: int) -> Tuple[date, date]:
    return date(year, month, 1), date(year, month, 15)


def _december_early(year: int, month: int) -> Tuple[date, date]:
    return date(year, 12, 1), date(year, 12, 19)


def _january_carryover(year: int, month: int) -> Tuple[date, date]:
    return date(year - 1, 12, 20), date(year - 1, 12, 31)


def _december_mid_month(year: int, month: int) -> Tuple[date, date]:
    return date(year, 11, 16), date(year, 11, 30)


def _mid_month_standard(year: int, month: int) -> Tuple[date, date]:
    prev_year, prev_month = _previous_month(year, month)
    return date(prev_year, prev_month, 16), _month_end(prev_year, prev_month)


PERIOD_BOUNDS: Dict[PeriodRule, Callable[[int, int], Tuple[date, date]]] = {
    PeriodRule.STANDARD: _standard,
    PeriodRule.DECEMBER_EARLY: _december_early,
    PeriodRule.JANUARY_CARRYOVER: _january_carryover,
    PeriodRule.DECEMBER_MID_MONTH: _december_mid_month,
    PeriodRule.MID_MONTH_STANDARD: _mid_month_standard,
}


def rule_for(month: int, payment_day: int) -> PeriodRule:
    """Pick the accrual rule for a nominal payment day in a month."""
    rule = _SPECIAL_RULES.get((month, payment_day))
    if rule is not None:
        return rule
    if payment_day == MID_MONTH_PAYMENT_DAY:
        return PeriodRule.MID_MONTH_STANDARD
    return PeriodRule.STANDARD


def period_bounds(year: int, month: int, payment_day: int) -> Tuple[date, date]:
    """Inclusive (start, end) of the period paid on payment_day of the month."""
    return PERIOD_BOUNDS[rule_for(month, payment_day)](year, month)


def daily_rate(monthly_salary: float, total_working_days: int) -> float:
    """Salary per working day; 0 when the reference month has no working days."""
    if total_working_days <= 0:
        return 0
    return monthly_salary / total_working_days


@dataclass(frozen=True)
class Period:
    """Accrual period of one payment."""

    start: date
    end: date
    total_working_days: int  # working days in the whole month of `start`
    rule: PeriodRule


class PeriodCalculator:
    """Derives accrual periods and their daily-rate divisor."""

    def __init__(self, cache: WorkingDayCache):
        self.cache = cache

    async def period_for(self, year: int, month: int, payment_day: int) -> Period:
        rule = rule_for(month, payment_day)
        start, end = PERIOD_BOUNDS[rule](year, month)
        total = await count_working_days(
            self.cache,
            date(start.year, start.month, 1),
            _month_end(start.year, start.month),
        )
        return Period(start=start, end=end, total_working_days=total, rule=rule)
