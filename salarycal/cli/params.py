"""Click parameter types for salary-calendar commands."""

import re
from typing import Optional

import click

from salarycal.sdk import MAX_SALARY_AMOUNT


_NUMBER_PATTERN = re.compile(r"\d[\d\s]*(?:[.,]\d+)?")


def parse_salary_amount(text: Optional[str]) -> Optional[int]:
    """Parse a salary amount with optional shorthand multipliers.

    Millions: "1.5кк", "2 млн", "1,5 миллиона", "1.5m"
    Thousands: "150к", "150k", "150 тыс", "150 тысяч"
    Plain numbers may use spaces as thousands separators: "150 000".

    Returns:
        Amount in whole currency units, or None if unparseable, not
        positive, or above MAX_SALARY_AMOUNT
    """
    if not text:
        return None

    lowered = text.lower().strip()
    multiplier = 1
    processed = lowered

    # "кк" must be checked before "к"
    if "кк" in lowered:
        multiplier = 1_000_000
        processed = processed.replace("кк", "")
    elif "млн" in lowered or "миллион" in lowered:
        multiplier = 1_000_000
        processed = re.sub(r"млн\.?|миллион[а-я]*", "", processed)
    elif re.search(r"\d+\s*m\s*$", lowered):
        multiplier = 1_000_000
        processed = re.sub(r"m\s*$", "", processed)
    elif "к" in lowered:
        multiplier = 1_000
        processed = processed.replace("к", "")
    elif re.search(r"\d+\s*k\s*$", lowered):
        multiplier = 1_000
        processed = re.sub(r"k\s*$", "", processed)
    elif "тыс" in lowered:
        multiplier = 1_000
        processed = re.sub(r"тыс\.?|тысяч[а-я]*", "", processed)

    match = _NUMBER_PATTERN.search(processed)
    if not match:
        return None

    number = float(re.sub(r"\s", "", match.group(0)).replace(",", "."))
    amount = int(number * multiplier + 0.5)
    if amount <= 0 or amount > MAX_SALARY_AMOUNT:
        return None
    return amount


class SalaryAmount(click.ParamType):
    """Monthly salary accepting shorthand such as 150к or 1.5m."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        amount = parse_salary_amount(str(value))
        if amount is None:
            self.fail(
                f"'{value}' is not a salary amount between 1 and {MAX_SALARY_AMOUNT:,}",
                param,
                ctx,
            )
        return amount


SALARY_AMOUNT = SalaryAmount()
