"""Salary Calendar CLI - upcoming salary payments from the command line."""

import asyncio
import json
import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional, Sequence

import click
import httpx
from pydantic import ValidationError
from rich.console import Console

from salarycal import __version__
from salarycal.sdk import (
    get_effective_profile,
    get_effective_settings,
    IsDayOffProvider,
    WeekendOnlyProvider,
    WorkingDayCache,
    SalaryScheduleGenerator,
    VacationRange,
)

from .params import SALARY_AMOUNT
from .profile_commands import profile as profile_group
from .settings_commands import settings as settings_group
from .vacations_commands import vacations as vacations_group, resolve_vacations
from .renderers.schedule_renderer import render_schedule, render_hourly_rate

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

NO_EVENTS_MESSAGE = "Could not produce any future salary events. Try again later."


@click.group()
@click.version_option(version=__version__, prog_name="salary-calendar")
def cli():
    """Salary Calendar - upcoming salary payments for a monthly salary.

    Payment dates follow the Russian production calendar: a payment day
    falling on a weekend or holiday moves to the previous working day.
    Vacation days reduce the worked days and the amount paid.

    Configuration is loaded from (in order):

    \b
    1. SALARY_CALENDAR_CONFIG_PATH environment variable
    2. ~/.config/salary-calendar/ (XDG default)
    """
    pass


cli.add_command(profile_group)
cli.add_command(settings_group)
cli.add_command(vacations_group)


def _load_profile():
    try:
        return get_effective_profile()
    except ValidationError as e:
        raise click.ClickException(f"Invalid profile: {e}")


def _load_settings():
    try:
        return get_effective_settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid settings: {e}")


def _resolve_salary(salary: Optional[int], profile) -> int:
    if salary is not None:
        return salary
    if profile.monthly_salary is not None:
        return profile.monthly_salary
    raise click.ClickException(
        "Monthly salary is required. Pass --salary or set monthly_salary in profile.yaml."
    )


@asynccontextmanager
async def _open_generator(offline: bool):
    """Schedule generator over the calendar service, or weekends only when offline."""
    if offline:
        yield SalaryScheduleGenerator(WorkingDayCache(WeekendOnlyProvider()))
        return

    settings = _load_settings()
    async with httpx.AsyncClient(timeout=settings.provider_timeout) as client:
        provider = IsDayOffProvider(settings.provider_url, settings.provider_timeout, client=client)
        yield SalaryScheduleGenerator(WorkingDayCache(provider))


async def _run_schedule(
    offline: bool,
    salary: int,
    payment_days: Sequence[int],
    count: int,
    vacations: List[VacationRange],
    with_hourly: bool,
):
    async with _open_generator(offline) as generator:
        events = await generator.generate(salary, payment_days, count, vacations)
        hourly = await generator.hourly_rate(salary) if with_hourly else None
        logger.debug(f"Calendar requests: {generator.cache.provider_calls}")
        return events, hourly


async def _run_hourly_rate(offline: bool, salary: int):
    async with _open_generator(offline) as generator:
        return await generator.hourly_rate(salary)


@cli.command("schedule")
@click.option("--salary", "-s", type=SALARY_AMOUNT,
              help="Monthly salary, e.g. 150000, '150 000', 150к, 1.5m. Default: profile.")
@click.option("--count", "-n", type=click.IntRange(1, 24), default=None,
              help="Number of upcoming payments (default: profile, or 5).")
@click.option("--payment-day", "-d", "payment_days", type=click.IntRange(1, 31), multiple=True,
              help="Nominal payment day of month (repeatable). Default: profile, or 14 and 29.")
@click.option("--vacations", "-v", "vacation_text",
              help="Vacation dates/ranges separated by newlines or semicolons.")
@click.option("--vacation-file", "-f", type=click.Path(exists=True, dir_okay=False),
              help="Vacation file (.csv, .txt, .text), at most 1 MB.")
@click.option("--offline", is_flag=True,
              help="Skip the calendar service; only weekends are days off.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def schedule(salary, count, payment_days, vacation_text, vacation_file, offline, output_format):
    """Show the next salary payments.

    Examples:
        salary-calendar schedule --salary 150к
        salary-calendar schedule -s 200000 -v "01.07.2026-14.07.2026"
        salary-calendar schedule --vacation-file vacations.csv --format json
    """
    profile = _load_profile()
    salary = _resolve_salary(salary, profile)
    days = sorted(set(payment_days)) if payment_days else profile.payment_days
    count = count or profile.count
    vacations = resolve_vacations(vacation_text, vacation_file, profile.vacations)

    events, hourly = asyncio.run(_run_schedule(
        offline, salary, days, count, vacations, with_hourly=output_format == "text",
    ))

    if not events:
        raise click.ClickException(NO_EVENTS_MESSAGE)

    if output_format == "json":
        click.echo(json.dumps([e.to_dict() for e in events], indent=2))
        return

    render_schedule(Console(), events, salary, days, vacations, hourly)


@cli.command("hourly-rate")
@click.option("--salary", "-s", type=SALARY_AMOUNT, help="Monthly salary. Default: profile.")
@click.option("--offline", is_flag=True,
              help="Skip the calendar service; only weekends are days off.")
def hourly_rate(salary, offline):
    """Show the hourly and overtime (x1.5) rate for the current month."""
    profile = _load_profile()
    salary = _resolve_salary(salary, profile)

    rate = asyncio.run(_run_hourly_rate(offline, salary))
    if rate is None:
        raise click.ClickException("The current month has no working days.")

    render_hourly_rate(Console(), rate)


def main():
    cli()


if __name__ == "__main__":
    main()
