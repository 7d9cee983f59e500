"""Rich renderer for salary schedules.

Transforms SDK results into formatted Rich tables.
"""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from salarycal.sdk import HourlyRate, SalaryEvent, VacationRange


def format_amount(amount: float, decimals: int = 0) -> str:
    """Format with spaces between thousands: 150 000, 937.50."""
    return f"{amount:,.{decimals}f}".replace(",", " ")


def format_date(value) -> str:
    return value.strftime("%d.%m.%Y")


def render_schedule(
    console: Console,
    events: List[SalaryEvent],
    monthly_salary: int,
    payment_days: Sequence[int],
    vacations: Sequence[VacationRange],
    hourly: Optional[HourlyRate] = None,
) -> None:
    """Render an upcoming salary schedule.

    Args:
        console: Rich Console instance
        events: SDK output from SalaryScheduleGenerator.generate()
        monthly_salary: Salary the schedule was computed for
        payment_days: Nominal payment days used
        vacations: Vacation ranges taken into account
        hourly: Optional current-month hourly rate
    """
    _render_summary(console, monthly_salary, payment_days, vacations)

    table = Table(box=box.SIMPLE_HEAVY, title="Upcoming salary payments")
    table.add_column("Date")
    table.add_column("Amount", justify="right", style="bold green")
    table.add_column("Period")
    table.add_column("Worked", justify="right")
    table.add_column("Month days", justify="right", style="dim")

    for event in events:
        worked = f"{event.worked_days}"
        if event.vacation_days_deducted > 0:
            worked += f" [yellow](-{event.vacation_days_deducted} vacation)[/yellow]"
        table.add_row(
            format_date(event.date),
            format_amount(event.amount),
            f"{format_date(event.period_start)} - {format_date(event.period_end)}",
            worked,
            str(event.total_days),
        )

    console.print(table)

    if hourly is not None:
        render_hourly_rate(console, hourly)


def _render_summary(
    console: Console,
    monthly_salary: int,
    payment_days: Sequence[int],
    vacations: Sequence[VacationRange],
) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Salary", f"{format_amount(monthly_salary)} / month")
    table.add_row("Payment days", ", ".join(str(d) for d in payment_days))
    if vacations:
        table.add_row("Vacations", ", ".join(v.format() for v in vacations))

    console.print(Panel(table, title="Summary", border_style="dim"))


def render_hourly_rate(console: Console, hourly: HourlyRate) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")
    table.add_row("Working days", str(hourly.working_days))
    table.add_row("Hourly rate", format_amount(hourly.hourly, 2))
    table.add_row("Overtime rate", format_amount(hourly.overtime, 2))
    console.print(Panel(
        table,
        title=f"Rate for {hourly.month:02d}.{hourly.year}",
        border_style="cyan",
    ))


def render_vacations(console: Console, vacations: Sequence[VacationRange]) -> None:
    table = Table(box=box.SIMPLE)
    table.add_column("Vacation")
    table.add_column("Days", justify="right")
    for vacation in vacations:
        table.add_row(vacation.format(), str(vacation.days))
    console.print(table)
