"""Profile CLI commands for Salary Calendar.

Manages user profile data (profile.yaml) - salary, payment days, vacations.
"""

import click
import yaml
from pydantic import ValidationError

from salarycal.sdk import (
    get_profile_path,
    load_profile,
    save_profile,
    ProfileSchema,
    parse_text,
)

from .params import SALARY_AMOUNT


def _validate_profile_data(profile_data: dict, path) -> ProfileSchema:
    """Validate profile contents, raising a readable ClickException on errors."""
    try:
        return ProfileSchema.model_validate(profile_data)
    except ValidationError as e:
        lines = [f"Profile validation failed for {path}:"]
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            lines.append(f"  ! {location}: {error['msg']}")
        raise click.ClickException("\n".join(lines))


@click.group()
def profile():
    """Manage your profile (profile.yaml)."""
    pass


@profile.command("show")
def profile_show():
    """Show profile location, contents and parsed vacations."""
    path = get_profile_path()
    click.echo(f"Profile path: {path}")

    if not path.exists():
        click.echo("Profile not found. Create one with: salary-calendar profile init")
        return

    try:
        profile_data = load_profile(require_exists=True)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in {path}: {e}")

    validated = _validate_profile_data(profile_data, path)

    click.echo()
    click.echo(yaml.dump(profile_data, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip())

    if validated.vacations:
        parsed = parse_text("\n".join(validated.vacations)) or []
        click.echo()
        click.echo(f"Vacations: {len(parsed)} of {len(validated.vacations)} entries parsed")
        for vacation in parsed:
            click.echo(f"  + {vacation.format()}")


@profile.command("init")
@click.option("--salary", type=SALARY_AMOUNT, help="Monthly salary, e.g. 150000 or 150к.")
@click.option("--payment-day", "payment_days", type=click.IntRange(1, 31), multiple=True,
              help="Nominal payment day of month (repeatable). Default: 14 and 29.")
@click.option("--force", is_flag=True, help="Overwrite an existing profile.")
def profile_init(salary, payment_days, force):
    """Create profile.yaml with salary and payment days."""
    path = get_profile_path()
    if path.exists() and not force:
        raise click.ClickException(f"Profile already exists: {path}\nUse --force to overwrite.")

    data = {}
    if salary is not None:
        data["monthly_salary"] = salary
    if payment_days:
        data["payment_days"] = list(payment_days)

    validated = _validate_profile_data(data, path)
    profile_data = validated.model_dump(exclude_none=True)

    saved = save_profile(profile_data, path)
    click.echo(f"Created profile: {saved}")
