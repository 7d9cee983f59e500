"""Settings CLI commands for Salary Calendar.

Manages settings.json - calendar service location and timeout, profile path.
"""

import click
from pydantic import ValidationError

from salarycal.sdk import (
    load_settings,
    save_settings,
    set_setting,
    get_settings_path,
    get_effective_settings,
    SettingsSchema,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - provider_url: production calendar service (default https://isdayoff.ru)
    - provider_timeout: seconds per calendar request
    - profile: path to profile.yaml
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their effective values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    try:
        effective = get_effective_settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid settings in {settings_path}:\n{e}")

    click.echo("Effective settings:")
    for key, value in effective.model_dump().items():
        source = "" if key in current else " (default)"
        click.echo(f"  {key}: {value}{source}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(SettingsSchema.model_fields)))
@click.argument("value")
def settings_set(key: str, value: str):
    """Set a setting value.

    Examples:
        salary-calendar settings set provider_timeout 5
        salary-calendar settings set profile ~/salary/profile.yaml
    """
    try:
        path = set_setting(key, value)
    except ValidationError as e:
        raise click.ClickException(f"Invalid value for {key}: {e.errors()[0]['msg']}")

    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key: str):
    """Remove a setting, reverting to its default."""
    current = load_settings()
    if key not in current:
        click.echo(f"{key} was not set.")
        return

    del current[key]
    save_settings(current)
    click.echo(f"Cleared {key}.")
