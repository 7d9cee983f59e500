"""Vacation CLI commands for Salary Calendar.

Parses vacation dates/ranges from text or files and shows the normalized result.
"""

import json
from typing import List, Optional, Sequence

import click
from rich.console import Console

from salarycal.sdk import (
    VacationRange,
    parse_text,
    read_vacation_file,
    UploadRejectedError,
)

from .renderers.schedule_renderer import render_vacations


NO_VACATIONS_MESSAGE = (
    "Could not parse any vacation entries. "
    "Use DD.MM.YYYY, DD.MM.YYYY-DD.MM.YYYY, DD.MM, DDMMYYYY or DDMM, one per line."
)


def resolve_vacations(
    text: Optional[str] = None,
    file_path: Optional[str] = None,
    profile_vacations: Sequence[str] = (),
) -> List[VacationRange]:
    """Pick vacations from a file, inline text, or the profile (in that order).

    Raises:
        click.ClickException: If a source was given but nothing could be parsed
    """
    if file_path:
        try:
            vacations = read_vacation_file(file_path)
        except UploadRejectedError as e:
            raise click.ClickException(str(e))
        except OSError as e:
            raise click.ClickException(f"Cannot read vacation file {file_path}: {e}")
    elif text:
        vacations = parse_text(text.replace(";", "\n"))
    elif profile_vacations:
        vacations = parse_text("\n".join(profile_vacations))
    else:
        return []

    if not vacations:
        raise click.ClickException(NO_VACATIONS_MESSAGE)
    return vacations


@click.group()
def vacations():
    """Parse and check vacation dates."""
    pass


@vacations.command("parse")
@click.argument("text", required=False)
@click.option("--file", "-f", "file_path", type=click.Path(exists=True, dir_okay=False),
              help="Vacation file (.csv, .txt, .text), at most 1 MB.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def vacations_parse(text: Optional[str], file_path: Optional[str], output_format: str):
    """Parse vacation dates from TEXT or a file.

    Separate entries in TEXT with newlines or semicolons.

    Examples:
        salary-calendar vacations parse "01.07.2026-14.07.2026; 04.11"
        salary-calendar vacations parse --file vacations.csv --format json
    """
    if not text and not file_path:
        raise click.UsageError("Provide vacation TEXT or --file.")

    parsed = resolve_vacations(text=text, file_path=file_path)

    if output_format == "json":
        click.echo(json.dumps([v.to_dict() for v in parsed], indent=2))
        return

    render_vacations(Console(), parsed)
