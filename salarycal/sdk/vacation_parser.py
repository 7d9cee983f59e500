"""Parse vacation dates and ranges from free text and uploaded files.

Accepted date formats (year defaults to the current year):
    DD.MM.YYYY   01.07.2026
    DD.MM        01.07
    DD MM        01 07
    DDMMYYYY     01072026
    DDMM         0107

A line is one of:
    <date>-<date>     01.07.2026-14.07.2026 (spaces around the hyphen allowed)
    <date> <date>     01.07.2026 14.07.2026
    <date>            a single vacation day

Ranges given backwards are swapped. Dates before MIN_YEAR or more than
MAX_YEARS_AHEAD years past the current year are dropped. Bulk parsing never
fails on a bad line: the line is skipped and parsing continues.

CSV files carry one vacation per row, either as two cells (start, end) or
one cell (a date or a hyphenated range). A header row is skipped.
"""

import logging
import re
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Pattern, Tuple, Union

from .vacations import VacationRange

logger = logging.getLogger(__name__)

MIN_YEAR = 2020
MAX_YEARS_AHEAD = 5
MAX_VACATION_LINES = 1000
MAX_FILE_SIZE = 1024 * 1024
ALLOWED_EXTENSIONS = (".csv", ".txt", ".text")

HEADER_KEYWORDS = ("дата", "date", "начало")
HEADER_CELL_PATTERN = re.compile(r"^(дата|date|начало|start)$", re.IGNORECASE)


class ParseError(ValueError):
    """Raised when text cannot be read as a date or range."""
    pass


class VacationValidationError(ParseError):
    """Raised when a parsed date falls outside the allowed year window."""
    pass


class UploadRejectedError(ValueError):
    """Raised when an uploaded vacation file has the wrong type or size."""
    pass


# Each pattern yields (day, month, year-or-None).
_DATE_FORMATS: List[Tuple[Pattern, Callable]] = [
    (re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$"), lambda m: (m[1], m[2], m[3])),
    (re.compile(r"^(\d{1,2})\.(\d{1,2})$"), lambda m: (m[1], m[2], None)),
    (re.compile(r"^(\d{1,2})\s+(\d{1,2})$"), lambda m: (m[1], m[2], None)),
    (re.compile(r"^(\d{2})(\d{2})(\d{4})$"), lambda m: (m[1], m[2], m[3])),
    (re.compile(r"^(\d{2})(\d{2})$"), lambda m: (m[1], m[2], None)),
]


def parse_date(text: str, *, today: Optional[date] = None) -> date:
    """Parse a single date in any supported format.

    Raises:
        ParseError: If no format matches or the date does not exist (31.02)
    """
    text = text.strip()
    current_year = (today or date.today()).year

    for pattern, fields in _DATE_FORMATS:
        match = pattern.match(text)
        if not match:
            continue
        day, month, year = fields(match)
        try:
            return date(int(year) if year else current_year, int(month), int(day))
        except ValueError:
            continue

    raise ParseError(f"Invalid date format: {text!r}")


def _year_window(today: Optional[date]) -> Tuple[int, int]:
    return MIN_YEAR, (today or date.today()).year + MAX_YEARS_AHEAD


def make_range(start: date, end: date, *, today: Optional[date] = None) -> VacationRange:
    """Build a range from parsed endpoints, swapping and checking the year window.

    Raises:
        VacationValidationError: If either endpoint is outside the year window
    """
    vacation = VacationRange.of(start, end)
    min_year, max_year = _year_window(today)
    if vacation.start.year < min_year or vacation.end.year > max_year:
        raise VacationValidationError(
            f"{vacation.format()} is outside {min_year}-{max_year}"
        )
    return vacation


def _parse_pair(first: str, second: str, today: Optional[date]) -> VacationRange:
    return make_range(parse_date(first, today=today), parse_date(second, today=today), today=today)


def parse_line(line: str, *, today: Optional[date] = None) -> Optional[VacationRange]:
    """Parse one line into a vacation range.

    Returns:
        VacationRange (start == end for a single date), or None if the line
        is empty, unparseable, or outside the allowed years
    """
    line = line.strip()
    if not line:
        return None

    try:
        if "-" in line:
            first, second = line.split("-")[:2]
            try:
                return _parse_pair(first, second, today)
            except VacationValidationError:
                raise
            except ParseError:
                pass

        parts = line.split()
        if len(parts) == 2:
            try:
                return _parse_pair(parts[0], parts[1], today)
            except VacationValidationError:
                raise
            except ParseError:
                pass

        day = parse_date(line, today=today)
        return make_range(day, day, today=today)

    except VacationValidationError as e:
        logger.debug(f"Skipping vacation line {line!r}: {e}")
        return None
    except ParseError:
        logger.debug(f"Skipping unparseable vacation line {line!r}")
        return None


def parse_text(text: str, *, today: Optional[date] = None) -> Optional[List[VacationRange]]:
    """Parse multi-line text, one date or range per line.

    Returns:
        Parsed ranges in input order, or None if no line could be parsed
    """
    vacations = []
    for line in text.strip().split("\n"):
        vacation = parse_line(line, today=today)
        if vacation:
            vacations.append(vacation)
    return vacations or None


def _split_csv_row(line: str) -> List[str]:
    cells = []
    for cell in line.split(","):
        cell = cell.strip()
        if cell.startswith('"'):
            cell = cell[1:]
        if cell.endswith('"'):
            cell = cell[:-1]
        cells.append(cell)
    return cells


def _parse_csv_row(cells: List[str], today: Optional[date]) -> Optional[VacationRange]:
    start_text = cells[0]
    end_text = cells[1] if len(cells) > 1 else ""

    if end_text:
        try:
            return _parse_pair(start_text, end_text, today)
        except VacationValidationError:
            return None
        except ParseError:
            return parse_line(f"{start_text}-{end_text}", today=today)

    try:
        day = parse_date(start_text, today=today)
    except ParseError:
        return parse_line(start_text, today=today)
    try:
        return make_range(day, day, today=today)
    except VacationValidationError:
        return None


def _parse_csv(lines: List[str], today: Optional[date]) -> List[VacationRange]:
    start_index = 0
    if lines and any(keyword in lines[0].lower() for keyword in HEADER_KEYWORDS):
        start_index = 1

    vacations = []
    for line in lines[start_index:start_index + MAX_VACATION_LINES]:
        line = line.strip()
        if not line:
            continue

        cells = _split_csv_row(line)
        if not cells[0] or HEADER_CELL_PATTERN.match(cells[0]):
            continue

        vacation = _parse_csv_row(cells, today)
        if vacation:
            vacations.append(vacation)
    return vacations


def _parse_plain(lines: List[str], today: Optional[date]) -> List[VacationRange]:
    vacations = []
    for line in lines[:MAX_VACATION_LINES]:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        vacation = parse_line(line, today=today)
        if vacation:
            vacations.append(vacation)
    return vacations


def parse_file(
    contents: Union[bytes, str],
    is_csv: bool,
    *,
    today: Optional[date] = None,
) -> Optional[List[VacationRange]]:
    """Parse an uploaded vacation file.

    Args:
        contents: Raw file bytes (UTF-8, BOM allowed) or decoded text
        is_csv: Parse as CSV rows instead of plain text lines
        today: Reference date for the current year, defaults to today

    Returns:
        Parsed ranges in file order, or None if nothing could be parsed.
        Files longer than MAX_VACATION_LINES are truncated.
    """
    if isinstance(contents, bytes):
        text = contents.decode("utf-8-sig", errors="replace")
    else:
        text = contents.lstrip("\ufeff")

    lines = text.split("\n")
    if is_csv:
        vacations = _parse_csv(lines, today)
    else:
        vacations = _parse_plain(lines, today)
    return vacations or None


def validate_upload(filename: str, size: int) -> None:
    """Check an uploaded file's extension and size before parsing it.

    Raises:
        UploadRejectedError: If the file is too large or not .csv/.txt/.text
    """
    if size > MAX_FILE_SIZE:
        raise UploadRejectedError(
            f"File is too large ({size:,} bytes). Maximum size: {MAX_FILE_SIZE // 1024 // 1024} MB"
        )
    suffix = Path(filename).suffix.lower()
    if suffix not in ALLOWED_EXTENSIONS:
        raise UploadRejectedError(
            f"Unsupported file type '{suffix or filename}'. Supported: {', '.join(ALLOWED_EXTENSIONS)}"
        )


def read_vacation_file(path: Union[str, Path], *, today: Optional[date] = None) -> Optional[List[VacationRange]]:
    """Validate and parse a vacation file from disk.

    Raises:
        UploadRejectedError: If the file is too large or has the wrong extension
    """
    path = Path(path)
    validate_upload(path.name, path.stat().st_size)
    return parse_file(path.read_bytes(), is_csv=path.suffix.lower() == ".csv", today=today)
