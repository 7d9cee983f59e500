"""Tests for vacation date/range parsing from text and files."""

from datetime import date

import pytest

from salarycal.sdk import (
    VacationRange,
    parse_date,
    parse_file,
    parse_line,
    parse_text,
    read_vacation_file,
    validate_upload,
    ParseError,
    UploadRejectedError,
)
from salarycal.sdk.vacation_parser import MAX_FILE_SIZE, MAX_VACATION_LINES


TODAY = date(2026, 10, 19)


def day_range(start: date, end: date = None) -> VacationRange:
    return VacationRange.of(start, end)


class TestParseDate:
    """Single-date grammar."""

    @pytest.mark.parametrize("text,expected", [
        ("01.03.2026", date(2026, 3, 1)),
        ("1.3.2026", date(2026, 3, 1)),
        ("01.03", date(2026, 3, 1)),
        ("01 03", date(2026, 3, 1)),
        ("01032026", date(2026, 3, 1)),
        ("0103", date(2026, 3, 1)),
        ("  29.02.2028 ", date(2028, 2, 29)),
    ])
    def test_formats(self, text, expected):
        assert parse_date(text, today=TODAY) == expected

    @pytest.mark.parametrize("text", ["31.02.2026", "32.01", "2026-03-01", "1/3/2026", "", "01.03.26"])
    def test_rejects_invalid(self, text):
        with pytest.raises(ParseError):
            parse_date(text, today=TODAY)


class TestParseLine:
    """One line: single date, hyphen range or whitespace range."""

    def test_single_date_is_degenerate_range(self):
        assert parse_line("04.11.2026", today=TODAY) == day_range(date(2026, 11, 4))

    def test_hyphen_range(self):
        assert parse_line("01.07.2026-14.07.2026", today=TODAY) == day_range(
            date(2026, 7, 1), date(2026, 7, 14)
        )

    def test_hyphen_range_with_spaces(self):
        assert parse_line("01.07.2026 - 14.07.2026", today=TODAY) == day_range(
            date(2026, 7, 1), date(2026, 7, 14)
        )

    def test_whitespace_range(self):
        assert parse_line("0107 1407", today=TODAY) == day_range(date(2026, 7, 1), date(2026, 7, 14))

    def test_day_month_with_space_is_single_date(self):
        assert parse_line("01 07", today=TODAY) == day_range(date(2026, 7, 1))

    def test_reversed_range_is_swapped(self):
        vacation = parse_line("14.07.2026-01.07.2026", today=TODAY)
        assert vacation.start == date(2026, 7, 1)
        assert vacation.end == date(2026, 7, 14)

    def test_year_before_minimum_is_dropped(self):
        assert parse_line("01.03.2019", today=TODAY) is None
        assert parse_line("01.03.2020", today=TODAY) == day_range(date(2020, 3, 1))

    def test_year_window_upper_bound(self):
        assert parse_line("01.03.2031", today=TODAY) == day_range(date(2031, 3, 1))
        assert parse_line("01.03.2032", today=TODAY) is None

    def test_range_straddling_window_is_dropped(self):
        assert parse_line("25.12.2019-10.01.2020", today=TODAY) is None

    @pytest.mark.parametrize("line", ["", "   ", "vacation", "01.07.2026-soon", "1-2-3"])
    def test_unparseable_lines_return_none(self, line):
        assert parse_line(line, today=TODAY) is None

    def test_formatted_range_round_trips(self):
        vacation = day_range(date(2026, 7, 1), date(2026, 7, 14))
        assert parse_line(vacation.format(), today=TODAY) == vacation


class TestParseText:
    """Multi-line text input."""

    def test_skips_bad_lines(self):
        text = """
        01.07.2026-14.07.2026
        not a date

        04.11
        01.03.2019
        """
        assert parse_text(text, today=TODAY) == [
            day_range(date(2026, 7, 1), date(2026, 7, 14)),
            day_range(date(2026, 11, 4)),
        ]

    def test_nothing_valid_is_none(self):
        assert parse_text("hello\nworld", today=TODAY) is None


class TestParseFile:
    """Plain text and CSV vacation files."""

    def test_plain_text_ignores_comments_and_blank_lines(self):
        contents = "# summer\n01.07.2026-14.07.2026\n\n# autumn\r\n04.11.2026\r\n"
        assert parse_file(contents, is_csv=False, today=TODAY) == [
            day_range(date(2026, 7, 1), date(2026, 7, 14)),
            day_range(date(2026, 11, 4)),
        ]

    def test_bytes_with_bom_are_decoded(self):
        contents = "\ufeff01.07.2026\n".encode("utf-8")
        assert parse_file(contents, is_csv=False, today=TODAY) == [day_range(date(2026, 7, 1))]

    def test_csv_with_header_and_mixed_rows(self):
        contents = (
            "Начало,Конец\n"
            "01.07.2026,14.07.2026\n"
            '"01.08.2026","05.08.2026"\n'
            "04.11.2026\n"
            "01.09.2026-03.09.2026\n"
            "Date,End\n"
            "garbage,row\n"
        ).encode("utf-8")

        assert parse_file(contents, is_csv=True, today=TODAY) == [
            day_range(date(2026, 7, 1), date(2026, 7, 14)),
            day_range(date(2026, 8, 1), date(2026, 8, 5)),
            day_range(date(2026, 11, 4)),
            day_range(date(2026, 9, 1), date(2026, 9, 3)),
        ]

    def test_csv_two_cells_are_swapped_and_window_checked(self):
        contents = "14.07.2026,01.07.2026\n01.01.2019,05.01.2019\n"
        assert parse_file(contents, is_csv=True, today=TODAY) == [
            day_range(date(2026, 7, 1), date(2026, 7, 14)),
        ]

    def test_longer_than_line_cap_is_truncated(self):
        contents = "01.07.2026\n" * (MAX_VACATION_LINES + 25)
        vacations = parse_file(contents, is_csv=False, today=TODAY)
        assert len(vacations) == MAX_VACATION_LINES

    def test_without_entries_is_none(self):
        assert parse_file(b"# nothing here\n", is_csv=False, today=TODAY) is None
        assert parse_file(b"date,end\n", is_csv=True, today=TODAY) is None


class TestUploadChecks:
    """Extension and size limits on vacation files."""

    @pytest.mark.parametrize("name", ["vacations.csv", "VACATIONS.TXT", "notes.text"])
    def test_allowed_extensions(self, name):
        validate_upload(name, 100)

    @pytest.mark.parametrize("name", ["vacations.pdf", "vacations", "vacations.csv.exe"])
    def test_rejected_extensions(self, name):
        with pytest.raises(UploadRejectedError):
            validate_upload(name, 100)

    def test_size_limit(self):
        validate_upload("vacations.txt", MAX_FILE_SIZE)
        with pytest.raises(UploadRejectedError):
            validate_upload("vacations.txt", MAX_FILE_SIZE + 1)

    def test_read_vacation_file_picks_csv_by_extension(self, tmp_path):
        path = tmp_path / "vacations.csv"
        path.write_text("start,end\n01.07.2026,14.07.2026\n", encoding="utf-8")

        assert read_vacation_file(path, today=TODAY) == [day_range(date(2026, 7, 1), date(2026, 7, 14))]

    def test_read_vacation_file_rejects_wrong_extension(self, tmp_path):
        path = tmp_path / "vacations.json"
        path.write_text("[]")

        with pytest.raises(UploadRejectedError):
            read_vacation_file(path, today=TODAY)
