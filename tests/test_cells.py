"""Tests for cell value normalization."""
from datetime import date, datetime, time, timedelta

import pytest
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.cell.text import InlineFont

from rota_reader.io.cells import (
    DateCell,
    DurationCell,
    EmptyCell,
    FormulaCell,
    NumberCell,
    RichTextCell,
    TextCell,
    TimeCell,
    cell_date,
    cell_text,
    classify,
    normalize_clock,
    parse_leading_int,
    serial_to_date,
)


class TestClassify:
    """Raw values map to exactly one variant."""

    @pytest.mark.parametrize("raw, variant", [
        (None, EmptyCell),
        ("  RD ", TextCell),
        (5, NumberCell),
        (5.5, NumberCell),
        (date(2024, 11, 3), DateCell),
        (datetime(2024, 11, 3, 6, 0), DateCell),
        (time(6, 0), TimeCell),
        (timedelta(hours=8), DurationCell),
        ({"result": 7}, FormulaCell),
        ({"richText": [{"text": "W/C "}, {"text": "03/11/2024"}]}, RichTextCell),
    ])
    def test_variants(self, raw, variant):
        """Test each raw type maps to its variant."""
        assert isinstance(classify(raw), variant)

    def test_already_classified_passes_through(self):
        """Test classified cells are returned unchanged."""
        cell = TextCell("x")
        assert classify(cell) is cell

    def test_nan_is_empty(self):
        """Test NaN from pandas sources is empty."""
        assert isinstance(classify(float("nan")), EmptyCell)

    def test_bool_renders_lowercase(self):
        """Test booleans render as true/false."""
        assert cell_text(True) == "true"


class TestText:
    """Trimmed text rendering."""

    def test_empty(self):
        """Test None renders as an empty string."""
        assert cell_text(None) == ""

    def test_string_trimmed(self):
        """Test surrounding whitespace is stripped."""
        assert cell_text("  1234\n") == "1234"

    def test_integral_float_has_no_decimal(self):
        """Test 5.0 renders as 5."""
        assert cell_text(5.0) == "5"
        assert cell_text(7) == "7"

    def test_fractional_float(self):
        """Test fractions keep their decimals."""
        assert cell_text(7.5) == "7.5"

    def test_time_renders_hh_mm(self):
        """Test times render zero-padded."""
        assert cell_text(time(6, 5)) == "06:05"

    def test_duration_renders_hours_minutes(self):
        """Test durations render as total hours and minutes."""
        assert cell_text(timedelta(hours=37, minutes=30)) == "37:30"

    def test_date_renders_iso(self):
        """Test midnight datetimes render as ISO dates."""
        assert cell_text(datetime(2024, 11, 3)) == "2024-11-03"

    def test_formula_prefers_result(self):
        """Test formulas render their computed result."""
        assert cell_text({"result": " Alice ", "formula": "=B2"}) == "Alice"

    def test_mapping_rich_text_joined(self):
        """Test rich text runs are joined then trimmed."""
        assert cell_text({"richText": [{"text": " Early"}, {"text": " 1234 "}]}) == "Early 1234"

    def test_openpyxl_rich_text_joined(self):
        """Test openpyxl CellRichText blocks are joined."""
        rich = CellRichText(["W/C ", TextBlock(InlineFont(b=True), "03/11/2024")])
        assert cell_text(rich) == "W/C 03/11/2024"

    def test_unknown_object_degrades_to_str(self):
        """Test unknown values fall back to str()."""
        class Odd:
            def __str__(self):
                return " odd "
        assert cell_text(Odd()) == "odd"


class TestDates:
    """Date resolution from typed cells."""

    def test_date_cell(self):
        """Test datetimes resolve to their date."""
        assert cell_date(datetime(2024, 11, 3, 12, 0)) == date(2024, 11, 3)

    def test_serial_number(self):
        """Test Excel serials resolve to dates."""
        # 45599 is 2024-11-03 in the 1900 date system
        assert cell_date(45599) == date(2024, 11, 3)
        assert serial_to_date(45599.0) == date(2024, 11, 3)

    def test_formula_result_serial(self):
        """Test a formula yielding a serial resolves to a date."""
        assert cell_date({"result": 45599}) == date(2024, 11, 3)

    def test_text_is_not_a_date(self):
        """Test ISO-looking text is not date-typed."""
        assert cell_date("2024-11-03") is None

    def test_empty_is_not_a_date(self):
        """Test empty cells have no date."""
        assert cell_date(None) is None

    def test_fraction_is_time_not_date(self):
        """Test a pure time fraction has no date."""
        assert serial_to_date(0.25) is None


class TestHelpers:
    @pytest.mark.parametrize("text, expected", [
        ("12", 12),
        (" 12 ", 12),
        ("12a", 12),
        ("5.0", 5),
        ("-3", -3),
        ("Wk", None),
        ("", None),
    ])
    def test_parse_leading_int(self, text, expected):
        """Test leading integer extraction."""
        assert parse_leading_int(text) == expected

    @pytest.mark.parametrize("text, expected", [
        ("6:00", "06:00"),
        ("06:00", "06:00"),
        ("22:30:00", "22:30"),
        ("25:00", "25:00"),
        ("TBC", "TBC"),
        ("", ""),
    ])
    def test_normalize_clock(self, text, expected):
        """Test clock text is zero-padded and seconds dropped."""
        assert normalize_clock(text) == expected
