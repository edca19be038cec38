"""Tests for the tabular shift view."""
import io
from datetime import date

import pandas as pd

from rota_reader.io.csv_export import COLUMNS, export_to_csv, weekly_day_counts, weeks_to_dataframe
from rota_reader.io.roster_parser import parse_shift_table


def alice_weeks(roster_workbook, end=date(2024, 11, 16)):
    return parse_shift_table(roster_workbook.get("Link 1"), date(2024, 11, 3), 5, end_filter=end).weeks


class TestDataFrame:
    def test_columns_and_rows(self, roster_workbook):
        """Test one row per day with the fixed columns."""
        df = weeks_to_dataframe(alice_weeks(roster_workbook))
        assert list(df.columns) == COLUMNS
        assert len(df) == 14
        assert df.iloc[0]["weekCommencing"] == "2024-11-03"
        assert df.iloc[7]["weekCommencing"] == "2024-11-10"

    def test_empty(self):
        """Test no weeks gives an empty frame with the columns."""
        df = weeks_to_dataframe([])
        assert df.empty
        assert list(df.columns) == COLUMNS


class TestDayCounts:
    def test_counts_per_week(self, roster_workbook):
        """Test working and rest day counts per week."""
        summary = weekly_day_counts(alice_weeks(roster_workbook))
        assert summary["working"].tolist() == [4, 2]
        assert summary["rest"].tolist() == [3, 5]


class TestCsv:
    def test_to_buffer(self, roster_workbook):
        """Test CSV written to a text buffer reads back."""
        buffer = io.StringIO()
        export_to_csv(alice_weeks(roster_workbook), buffer)
        buffer.seek(0)
        df = pd.read_csv(buffer)
        assert len(df) == 14
        assert str(df.iloc[0]["reference"]) == "1234"

    def test_to_file(self, roster_workbook, tmp_path):
        """Test the CSV file starts with the header."""
        path = tmp_path / "alice.csv"
        export_to_csv(alice_weeks(roster_workbook), path)
        assert path.read_text(encoding="utf-8").splitlines()[0] == ",".join(COLUMNS)
