"""Tests for extraction orchestration."""
import logging
from datetime import date

import pytest

from rota_reader.core.errors import (
    DirectorySheetNotFoundError,
    SheetNotFoundError,
    WeekCommencingNotFoundError,
)
from rota_reader.engine.extract import (
    extract_shifts,
    find_worker_sheet,
    get_employee_shift_data,
    load_directory,
    resolve_roster_start,
)
from rota_reader.io.workbook import open_workbook
from rota_reader.models.config import ReaderConfig

from conftest import build_workbook


class TestExtract:
    """Sheet resolution and the extraction result envelope."""

    def test_load_directory(self, roster_workbook):
        """Test the directory yields three links."""
        links = load_directory(roster_workbook)
        assert len(links) == 3

    def test_worker_sheet_substring_match(self, roster_workbook):
        """Test the link name matches sheets case-insensitively."""
        assert find_worker_sheet(roster_workbook, "link 1").name == "Link 1"

    def test_worker_sheet_missing(self, roster_workbook):
        """Test a missing sheet reports the available names."""
        with pytest.raises(SheetNotFoundError) as exc_info:
            find_worker_sheet(roster_workbook, "Link 4")
        payload = exc_info.value.to_payload()
        assert payload["receivedLink"] == "Link 4"
        assert payload["availableSheets"] == ["Roster", "Link 1", "Notes"]

    def test_directory_sheet_missing(self):
        """Test a workbook without a Roster sheet is rejected."""
        wb = build_workbook()
        wb["Roster"].title = "Directory"
        with pytest.raises(DirectorySheetNotFoundError):
            load_directory(open_workbook(wb))

    def test_directory_sheet_configurable(self):
        """Test the directory sheet name comes from the config."""
        wb = build_workbook()
        wb["Roster"].title = "Directory"
        config = ReaderConfig(directory_sheet="Directory")
        assert len(load_directory(open_workbook(wb), config)) == 3

    def test_roster_start(self, roster_workbook):
        """Test the roster start comes from the anchor cell."""
        assert resolve_roster_start(roster_workbook) == date(2024, 11, 3)

    def test_roster_start_missing(self):
        """Test a blank anchor is reported with the fixed message."""
        wb = open_workbook(build_workbook(anchor=None))
        with pytest.raises(WeekCommencingNotFoundError) as exc_info:
            resolve_roster_start(wb)
        assert str(exc_info.value) == "Could not find first week commencing date in Roster sheet"

    def test_extract_shifts(self, roster_workbook):
        """Test extraction starts on the requested week."""
        parsed = extract_shifts(roster_workbook, "Link 1", 6)
        assert parsed.roster_start == date(2024, 11, 3)
        assert parsed.weeks[0].week_number == 6

    def test_extract_shifts_config_window(self, roster_workbook):
        """Test the default window length comes from the config."""
        parsed = extract_shifts(roster_workbook, "Link 1", 5, config=ReaderConfig(default_weeks=4))
        assert len(parsed.weeks) == 4

    def test_employee_shift_data(self, roster_workbook):
        """Test the success envelope echoes the selection."""
        result = get_employee_shift_data(
            roster_workbook, "Alice Smith", "Link 1", 5, end_date=date(2024, 11, 30)
        )
        payload = result.to_dict()

        assert payload["success"] is True
        assert payload["message"] == "Retrieved 4 weeks of shifts for Alice Smith"
        assert payload["currentWeek"] == 5
        assert payload["selectedEmployee"] == {
            "name": "Alice Smith",
            "link": "Link 1",
            "wk": 5,
            "startDate": None,
            "endDate": "2024-11-30",
        }
        assert "warning" not in payload
        assert payload["weeksData"][0]["shifts"][0]["reference"] == "1234"

    def test_employee_shift_data_warning(self, roster_workbook):
        """Test a capped window carries the warning."""
        result = get_employee_shift_data(
            roster_workbook, "Alice Smith", "Link 1", 5, end_date=date(2026, 6, 1)
        )
        assert "Only 52 weeks allowed" in result.to_dict()["warning"]

    def test_extract_shifts_logs_phase(self, roster_workbook, caplog):
        """Test extraction opens with a phase banner and the request step."""
        with caplog.at_level(logging.INFO, logger="rota_reader.engine.extract"):
            extract_shifts(roster_workbook, "Link 1", 5)

        messages = [r.getMessage() for r in caplog.records if r.name == "rota_reader.engine.extract"]
        assert messages[0] == f"{'=' * 20} Extract shifts {'=' * 20}"
        assert "link='Link 1' wk=5" in messages[1]
