"""Pytest configuration and fixtures."""
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
import structlog
from openpyxl import Workbook

from rota_reader.io.workbook import RosterWorkbook, open_workbook

# (on, off, turn, day total)
EARLY = ("06:00", "14:00", "1234", "8:00")
NIGHT = ("22:00", "06:00", "N22", "8:00")
LATE = ("14:00", "02:00", "A/R 7", "12:00")
TRAINING = ("09:00", "17:00", "TRAIN1", "8:00")
REST = (None, None, "RD", None)
BLANK = (None, None, None, None)

WEEK_ROWS = [
    # week 5: the end-to-end reference week
    (5, "40:00", [EARLY, REST, NIGHT, LATE, BLANK, TRAINING, REST]),
    (6, "16:00", [REST, EARLY, EARLY, REST, REST, REST, REST]),
    (7, "8:00", [REST, REST, REST, REST, REST, REST, NIGHT]),
]

DIRECTORY_ROWS = [
    ("Wk", "Name"),
    (5, "Alice Smith"),
    (6, "Bob Jones"),
    (None, "Total"),
    (7, "Carol White"),
    ("Total", None),
    (1, "Dan Brown"),
    ("TOTAL", None),
    (2, "Eve Black"),
    ("total", None),
]


def make_week_row(week, total, days):
    """Flatten one roster week into sheet cells."""
    row = [week, total]
    for day in days:
        row.extend(day)
    return row


def build_workbook(anchor="W/C 03/11/2024", week_rows=None, directory_rows=None, link_title="Link 1"):
    """Roster directory sheet plus one link sheet, built in memory."""
    wb = Workbook()
    roster = wb.active
    roster.title = "Roster"
    roster.cell(row=1, column=1, value="Driver Rota")
    roster.cell(row=2, column=1, value=anchor)
    for offset, (wk, name) in enumerate(directory_rows if directory_rows is not None else DIRECTORY_ROWS):
        roster.cell(row=8 + offset, column=1, value=wk)
        roster.cell(row=8 + offset, column=2, value=name)

    link = wb.create_sheet(link_title)
    header = ["Wk", "Total"]
    for day in ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]:
        header.extend([f"{day} On", f"{day} Off", f"{day} Turn", f"{day} Hrs"])
    link.append(header)
    for week, total, days in (week_rows if week_rows is not None else WEEK_ROWS):
        link.append(make_week_row(week, total, days))

    wb.create_sheet("Notes")
    return wb


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging/configure_structlog; both hold per-test streams."""
    yield
    logger = logging.getLogger("rota_reader")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def raw_workbook():
    """openpyxl workbook with the standard test roster."""
    return build_workbook()


@pytest.fixture
def roster_workbook(raw_workbook) -> RosterWorkbook:
    return open_workbook(raw_workbook)


@pytest.fixture
def roster_path(tmp_path, raw_workbook) -> Path:
    """The standard test roster saved as .xlsx."""
    path = tmp_path / "roster.xlsx"
    raw_workbook.save(path)
    return path
