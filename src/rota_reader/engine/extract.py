"""
Roster Extraction
=================
Ties the parsing passes together for one request: find the worker's link
sheet, resolve the roster start from the directory sheet, then walk the
shift table.
"""
from datetime import date
from typing import List, Optional

from rota_reader.core.dto import ExtractionResult
from rota_reader.core.errors import (
    DirectorySheetNotFoundError,
    SheetNotFoundError,
    WeekCommencingNotFoundError,
)
from rota_reader.io.directory import parse_directory
from rota_reader.io.roster_parser import ParsedRoster, parse_shift_table
from rota_reader.io.week_commencing import extract_first_week_commencing
from rota_reader.io.workbook import RosterSheet, RosterWorkbook
from rota_reader.models.config import DEFAULT_CONFIG, ReaderConfig
from rota_reader.models.employee import Link
from rota_reader.utils.logging_setup import ExtractionLogger, get_logger

logger = get_logger("rota_reader.engine.extract")


def find_worker_sheet(workbook: RosterWorkbook, link: str) -> RosterSheet:
    """First sheet whose name contains the link label."""
    sheet = workbook.find(link)
    if sheet is None:
        raise SheetNotFoundError(link, workbook.sheetnames)
    logger.debug(f"Matched sheet {sheet.name!r} for link {link!r}")
    return sheet


def get_directory_sheet(workbook: RosterWorkbook, config: ReaderConfig = DEFAULT_CONFIG) -> RosterSheet:
    sheet = workbook.get(config.directory_sheet)
    if sheet is None:
        raise DirectorySheetNotFoundError(config.directory_sheet, workbook.sheetnames)
    return sheet


def load_directory(workbook: RosterWorkbook, config: ReaderConfig = DEFAULT_CONFIG) -> List[Link]:
    """Links and employees listed on the directory sheet."""
    return parse_directory(get_directory_sheet(workbook, config), config)


def resolve_roster_start(workbook: RosterWorkbook, config: ReaderConfig = DEFAULT_CONFIG) -> date:
    """Week-commencing date of the first rotation week."""
    sheet = get_directory_sheet(workbook, config)
    start = extract_first_week_commencing(sheet, config)
    if start is None:
        raise WeekCommencingNotFoundError(sheet.name)
    return start


def extract_shifts(
    workbook: RosterWorkbook,
    link: str,
    wk: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    config: ReaderConfig = DEFAULT_CONFIG,
) -> ParsedRoster:
    """Parse a worker's rotation without building the response envelope."""
    slog = ExtractionLogger("rota_reader.engine.extract")
    slog.phase("Extract shifts")
    slog.step(f"link={link!r} wk={wk} window={start_date or '-'}..{end_date or '-'}")

    sheet = find_worker_sheet(workbook, link)
    roster_start = resolve_roster_start(workbook, config)
    slog.detail("roster start", roster_start.isoformat())

    return parse_shift_table(
        sheet,
        roster_start,
        wk,
        start_filter=start_date,
        end_filter=end_date,
        config=config,
    )


def get_employee_shift_data(
    workbook: RosterWorkbook,
    name: str,
    link: str,
    wk: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    config: ReaderConfig = DEFAULT_CONFIG,
) -> ExtractionResult:
    """
    Extract a worker's shifts and wrap them in the API result shape.

    Args:
        workbook: Uploaded roster workbook
        name: Worker name (echoed back, not used for lookup)
        link: Link label; selects the worker sheet by substring
        wk: Rotation week the worker starts on
        start_date: Optional lower bound for shift dates
        end_date: Optional upper bound; widens the window up to the maximum

    Returns:
        ExtractionResult with weeks and an optional truncation warning
    """
    parsed = extract_shifts(workbook, link, wk, start_date, end_date, config)
    logger.info(f"Retrieved {len(parsed.weeks)} weeks for {name} ({link}, wk {wk})")

    return ExtractionResult(
        success=True,
        message=f"Retrieved {len(parsed.weeks)} weeks of shifts for {name}",
        selected_employee={
            "name": name,
            "link": link,
            "wk": wk,
            "startDate": start_date.isoformat() if start_date else None,
            "endDate": end_date.isoformat() if end_date else None,
        },
        current_week=wk,
        weeks_data=parsed.weeks,
        warning=parsed.warning,
    )
