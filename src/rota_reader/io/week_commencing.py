"""Resolve the Sunday that starts week 1 of the rotation from the anchor cell."""
import re
from datetime import date
from typing import Optional

from rota_reader.io.cells import CellValue, DateCell, FormulaCell, NumberCell
from rota_reader.io.workbook import RosterSheet
from rota_reader.models.config import DEFAULT_CONFIG, ReaderConfig
from rota_reader.utils.logging_setup import get_logger

logger = get_logger("rota_reader.io.week_commencing")

# "W/C 03/11/2024", "WC 3/11/2024", "w/c03/11/2024"
WEEK_COMMENCING_PATTERN = re.compile(r"w/?c\s*(\d{1,2}/\d{1,2}/\d{4})", re.IGNORECASE)


def parse_week_commencing_text(text: str) -> Optional[date]:
    """Find a week-commencing marker in free text and parse it as day/month/year."""
    match = WEEK_COMMENCING_PATTERN.search(text or "")
    if not match:
        return None
    day, month, year = (int(part) for part in match.group(1).split("/"))
    try:
        return date(year, month, day)
    except ValueError:
        logger.warning(f"Week commencing marker {match.group(0)!r} is not a real date")
        return None


def resolve_week_commencing(cell: CellValue) -> Optional[date]:
    """Date-typed and serial cells resolve directly; text is searched for a W/C marker."""
    if isinstance(cell, FormulaCell):
        return resolve_week_commencing(cell.result)
    if isinstance(cell, (DateCell, NumberCell)):
        return cell.as_date()
    return parse_week_commencing_text(cell.text())


def extract_first_week_commencing(
    sheet: RosterSheet, config: ReaderConfig = DEFAULT_CONFIG
) -> Optional[date]:
    """
    Read the roster's first week-commencing date from the anchor cell.

    Args:
        sheet: The directory/anchor sheet
        config: Anchor cell position

    Returns:
        The resolved date, or None when the anchor cell holds nothing usable
    """
    cell = sheet.cell(config.anchor_row, config.anchor_column)
    resolved = resolve_week_commencing(cell)
    if resolved is None:
        logger.debug(f"No week commencing date in {sheet.name}!R{config.anchor_row}C{config.anchor_column}: {cell!r}")
        return None
    if resolved.weekday() != 6:
        logger.warning(f"Week commencing {resolved.isoformat()} is a {resolved.strftime('%A')}, expected Sunday")
    return resolved
