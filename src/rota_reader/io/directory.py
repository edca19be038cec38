"""
Directory Sheet Parsing
=======================
The directory ("Roster") sheet lists workers in blocks, one block per link.
Each block ends with a "total" row; the sheet holds three blocks by
convention, and anything after the third total is ignored.
"""
from typing import List, Optional

from rota_reader.io.cells import parse_leading_int
from rota_reader.io.workbook import RosterSheet
from rota_reader.models.config import DEFAULT_CONFIG, ReaderConfig
from rota_reader.models.employee import Employee, Link
from rota_reader.utils.logging_setup import get_logger, log_function_call

logger = get_logger("rota_reader.io.directory")

WEEK_COLUMN = 1
NAME_COLUMN = 2
HEADER_TOKEN = "wk"
TOTAL_TOKEN = "total"


@log_function_call
def parse_directory(sheet: RosterSheet, config: ReaderConfig = DEFAULT_CONFIG) -> List[Link]:
    """
    Build the link directory from the directory sheet.

    Args:
        sheet: The directory sheet
        config: Header row count and block limit

    Returns:
        Links in sheet order; only blocks closed by a total row are kept
    """
    links: List[Link] = []
    current: Optional[Link] = None
    link_number = 0
    totals_seen = 0

    for row in range(config.directory_header_rows + 1, sheet.max_row + 1):
        wk_value = sheet.text(row, WEEK_COLUMN)
        name_value = sheet.text(row, NAME_COLUMN)

        if TOTAL_TOKEN in wk_value.lower() or TOTAL_TOKEN in name_value.lower():
            totals_seen += 1
            if current is not None and current.employees:
                links.append(current)
                logger.debug(f"Closed {current.link} at row {row} ({len(current.employees)} employees)")
            current = None
            if totals_seen >= config.directory_max_blocks:
                break
            continue

        if not wk_value or not name_value or wk_value.lower() == HEADER_TOKEN:
            continue

        if current is None:
            link_number += 1
            current = Link(link=f"Link {link_number}")

        current.employees.append(Employee(name=name_value, wk=parse_leading_int(wk_value) or 0))

    if current is not None and current.employees:
        logger.warning(
            f"Dropping {current.link}: {len(current.employees)} employees with no closing total row"
        )

    logger.info(f"Directory parsed: {len(links)} links, {sum(len(l.employees) for l in links)} employees")
    return links
