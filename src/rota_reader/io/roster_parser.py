"""
Shift Table Parsing
===================
A worker sheet holds one row per rotation week. Column 1 is the week label,
column 2 the week's total hours, then four columns per day from Sunday to
Saturday: on-time, off-time, turn (reference) and day total.

The rotation repeats: once the last week row is used, extraction wraps back
to the first row, so any window length can be produced from a short table.
"""
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Tuple

from rota_reader.core.errors import DateRangeError, NoWeekRowsError
from rota_reader.io.cells import (
    CellValue,
    DateCell,
    DurationCell,
    FormulaCell,
    TimeCell,
    normalize_clock,
    parse_leading_int,
)
from rota_reader.io.workbook import RosterSheet
from rota_reader.models.config import DEFAULT_CONFIG, ReaderConfig
from rota_reader.models.rules import DAYS, LAYOUT, SheetLayout
from rota_reader.models.shift import Shift, WeekData
from rota_reader.utils.logging_setup import ExtractionLogger, get_logger, log_function_call

logger = get_logger("rota_reader.io.roster_parser")


@dataclass(frozen=True)
class WeekRow:
    """A sheet row carrying a numeric week label."""
    row: int
    week_number: int


@dataclass
class ParsedRoster:
    """Weeks extracted for one worker plus any advisory message."""
    roster_start: date
    weeks: List[WeekData] = field(default_factory=list)
    warning: Optional[str] = None

    @property
    def shifts(self) -> List[Shift]:
        return [s for w in self.weeks for s in w.shifts]


def week_label(cell: CellValue) -> Optional[int]:
    """Integer week label of a cell; date, time and duration cells never qualify."""
    if isinstance(cell, FormulaCell):
        return week_label(cell.result)
    if isinstance(cell, (DateCell, TimeCell, DurationCell)):
        return None
    return parse_leading_int(cell.text())


def collect_week_rows(sheet: RosterSheet, layout: SheetLayout = LAYOUT) -> List[WeekRow]:
    """Every row whose first column parses as an integer, in sheet order."""
    rows = []
    for r in range(1, sheet.max_row + 1):
        week_number = week_label(sheet.cell(r, layout.week_column))
        if week_number is not None:
            rows.append(WeekRow(row=r, week_number=week_number))
    return rows


def find_start_index(week_rows: List[WeekRow], start_week: int) -> int:
    """Index of the first row labelled `start_week`; 0 when absent."""
    for i, wr in enumerate(week_rows):
        if wr.week_number == start_week:
            return i
    return 0


def check_ends_next_day(start_time: Optional[str], end_time: Optional[str]) -> bool:
    """
    Overnight heuristic: the end hour is earlier than the start hour, or the
    shift starts in the afternoon/evening and ends before 06:00.
    """
    if not start_time or not end_time:
        return False
    start_hour = parse_leading_int(start_time.split(":")[0])
    end_hour = parse_leading_int(end_time.split(":")[0])
    if start_hour is None or end_hour is None:
        return False
    return end_hour < start_hour or (0 <= end_hour < 6 and start_hour >= 12)


def weeks_to_collect(
    roster_start: date,
    end_filter: Optional[date],
    config: ReaderConfig = DEFAULT_CONFIG,
) -> Tuple[int, Optional[str]]:
    """
    Size of the extraction window.

    Returns:
        (weeks, warning) where warning is set when the window was capped
    """
    if end_filter is None:
        return config.default_weeks, None

    diff_weeks = math.ceil((end_filter - roster_start).days / 7)
    weeks = max(diff_weeks + 1, config.default_weeks)
    if weeks <= config.max_weeks:
        return weeks, None

    last_allowed = roster_start + timedelta(days=config.max_weeks * 7 - 1)
    warning = (
        f"Only {config.max_weeks} weeks allowed from Roster WC {roster_start.isoformat()}. "
        f"Results displayed until {last_allowed.isoformat()}."
    )
    logger.warning(warning)
    return config.max_weeks, warning


def build_shift(
    week_number: int,
    day_index: int,
    shift_date: date,
    on_time: str,
    off_time: str,
    turn: str,
    day_total: str,
    rest_day_marker: str = DEFAULT_CONFIG.rest_day_marker,
) -> Shift:
    """Derive one day's shift record from its four raw cell texts."""
    on_time = normalize_clock(on_time)
    off_time = normalize_clock(off_time)
    day_name = DAYS[day_index]
    iso_date = shift_date.isoformat()

    is_rest_day = turn == rest_day_marker or (not on_time and not off_time and not turn)
    if is_rest_day:
        return Shift(week_number=week_number, day=day_name, date=iso_date, is_rest_day=True)

    ends_next_day = check_ends_next_day(on_time, off_time)
    start_date_time = end_date_time = None
    if on_time and off_time:
        end_date = shift_date + timedelta(days=1) if ends_next_day else shift_date
        start_date_time = f"{iso_date}T{on_time}:00"
        end_date_time = f"{end_date.isoformat()}T{off_time}:00"

    return Shift(
        week_number=week_number,
        day=day_name,
        date=iso_date,
        start_time=on_time or None,
        end_time=off_time or None,
        start_date_time=start_date_time,
        end_date_time=end_date_time,
        reference=turn or None,
        total_hours=day_total or None,
        is_rest_day=False,
        ends_next_day=ends_next_day,
    )


@log_function_call
def parse_shift_table(
    sheet: RosterSheet,
    roster_start: date,
    start_week: int,
    start_filter: Optional[date] = None,
    end_filter: Optional[date] = None,
    config: ReaderConfig = DEFAULT_CONFIG,
    layout: SheetLayout = LAYOUT,
) -> ParsedRoster:
    """
    Extract the rotation for a worker starting on `start_week`.

    Args:
        sheet: The worker's link sheet
        roster_start: Sunday that begins the first extracted week
        start_week: Week label the worker starts on
        start_filter: Drop days before this date (default: roster_start)
        end_filter: Drop days after this date; also widens the window
        config: Window sizes and rest-day marker
        layout: Column positions

    Returns:
        ParsedRoster with non-empty weeks in date order

    Raises:
        DateRangeError: end_filter is earlier than roster_start
        NoWeekRowsError: the sheet has no numeric week labels
    """
    if end_filter is not None and end_filter < roster_start:
        raise DateRangeError(roster_start.isoformat())

    slog = ExtractionLogger("rota_reader.io.roster_parser")
    slog.enter(f"sheet {sheet.name}")

    week_rows = collect_week_rows(sheet, layout)
    if not week_rows:
        raise NoWeekRowsError(sheet.name)

    start_index = find_start_index(week_rows, start_week)
    if week_rows[start_index].week_number != start_week:
        logger.warning(f"Week {start_week} not found in {sheet.name}; starting from first row")

    total_weeks, warning = weeks_to_collect(roster_start, end_filter, config)
    lower = start_filter or roster_start
    slog.detail("week rows", len(week_rows))
    slog.detail("start index", start_index)
    slog.detail("weeks to collect", total_weeks)

    result = ParsedRoster(roster_start=roster_start, warning=warning)
    for i in range(total_weeks):
        week_row = week_rows[(start_index + i) % len(week_rows)]
        week_commencing = roster_start + timedelta(days=7 * i)

        shifts = []
        for day_index in range(len(DAYS)):
            shift_date = week_commencing + timedelta(days=day_index)
            if shift_date < lower or (end_filter is not None and shift_date > end_filter):
                continue
            on_col, off_col, turn_col, total_col = layout.day_columns(day_index)
            shifts.append(build_shift(
                week_row.week_number,
                day_index,
                shift_date,
                sheet.text(week_row.row, on_col),
                sheet.text(week_row.row, off_col),
                sheet.text(week_row.row, turn_col),
                sheet.text(week_row.row, total_col),
                config.rest_day_marker,
            ))

        if not shifts:
            continue

        result.weeks.append(WeekData(
            week_number=week_row.week_number,
            week_commencing=week_commencing.isoformat(),
            total_hours=sheet.text(week_row.row, layout.total_hours_column),
            shifts=shifts,
        ))

    slog.exit(f"{len(result.weeks)} weeks, {len(result.shifts)} days")
    return result
