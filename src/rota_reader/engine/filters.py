"""Narrow an extracted shift collection to the window a caller asked for."""
from typing import Iterable, List, Optional

from rota_reader.models.settings import ExportType, MonthFilter
from rota_reader.models.shift import Shift, WeekData
from rota_reader.utils.logging_setup import get_logger

logger = get_logger("rota_reader.engine.filters")


def flatten_weeks(weeks: Iterable[WeekData]) -> List[Shift]:
    """All shifts of all weeks, in order."""
    return [shift for week in weeks for shift in week.shifts]


def filter_by_month(shifts: Iterable[Shift], month_filter: MonthFilter) -> List[Shift]:
    """Shifts dated inside the given zero-based month and year."""
    kept = []
    for shift in shifts:
        d = shift.calendar_date
        if d.month == month_filter.month + 1 and d.year == month_filter.year:
            kept.append(shift)
    return kept


def single_shift(shift: Shift) -> List[Shift]:
    """A caller-supplied shift exported on its own."""
    return [shift]


def filter_shifts(
    shifts: Iterable[Shift],
    export_type: ExportType = ExportType.ALL,
    month_filter: Optional[MonthFilter] = None,
) -> List[Shift]:
    """
    Apply an export mode to a shift collection.

    Args:
        shifts: Extracted shifts (already range-filtered by the parser)
        export_type: all, month or single
        month_filter: Required for month mode

    Returns:
        The retained shifts
    """
    shifts = list(shifts)
    if export_type == ExportType.MONTH:
        if month_filter is None:
            raise ValueError("month export requires a month filter")
        kept = filter_by_month(shifts, month_filter)
        logger.debug(f"Month filter {month_filter.month + 1}/{month_filter.year}: {len(kept)}/{len(shifts)} shifts kept")
        return kept
    if export_type == ExportType.SINGLE:
        if len(shifts) != 1:
            raise ValueError(f"single export expects exactly one shift, got {len(shifts)}")
        return single_shift(shifts[0])
    return shifts
