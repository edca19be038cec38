"""
Roster Layout Rules and Constants
=================================
Central source of truth for the workbook layout and calendar output defaults.
"""
from dataclasses import dataclass

# Days in roster column order (weeks start on Sunday)
DAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

REST_DAY_MARKER = "RD"
REST_DAY_TITLE = "Rest Day (RD)"
REST_DAY_DESCRIPTION = "Rest Day"
REST_DAY_CATEGORY = "REST_DAY"
GENERIC_SHIFT_LABEL = "Shift"
GENERIC_SHIFT_CATEGORY = "SHIFT"

CALENDAR_MIME_TYPE = "text/calendar; charset=utf-8"


@dataclass(frozen=True)
class SheetLayout:
    """Column positions inside a worker sheet (1-based, openpyxl style)."""

    week_column: int = 1
    total_hours_column: int = 2
    first_day_column: int = 3
    columns_per_day: int = 4  # on-time, off-time, turn, day total

    def day_columns(self, day_index: int):
        """Return (on, off, turn, total) column numbers for a day slot."""
        base = self.first_day_column + day_index * self.columns_per_day
        return base, base + 1, base + 2, base + 3


LAYOUT = SheetLayout()
