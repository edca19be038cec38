# rota_reader/io - Workbook reading and calendar/CSV output
from .csv_export import export_to_csv, weeks_to_dataframe
from .directory import parse_directory
from .ics_export import export_shifts_to_ics, generate_ics
from .roster_parser import parse_shift_table
from .week_commencing import extract_first_week_commencing
from .workbook import RosterSheet, RosterWorkbook, open_workbook

__all__ = [
    "open_workbook", "RosterWorkbook", "RosterSheet",
    "parse_directory", "extract_first_week_commencing", "parse_shift_table",
    "generate_ics", "export_shifts_to_ics",
    "export_to_csv", "weeks_to_dataframe",
]
