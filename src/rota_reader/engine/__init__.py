# rota_reader/engine - Extraction orchestration and export filters
from .extract import extract_shifts, get_employee_shift_data, load_directory
from .filters import filter_shifts, flatten_weeks

__all__ = [
    "get_employee_shift_data", "extract_shifts", "load_directory",
    "filter_shifts", "flatten_weeks",
]
