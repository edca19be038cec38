# rota_reader/models - Value objects for roster extraction and export
from .config import DEFAULT_CONFIG, ReaderConfig
from .employee import Employee, Link
from .rules import DAYS, LAYOUT, REST_DAY_MARKER
from .settings import (
    EventSettings,
    ExportType,
    MonthFilter,
    NameFormat,
    default_event_settings,
)
from .shift import Shift, WeekData

__all__ = [
    "Shift", "WeekData",
    "Employee", "Link",
    "EventSettings", "NameFormat", "ExportType", "MonthFilter", "default_event_settings",
    "ReaderConfig", "DEFAULT_CONFIG",
    "DAYS", "LAYOUT", "REST_DAY_MARKER",
]
