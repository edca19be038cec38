"""Calendar event settings supplied by the caller."""
from dataclasses import dataclass
from enum import Enum


class NameFormat(str, Enum):
    """Event summary templates."""
    REFERENCE = "reference"        # 1234
    TIMES = "times"                # 06:00-14:00
    TIMES_WITH_REF = "timesWithRef"  # 06:00-14:00 (1234)
    DETAILED = "detailed"          # Shift 1234 (06:00-14:00)
    CUSTOM = "custom"              # <prefix>1234


@dataclass
class EventSettings:
    """Reminder and naming options for exported events."""

    shift_reminder_minutes: int = 0  # 0 = no reminder
    rest_day_reminder: bool = False
    rest_day_reminder_minutes: int = 0  # Offset from the rest day's midnight start
    event_name_format: NameFormat = NameFormat.REFERENCE
    custom_prefix: str = ""

    def __post_init__(self):
        if isinstance(self.event_name_format, str) and not isinstance(self.event_name_format, NameFormat):
            self.event_name_format = NameFormat(self.event_name_format)
        if self.shift_reminder_minutes < 0:
            self.shift_reminder_minutes = 0
        if self.rest_day_reminder_minutes < 0:
            self.rest_day_reminder_minutes = 0
        self.custom_prefix = self.custom_prefix or ""


def default_event_settings() -> EventSettings:
    """Settings used when the caller supplies none."""
    return EventSettings()


class ExportType(str, Enum):
    """Which shifts a calendar export covers."""
    ALL = "all"
    MONTH = "month"
    SINGLE = "single"


@dataclass(frozen=True)
class MonthFilter:
    """Calendar month selector; month is zero-based (0 = January)."""

    month: int
    year: int

    def __post_init__(self):
        if not 0 <= self.month <= 11:
            raise ValueError(f"month must be between 0 and 11, got {self.month}")
