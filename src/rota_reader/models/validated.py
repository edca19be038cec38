"""
Pydantic Validated Models
=========================
Validation layer for request bodies arriving at the service boundary.

Bodies use the camelCase keys of the JSON API; each model converts to the
plain dataclasses the engine works with.

Usage:
    from rota_reader.models.validated import EmployeeSelectionModel

    selection = EmployeeSelectionModel.model_validate(
        {"name": "Smith", "link": "Link 1", "wk": 5}
    )
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rota_reader.models.settings import (
    EventSettings,
    ExportType,
    MonthFilter,
    NameFormat,
)
from rota_reader.models.shift import Shift


class EmployeeSelectionModel(BaseModel):
    """Which worker to extract and the optional date window."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    link: str = Field(min_length=1)
    wk: int = Field(default=0, description="Starting rotation week")
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(default=None, alias="endDate")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        """Treat empty strings from form posts as missing."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_window(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate cannot be earlier than startDate")
        return self


class MonthFilterModel(BaseModel):
    """Zero-based month plus year."""
    month: int = Field(ge=0, le=11)
    year: int = Field(ge=1900, le=9999)

    def to_dataclass(self) -> MonthFilter:
        return MonthFilter(month=self.month, year=self.year)


class EventSettingsModel(BaseModel):
    """Reminder and naming options."""
    model_config = ConfigDict(populate_by_name=True)

    shift_reminder_minutes: int = Field(default=0, ge=0, le=7 * 24 * 60, alias="shiftReminderMinutes")
    rest_day_reminder: bool = Field(default=False, alias="restDayReminder")
    rest_day_reminder_minutes: int = Field(default=0, ge=0, le=7 * 24 * 60, alias="restDayReminderMinutes")
    event_name_format: NameFormat = Field(default=NameFormat.REFERENCE, alias="eventNameFormat")
    custom_prefix: Optional[str] = Field(default="", alias="customPrefix")

    def to_dataclass(self) -> EventSettings:
        return EventSettings(
            shift_reminder_minutes=self.shift_reminder_minutes,
            rest_day_reminder=self.rest_day_reminder,
            rest_day_reminder_minutes=self.rest_day_reminder_minutes,
            event_name_format=self.event_name_format,
            custom_prefix=self.custom_prefix or "",
        )


class ShiftModel(BaseModel):
    """A single shift record supplied directly by the caller."""
    model_config = ConfigDict(populate_by_name=True)

    week_number: int = Field(default=0, alias="weekNumber")
    day: str = ""
    shift_date: date = Field(alias="date")
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    start_date_time: Optional[str] = Field(default=None, alias="startDateTime")
    end_date_time: Optional[str] = Field(default=None, alias="endDateTime")
    reference: Optional[str] = None
    total_hours: Optional[str] = Field(default=None, alias="totalHours")
    is_rest_day: bool = Field(default=False, alias="isRestDay")
    ends_next_day: bool = Field(default=False, alias="endsNextDay")

    def to_dataclass(self) -> Shift:
        return Shift(
            week_number=self.week_number,
            day=self.day,
            date=self.shift_date.isoformat(),
            start_time=self.start_time,
            end_time=self.end_time,
            start_date_time=self.start_date_time,
            end_date_time=self.end_date_time,
            reference=self.reference,
            total_hours=self.total_hours,
            is_rest_day=self.is_rest_day,
            ends_next_day=self.ends_next_day,
        )


class DownloadRequestModel(BaseModel):
    """Body of a calendar download request."""
    model_config = ConfigDict(populate_by_name=True)

    employee_data: EmployeeSelectionModel = Field(alias="employeeData")
    include_rest_days: bool = Field(default=False, alias="includeRestDays")
    type: ExportType = ExportType.ALL
    month_filter: Optional[MonthFilterModel] = Field(default=None, alias="monthFilter")
    shift: Optional[ShiftModel] = None
    settings: Optional[EventSettingsModel] = None

    @model_validator(mode="after")
    def validate_type_options(self):
        """Month exports need a month, single exports need a shift."""
        if self.type == ExportType.MONTH and self.month_filter is None:
            raise ValueError("monthFilter is required when type is 'month'")
        if self.type == ExportType.SINGLE and self.shift is None:
            raise ValueError("shift is required when type is 'single'")
        return self

    def event_settings(self) -> EventSettings:
        if self.settings is None:
            return EventSettings()
        return self.settings.to_dataclass()
