from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from rota_reader.models.rules import CALENDAR_MIME_TYPE
from rota_reader.models.shift import WeekData


@dataclass
class ExtractionResult:
    success: bool
    message: str
    selected_employee: Dict[str, Any]
    current_week: int
    weeks_data: List[WeekData] = field(default_factory=list)
    warning: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "success": self.success,
            "message": self.message,
            "selectedEmployee": self.selected_employee,
            "currentWeek": self.current_week,
            "weeksData": [w.to_dict() for w in self.weeks_data],
        }
        if self.warning:
            payload["warning"] = self.warning
        return payload


@dataclass
class CalendarExport:
    content: str
    filename: str
    mime_type: str = CALENDAR_MIME_TYPE
    event_count: int = 0

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": self.mime_type,
            "Content-Disposition": f'attachment; filename="{self.filename}"',
        }


@dataclass
class ServiceResponse:
    status_code: int
    payload: Dict[str, Any] | None = None
    body: str | None = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code < 400
