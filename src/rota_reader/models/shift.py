"""Shift and week models extracted from a worker's roster sheet."""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional


@dataclass
class Shift:
    """One day's entry in a worker's roster."""

    week_number: int
    day: str
    date: str  # YYYY-MM-DD
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    start_date_time: Optional[str] = None
    end_date_time: Optional[str] = None
    reference: Optional[str] = None
    total_hours: Optional[str] = None
    is_rest_day: bool = False
    ends_next_day: bool = False

    @property
    def calendar_date(self) -> date:
        """The shift date as a `datetime.date`."""
        return date.fromisoformat(self.date)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-shaped dictionary used by API payloads."""
        return {
            "weekNumber": self.week_number,
            "day": self.day,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "startDateTime": self.start_date_time,
            "endDateTime": self.end_date_time,
            "reference": self.reference,
            "totalHours": self.total_hours,
            "isRestDay": self.is_rest_day,
            "endsNextDay": self.ends_next_day,
        }


@dataclass
class WeekData:
    """One rotation week for one worker."""

    week_number: int
    week_commencing: str  # Sunday, YYYY-MM-DD
    total_hours: str = ""
    shifts: List[Shift] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekNumber": self.week_number,
            "weekCommencing": self.week_commencing,
            "totalHours": self.total_hours,
            "shifts": [s.to_dict() for s in self.shifts],
        }
