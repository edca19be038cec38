"""
Calendar Event Formatting
=========================
Turns shift records into calendar event descriptors. Working shifts become
timed events named by the caller's template; rest days become all-day events
with a fixed title.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from rota_reader.models.rules import (
    GENERIC_SHIFT_CATEGORY,
    GENERIC_SHIFT_LABEL,
    REST_DAY_CATEGORY,
    REST_DAY_DESCRIPTION,
    REST_DAY_TITLE,
)
from rota_reader.models.settings import EventSettings, NameFormat, default_event_settings
from rota_reader.models.shift import Shift
from rota_reader.utils.logging_setup import get_logger

logger = get_logger("rota_reader.io.ics_events")

_FOUR_DIGITS = re.compile(r"^\d{4}$")
_NON_CATEGORY_CHARS = re.compile(r"[^A-Z0-9_]")


@dataclass
class CalendarEvent:
    """Format-neutral event; all-day events use dates, timed events datetimes."""
    summary: str
    start: Union[date, datetime]
    end: Union[date, datetime]
    description: Optional[str] = None
    is_all_day: bool = False
    category: Optional[str] = None
    alarm_minutes: Optional[int] = None


def determine_category(reference: Optional[str]) -> str:
    """Group a turn/reference code into a calendar category."""
    if not reference:
        return GENERIC_SHIFT_CATEGORY

    ref = reference.upper()
    if "A/R" in ref or ref.startswith("AR"):
        return "AR_SHIFT"
    if _FOUR_DIGITS.match(ref):
        return f"REF_{ref}"
    if "TRAIN" in ref:
        return "TRAINING"
    if "MEET" in ref:
        return "MEETING"
    return _NON_CATEGORY_CHARS.sub("_", ref)


def format_event_name(
    reference: Optional[str],
    start_time: Optional[str],
    end_time: Optional[str],
    settings: EventSettings,
) -> str:
    """Summary for a working shift under the selected naming template."""
    ref = reference or GENERIC_SHIFT_LABEL
    has_times = bool(start_time and end_time)
    fmt = settings.event_name_format

    if fmt == NameFormat.TIMES and has_times:
        return f"{start_time}-{end_time}"
    if fmt == NameFormat.TIMES_WITH_REF and has_times:
        return f"{start_time}-{end_time} ({ref})"
    if fmt == NameFormat.DETAILED and has_times:
        return f"Shift {ref} ({start_time}-{end_time})"
    if fmt == NameFormat.CUSTOM:
        return f"{settings.custom_prefix}{ref}"
    return ref


def rest_day_event(shift: Shift, settings: EventSettings) -> CalendarEvent:
    """All-day event covering [date, date + 1)."""
    day = shift.calendar_date
    return CalendarEvent(
        summary=REST_DAY_TITLE,
        description=REST_DAY_DESCRIPTION,
        start=day,
        end=day + timedelta(days=1),
        is_all_day=True,
        category=REST_DAY_CATEGORY,
        alarm_minutes=settings.rest_day_reminder_minutes if settings.rest_day_reminder else None,
    )


def shift_event(shift: Shift, settings: EventSettings) -> Optional[CalendarEvent]:
    """Timed event for a working shift, or None when its times are unusable."""
    if not shift.start_date_time or not shift.end_date_time:
        return None
    try:
        start = datetime.fromisoformat(shift.start_date_time)
        end = datetime.fromisoformat(shift.end_date_time)
    except ValueError:
        logger.warning(
            f"Skipping {shift.date} ({shift.reference}): "
            f"unreadable times {shift.start_date_time!r} / {shift.end_date_time!r}"
        )
        return None

    label = shift.reference or GENERIC_SHIFT_LABEL
    return CalendarEvent(
        summary=format_event_name(shift.reference, shift.start_time, shift.end_time, settings),
        description=f"{label} - {shift.start_time} to {shift.end_time}",
        start=start,
        end=end,
        is_all_day=False,
        category=determine_category(shift.reference),
        alarm_minutes=settings.shift_reminder_minutes if settings.shift_reminder_minutes > 0 else None,
    )


def shifts_to_events(
    shifts: Iterable[Shift],
    include_rest_days: bool = False,
    settings: Optional[EventSettings] = None,
) -> List[CalendarEvent]:
    """
    Map shifts to calendar events.

    Args:
        shifts: Shifts to export
        include_rest_days: Emit all-day events for rest days
        settings: Reminder and naming options (defaults when None)

    Returns:
        Events in shift order
    """
    if settings is None:
        settings = default_event_settings()

    events = []
    for shift in shifts:
        if shift.is_rest_day:
            if include_rest_days:
                events.append(rest_day_event(shift, settings))
            continue
        event = shift_event(shift, settings)
        if event is not None:
            events.append(event)

    logger.debug(f"Built {len(events)} events (rest days {'included' if include_rest_days else 'excluded'})")
    return events
