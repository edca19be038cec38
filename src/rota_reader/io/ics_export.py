"""
iCalendar Export
================
Renders calendar events as RFC 5545 text: CRLF line endings, escaped text
values and lines folded at 75 octets.
"""
import re
import secrets
import string
import time
from datetime import date, datetime, timezone
from typing import Callable, Iterable, List, Optional

from rota_reader.core.dto import CalendarExport
from rota_reader.io.ics_events import CalendarEvent, shifts_to_events
from rota_reader.models.config import DEFAULT_CONFIG, ReaderConfig
from rota_reader.models.rules import MONTH_ABBREVIATIONS, REST_DAY_MARKER
from rota_reader.models.settings import EventSettings, ExportType, MonthFilter
from rota_reader.models.shift import Shift
from rota_reader.utils.logging_setup import get_logger

logger = get_logger("rota_reader.io.ics_export")

CRLF = "\r\n"
MAX_LINE_OCTETS = 75
_UID_ALPHABET = string.ascii_lowercase + string.digits
_ESCAPED = re.compile(r"\\(.)", re.DOTALL)
_UNESCAPE = {"\\": "\\", ";": ";", ",": ",", "n": "\n", "N": "\n"}
_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9]")


def escape_text(text: str) -> str:
    """Escape a TEXT value; backslashes first so nothing is escaped twice."""
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def unescape_text(text: str) -> str:
    """Inverse of `escape_text`."""
    return _ESCAPED.sub(lambda m: _UNESCAPE.get(m.group(1), m.group(0)), text)


def fold_line(line: str, limit: int = MAX_LINE_OCTETS) -> str:
    """Fold a content line so no physical line exceeds `limit` octets."""
    if len(line.encode("utf-8")) <= limit:
        return line

    parts = []
    current, current_len, max_len = "", 0, limit
    for ch in line:
        ch_len = len(ch.encode("utf-8"))
        if current_len + ch_len > max_len:
            parts.append(current)
            # Continuation lines start with a space, which counts
            current, current_len, max_len = "", 0, limit - 1
        current += ch
        current_len += ch_len
    parts.append(current)
    return (CRLF + " ").join(parts)


def format_date_time(value: datetime) -> str:
    """Floating local date-time (no Z)."""
    return value.strftime("%Y%m%dT%H%M%S")


def format_date_time_utc(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def format_date_only(value: date) -> str:
    return value.strftime("%Y%m%d")


def generate_uid(domain: str = DEFAULT_CONFIG.uid_domain) -> str:
    """Time-based identifier with a random suffix."""
    suffix = "".join(secrets.choice(_UID_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}@{domain}"


def _event_lines(event: CalendarEvent, uid: str, stamp: str) -> List[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{uid}",
        f"DTSTAMP:{stamp}",
    ]
    if event.is_all_day:
        lines.append(f"DTSTART;VALUE=DATE:{format_date_only(event.start)}")
        lines.append(f"DTEND;VALUE=DATE:{format_date_only(event.end)}")
    else:
        lines.append(f"DTSTART:{format_date_time(event.start)}")
        lines.append(f"DTEND:{format_date_time(event.end)}")

    lines.append(f"SUMMARY:{escape_text(event.summary)}")
    if event.description:
        lines.append(f"DESCRIPTION:{escape_text(event.description)}")
    if event.category:
        lines.append(f"CATEGORIES:{escape_text(event.category)}")

    if event.alarm_minutes and event.alarm_minutes > 0:
        lines.extend([
            "BEGIN:VALARM",
            "ACTION:DISPLAY",
            f"DESCRIPTION:{escape_text(event.summary)}",
            f"TRIGGER:-PT{event.alarm_minutes}M",
            "END:VALARM",
        ])

    lines.append("END:VEVENT")
    return lines


def generate_ics(
    events: Iterable[CalendarEvent],
    employee_name: str,
    now: Optional[datetime] = None,
    uid_factory: Optional[Callable[[], str]] = None,
    config: ReaderConfig = DEFAULT_CONFIG,
) -> str:
    """
    Render a VCALENDAR document.

    Args:
        events: Events to include, in order
        employee_name: Used for the calendar display name
        now: Creation timestamp (defaults to the current UTC time)
        uid_factory: UID generator (defaults to `generate_uid`)
        config: Product id, timezone hint and UID domain

    Returns:
        Calendar text with CRLF line endings
    """
    stamp = format_date_time_utc(now or datetime.now(timezone.utc))
    if uid_factory is None:
        uid_factory = lambda: generate_uid(config.uid_domain)  # noqa: E731

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{config.product_id}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:{escape_text(employee_name)} Shifts",
        f"X-WR-TIMEZONE:{config.timezone_hint}",
    ]
    for event in events:
        lines.extend(_event_lines(event, uid_factory(), stamp))
    lines.append("END:VCALENDAR")

    return CRLF.join(fold_line(line) for line in lines)


def export_filename(
    employee_name: str,
    export_type: ExportType = ExportType.ALL,
    month_filter: Optional[MonthFilter] = None,
    shift: Optional[Shift] = None,
) -> str:
    """Download file name, e.g. "Jane_Smith_shifts_Nov_2024.ics"."""
    filename = f"{_UNSAFE_FILENAME.sub('_', employee_name)}_shifts"
    if export_type == ExportType.MONTH and month_filter is not None:
        filename += f"_{MONTH_ABBREVIATIONS[month_filter.month]}_{month_filter.year}"
    elif export_type == ExportType.SINGLE and shift is not None:
        reference = shift.reference or REST_DAY_MARKER
        filename += f"_{_UNSAFE_FILENAME.sub('_', reference)}_{shift.date}"
    return filename + ".ics"


def export_shifts_to_ics(
    shifts: Iterable[Shift],
    employee_name: str,
    include_rest_days: bool = False,
    settings: Optional[EventSettings] = None,
    export_type: ExportType = ExportType.ALL,
    month_filter: Optional[MonthFilter] = None,
    config: ReaderConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> CalendarExport:
    """Format, serialize and name a calendar download for already-filtered shifts."""
    shifts = list(shifts)
    events = shifts_to_events(shifts, include_rest_days, settings)
    content = generate_ics(events, employee_name, now=now, config=config)
    single = shifts[0] if export_type == ExportType.SINGLE and shifts else None
    filename = export_filename(employee_name, export_type, month_filter, single)
    logger.info(f"Calendar export {filename}: {len(events)} events from {len(shifts)} shifts")
    return CalendarExport(content=content, filename=filename, event_count=len(events))
