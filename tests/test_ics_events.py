"""Tests for shift-to-event formatting."""
from datetime import date, datetime

import pytest

from rota_reader.io.ics_events import (
    determine_category,
    format_event_name,
    shifts_to_events,
)
from rota_reader.io.roster_parser import build_shift
from rota_reader.models.settings import EventSettings, NameFormat
from rota_reader.models.shift import Shift

SUNDAY = date(2024, 11, 3)


@pytest.fixture
def early():
    return build_shift(5, 0, SUNDAY, "06:00", "14:00", "1234", "8:00")


@pytest.fixture
def rest_day():
    return build_shift(5, 1, date(2024, 11, 4), "", "", "RD", "")


class TestCategory:
    @pytest.mark.parametrize("reference, expected", [
        (None, "SHIFT"),
        ("", "SHIFT"),
        ("A/R 7", "AR_SHIFT"),
        ("ar12", "AR_SHIFT"),
        ("1234", "REF_1234"),
        ("12345", "12345"),
        ("Train1", "TRAINING"),
        ("Team meeting", "MEETING"),
        ("N22", "N22"),
        ("spare-1 x", "SPARE_1_X"),
    ])
    def test_categories(self, reference, expected):
        """Test references map to their category codes."""
        assert determine_category(reference) == expected


class TestEventName:
    """Summary templates."""

    @pytest.mark.parametrize("fmt, expected", [
        (NameFormat.REFERENCE, "1234"),
        (NameFormat.TIMES, "06:00-14:00"),
        (NameFormat.TIMES_WITH_REF, "06:00-14:00 (1234)"),
        (NameFormat.DETAILED, "Shift 1234 (06:00-14:00)"),
    ])
    def test_formats(self, fmt, expected):
        """Test each naming template."""
        settings = EventSettings(event_name_format=fmt)
        assert format_event_name("1234", "06:00", "14:00", settings) == expected

    def test_custom_prefix(self):
        """Test the custom template prepends the prefix."""
        settings = EventSettings(event_name_format=NameFormat.CUSTOM, custom_prefix="Work: ")
        assert format_event_name("1234", "06:00", "14:00", settings) == "Work: 1234"

    def test_time_formats_fall_back_without_times(self):
        """Test time templates fall back to the reference."""
        settings = EventSettings(event_name_format=NameFormat.TIMES)
        assert format_event_name("SPARE", None, None, settings) == "SPARE"

    def test_missing_reference_uses_generic_label(self):
        """Test a missing reference reads as Shift."""
        settings = EventSettings(event_name_format=NameFormat.DETAILED)
        assert format_event_name(None, "06:00", "14:00", settings) == "Shift Shift (06:00-14:00)"

    def test_format_accepts_plain_string(self):
        """Test string formats are coerced to the enum."""
        settings = EventSettings(event_name_format="timesWithRef")
        assert settings.event_name_format is NameFormat.TIMES_WITH_REF


class TestShiftsToEvents:
    """Mapping shifts to events."""

    def test_working_shift(self, early):
        """Test a day shift becomes a timed event."""
        event = shifts_to_events([early])[0]
        assert event.summary == "1234"
        assert event.description == "1234 - 06:00 to 14:00"
        assert event.start == datetime(2024, 11, 3, 6, 0)
        assert event.end == datetime(2024, 11, 3, 14, 0)
        assert event.is_all_day is False
        assert event.category == "REF_1234"
        assert event.alarm_minutes is None

    def test_overnight_shift_ends_next_day(self):
        """Test an overnight event ends the following morning."""
        night = build_shift(5, 2, date(2024, 11, 5), "22:00", "06:00", "N22", "8:00")
        event = shifts_to_events([night])[0]
        assert event.end == datetime(2024, 11, 6, 6, 0)

    def test_rest_days_excluded_by_default(self, early, rest_day):
        """Test rest days are dropped unless requested."""
        assert len(shifts_to_events([early, rest_day])) == 1

    def test_rest_day_event(self, rest_day):
        """Test a rest day becomes an all-day event."""
        event = shifts_to_events([rest_day], include_rest_days=True)[0]
        assert event.summary == "Rest Day (RD)"
        assert event.description == "Rest Day"
        assert event.is_all_day is True
        assert event.start == date(2024, 11, 4)
        assert event.end == date(2024, 11, 5)
        assert event.category == "REST_DAY"

    def test_rest_day_title_ignores_naming_template(self, rest_day):
        """Test rest days keep the fixed title."""
        settings = EventSettings(event_name_format=NameFormat.CUSTOM, custom_prefix="Work: ")
        event = shifts_to_events([rest_day], include_rest_days=True, settings=settings)[0]
        assert event.summary == "Rest Day (RD)"

    def test_shift_reminder(self, early):
        """Test the shift reminder offset is carried."""
        event = shifts_to_events([early], settings=EventSettings(shift_reminder_minutes=30))[0]
        assert event.alarm_minutes == 30

    def test_rest_day_reminder_needs_flag(self, rest_day):
        """Test rest day reminders need the flag."""
        off = EventSettings(rest_day_reminder_minutes=60)
        on = EventSettings(rest_day_reminder=True, rest_day_reminder_minutes=60)
        assert shifts_to_events([rest_day], True, off)[0].alarm_minutes is None
        assert shifts_to_events([rest_day], True, on)[0].alarm_minutes == 60

    def test_shift_without_times_skipped(self):
        """Test shifts without datetimes produce no event."""
        spare = build_shift(5, 2, date(2024, 11, 5), "", "", "SPARE", "")
        assert shifts_to_events([spare]) == []

    def test_unreadable_times_skipped(self):
        """Test unparseable datetimes are skipped."""
        shift = Shift(
            week_number=1, day="Sunday", date="2024-11-03",
            start_time="early", end_time="late",
            start_date_time="2024-11-03Tearly:00", end_date_time="2024-11-03Tlate:00",
            reference="X",
        )
        assert shifts_to_events([shift]) == []

    def test_order_preserved(self, early, rest_day):
        """Test events follow shift order."""
        events = shifts_to_events([rest_day, early], include_rest_days=True)
        assert [e.is_all_day for e in events] == [True, False]
