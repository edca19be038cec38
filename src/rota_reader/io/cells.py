"""
Cell Value Normalization
========================
Raw workbook values are classified once into a closed set of variants.
Each variant knows how to render itself as trimmed text and, where it makes
sense, as a calendar date. Nothing here raises on odd input: unknown shapes
degrade to text, unusable values to "" or None.
"""
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Mapping, Optional, Tuple, Union

from openpyxl.cell.rich_text import CellRichText
from openpyxl.utils.datetime import from_excel

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


class _Cell:
    """Shared defaults for all variants."""

    def text(self) -> str:
        return ""

    def as_date(self) -> Optional[date]:
        return None

    @property
    def is_empty(self) -> bool:
        return not self.text()


@dataclass(frozen=True)
class EmptyCell(_Cell):
    """Absent value."""


@dataclass(frozen=True)
class TextCell(_Cell):
    value: str

    def text(self) -> str:
        return self.value.strip()


@dataclass(frozen=True)
class NumberCell(_Cell):
    """Plain number, or a date serial when the caller expects a date."""
    value: float

    def text(self) -> str:
        if isinstance(self.value, float) and self.value.is_integer():
            return str(int(self.value))
        return str(self.value)

    def as_date(self) -> Optional[date]:
        return serial_to_date(self.value)


@dataclass(frozen=True)
class DateCell(_Cell):
    value: date

    def text(self) -> str:
        if isinstance(self.value, datetime):
            if self.value.time() == time(0, 0):
                return self.value.date().isoformat()
            return self.value.isoformat(sep=" ", timespec="minutes")
        return self.value.isoformat()

    def as_date(self) -> Optional[date]:
        if isinstance(self.value, datetime):
            return self.value.date()
        return self.value


@dataclass(frozen=True)
class TimeCell(_Cell):
    """Time-of-day formatted cell, e.g. an on/off time."""
    value: time

    def text(self) -> str:
        return f"{self.value.hour:02d}:{self.value.minute:02d}"


@dataclass(frozen=True)
class DurationCell(_Cell):
    """Elapsed-time cell such as a [h]:mm total."""
    value: timedelta

    def text(self) -> str:
        minutes = int(self.value.total_seconds() // 60)
        return f"{minutes // 60}:{minutes % 60:02d}"


@dataclass(frozen=True)
class RichTextCell(_Cell):
    runs: Tuple[str, ...]

    def text(self) -> str:
        return "".join(self.runs).strip()


@dataclass(frozen=True)
class FormulaCell(_Cell):
    """Formula wrapper; only the computed result matters."""
    result: "CellValue"

    def text(self) -> str:
        return self.result.text()

    def as_date(self) -> Optional[date]:
        return self.result.as_date()


CellValue = Union[
    EmptyCell, TextCell, NumberCell, DateCell, TimeCell,
    DurationCell, RichTextCell, FormulaCell,
]

EMPTY = EmptyCell()


def classify(raw: Any) -> CellValue:
    """Map a raw value (as produced by openpyxl or a mapping-based source) to a variant."""
    if raw is None:
        return EMPTY
    if isinstance(raw, _Cell):
        return raw
    if isinstance(raw, CellRichText):
        return RichTextCell(tuple(_run_text(run) for run in raw))
    if isinstance(raw, Mapping):
        return _classify_mapping(raw)
    if isinstance(raw, bool):
        return TextCell(str(raw).lower())
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and math.isnan(raw):
            return EMPTY
        return NumberCell(raw)
    if isinstance(raw, (datetime, date)):
        return DateCell(raw)
    if isinstance(raw, time):
        return TimeCell(raw)
    if isinstance(raw, timedelta):
        return DurationCell(raw)
    return TextCell(str(raw))


def _run_text(run: Any) -> str:
    # CellRichText holds plain strings and TextBlock objects
    if isinstance(run, str):
        return run
    return str(getattr(run, "text", "") or "")


def _classify_mapping(raw: Mapping) -> CellValue:
    if "result" in raw:
        return FormulaCell(classify(raw["result"]))
    if "richText" in raw:
        runs = raw.get("richText") or []
        return RichTextCell(tuple(
            str(r.get("text", "")) if isinstance(r, Mapping) else str(r) for r in runs
        ))
    if "text" in raw:
        return TextCell(str(raw["text"]))
    return TextCell(str(raw))


def cell_text(raw: Any) -> str:
    """Trimmed text of a raw value."""
    return classify(raw).text()


def cell_date(raw: Any) -> Optional[date]:
    """Date of a raw value, or None when it is not date-typed."""
    return classify(raw).as_date()


def serial_to_date(serial: float) -> Optional[date]:
    """Convert an Excel 1900-system date serial to a date."""
    try:
        converted = from_excel(serial)
    except (ValueError, OverflowError, TypeError):
        return None
    if isinstance(converted, datetime):
        return converted.date()
    return None


def parse_leading_int(text: str) -> Optional[int]:
    """Leading signed integer of `text` ("12", "12a" -> 12), else None."""
    match = _LEADING_INT.match(text or "")
    if not match:
        return None
    return int(match.group(1))


def normalize_clock(text: str) -> str:
    """Zero-pad clock text ("6:00" -> "06:00"); other text is returned unchanged."""
    match = _CLOCK.match(text or "")
    if not match:
        return text
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return text
    return f"{hour:02d}:{minute:02d}"
