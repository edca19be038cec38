"""Rota Reader: roster workbook extraction and iCalendar export."""

__version__ = "0.1.0"
