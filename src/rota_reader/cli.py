from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from rota_reader.core.errors import ClientInputError
from rota_reader.engine.extract import extract_shifts, get_employee_shift_data, load_directory
from rota_reader.engine.filters import filter_shifts, flatten_weeks
from rota_reader.io.csv_export import export_to_csv, weekly_day_counts, weeks_to_dataframe
from rota_reader.io.ics_export import export_shifts_to_ics
from rota_reader.io.workbook import RosterWorkbook, open_workbook
from rota_reader.models.config import DEFAULT_CONFIG, ReaderConfig
from rota_reader.models.settings import EventSettings, ExportType, MonthFilter, NameFormat
from rota_reader.utils.logging_setup import get_logger, setup_logging
from rota_reader.utils.structured_logging import configure_structlog

logger = get_logger("rota_reader.cli")


def _load_config(path: str | None) -> ReaderConfig:
    """Defaults, overridden by keys from a JSON file."""
    if not path:
        return DEFAULT_CONFIG
    with open(path, encoding="utf-8") as fh:
        config = ReaderConfig.from_dict(json.load(fh))
    logger.debug(f"Loaded config from {path}: {config.to_dict()}")
    return config


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def _resolve_wk(workbook: RosterWorkbook, args: argparse.Namespace) -> int:
    """Explicit --wk wins; otherwise look the name up in the directory."""
    if args.wk is not None:
        return args.wk
    links = load_directory(workbook, args.config)
    ordered = [l for l in links if l.link.lower() == args.link.lower()] + links
    for link in ordered:
        employee = link.find(args.name)
        if employee is not None:
            return employee.wk
    raise ClientInputError(f"Employee {args.name!r} not found in the directory; pass --wk")


def _cmd_links(args: argparse.Namespace) -> int:
    links = load_directory(open_workbook(args.file), args.config)
    if args.json_out:
        print(json.dumps([l.to_dict() for l in links], ensure_ascii=False, indent=2))
        return 0
    for link in links:
        print(f"{link.link}:")
        for emp in link.employees:
            print(f" - {emp.name} (wk {emp.wk})")
    return 0


def _cmd_shifts(args: argparse.Namespace) -> int:
    workbook = open_workbook(args.file)
    wk = _resolve_wk(workbook, args)
    result = get_employee_shift_data(
        workbook, args.name, args.link, wk, args.start_date, args.end_date, args.config
    )

    if args.csv:
        export_to_csv(result.weeks_data, args.csv)
        print(f"Wrote {args.csv}", file=sys.stderr)
    if args.json_out:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    elif not args.csv:
        print(result.message)
        df = weeks_to_dataframe(result.weeks_data)
        if not df.empty:
            print(df.to_string(index=False))
    if args.summary and not args.json_out:
        print(weekly_day_counts(result.weeks_data).to_string(index=False))
    if result.warning:
        print(f"Warning: {result.warning}", file=sys.stderr)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    workbook = open_workbook(args.file)
    wk = _resolve_wk(workbook, args)

    export_type = ExportType(args.type)
    month_filter = None
    if export_type == ExportType.MONTH:
        if args.month is None or args.year is None:
            raise ClientInputError("--month and --year are required with --type month")
        month_filter = MonthFilter(month=args.month - 1, year=args.year)

    parsed = extract_shifts(workbook, args.link, wk, args.start_date, args.end_date, args.config)
    shifts = filter_shifts(flatten_weeks(parsed.weeks), export_type, month_filter)

    settings = EventSettings(
        shift_reminder_minutes=args.shift_reminder,
        rest_day_reminder=args.rest_day_reminder is not None,
        rest_day_reminder_minutes=args.rest_day_reminder or 0,
        event_name_format=NameFormat(args.name_format),
        custom_prefix=args.prefix,
    )
    export = export_shifts_to_ics(
        shifts,
        args.name,
        include_rest_days=args.include_rest_days,
        settings=settings,
        export_type=export_type,
        month_filter=month_filter,
        config=args.config,
    )

    out = Path(args.output) if args.output else Path(export.filename)
    if args.output == "-":
        sys.stdout.write(export.content)
    else:
        # newline="" keeps the CRLF line endings intact
        with open(out, "w", encoding="utf-8", newline="") as fh:
            fh.write(export.content)
        print(f"Wrote {export.event_count} events to {out}", file=sys.stderr)
    if parsed.warning:
        print(f"Warning: {parsed.warning}", file=sys.stderr)
    return 0


def _add_selection_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="Roster workbook (.xlsx)")
    p.add_argument("--name", required=True, help="Employee name")
    p.add_argument("--link", required=True, help="Link sheet name (substring match)")
    p.add_argument("--wk", type=int, default=None, help="Starting rotation week (default: directory lookup)")
    p.add_argument("--start-date", type=_iso_date, default=None, help="First date to include (YYYY-MM-DD)")
    p.add_argument("--end-date", type=_iso_date, default=None, help="Last date to include (YYYY-MM-DD)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rota-reader", description="Roster workbook to calendar feed")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--log-file", default=None, help="Also log to this file")
    p.add_argument("--config", default=None, help="JSON file overriding reader settings")
    sub = p.add_subparsers(dest="command", required=True)

    p_links = sub.add_parser("links", help="List links and employees from the directory sheet")
    p_links.add_argument("file", help="Roster workbook (.xlsx)")
    p_links.add_argument("--json", dest="json_out", action="store_true")
    p_links.set_defaults(func=_cmd_links)

    p_shifts = sub.add_parser("shifts", help="Show an employee's shifts")
    _add_selection_args(p_shifts)
    p_shifts.add_argument("--json", dest="json_out", action="store_true")
    p_shifts.add_argument("--csv", default=None, help="Write shifts to this CSV file")
    p_shifts.add_argument("--summary", action="store_true", help="Print working/rest day counts per week")
    p_shifts.set_defaults(func=_cmd_shifts)

    p_export = sub.add_parser("export", help="Export an employee's shifts as .ics")
    _add_selection_args(p_export)
    p_export.add_argument("--type", choices=["all", "month"], default="all")
    p_export.add_argument("--month", type=int, choices=range(1, 13), default=None, help="Month (1-12)")
    p_export.add_argument("--year", type=int, default=None)
    p_export.add_argument("--include-rest-days", action="store_true")
    p_export.add_argument("--shift-reminder", type=int, default=0, help="Minutes before each shift")
    p_export.add_argument("--rest-day-reminder", type=int, default=None, help="Rest day reminder offset (minutes)")
    p_export.add_argument("--name-format", choices=[f.value for f in NameFormat], default=NameFormat.REFERENCE.value)
    p_export.add_argument("--prefix", default="", help="Prefix for --name-format custom")
    p_export.add_argument("-o", "--output", default=None, help="Output path, '-' for stdout")
    p_export.set_defaults(func=_cmd_export)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = "DEBUG" if args.verbose > 1 else "INFO" if args.verbose else "WARNING"
    setup_logging(level=level, log_file=args.log_file)
    configure_structlog(level=getattr(logging, level))
    args.config = _load_config(args.config)

    try:
        return args.func(args)
    except ClientInputError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        for key, value in exc.details.items():
            print(f"  {key}: {value}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
