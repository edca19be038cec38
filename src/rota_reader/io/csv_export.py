"""Tabular view of extracted shifts and CSV export."""
import io
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd

from rota_reader.models.shift import WeekData

COLUMNS = [
    "weekNumber", "weekCommencing", "day", "date", "reference",
    "startTime", "endTime", "totalHours", "isRestDay", "endsNextDay",
]


def weeks_to_dataframe(weeks: Iterable[WeekData]) -> pd.DataFrame:
    """One row per shift, with its week's commencing date."""
    rows: List[dict] = []
    for week in weeks:
        for shift in week.shifts:
            row = shift.to_dict()
            row["weekCommencing"] = week.week_commencing
            rows.append(row)

    if not rows:
        return pd.DataFrame(columns=COLUMNS)
    return pd.DataFrame(rows)[COLUMNS]


def weekly_day_counts(weeks: Iterable[WeekData]) -> pd.DataFrame:
    """Per-week counts of working days and rest days."""
    df = weeks_to_dataframe(weeks)
    if df.empty:
        return pd.DataFrame(columns=["weekCommencing", "weekNumber", "working", "rest"])

    summary = (
        df.groupby(["weekCommencing", "weekNumber"], sort=True)["isRestDay"]
        .agg(working=lambda s: int((~s.astype(bool)).sum()), rest=lambda s: int(s.astype(bool).sum()))
        .reset_index()
    )
    return summary


def export_to_csv(weeks: Iterable[WeekData], output: Union[str, Path, io.StringIO]) -> None:
    """Export shifts to CSV."""
    df = weeks_to_dataframe(weeks)
    if isinstance(output, io.StringIO):
        df.to_csv(output, index=False)
    else:
        df.to_csv(str(output), index=False)
