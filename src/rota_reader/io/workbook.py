"""Workbook access: sheets by name, cells by (row, column), fully in memory."""
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Sequence, Union

from openpyxl import Workbook, load_workbook

from rota_reader.io.cells import EMPTY, CellValue, classify
from rota_reader.utils.logging_setup import get_logger

logger = get_logger("rota_reader.io.workbook")


class RosterSheet:
    """Materialized sheet; rows and columns are 1-based like openpyxl."""

    def __init__(self, name: str, rows: Sequence[Sequence[Any]]):
        self.name = name
        self._rows = [tuple(r) for r in rows]

    @property
    def max_row(self) -> int:
        return len(self._rows)

    def cell(self, row: int, column: int) -> CellValue:
        if row < 1 or row > len(self._rows):
            return EMPTY
        values = self._rows[row - 1]
        if column < 1 or column > len(values):
            return EMPTY
        return classify(values[column - 1])

    def text(self, row: int, column: int) -> str:
        return self.cell(row, column).text()

    def __repr__(self):
        return f"RosterSheet(name={self.name!r}, rows={self.max_row})"


class RosterWorkbook:
    """Read-only view over an openpyxl workbook."""

    def __init__(self, workbook: Workbook):
        self._wb = workbook
        self._cache: Dict[str, RosterSheet] = {}

    @property
    def sheetnames(self) -> List[str]:
        return list(self._wb.sheetnames)

    def get(self, name: str) -> Optional[RosterSheet]:
        """Sheet with exactly this name, if present."""
        if name not in self._wb.sheetnames:
            return None
        return self._sheet(name)

    def find(self, fragment: str) -> Optional[RosterSheet]:
        """First sheet whose name contains `fragment`, case-insensitively."""
        key = fragment.lower()
        for name in self._wb.sheetnames:
            if key in name.lower():
                return self._sheet(name)
        return None

    def _sheet(self, name: str) -> RosterSheet:
        if name not in self._cache:
            ws = self._wb[name]
            self._cache[name] = RosterSheet(name, list(ws.iter_rows(values_only=True)))
            logger.debug(f"Loaded sheet {name!r}: {self._cache[name].max_row} rows")
        return self._cache[name]


def open_workbook(source: Union[str, Path, IO[bytes], Workbook]) -> RosterWorkbook:
    """
    Open a roster workbook.

    Args:
        source: Path, binary file object, or an already built openpyxl Workbook

    Returns:
        RosterWorkbook with cached formula results and rich text preserved
    """
    if isinstance(source, Workbook):
        return RosterWorkbook(source)
    if isinstance(source, Path):
        source = str(source)
    wb = load_workbook(source, data_only=True, rich_text=True)
    logger.debug(f"Opened workbook with sheets: {wb.sheetnames}")
    return RosterWorkbook(wb)
