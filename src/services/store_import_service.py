"""
Store CSV import.

Expected file:
    name,level
    Toko A,Ritel
    Toko B,WS1
    "Toko C, Cabang 2",RitelL

Rows with an empty name or an unknown level are reported by line number
(1-based, header counted); valid rows are still imported.
"""

import csv
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from src.models.entities import Store
from src.models.enums import StoreLevel
from src.models.errors import InvalidCsvHeaderError
from src.repositories.interfaces import SnapshotRepository

logger = logging.getLogger(__name__)

EXPECTED_HEADER = "name,level"


@dataclass
class StoreImportRow:
    """A parsed, valid CSV row."""
    line_number: int
    name: str
    level: StoreLevel


@dataclass
class StoreImportResult:
    """Outcome of a CSV import, for display to the user."""
    rows: List[StoreImportRow] = field(default_factory=list)
    error_lines: List[int] = field(default_factory=list)
    stores: List[Store] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.stores) if self.stores else len(self.rows)

    @property
    def has_errors(self) -> bool:
        return bool(self.error_lines)

    def summary(self) -> str:
        text = f"Imported {self.imported_count} store(s)."
        if self.error_lines:
            lines = ", ".join(str(n) for n in self.error_lines)
            text += (f" {len(self.error_lines)} row(s) failed (lines: {lines}). "
                     "Check that the store level is spelled exactly.")
        return text

    def to_dict(self) -> dict:
        return {
            "imported_count": self.imported_count,
            "error_lines": list(self.error_lines),
            "stores": [s.to_dict() for s in self.stores],
            "summary": self.summary(),
        }


def _parse_row(row: str) -> Optional[Tuple[str, StoreLevel]]:
    try:
        cells = [cell.strip() for cell in next(csv.reader([row]), [])]
    except csv.Error:
        return None
    name = cells[0] if cells else ""
    level_text = cells[1] if len(cells) > 1 else ""
    if not name or not level_text:
        return None
    try:
        return name, StoreLevel.parse(level_text)
    except ValueError:
        return None


def parse_store_csv(text: str) -> StoreImportResult:
    """
    Parse CSV text into valid rows and failed line numbers.

    Raises:
        InvalidCsvHeaderError: If the file is empty or the header is not `name,level`
    """
    rows = [line.strip() for line in (text or "").split("\n")]
    rows = [line for line in rows if line]
    if not rows:
        raise InvalidCsvHeaderError("CSV file is empty")

    header = rows.pop(0).lower().replace("\r", "")
    if header != EXPECTED_HEADER:
        raise InvalidCsvHeaderError(f'Invalid CSV header {header!r}, expected "{EXPECTED_HEADER}"')

    result = StoreImportResult()
    for index, row in enumerate(rows):
        line_number = index + 2
        parsed = _parse_row(row)
        if parsed is None:
            result.error_lines.append(line_number)
            continue
        name, level = parsed
        result.rows.append(StoreImportRow(line_number=line_number, name=name, level=level))
    return result


class StoreImportService:
    """Parses store CSV files and bulk-inserts the valid rows."""

    def __init__(self, repository: SnapshotRepository):
        self.repository = repository

    def import_text(self, text: str) -> StoreImportResult:
        result = parse_store_csv(text)
        if result.rows:
            result.stores = self.repository.bulk_add_stores(
                (row.name, row.level) for row in result.rows
            )
        if result.error_lines:
            logger.warning(f"Store import skipped lines {result.error_lines}")
        logger.info(result.summary())
        return result
