"""Spreadsheet export of a result set."""
import csv
import io
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Any

from .aggregator import ResultSet
from ..errors import ExportError
from ..utils.file_utils import write_bytes

logger = logging.getLogger(__name__)

HEADERS = ["Date", "Task", "Duration", "Start Time", "End Time"]
COLUMN_WIDTHS = [12, 30, 12, 12, 12]
SHEET_TITLE = "Time Entries"

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv"


@dataclass(frozen=True)
class ExportedFile:
    """A serialized export ready to be saved or sent."""
    filename: str
    content: bytes
    media_type: str

    def save(self, directory: str) -> str:
        """Write the file into a directory.

        Args:
            directory: Output directory

        Returns:
            Path of the written file
        """
        return write_bytes(directory, self.filename, self.content)


def export_filename(range_start: date, range_end: date, ext: str = "xlsx") -> str:
    return f"Clockify_Export_{range_start.isoformat()}_to_{range_end.isoformat()}.{ext}"


def build_rows(result_set: ResultSet, include_task: bool) -> List[List[Any]]:
    """Lay out a result set as worksheet rows, header first and totals last.

    Args:
        result_set: Records to export
        include_task: Whether to fill the Task column (it is kept but blank otherwise)

    Returns:
        Rows as lists of cell values
    """
    rows = [list(HEADERS)]
    rows.extend(record.to_row(include_task) for record in result_set.records)
    rows.append(["", "", result_set.total_duration_label, "", ""])
    return rows


def export_to_spreadsheet(result_set: ResultSet, include_task: bool, range_start: date, range_end: date,
                          fmt: str = "xlsx") -> ExportedFile:
    """Serialize a result set to a spreadsheet file.

    Args:
        result_set: Records to export
        include_task: Whether to fill the Task column
        range_start: First day of the exported range, used in the file name
        range_end: Last day of the exported range, used in the file name
        fmt: "xlsx" or "csv"

    Returns:
        ExportedFile

    Raises:
        ExportError: If there is nothing to export, the format is unknown,
            or openpyxl is not installed
    """
    if result_set is None or result_set.is_empty:
        raise ExportError("No records to export", ExportError.EMPTY)

    rows = build_rows(result_set, include_task)
    filename = export_filename(range_start, range_end, fmt)
    if fmt == "xlsx":
        content = _to_xlsx(rows)
        media_type = XLSX_MEDIA_TYPE
    elif fmt == "csv":
        content = _to_csv(rows)
        media_type = CSV_MEDIA_TYPE
    else:
        raise ExportError(f"Unsupported export format: {fmt}", ExportError.FORMAT)

    logger.info("Exported %d records to %s", result_set.count, filename)
    return ExportedFile(filename, content, media_type)


def _to_xlsx(rows: List[List[Any]]) -> bytes:
    try:
        from openpyxl import Workbook
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter
    except ImportError as e:
        raise ExportError("Excel library is not available. Install openpyxl and try again.",
                          ExportError.BACKEND) from e

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    for row in rows:
        ws.append(row)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for i, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(i)].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _to_csv(rows: List[List[Any]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")
