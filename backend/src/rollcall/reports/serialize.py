"""Turn row-sets into CSV text or an xlsx workbook."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from rollcall.reports.errors import SerializationError

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_CONTENT_TYPE = "text/csv"

_MAX_SHEET_TITLE = 31


def cell_value(value: Any) -> str | int | float:
    """None -> "", numbers as-is, anything else as text."""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return str(value)


def to_csv(rows: Sequence[Sequence[Any]]) -> str:
    """Quote every field, double inner quotes, join rows with newlines."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    try:
        writer.writerows([cell_value(v) for v in row] for row in rows)
    except (csv.Error, TypeError) as e:
        raise SerializationError(f"Could not write CSV: {e}") from e
    return buf.getvalue().removesuffix("\n")


def to_workbook(sheets: Mapping[str, Sequence[Sequence[Any]]]) -> bytes:
    """Write each row-set to its own sheet and return the xlsx bytes."""
    if not sheets:
        raise SerializationError("No sheets to write")

    wb = Workbook()
    wb.remove(wb.active)
    try:
        for name, rows in sheets.items():
            ws = wb.create_sheet(title=name[:_MAX_SHEET_TITLE])
            for row in rows:
                ws.append([cell_value(v) for v in row])
        buf = io.BytesIO()
        wb.save(buf)
    except (IllegalCharacterError, ValueError, TypeError) as e:
        raise SerializationError(f"Could not write workbook: {e}") from e

    data = buf.getvalue()
    logger.info(f"Workbook size: {len(data):,} bytes ({len(sheets)} sheets)")
    return data
