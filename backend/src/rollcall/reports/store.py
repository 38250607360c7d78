"""Write report exports to disk and upload them to Supabase Storage."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from rollcall.config import get_settings
from rollcall.reports.assemble import TeamReports
from rollcall.reports.labels import report_filename
from rollcall.reports.serialize import CSV_CONTENT_TYPE, XLSX_CONTENT_TYPE, to_csv, to_workbook
from rollcall.storage import upload_bytes

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("xlsx", "csv")


def render_exports(reports: TeamReports, fmt: str = "xlsx") -> dict[str, bytes]:
    """Serialize every sheet, keyed by download filename.

    ``xlsx`` gives a single workbook; ``csv`` gives one file per sheet.
    Nothing is returned if any sheet fails to serialize.
    """
    if fmt == "xlsx":
        name = report_filename(reports.team_name, "Attendance", "xlsx")
        return {name: to_workbook(reports.sheets)}
    if fmt == "csv":
        return {
            report_filename(reports.team_name, sheet.replace(" ", "_"), "csv"): to_csv(rows).encode("utf-8")
            for sheet, rows in reports.sheets.items()
        }
    raise ValueError(f"Unknown export format: {fmt!r}")


def write_exports(
    reports: TeamReports,
    out_dir: str | Path | None = None,
    fmt: str = "xlsx",
) -> list[Path]:
    """Write exports under ``out_dir`` (default: settings.export_dir). Returns the paths."""
    files = render_exports(reports, fmt)

    target = Path(out_dir or get_settings().export_dir)
    target.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, data in files.items():
        path = target / name
        path.write_bytes(data)
        logger.info(f"Wrote {path} ({len(data):,} bytes)")
        written.append(path)
    return written


def upload_exports(reports: TeamReports, paths: list[Path]) -> list[str]:
    """Upload written exports to the reports bucket. Returns storage paths.

    Path format: attendance/{team_id}/{timestamp}/{filename}
    """
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    bucket = get_settings().supabase_bucket_reports

    uploaded: list[str] = []
    for path in paths:
        content_type = XLSX_CONTENT_TYPE if path.suffix == ".xlsx" else CSV_CONTENT_TYPE
        key = f"attendance/{reports.team_id}/{ts}/{path.name}"
        full_path = upload_bytes(bucket, key, path.read_bytes(), content_type)
        logger.info(f"Uploaded to {full_path}")
        uploaded.append(full_path)
    return uploaded
