"""CLI entry point for attendance report exports.

Usage:
    python -m rollcall.reports export --team-id abc123 --format xlsx
    python -m rollcall.reports export --snapshot tang-a.json --format csv --out-dir exports
    python -m rollcall.reports summary --snapshot tang-a.json
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from rollcall.config import get_settings
from rollcall.models.snapshot import TeamSnapshot
from rollcall.reports.errors import ReportError

app = typer.Typer(help="Rollcall attendance report CLI", invoke_without_command=True)
console = Console()


@app.callback()
def _callback() -> None:
    """Attendance matrix and absence reports for club teams."""


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load(team_id: Optional[str], snapshot: Optional[Path]) -> TeamSnapshot:
    if snapshot is not None:
        from rollcall.reports.loader import load_snapshot_file

        return load_snapshot_file(snapshot)
    if team_id:
        from rollcall.reports.loader import load_team_snapshot

        return load_team_snapshot(team_id)
    # Neither given: an empty snapshot reports "Select a team first."
    return TeamSnapshot()


@app.command()
def export(
    team_id: Optional[str] = typer.Option(None, "--team-id", help="Team id to load from Supabase"),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", help="JSON snapshot file instead of Supabase"),
    fmt: Optional[str] = typer.Option(None, "--format", help="xlsx or csv (default: settings.export_format)"),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="Output directory (default: settings.export_dir)"),
    summary: bool = typer.Option(False, "--summary/--no-summary", help="Add the Player Summary sheet"),
    results: bool = typer.Option(False, "--results/--no-results", help="Add the match Results sheet"),
    upload: bool = typer.Option(False, "--upload", help="Upload exports to the reports bucket"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level"),
) -> None:
    """Build the attendance reports for one team and write them to disk."""
    _setup_logging(log_level)
    settings = get_settings()
    fmt_val = (fmt or settings.export_format).lower()

    from rollcall.reports.store import EXPORT_FORMATS

    if fmt_val not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format: {fmt_val}. Use one of {', '.join(EXPORT_FORMATS)}[/red]")
        raise typer.Exit(1)

    console.print("[bold]═══ Rollcall Attendance Export ═══[/bold]")

    try:
        console.print("[cyan]▶ Step 1/3: Loading team records...[/cyan]")
        snap = _load(team_id, snapshot)
        console.print(
            f"  [green]✓ {snap.team_name}: {len(snap.players)} players, "
            f"{len(snap.events)} events, {len(snap.attendance)} attendance records[/green]"
        )

        console.print("[cyan]▶ Step 2/3: Building reports...[/cyan]")
        from rollcall.reports.assemble import build_team_reports

        reports = build_team_reports(snap, include_summary=summary, include_results=results)
        console.print(f"  [green]✓ Sheets: {', '.join(reports.sheets)}[/green]")

        console.print(f"[cyan]▶ Step 3/3: Writing {fmt_val} export...[/cyan]")
        from rollcall.reports.store import upload_exports, write_exports

        paths = write_exports(reports, out_dir, fmt_val)
        for p in paths:
            console.print(f"  [green]✓ {p}[/green]")

        if upload:
            for full_path in upload_exports(reports, paths):
                console.print(f"  [green]✓ Uploaded {full_path}[/green]")

    except ReportError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"\n[red]✗ Export failed: {e}[/red]")
        raise typer.Exit(1)

    console.print()
    table = Table(title="Attendance Summary")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Players", str(len(reports.matrix.player_totals)))
    table.add_row("Events", str(len(reports.matrix.event_totals)))
    table.add_row("Attendances", str(reports.matrix.grand_total))
    table.add_row("Absences", str(sum(reports.reasons.absences.values())))
    table.add_row("Absence reasons", str(len(reports.reasons.reasons)))
    console.print(table)


@app.command("summary")
def summary_cmd(
    team_id: Optional[str] = typer.Option(None, "--team-id", help="Team id to load from Supabase"),
    snapshot: Optional[Path] = typer.Option(None, "--snapshot", help="JSON snapshot file instead of Supabase"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
) -> None:
    """Print per-player attendance and venue usage."""
    _setup_logging(log_level)

    from rollcall.reports.matrix import venue_usage
    from rollcall.reports.summary import build_player_summary

    try:
        snap = _load(team_id, snapshot)
        rows = build_player_summary(snap)
    except ReportError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{snap.team_name} attendance")
    header, *body = rows
    for i, col in enumerate(header):
        table.add_column(str(col), justify="left" if i == 0 else "right")
    for row in body:
        table.add_row(*(str(v) for v in row))
    console.print(table)

    usage = venue_usage(snap.sorted_events())
    if usage:
        vt = Table(title="Venue usage (by events)")
        vt.add_column("Venue")
        vt.add_column("Events", justify="right")
        vt.add_column("Share", justify="right")
        for u in usage:
            vt.add_row(u.venue, str(u.events), f"{u.percent}%")
        console.print(vt)
    else:
        console.print("[yellow]No events recorded yet.[/yellow]")


if __name__ == "__main__":
    app()
