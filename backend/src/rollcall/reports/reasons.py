"""Per-player tally of absence reasons."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import polars as pl

from rollcall.models.snapshot import TeamSnapshot
from rollcall.reports.index import index_frame, snapshot_index
from rollcall.reports.labels import NO_REASON
from rollcall.reports.matrix import Row, require_roster
from rollcall.reports.presence import absent_expr

logger = logging.getLogger(__name__)


@dataclass
class ReasonsReport:
    rows: list[Row]
    reasons: list[str] = field(default_factory=list)
    absences: dict[str, int] = field(default_factory=dict)  # player id -> total


def absence_tally(snapshot: TeamSnapshot) -> pl.DataFrame:
    """Absent records counted per (player_id, reason) with blank reasons labelled."""
    return (
        index_frame(snapshot_index(snapshot))
        .filter(absent_expr("status"))
        .with_columns(
            pl.col("reason").fill_null("").str.strip_chars().alias("reason")
        )
        .with_columns(
            pl.when(pl.col("reason") == "")
            .then(pl.lit(NO_REASON))
            .otherwise(pl.col("reason"))
            .alias("reason")
        )
        .group_by(["player_id", "reason"])
        .agg(pl.len().cast(pl.Int64).alias("count"))
    )


def build_reasons_report(snapshot: TeamSnapshot) -> ReasonsReport:
    """Build the Reasons Missing sheet: one row per roster player.

    Columns are every reason seen on an absent record, alphabetical, then
    ``Total Absent``. Players without absences get a row of zeros.
    """
    require_roster(snapshot, need_events=False)

    tally = absence_tally(snapshot)
    reasons = sorted(set(tally["reason"].to_list()), key=lambda r: (r.casefold(), r))
    counts: dict[tuple[str, str], int] = {
        (r["player_id"], r["reason"]): r["count"] for r in tally.iter_rows(named=True)
    }

    rows: list[Row] = [["Player", *reasons, "Total Absent"]]
    absences: dict[str, int] = {}
    for player in snapshot.sorted_players():
        per_reason = [counts.get((player.id, r), 0) for r in reasons]
        total = sum(per_reason)
        rows.append([player.name, *per_reason, total])
        absences[player.id] = total

    logger.info(f"Reasons: {len(reasons)} reason(s), {sum(absences.values())} absence(s)")
    return ReasonsReport(rows=rows, reasons=reasons, absences=absences)
