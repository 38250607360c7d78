"""Per-player attendance summary and match results sheets."""

from __future__ import annotations

import polars as pl

from rollcall.models.records import Event
from rollcall.models.snapshot import TeamSnapshot
from rollcall.reports.errors import NoTeamSelectedError
from rollcall.reports.index import snapshot_index
from rollcall.reports.labels import category_label, percent, venue_label
from rollcall.reports.matrix import Row, presence_grid, require_roster

SUMMARY_HEADER = ["Player", "Events", "Present", "Absent", "Attendance %"]
RESULTS_HEADER = ["Date", "Type", "Opposition", "Venue", "Score", "Result"]


def build_player_summary(snapshot: TeamSnapshot) -> list[Row]:
    """One row per player: events, present, absent and attendance percentage."""
    require_roster(snapshot, need_events=False)

    players = snapshot.sorted_players()
    events = snapshot.sorted_events()
    n_events = len(events)

    present_by_pos: dict[int, int] = {}
    if n_events:
        grid = presence_grid(players, events, snapshot_index(snapshot))
        totals = grid.group_by("player_pos").agg(
            pl.col("present").sum().cast(pl.Int64).alias("present")
        )
        present_by_pos = dict(zip(totals["player_pos"].to_list(), totals["present"].to_list()))

    rows: list[Row] = [list(SUMMARY_HEADER)]
    for pos, player in enumerate(players):
        present = present_by_pos.get(pos, 0)
        rows.append([
            player.name,
            n_events,
            present,
            n_events - present,
            f"{percent(present, n_events)}%",
        ])
    return rows


def score_line(event: Event) -> str:
    """``goals-points vs goals-points``, missing values as 0."""
    return (
        f"{event.team_goals or 0}-{event.team_points or 0} vs "
        f"{event.opp_goals or 0}-{event.opp_points or 0}"
    )


def build_results_report(snapshot: TeamSnapshot) -> list[Row]:
    """Matches and challenges in date order, then the W-D-L record."""
    if snapshot.team is None:
        raise NoTeamSelectedError()

    rows: list[Row] = [list(RESULTS_HEADER)]
    record = {"W": 0, "D": 0, "L": 0}
    for event in snapshot.sorted_events():
        if not event.is_scored:
            continue
        rows.append([
            event.date_label,
            category_label(event.type),
            event.opposition or "",
            venue_label(event),
            score_line(event),
            event.result or "",
        ])
        if event.result in record:
            record[event.result] += 1

    rows.append([])
    rows.append(["Record", f"{record['W']}-{record['D']}-{record['L']}"])
    return rows
