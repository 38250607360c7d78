"""Player x event attendance matrix with totals and venue usage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import polars as pl

from rollcall.models.records import Event, Player
from rollcall.models.snapshot import TeamSnapshot
from rollcall.reports.errors import NoEventsError, NoPlayersError, NoTeamSelectedError
from rollcall.reports.index import AttendanceIndex, index_frame, snapshot_index
from rollcall.reports.labels import category_label, venue_label
from rollcall.reports.presence import presence_expr

logger = logging.getLogger(__name__)

Row = list[str | int]

VENUE_USAGE_TITLE = "Venue usage (by events)"


@dataclass(frozen=True)
class VenueUsage:
    venue: str
    events: int
    percent: int

    def as_row(self) -> Row:
        return [self.venue, self.events, f"{self.percent}%"]


@dataclass
class MatrixReport:
    rows: list[Row]
    player_totals: list[tuple[str, int]] = field(default_factory=list)
    event_totals: list[int] = field(default_factory=list)
    grand_total: int = 0
    venue_usage: list[VenueUsage] = field(default_factory=list)


def require_roster(snapshot: TeamSnapshot, need_events: bool = True) -> None:
    """Raise the input error matching the first missing piece of the snapshot."""
    if snapshot.team is None:
        raise NoTeamSelectedError()
    if need_events and not snapshot.events:
        raise NoEventsError()
    if not snapshot.players:
        raise NoPlayersError()


def _events_frame(events: list[Event]) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "event_pos": list(range(len(events))),
            "event_id": [e.id for e in events],
            "venue": [venue_label(e) for e in events],
        },
        schema={"event_pos": pl.Int64, "event_id": pl.Utf8, "venue": pl.Utf8},
    )


def _players_frame(players: list[Player]) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "player_pos": list(range(len(players))),
            "player_id": [p.id for p in players],
        },
        schema={"player_pos": pl.Int64, "player_id": pl.Utf8},
    )


def presence_grid(
    players: list[Player],
    events: list[Event],
    index: AttendanceIndex,
) -> pl.DataFrame:
    """Cross join roster and events, flagging presence for every pair.

    Pairs with no attendance record count as present. Sorted by
    (player_pos, event_pos).
    """
    return (
        _players_frame(players)
        .join(_events_frame(events), how="cross")
        .join(index_frame(index), on=["event_id", "player_id"], how="left")
        .with_columns(presence_expr("status").alias("present"))
        .sort(["player_pos", "event_pos"])
    )


def venue_usage(events: list[Event]) -> list[VenueUsage]:
    """Events per venue label, busiest first; ties keep first appearance."""
    total = len(events)
    if total == 0:
        return []

    usage = (
        _events_frame(events)
        .group_by("venue", maintain_order=True)
        .agg(
            pl.len().alias("events"),
            pl.col("event_pos").min().alias("first_pos"),
        )
        .with_columns(
            (pl.col("events") * 100.0 / total + 0.5).floor().cast(pl.Int64).alias("percent")
        )
        .sort(["events", "first_pos"], descending=[True, False])
    )
    return [
        VenueUsage(venue=r["venue"], events=int(r["events"]), percent=int(r["percent"]))
        for r in usage.iter_rows(named=True)
    ]


def build_matrix_report(snapshot: TeamSnapshot) -> MatrixReport:
    """Build the Attendance Matrix sheet for the snapshot's team.

    Raises NoTeamSelectedError, NoEventsError or NoPlayersError instead of
    producing an empty sheet.
    """
    require_roster(snapshot)

    players = snapshot.sorted_players()
    events = snapshot.sorted_events()
    grid = presence_grid(players, events, snapshot_index(snapshot))

    cells = (
        grid.with_columns(
            pl.when(pl.col("present")).then(pl.lit("Yes")).otherwise(pl.lit("No")).alias("cell")
        )
        .group_by("player_pos", maintain_order=True)
        .agg(
            pl.col("cell"),
            pl.col("present").sum().cast(pl.Int64).alias("total"),
        )
        .sort("player_pos")
    )
    event_totals = (
        grid.group_by("event_pos")
        .agg(pl.col("present").sum().cast(pl.Int64).alias("total"))
        .sort("event_pos")["total"]
        .to_list()
    )

    rows: list[Row] = [
        ["Player", *(category_label(e.type) for e in events), "Total"],
        ["", *(e.date_label for e in events), ""],
        ["", *(venue_label(e) for e in events), ""],
    ]

    player_totals: list[tuple[str, int]] = []
    for player, rec in zip(players, cells.iter_rows(named=True)):
        rows.append([player.name, *rec["cell"], rec["total"]])
        player_totals.append((player.name, rec["total"]))

    grand_total = sum(event_totals)
    rows.append(["Total", *event_totals, grand_total])

    usage = venue_usage(events)
    rows.append([])
    rows.append([VENUE_USAGE_TITLE])
    rows.extend(u.as_row() for u in usage)

    logger.info(
        f"Matrix: {len(players)} players × {len(events)} events, "
        f"{grand_total} attendances, {len(usage)} venues"
    )
    return MatrixReport(
        rows=rows,
        player_totals=player_totals,
        event_totals=event_totals,
        grand_total=grand_total,
        venue_usage=usage,
    )
