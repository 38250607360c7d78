"""Attendance lookup keyed by (event_id, player_id)."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import polars as pl

from rollcall.models.records import AttendanceRecord
from rollcall.models.snapshot import TeamSnapshot

logger = logging.getLogger(__name__)

AttendanceIndex = dict[tuple[str, str], AttendanceRecord]

_INDEX_SCHEMA = {
    "event_id": pl.Utf8,
    "player_id": pl.Utf8,
    "status": pl.Utf8,
    "reason": pl.Utf8,
}


def build_attendance_index(
    records: Iterable[AttendanceRecord],
    event_ids: Iterable[str] | None = None,
    player_ids: Iterable[str] | None = None,
) -> AttendanceIndex:
    """Index records by (event_id, player_id); the last duplicate wins.

    When ``event_ids`` / ``player_ids`` are given, records pointing at
    anything outside them are orphans and are dropped.
    """
    known_events = set(event_ids) if event_ids is not None else None
    known_players = set(player_ids) if player_ids is not None else None

    index: AttendanceIndex = {}
    orphans = 0
    for rec in records:
        if not rec.event_id or not rec.player_id:
            continue
        if (known_events is not None and rec.event_id not in known_events) or (
            known_players is not None and rec.player_id not in known_players
        ):
            orphans += 1
            logger.debug(f"Ignoring orphaned attendance {rec.event_id}/{rec.player_id}")
            continue
        index[rec.key] = rec

    if orphans:
        logger.info(f"Ignored {orphans} orphaned attendance record(s)")
    return index


def snapshot_index(snapshot: TeamSnapshot) -> AttendanceIndex:
    """Index a snapshot's attendance against its own events and roster."""
    return build_attendance_index(
        snapshot.attendance,
        event_ids=[e.id for e in snapshot.events],
        player_ids=[p.id for p in snapshot.players],
    )


def index_frame(index: AttendanceIndex) -> pl.DataFrame:
    """One row per indexed record: event_id, player_id, status, reason."""
    return pl.DataFrame(
        [
            {
                "event_id": rec.event_id,
                "player_id": rec.player_id,
                "status": rec.status,
                "reason": rec.reason,
            }
            for rec in index.values()
        ],
        schema=_INDEX_SCHEMA,
    )
