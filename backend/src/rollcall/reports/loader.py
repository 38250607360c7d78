"""Load one team's records and validate them into a TeamSnapshot.

Documents arrive with the app's camelCase keys; this module is the only
place where raw dicts are turned into typed records.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from httpx import TransportError
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from rollcall.db import get_client, select_rows
from rollcall.models.records import AttendanceRecord, Event, Player, Team
from rollcall.models.snapshot import TeamSnapshot
from rollcall.reports.errors import SnapshotValidationError

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000


def _validate(model, docs: list[dict[str, Any]], kind: str) -> list:
    out = []
    for i, doc in enumerate(docs):
        try:
            out.append(model.model_validate(doc))
        except ValidationError as e:
            ident = doc.get("id", f"#{i}") if isinstance(doc, dict) else f"#{i}"
            raise SnapshotValidationError(f"Invalid {kind} {ident}: {e}") from e
    return out


def snapshot_from_documents(
    team: dict[str, Any] | None,
    players: list[dict[str, Any]],
    events: list[dict[str, Any]],
    attendance: list[dict[str, Any]],
) -> TeamSnapshot:
    """Validate raw documents for one team.

    Players and events owned by another team are rejected. Attendance is
    kept as-is; orphans are dropped later when the index is built.
    """
    team_model = _validate(Team, [team], "team")[0] if team else None
    player_models: list[Player] = _validate(Player, players, "player")
    event_models: list[Event] = _validate(Event, events, "event")
    attendance_models: list[AttendanceRecord] = _validate(
        AttendanceRecord, attendance, "attendance record"
    )

    if team_model is not None:
        foreign = [p.id for p in player_models if p.team_id != team_model.id]
        foreign += [e.id for e in event_models if e.team_id != team_model.id]
        if foreign:
            raise SnapshotValidationError(
                f"Records belong to another team than {team_model.id}: {', '.join(foreign)}"
            )

    return TeamSnapshot(
        team=team_model,
        players=player_models,
        events=event_models,
        attendance=attendance_models,
    )


def load_snapshot_file(path: str | Path) -> TeamSnapshot:
    """Read a JSON export: {"team": {...}, "players": [...], "events": [...], "attendance": [...]}."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SnapshotValidationError(f"{p} is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise SnapshotValidationError(f"{p} must contain a JSON object")

    logger.info(f"Loaded snapshot file {p}")
    return snapshot_from_documents(
        raw.get("team"),
        raw.get("players") or [],
        raw.get("events") or [],
        raw.get("attendance") or [],
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(TransportError),
    reraise=True,
)
def _fetch_page(table: str, team_id: str, offset: int) -> list[dict]:
    return (
        get_client()
        .table(table)
        .select("*")
        .eq("teamId", team_id)
        .order("id")
        .range(offset, offset + PAGE_SIZE - 1)
        .execute()
        .data
    )


def _paginated_team_rows(table: str, team_id: str) -> list[dict]:
    """Fetch every row of ``table`` for one team (Supabase caps at 1000)."""
    all_rows: list[dict] = []
    offset = 0
    while True:
        rows = _fetch_page(table, team_id, offset)
        all_rows.extend(rows)
        if len(rows) < PAGE_SIZE:
            break
        offset += PAGE_SIZE
    return all_rows


def _attendance_by_event(event_ids: list[str]) -> list[dict]:
    """Older records carry only ``eventId``; fetch them one event at a time."""
    rows: list[dict] = []
    for event_id in event_ids:
        rows.extend(select_rows("attendance", filters={"eventId": event_id}))
    logger.info(f"  Attendance by event: {len(rows)} rows over {len(event_ids)} events")
    return rows


def load_team_snapshot(team_id: str) -> TeamSnapshot:
    """Pull teams, players, events and attendance for ``team_id`` from Supabase."""
    logger.info(f"Loading team {team_id} from Supabase...")

    teams = select_rows("teams", filters={"id": team_id})
    if not teams:
        logger.warning(f"Team {team_id} not found")
    team = teams[0] if teams else None

    players = _paginated_team_rows("players", team_id)
    logger.info(f"  Players: {len(players)} rows")
    events = _paginated_team_rows("events", team_id)
    logger.info(f"  Events: {len(events)} rows")
    attendance = _paginated_team_rows("attendance", team_id)
    if not attendance and events:
        attendance = _attendance_by_event([e["id"] for e in events if e.get("id")])
    logger.info(f"  Attendance: {len(attendance)} rows")

    return snapshot_from_documents(team, players, events, attendance)
