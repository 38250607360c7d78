"""Pytest configuration and fixtures for rollcall tests."""

import json

import pytest

from rollcall.models.records import AttendanceRecord, Event, Player, Team
from rollcall.models.snapshot import TeamSnapshot


def make_snapshot(team=None, players=(), events=(), attendance=()):
    """Build a snapshot from plain dicts, the way the loader would."""
    return TeamSnapshot(
        team=Team.model_validate(team) if team else None,
        players=[Player.model_validate(p) for p in players],
        events=[Event.model_validate(e) for e in events],
        attendance=[AttendanceRecord.model_validate(a) for a in attendance],
    )


TANG_A = {"id": "t1", "name": "Tang A", "season": "2024"}

TANG_A_PLAYERS = [
    {"id": "bob", "name": "Bob", "teamId": "t1"},
    {"id": "alice", "name": "Alice", "teamId": "t1"},
]

TANG_A_EVENTS = [
    {"id": "e2", "teamId": "t1", "type": "match", "date": "2024-01-17", "venue": "Maryland",
     "opposition": "Clara", "teamGoals": 1, "teamPoints": 10, "oppGoals": 2, "oppPoints": 5},
    {"id": "e1", "teamId": "t1", "type": "training", "date": "2024-01-10", "venue": "Tang"},
]

TANG_A_ATTENDANCE = [
    {"eventId": "e1", "playerId": "bob", "teamId": "t1", "status": "absent", "reason": "Work"},
]


@pytest.fixture
def tang_a():
    """The two-player, two-event example team."""
    return make_snapshot(TANG_A, TANG_A_PLAYERS, TANG_A_EVENTS, TANG_A_ATTENDANCE)


@pytest.fixture
def squad():
    """A bigger team with duplicates, orphans, blank reasons and mixed venues."""
    team = {"id": "t2", "name": "U14 Girls / Blue!", "season": "2025"}
    players = [
        {"id": "p1", "name": "ciara", "teamId": "t2"},
        {"id": "p2", "name": "Aoife", "teamId": "t2"},
        {"id": "p3", "name": "Brid", "teamId": "t2"},
        {"id": "p4", "name": "Deirdre", "teamId": "t2"},
    ]
    events = [
        {"id": "e1", "teamId": "t2", "type": "training", "date": "2025-03-01", "venueType": "Tang"},
        {"id": "e2", "teamId": "t2", "type": "training", "date": "2025-03-08", "venueType": "Tang"},
        {"id": "e3", "teamId": "t2", "type": "match", "date": "2025-03-15", "venueType": "Other",
         "venueOther": " Croke Park ", "opposition": "Ballyboden",
         "teamGoals": 2, "teamPoints": 4, "oppGoals": 1, "oppPoints": 7},
        {"id": "e4", "teamId": "t2", "type": "challenge", "date": "2025-03-22", "venueType": "Maryland",
         "opposition": "Na Fianna", "teamGoals": 0, "teamPoints": 9, "oppGoals": 3, "oppPoints": 1},
        {"id": "e5", "teamId": "t2", "type": "blitz", "date": "2025-03-29", "venueType": "other"},
    ]
    attendance = [
        {"eventId": "e1", "playerId": "p1", "status": "Absent", "reason": "Soccer"},
        {"eventId": "e1", "playerId": "p2", "status": "present"},
        {"eventId": "e2", "playerId": "p1", "status": "n", "reason": ""},
        {"eventId": "e2", "playerId": "p3", "status": "late"},
        {"eventId": "e3", "playerId": "p3", "status": "absent", "reason": "Holidays"},
        # Duplicate key: the later record wins
        {"eventId": "e3", "playerId": "p3", "status": "absent", "reason": "Hurling"},
        {"eventId": "e4", "playerId": "p4", "status": "NO", "reason": " Work "},
        {"eventId": "e5", "playerId": "p4", "status": "injured"},
        # Orphans: unknown event and unknown player
        {"eventId": "gone", "playerId": "p1", "status": "absent", "reason": "Rugby"},
        {"eventId": "e1", "playerId": "left-club", "status": "absent", "reason": "Rugby"},
    ]
    return make_snapshot(team, players, events, attendance)


@pytest.fixture
def snapshot_file(tmp_path):
    """The example team written as a JSON export."""
    path = tmp_path / "tang-a.json"
    path.write_text(
        json.dumps({
            "team": TANG_A,
            "players": TANG_A_PLAYERS,
            "events": TANG_A_EVENTS,
            "attendance": TANG_A_ATTENDANCE,
        }),
        encoding="utf-8",
    )
    return path
