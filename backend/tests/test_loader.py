"""Tests for snapshot loading and validation."""

import json
from unittest.mock import MagicMock, patch

import pytest

from rollcall.reports import loader
from rollcall.reports.errors import SnapshotValidationError
from rollcall.reports.loader import load_snapshot_file, load_team_snapshot, snapshot_from_documents

from conftest import TANG_A, TANG_A_ATTENDANCE, TANG_A_EVENTS, TANG_A_PLAYERS


class TestSnapshotFromDocuments:
    def test_valid_documents(self):
        snap = snapshot_from_documents(TANG_A, TANG_A_PLAYERS, TANG_A_EVENTS, TANG_A_ATTENDANCE)
        assert snap.team.name == "Tang A"
        assert [p.name for p in snap.sorted_players()] == ["Alice", "Bob"]
        assert [e.id for e in snap.sorted_events()] == ["e1", "e2"]
        assert snap.attendance[0].reason == "Work"

    def test_no_team(self):
        snap = snapshot_from_documents(None, [], [], [])
        assert snap.team is None
        assert snap.team_name == "Team"

    def test_foreign_records_rejected(self):
        players = TANG_A_PLAYERS + [{"id": "x", "name": "Xavier", "teamId": "other"}]
        with pytest.raises(SnapshotValidationError, match="x"):
            snapshot_from_documents(TANG_A, players, TANG_A_EVENTS, [])

    def test_invalid_event_named_in_error(self):
        events = [{"id": "bad", "teamId": "t1", "type": "training", "date": "not-a-date"}]
        with pytest.raises(SnapshotValidationError, match="Invalid event bad"):
            snapshot_from_documents(TANG_A, TANG_A_PLAYERS, events, [])

    def test_missing_player_name(self):
        with pytest.raises(SnapshotValidationError, match="Invalid player"):
            snapshot_from_documents(TANG_A, [{"id": "p", "teamId": "t1"}], [], [])


    def test_non_dict_document(self):
        with pytest.raises(SnapshotValidationError, match="Invalid player #0"):
            snapshot_from_documents(TANG_A, ["alice"], TANG_A_EVENTS, [])

    def test_non_text_event_type(self):
        events = [{"id": "e1", "teamId": "t1", "type": 5, "date": "2024-01-10"}]
        with pytest.raises(SnapshotValidationError, match="Invalid event e1"):
            snapshot_from_documents(TANG_A, TANG_A_PLAYERS, events, [])


class TestSnapshotFile:
    def test_load(self, snapshot_file):
        snap = load_snapshot_file(snapshot_file)
        assert len(snap.players) == 2
        assert len(snap.events) == 2
        assert len(snap.attendance) == 1

    def test_non_dict_player_in_file(self, tmp_path):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"team": TANG_A, "players": ["alice"]}), encoding="utf-8")
        with pytest.raises(SnapshotValidationError, match="Invalid player"):
            load_snapshot_file(path)

    def test_not_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(SnapshotValidationError, match="not valid JSON"):
            load_snapshot_file(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(SnapshotValidationError):
            load_snapshot_file(path)


class TestSupabaseLoading:
    def _client(self, tables):
        """Mock client whose table(name)...execute().data returns tables[name]."""
        client = MagicMock()

        def table(name):
            query = MagicMock()
            for method in ("select", "eq", "order", "range"):
                getattr(query, method).return_value = query
            query.execute.return_value.data = tables[name]
            return query

        client.table.side_effect = table
        return client

    def test_load_team_snapshot(self):
        client = self._client({
            "players": TANG_A_PLAYERS,
            "events": TANG_A_EVENTS,
            "attendance": TANG_A_ATTENDANCE,
        })
        with patch.object(loader, "get_client", return_value=client), \
                patch.object(loader, "select_rows", return_value=[TANG_A]) as select_rows:
            snap = load_team_snapshot("t1")

        select_rows.assert_called_once_with("teams", filters={"id": "t1"})
        assert snap.team.id == "t1"
        assert len(snap.players) == 2
        assert len(snap.events) == 2

    def test_pagination(self):
        pages = [[{"id": str(i)} for i in range(loader.PAGE_SIZE)], [{"id": "last"}]]
        with patch.object(loader, "_fetch_page", side_effect=pages) as fetch:
            rows = loader._paginated_team_rows("players", "t1")
        assert len(rows) == loader.PAGE_SIZE + 1
        assert [c.args[2] for c in fetch.call_args_list] == [0, loader.PAGE_SIZE]

    def test_unknown_team_yields_empty_selection(self):
        client = self._client({"players": [], "events": [], "attendance": []})
        with patch.object(loader, "get_client", return_value=client), \
                patch.object(loader, "select_rows", return_value=[]):
            snap = load_team_snapshot("nope")
        assert snap.team is None


class TestAttendanceByEvent:
    def test_falls_back_to_event_queries(self):
        by_event = {"e1": TANG_A_ATTENDANCE, "e2": []}

        def select_rows(table, filters=None):
            if table == "teams":
                return [TANG_A]
            return by_event[filters["eventId"]]

        pages = {"players": TANG_A_PLAYERS, "events": TANG_A_EVENTS, "attendance": []}
        with patch.object(loader, "_fetch_page", side_effect=lambda t, tid, off: pages[t]), \
                patch.object(loader, "select_rows", side_effect=select_rows) as sel:
            snap = load_team_snapshot("t1")

        event_calls = [c.kwargs["filters"] for c in sel.call_args_list if c.args[0] == "attendance"]
        assert event_calls == [{"eventId": "e2"}, {"eventId": "e1"}]
        assert [(a.event_id, a.player_id) for a in snap.attendance] == [("e1", "bob")]

    def test_no_fallback_when_team_query_has_rows(self):
        pages = {"players": TANG_A_PLAYERS, "events": TANG_A_EVENTS, "attendance": TANG_A_ATTENDANCE}
        with patch.object(loader, "_fetch_page", side_effect=lambda t, tid, off: pages[t]), \
                patch.object(loader, "select_rows", return_value=[TANG_A]) as sel:
            load_team_snapshot("t1")
        sel.assert_called_once_with("teams", filters={"id": "t1"})
