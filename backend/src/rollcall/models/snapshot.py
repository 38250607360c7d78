"""The explicit context handed to every report builder."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rollcall.models.records import AttendanceRecord, Event, Player, Team


class TeamSnapshot(BaseModel):
    """Read-only view of one team's records at report time.

    ``team`` is None when no team has been selected.
    """

    team: Team | None = None
    players: list[Player] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    attendance: list[AttendanceRecord] = Field(default_factory=list)

    @property
    def team_name(self) -> str:
        return self.team.name if self.team else "Team"

    def sorted_players(self) -> list[Player]:
        """Players by display name, case-insensitive."""
        return sorted(self.players, key=lambda p: (p.name.casefold(), p.name, p.id))

    def sorted_events(self) -> list[Event]:
        """Events in chronological order; same-day events keep input order."""
        return sorted(self.events, key=lambda e: e.date)
