"""Models for teams, players, events and attendance records.

Documents are stored with camelCase keys (``teamId``, ``venueType``...);
every model accepts either spelling.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from rollcall.reports.presence import is_absent

EVENT_TYPES = ("training", "match", "challenge")
SCORED_EVENT_TYPES = ("match", "challenge")

# Suggestions for the attendance screen; reasons stay free text
RECOMMENDED_REASONS = ("Rugby", "Soccer", "Hurling", "Holidays", "Work", "No Apology")


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def match_result(
    team_goals: int | None,
    team_points: int | None,
    opp_goals: int | None,
    opp_points: int | None,
) -> str:
    """Return W/D/L comparing totals where a goal is worth three points."""
    team_total = (team_goals or 0) * 3 + (team_points or 0)
    opp_total = (opp_goals or 0) * 3 + (opp_points or 0)
    if team_total > opp_total:
        return "W"
    if team_total < opp_total:
        return "L"
    return "D"


class Team(_Record):
    id: str
    name: str
    season: str | None = None
    admin_uids: list[str] = Field(default_factory=list)


class Player(_Record):
    id: str
    name: str
    team_id: str

    @field_validator("name")
    @classmethod
    def _collapse_name(cls, v: str) -> str:
        return " ".join(v.split())


class Event(_Record):
    id: str
    team_id: str
    type: str = Field("", validate_default=True)
    date: dt.date
    venue: str | None = None
    venue_type: str | None = None
    venue_other: str | None = None

    # Matches and challenges only
    opposition: str | None = None
    team_goals: int | None = None
    team_points: int | None = None
    opp_goals: int | None = None
    opp_points: int | None = None
    result: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: object) -> str:
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError(f"type must be text, got {type(v).__name__}")
        s = v.strip()
        return s.lower() if s.lower() in EVENT_TYPES else s

    @field_validator("result")
    @classmethod
    def _check_result(cls, v: str | None) -> str | None:
        if v is not None and v not in ("W", "D", "L"):
            raise ValueError(f"result must be W, D or L, got {v!r}")
        return v

    @model_validator(mode="after")
    def _derive_result(self) -> Event:
        # A stored result is kept; it was computed when the event was created
        if self.is_scored and self.result is None:
            self.result = match_result(
                self.team_goals, self.team_points, self.opp_goals, self.opp_points
            )
        return self

    @property
    def is_scored(self) -> bool:
        return self.type in SCORED_EVENT_TYPES

    @property
    def date_label(self) -> str:
        return self.date.isoformat()


class AttendanceRecord(_Record):
    event_id: str
    player_id: str
    team_id: str | None = None
    status: str | None = None
    reason: str | None = None

    @model_validator(mode="after")
    def _clear_reason(self) -> AttendanceRecord:
        if self.reason and not is_absent(self.status):
            self.reason = None
        return self

    @property
    def key(self) -> tuple[str, str]:
        return (self.event_id, self.player_id)
