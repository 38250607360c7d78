"""Errors raised while building or exporting attendance reports."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for report failures."""


class ReportInputError(ReportError, ValueError):
    """The snapshot cannot produce a report; the message is shown to the user."""

    message = "Report inputs are incomplete."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NoTeamSelectedError(ReportInputError):
    message = "Select a team first."


class NoEventsError(ReportInputError):
    message = "No events found for this team yet."


class NoPlayersError(ReportInputError):
    message = "No players found for this team."


class SnapshotValidationError(ReportError, ValueError):
    """Raw documents failed validation at the loading boundary."""


class SerializationError(ReportError):
    """A row-set could not be turned into a workbook or CSV text."""
